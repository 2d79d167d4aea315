"""Base exceptions for fs_err.

Filesystem failures are never raised as these classes; they surface as
``OSError`` subclasses built in :mod:`fs_err.errors`. The classes here cover
the library's own configuration layer.
"""


class FsErrError(Exception):
    """Base exception for errors raised by fs_err itself."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(FsErrError):
    """Exception for invalid fs_err settings."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        *args: object,
    ) -> None:
        self.source = source
        enhanced_message = message

        if source:
            enhanced_message = f"[{source}] {enhanced_message}"

        super().__init__(enhanced_message, *args)

import logging
from collections.abc import MutableMapping
from typing import Any

# Keyword arguments understood by logging.Logger itself; everything else is
# treated as a structured field.
_LOGGER_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class ContextualLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that accepts structured fields as keyword arguments.

    ``logger.debug("failed", operation="open file", path="x")`` stores
    ``operation`` and ``path`` on the emitted record, next to any fields
    bound when the adapter was created.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields: dict[str, Any] = dict(self.extra or {})
        fields.update(kwargs.pop("extra", None) or {})

        for key in [k for k in kwargs if k not in _LOGGER_KWARGS]:
            fields[key] = kwargs.pop(key)

        kwargs["extra"] = fields
        return msg, kwargs

    def bind(self, **fields: Any) -> "ContextualLogger":
        merged = {**(self.extra or {}), **fields}
        return ContextualLogger(self.logger, merged)


def get_contextual_logger(
    name: str, **fields: Any
) -> ContextualLogger:
    return ContextualLogger(logging.getLogger(name), fields)

from typing import Any, ClassVar


class Sealed:
    """Marker for capability mixins only fs_err's own types may implement.

    A class defined in ``fs_err`` that derives directly from :class:`Sealed`
    declares a capability. Any class listing such a capability as a direct
    base must itself live inside ``fs_err``; subclassing a concrete type
    (``class MyFile(fs_err.File)``) stays allowed.
    """

    _capabilities: ClassVar[set[type]] = set()
    _implementors: ClassVar[dict[type, set[type]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if Sealed in cls.__bases__:
            if not _is_internal(cls):
                raise TypeError(
                    f"{cls.__qualname__} cannot derive from Sealed "
                    "outside fs_err"
                )
            Sealed._capabilities.add(cls)
            return

        for base in cls.__bases__:
            if base not in Sealed._capabilities:
                continue
            if not _is_internal(cls):
                raise TypeError(
                    f"{base.__qualname__} is sealed and cannot be implemented "
                    f"by {cls.__module__}.{cls.__qualname__}"
                )
            Sealed._implementors.setdefault(base, set()).add(cls)


def _is_internal(cls: type) -> bool:
    return cls.__module__ == "fs_err" or cls.__module__.startswith("fs_err.")


def _implementors_of(capability: type) -> frozenset[type]:
    return frozenset(Sealed._implementors.get(capability, ()))

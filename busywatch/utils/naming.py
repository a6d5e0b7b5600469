"""Name derivation for watchers keyed by an object rather than a string."""

from __future__ import annotations

from ..errors.internal import InvalidInputError

__all__ = ["name_of", "resolve_name"]


def name_of(obj: object) -> str:
    """Return a registry name for ``obj`` derived from its runtime type.

    Uses the fully qualified ``module.QualName`` of ``type(obj)``. Types
    without a usable qualified name (no ``__module__``, or defined inside a
    function so the qualname contains ``<locals>``) fall back to the short
    ``__name__``. Unrelated types sharing a short name then collide; pass an
    explicit name when that matters.

    Examples:
      Session() defined in app.net -> "app.net.Session"
      Outer.Inner()                -> "app.net.Outer.Inner"
      class declared in a function -> "Inner"

    Raises:
        InvalidInputError: If ``obj`` is None.
    """
    if obj is None:
        raise InvalidInputError("Cannot derive a watcher name from None")
    cls = type(obj)
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None)
    if module and qualname and "<locals>" not in qualname:
        return f"{module}.{qualname}"
    return cls.__name__


def resolve_name(target: object) -> str:
    """Return ``target`` itself when it is a name, else ``name_of(target)``.

    Raises:
        InvalidInputError: For None or an empty / whitespace-only name.
    """
    if isinstance(target, str):
        if not target.strip():
            raise InvalidInputError("Watcher name must be a non-empty string")
        return target
    return name_of(target)

"""Project validators and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..svn.client import MetadataStore
from .base import (
    PropertyLookupError,
    ValidationEnvironment,
    ValidationError,
    Validator,
)
from .svn_properties import SvnPropertiesValidator, is_svn_project

_ENTRY_POINT_GROUP = "propguard.validators"

_BUILTIN_FACTORIES: dict[str, Callable[[Optional[MetadataStore]], Validator]] = {
    SvnPropertiesValidator.name: SvnPropertiesValidator,
}


def discover_validators(
    enabled: Sequence[str] | None = None,
    *,
    store: Optional[MetadataStore] = None,
) -> List[Validator]:
    """Return instantiated validators, honoring optional enabled names.

    ``store`` is handed to the built-in validators; plugin validators loaded
    from the ``propguard.validators`` entry point group build their own.
    """
    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    validators: List[Validator] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], object]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        validators.append(_coerce_validator(name, factory()))
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, builtin in _BUILTIN_FACTORIES.items():
        _add(name, lambda builtin=builtin: builtin(store))

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - plugin import failure
            raise RuntimeError(f"Failed to load validator entry point '{entry.name}': {exc}") from exc
        _add(entry.name, lambda obj=loaded: obj() if callable(obj) else obj)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown validators requested: {missing}")

    return validators


def _coerce_validator(name: str, obj: object) -> Validator:
    if callable(getattr(obj, "validate", None)) and isinstance(getattr(obj, "name", None), str):
        return obj  # type: ignore[return-value]
    raise TypeError(f"Validator factory for '{name}' did not return a Validator instance")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "PropertyLookupError",
    "SvnPropertiesValidator",
    "ValidationEnvironment",
    "ValidationError",
    "Validator",
    "discover_validators",
    "is_svn_project",
]

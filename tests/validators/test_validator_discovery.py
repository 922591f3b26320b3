"""Tests for validator discovery utilities."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import propguard.validators as validators_module
from propguard.models import CheckResult
from propguard.validators import SvnPropertiesValidator, discover_validators


class DummyValidator:
    """Test validator used for plugin discovery."""

    name = "dummy"

    def validate(self, env):  # pragma: no cover - unused
        return CheckResult(validator=self.name, checked=0, skipped=True, message="")


def test_discover_validators_returns_builtin_validators() -> None:
    validators = discover_validators()

    assert any(isinstance(validator, SvnPropertiesValidator) for validator in validators)


def test_discover_validators_hands_store_to_builtins() -> None:
    store = object()

    (validator,) = discover_validators(["svn_properties"], store=store)  # type: ignore[arg-type]

    assert validator._store is store


def test_discover_validators_respects_empty_enabled_list() -> None:
    assert discover_validators([]) == []


def test_discover_validators_loads_entry_points(monkeypatch) -> None:
    dummy_entry = SimpleNamespace(name="dummy", load=lambda: DummyValidator)
    monkeypatch.setattr(validators_module, "_iter_entry_points", lambda: [dummy_entry])

    validators = discover_validators(["dummy"])

    assert len(validators) == 1
    assert isinstance(validators[0], DummyValidator)


def test_discover_validators_rejects_non_validator_entry_point(monkeypatch) -> None:
    bogus_entry = SimpleNamespace(name="bogus", load=lambda: object)
    monkeypatch.setattr(validators_module, "_iter_entry_points", lambda: [bogus_entry])

    with pytest.raises(TypeError):
        discover_validators(["bogus"])


def test_discover_validators_rejects_unknown_names() -> None:
    with pytest.raises(ValueError) as excinfo:
        discover_validators(["svn_properties", "nope"])

    assert "nope" in str(excinfo.value)

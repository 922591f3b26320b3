"""Configuration loading for propguard (.propguard.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

CONFIG_FILENAME = ".propguard.yml"
DEFAULT_SVN_BINARY = "svn"


class ConfigError(RuntimeError):
    """Raised when the configuration file or project descriptor cannot be parsed."""


@dataclass
class SvnConfig:
    """Settings for the external Subversion client."""

    binary: str = DEFAULT_SVN_BINARY


@dataclass
class ScmConfig:
    """SCM override for trees without a pom.xml."""

    connection: Optional[str] = None


@dataclass
class ValidatorConfig:
    """Validator enablement. ``None`` means every registered validator."""

    enabled: Optional[List[str]] = None


@dataclass
class ReportConfig:
    """Where to write the JSON validation report, relative to the project root."""

    path: Optional[Path] = None


@dataclass
class PropGuardConfig:
    """Represents the settings defined in .propguard.yml."""

    root: Path
    svn: SvnConfig = field(default_factory=SvnConfig)
    scm: ScmConfig = field(default_factory=ScmConfig)
    validators: ValidatorConfig = field(default_factory=ValidatorConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> PropGuardConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PropGuardConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    svn = SvnConfig()
    svn_data = _as_dict(data.get("svn"))
    binary = _as_str(svn_data.get("binary"))
    if binary:
        svn.binary = binary

    scm_data = _as_dict(data.get("scm"))
    scm = ScmConfig(connection=_as_str(scm_data.get("connection")))

    validator_data = _as_dict(data.get("validators"))
    validators = ValidatorConfig(enabled=_as_validator_names(validator_data.get("enabled")))

    report = ReportConfig()
    report_data = data.get("report")
    if isinstance(report_data, str):
        report.path = root / report_data
    else:
        report_path = _as_str(_as_dict(report_data).get("path"))
        if report_path:
            report.path = root / report_path

    return PropGuardConfig(
        root=root,
        svn=svn,
        scm=scm,
        validators=validators,
        report=report,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_validator_names(value: Any) -> Optional[List[str]]:
    # A missing or blank "enabled" key means every registered validator.
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError("validators.enabled must be a validator name or a list of names")


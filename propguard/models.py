"""Core data models shared across propguard components."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ScmDescriptor:
    """Source-control coordinates declared by a project (Maven ``<scm>`` block)."""

    connection: Optional[str] = None
    developer_connection: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Project:
    """Read-only view of the project a validator runs against."""

    basedir: Path
    scm: Optional[ScmDescriptor] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single validator run that did not fail."""

    validator: str
    checked: int
    skipped: bool
    message: str

"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from propguard.config import PropGuardConfig
    from propguard.models import CheckResult, Project


class ValidationError(RuntimeError):
    """Raised when a project fails a validator.

    ``messages`` lists every human-readable failure; validators in this
    package stop at the first one, so it usually holds a single entry.
    """

    def __init__(self, message: str, messages: Optional[Sequence[str]] = None) -> None:
        self.messages: List[str] = list(messages) if messages else [message]
        super().__init__(self.messages[0])


class PropertyLookupError(ValidationError):
    """Raised when the metadata store itself could not be queried."""

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException,
        interrupted: bool = False,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.interrupted = interrupted


@dataclass
class ValidationEnvironment:
    """Context shared with validators for one run."""

    project: "Project"
    config: Optional["PropGuardConfig"] = None


class Validator(Protocol):
    """Protocol implemented by project validators."""

    name: str

    def validate(self, env: ValidationEnvironment) -> "CheckResult":
        """Return a result on success; raise ``ValidationError`` on failure."""

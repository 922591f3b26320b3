"""Subversion property lookups through the ``svn`` command-line client."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, Sequence

from ..config import DEFAULT_SVN_BINARY
from ..logging import get_logger


class MetadataStore(Protocol):
    """Source of per-file version-control properties."""

    def get(self, path: Path, name: str) -> str:
        """Return the raw value of property ``name`` on ``path``."""


@dataclass(frozen=True)
class CommandOutput:
    """Exit status and merged stdout/stderr of a finished client invocation."""

    returncode: int
    output: str


class SvnClient:
    """Reads properties by running ``svn propget <name> <absolute-path>``.

    The exit status is not inspected: whatever the client printed, including
    its own error text, is returned as the property value.
    """

    def __init__(
        self,
        binary: str = DEFAULT_SVN_BINARY,
        runner: Callable[[Sequence[str]], CommandOutput] | None = None,
    ) -> None:
        self.binary = binary
        self._runner = runner or self._default_runner
        self.logger = get_logger("svn")

    def get(self, path: Path, name: str) -> str:
        args = [self.binary, "propget", name, str(Path(path).absolute())]
        self.logger.debug("Running %s", " ".join(args))
        result = self._runner(args)
        if result.returncode != 0:
            self.logger.debug(
                "%s exited with status %d for %s", self.binary, result.returncode, path
            )
        return result.output

    @staticmethod
    def _default_runner(args: Sequence[str]) -> CommandOutput:
        completed = subprocess.run(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
        output = completed.stdout.decode("utf-8", errors="replace")
        return CommandOutput(returncode=completed.returncode, output=output)


__all__ = ["CommandOutput", "MetadataStore", "SvnClient"]

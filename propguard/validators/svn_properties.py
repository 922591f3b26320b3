"""Validator requiring Subversion properties on every text file.

Every text file in a Subversion project should carry::

    svn:keywords=Id
    svn:eol-style=native

See http://svnbook.red-bean.com/en/1.5/svn.ref.properties.html for how to set
them (``svn propset`` or ``auto-props``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..file_scanner import list_text_files
from ..logging import get_logger
from ..models import CheckResult, Project
from ..svn.client import MetadataStore, SvnClient
from .base import PropertyLookupError, ValidationEnvironment, ValidationError, Validator

SVN_SCHEME = "scm:svn"
EOL_STYLE = "svn:eol-style"
KEYWORDS = "svn:keywords"
REQUIRED_EOL_STYLE = "native"
REQUIRED_KEYWORD = "Id"


def is_svn_project(project: Project) -> bool:
    """Return True when the project's SCM connection points at Subversion."""
    scm = project.scm
    if scm is None or scm.connection is None:
        return False
    return scm.connection.startswith(SVN_SCHEME)


class SvnPropertiesValidator(Validator):
    """Fails the build on the first text file missing required svn properties."""

    name = "svn_properties"

    def __init__(self, store: Optional[MetadataStore] = None) -> None:
        self._store = store
        self.logger = get_logger("validators.svn_properties")

    def validate(self, env: ValidationEnvironment) -> CheckResult:
        project = env.project
        if not self.is_svn(project):
            return CheckResult(
                validator=self.name,
                checked=0,
                skipped=True,
                message="This is not an SVN project",
            )

        store = self._resolve_store(env)
        files = list_text_files(project.basedir)
        for path in files:
            self.check(path, store)
        return CheckResult(
            validator=self.name,
            checked=len(files),
            skipped=False,
            message=f"{len(files)} text files have necessary SVN properties",
        )

    def is_svn(self, project: Project) -> bool:
        return is_svn_project(project)

    def check(self, path: Path, store: MetadataStore) -> None:
        """Raise ``ValidationError`` if ``path`` lacks either property."""
        self.logger.debug("Checking svn properties of %s", path)
        style = self._propget(store, path, EOL_STYLE)
        if style != REQUIRED_EOL_STYLE:
            raise ValidationError(
                f"File {path} doesn't have '{EOL_STYLE}' set to "
                f"'{REQUIRED_EOL_STYLE}': {style}"
            )
        keywords = self._propget(store, path, KEYWORDS)
        if REQUIRED_KEYWORD not in keywords:
            raise ValidationError(
                f"File {path} doesn't have '{KEYWORDS}' with "
                f"'{REQUIRED_KEYWORD}': {keywords}"
            )

    def _propget(self, store: MetadataStore, path: Path, name: str) -> str:
        try:
            return store.get(path, name)
        except OSError as exc:
            raise PropertyLookupError(
                f"Unable to read '{name}' of {path}: {exc}", cause=exc
            ) from exc
        except KeyboardInterrupt as exc:
            raise PropertyLookupError(
                f"Interrupted while reading '{name}' of {path}",
                cause=exc,
                interrupted=True,
            ) from exc

    def _resolve_store(self, env: ValidationEnvironment) -> MetadataStore:
        if self._store is not None:
            return self._store
        if env.config is not None:
            return SvnClient(binary=env.config.svn.binary)
        return SvnClient()

"""Build the read-only Project view from pom.xml and .propguard.yml."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .config import ConfigError, PropGuardConfig
from .models import Project, ScmDescriptor

POM_FILENAME = "pom.xml"


def load_project(path: Path, config: PropGuardConfig) -> Project:
    """Return the project rooted at ``path``.

    The SCM descriptor comes from the ``<scm>`` block of ``pom.xml``; a
    ``scm.connection`` entry in the config replaces the pom's connection.
    """
    basedir = Path(path).expanduser().resolve()
    if not basedir.exists():
        raise FileNotFoundError(f"Project path not found: {path}")
    if not basedir.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {path}")

    scm: Optional[ScmDescriptor] = None
    name: Optional[str] = None
    pom = basedir / POM_FILENAME
    if pom.exists():
        scm, name = _parse_pom(pom)

    override = config.scm.connection
    if override:
        if scm is None:
            scm = ScmDescriptor(connection=override)
        else:
            scm = ScmDescriptor(
                connection=override,
                developer_connection=scm.developer_connection,
                url=scm.url,
            )

    return Project(basedir=basedir, scm=scm, name=name or basedir.name)


def _parse_pom(path: Path) -> tuple[Optional[ScmDescriptor], Optional[str]]:
    try:
        root = ET.fromstring(path.read_text(encoding="utf-8"))
    except ET.ParseError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    namespace = _detect_xml_namespace(root)

    def tag(name: str) -> str:
        return f"{{{namespace}}}{name}" if namespace else name

    name = _text(root.find(tag("artifactId")))
    scm_element = root.find(tag("scm"))
    if scm_element is None:
        return None, name

    scm = ScmDescriptor(
        connection=_text(scm_element.find(tag("connection"))),
        developer_connection=_text(scm_element.find(tag("developerConnection"))),
        url=_text(scm_element.find(tag("url"))),
    )
    return scm, name


def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None or element.text is None:
        return None
    value = element.text.strip()
    return value or None


def _detect_xml_namespace(element: ET.Element) -> str | None:
    match = re.match(r"\{(.+)}", element.tag)
    return match.group(1) if match else None

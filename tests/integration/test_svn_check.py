"""End-to-end check against a scripted stand-in for the svn client."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from propguard.runner import CheckRunner
from propguard.validators import ValidationError
from tests._fixtures.project_builder import ProjectBuilder

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script")

_FAKE_SVN = """\
#!/bin/sh
# usage: svn propget <name> <path>
case "$2" in
  svn:eol-style) printf 'native' ;;
  svn:keywords)
    case "$3" in
      *{bad}) echo "svn: warning: W200017: Property 'svn:keywords' not found on '$3'" >&2 ;;
      *) printf 'Id' ;;
    esac ;;
esac
"""


def _install_fake_svn(tmp_path: Path, bad: str = "Broken.java") -> Path:
    script = tmp_path / "bin" / "svn"
    script.parent.mkdir()
    script.write_text(_FAKE_SVN.format(bad=bad), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return script


def test_check_passes_with_scripted_client(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write_pom()
    project_builder.write({"src/App.java": "class App {}\n"})
    svn = _install_fake_svn(tmp_path)

    results = CheckRunner().run_check(project_builder.path(), svn_binary=str(svn))

    assert results[0].checked == 2


def test_check_surfaces_client_error_text(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write_pom()
    project_builder.write({"src/Broken.java": "class Broken {}\n"})
    svn = _install_fake_svn(tmp_path)

    with pytest.raises(ValidationError) as excinfo:
        CheckRunner().run_check(project_builder.path(), svn_binary=str(svn))

    message = str(excinfo.value)
    assert "Broken.java doesn't have 'svn:keywords'" in message
    assert "W200017" in message


def test_check_fails_when_client_is_missing(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write_pom()

    with pytest.raises(ValidationError) as excinfo:
        CheckRunner().run_check(project_builder.path(), svn_binary=str(tmp_path / "nope" / "svn"))

    assert isinstance(excinfo.value.__cause__, OSError)

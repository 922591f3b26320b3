"""Runs the configured validators over a project and records the outcome."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .config import ConfigError, PropGuardConfig, load_config
from .logging import get_logger
from .models import CheckResult
from .project import load_project
from .svn.client import MetadataStore, SvnClient
from .validators import ValidationEnvironment, ValidationError, Validator, discover_validators


class CheckRunner:
    """Loads a project, runs each validator in order, and stops at the first failure."""

    def __init__(
        self,
        validators: Optional[Iterable[Validator]] = None,
        store: Optional[MetadataStore] = None,
        config_loader: Callable[[Path], PropGuardConfig] = load_config,
    ) -> None:
        self._validator_overrides = list(validators) if validators is not None else None
        self._store = store
        self._config_loader = config_loader
        self.logger = get_logger("runner")

    def run_check(
        self,
        path: str | Path,
        *,
        svn_binary: Optional[str] = None,
        report_path: Optional[Path] = None,
    ) -> List[CheckResult]:
        """Validate the project at ``path``; raise ``ValidationError`` on failure."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting check run for %s", repo_path)

        config = self._config_loader(repo_path)
        if svn_binary:
            config.svn.binary = svn_binary
        project = load_project(repo_path, config)
        env = ValidationEnvironment(project=project, config=config)

        validators = self._resolve_validators(config)
        if not validators:
            raise ConfigError(
                f"No validators enabled for {repo_path}; remove validators.enabled to run all"
            )
        self.logger.debug("Selected %d validator(s)", len(validators))
        target_report = report_path if report_path is not None else config.report.path
        if target_report is not None and not target_report.is_absolute():
            target_report = repo_path / target_report

        results: List[CheckResult] = []
        for validator in validators:
            self.logger.debug("Running validator %s", validator.name)
            try:
                result = validator.validate(env)
            except ValidationError as exc:
                for message in exc.messages:
                    self.logger.error("Validation failure in %s: %s", validator.name, message)
                if target_report is not None:
                    self._write_report(
                        target_report,
                        status="failed",
                        validators=validators,
                        results=results,
                        errors=exc.messages,
                    )
                raise
            self.logger.debug("%s: %s", validator.name, result.message)
            results.append(result)

        if target_report is not None:
            status = "passed" if any(not r.skipped for r in results) else "skipped"
            self._write_report(
                target_report,
                status=status,
                validators=validators,
                results=results,
                errors=[],
            )
        return results

    def _resolve_validators(self, config: PropGuardConfig) -> List[Validator]:
        if self._validator_overrides is not None:
            return list(self._validator_overrides)
        store = self._store or SvnClient(binary=config.svn.binary)
        return discover_validators(config.validators.enabled, store=store)

    def _write_report(
        self,
        report_path: Path,
        *,
        status: str,
        validators: Sequence[Validator],
        results: Sequence[CheckResult],
        errors: Sequence[str],
    ) -> None:
        now_utc = datetime.now(UTC)
        payload = {
            "status": status,
            "validators": [validator.name for validator in validators],
            "results": [
                {
                    "validator": result.validator,
                    "checked": result.checked,
                    "skipped": result.skipped,
                    "message": result.message,
                }
                for result in results
            ],
            "errors": list(errors),
            "generated_at": now_utc.isoformat().replace("+00:00", "Z"),
        }
        try:
            report_path.parent.mkdir(parents=True, exist_ok=True)
            report_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError:
            self.logger.warning("Unable to write validation report to %s", report_path, exc_info=True)
            return
        self.logger.debug("Validation report written to %s", report_path)


__all__ = ["CheckRunner"]

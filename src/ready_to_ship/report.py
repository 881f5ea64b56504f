"""Report aggregation: run validators, merge verdicts, export JSON."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .checks import VALIDATORS
from .config import REPORT_FILENAME, ScanConfig
from .console import print_header, print_result, print_success, print_summary
from .fact_store import ScanContext
from .models import AggregateReport, IssueKind, ValidatorResult, issue

logger = logging.getLogger(__name__)


def run_module(name: str, ctx: ScanContext) -> ValidatorResult:
    """Run one validator; a crash inside it becomes a failing result."""
    runner = VALIDATORS[name]
    try:
        return runner(ctx)
    except Exception as e:
        # Don't let one module crash the whole report
        logger.exception(f"Module '{name}' failed")
        return ValidatorResult(
            module=name,
            passed=False,
            issues=[issue(IssueKind.MODULE_ERROR, subject=name, detail=type(e).__name__)],
        )


def run_validation(
    config: ScanConfig,
    modules: Optional[list[str]] = None,
    echo: bool = False,
) -> AggregateReport:
    """
    Run the requested validators in report order against one project.

    Args:
        config: Project path, scan limits and skip list
        modules: Explicit module list; defaults to every module not skipped
        echo: Print each module's section as it completes

    Returns:
        AggregateReport over exactly the modules that ran
    """
    names = [n for n in config.modules if modules is None or n in modules]
    ctx = ScanContext.from_config(config)
    logger.info(f"Validating {ctx.root} ({', '.join(names) or 'no modules'})")

    report = AggregateReport(
        timestamp=datetime.now(timezone.utc),
        project_path=str(config.root),
    )
    for name in names:
        result = run_module(name, ctx)
        report.results[name] = result
        if echo:
            print_result(result)
    return report


def write_json_report(report: AggregateReport, path: Optional[Path] = None) -> Path:
    """Write the export structure; defaults to ready-to-ship-report.json in the project."""
    target = path or Path(report.project_path) / REPORT_FILENAME
    target.write_text(json.dumps(report.to_export(), indent=2), encoding="utf-8")
    return target


def generate_report(
    config: ScanConfig,
    json_export: bool = False,
    verbose: bool = False,
) -> AggregateReport:
    """Full console report, optionally saved as JSON."""
    print_header("READY-TO-SHIP REPORT")
    report = run_validation(config, echo=True)
    print_summary(report, verbose=verbose)

    if json_export:
        saved = write_json_report(report)
        print_success(f"JSON report saved to: {saved}")
    return report

"""
Project hygiene checks.

#1 .env.example for collaborators
#2 README with install / usage instructions
#3 A recognisable folder layout
#4 A global error-handling construct
#5 A package.json with a start script and description
"""

import logging
import re

from ..fact_store import ScanContext
from ..file_walker import MAIN_FILE_GLOB, load_package_json
from ..models import IssueKind, ValidatorResult, issue, warning

logger = logging.getLogger(__name__)

MODULE = "project"

README_NAMES = ("README.md", "README.txt", "readme.md")
EXPECTED_FOLDERS = ("src", "routes", "config", "middleware", "controllers", "models")
MIN_README_LENGTH = 100

ERROR_HANDLER_GLOBS = [
    "**/middleware/**/*.{js,ts}",
    "**/middleware.{js,ts}",
    "**/error*.{js,ts}",
    "**/src/**/*.{js,ts}",
]

_INSTALL_RE = re.compile(r"install|setup|getting started", re.IGNORECASE)
_USAGE_RE = re.compile(r"usage|how to|example", re.IGNORECASE)


def _find_error_handler(ctx: ScanContext) -> bool:
    for pattern in ERROR_HANDLER_GLOBS:
        for path in ctx.facts.find(pattern)[:ctx.limits.error_handler_files_per_glob]:
            code = ctx.facts.read(path)
            if code and ctx.extractor.has_error_handling(code):
                return True

    for path in ctx.facts.find(MAIN_FILE_GLOB)[:ctx.limits.error_handler_main_files]:
        code = ctx.facts.read(path)
        if code and ctx.extractor.has_error_handling(code):
            return True
    return False


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Check README, .env.example, layout, error handling and package.json."""
    issues = []
    warnings = []
    notes = []

    if (ctx.root / ".env.example").is_file():
        notes.append(".env.example found")
    else:
        issues.append(issue(IssueKind.ENV_EXAMPLE_MISSING, detail="required"))

    readme_name = next((name for name in README_NAMES if (ctx.root / name).is_file()), None)
    if readme_name is None:
        issues.append(issue(IssueKind.README_MISSING))
    else:
        notes.append("README found")
        content = ctx.facts.read(ctx.root / readme_name) or ""
        if len(content) <= MIN_README_LENGTH:
            warnings.append(warning(IssueKind.README_TOO_SHORT, file=readme_name))
        elif not _INSTALL_RE.search(content) and not _USAGE_RE.search(content):
            warnings.append(warning(IssueKind.README_NO_INSTRUCTIONS, file=readme_name))

    existing = [name for name in EXPECTED_FOLDERS if (ctx.root / name).exists()]
    if not existing:
        warnings.append(warning(IssueKind.NO_STANDARD_STRUCTURE))

    if _find_error_handler(ctx):
        notes.append("Error handling found")
    else:
        issues.append(issue(IssueKind.NO_ERROR_HANDLER))

    manifest = load_package_json(ctx.root)
    if not manifest.found:
        issues.append(issue(IssueKind.PACKAGE_JSON_MISSING))
    elif manifest.malformed:
        warnings.append(warning(IssueKind.PACKAGE_JSON_MALFORMED, file="package.json"))
    else:
        if not manifest.scripts.get("start"):
            warnings.append(warning(IssueKind.MISSING_START_SCRIPT, file="package.json"))
        if not manifest.description:
            warnings.append(warning(IssueKind.MISSING_DESCRIPTION, file="package.json"))

    if not issues and not warnings:
        notes.append("Project structure looks good")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
    )

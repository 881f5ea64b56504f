"""
Environment configuration checks.

Compares .env against .env.example, flags empty or short secrets and
values that do not look like the URL / email / port their name promises.
"""

import re

from ..classifiers import is_placeholder, is_valid_email, is_valid_number, is_valid_url
from ..fact_store import ScanContext
from ..file_walker import parse_env_file
from ..models import IssueKind, ValidatorResult, issue, warning

MODULE = "env"

_SECRET_KEY_RE = re.compile(r"SECRET|KEY|PASSWORD|TOKEN", re.IGNORECASE)
_PASSWORD_KEY_RE = re.compile(r"PASSWORD|KEY", re.IGNORECASE)

MIN_SECRET_LENGTH = 32
MIN_KEY_LENGTH = 16


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Validate .env presence, completeness and value quality."""
    issues = []
    warnings = []

    env_path = ctx.root / ".env"
    example_path = ctx.root / ".env.example"
    env_exists = env_path.is_file()
    example_exists = example_path.is_file()

    if not env_exists:
        issues.append(issue(IssueKind.ENV_FILE_MISSING))
    if not example_exists:
        warnings.append(warning(IssueKind.ENV_EXAMPLE_MISSING, detail="recommended"))

    expected = parse_env_file(example_path) if example_exists else {}
    actual = parse_env_file(env_path) if env_exists else {}

    for key in expected:
        if key not in actual:
            issues.append(issue(IssueKind.MISSING_ENV_VAR, subject=key))

    for key, value in actual.items():
        if not _SECRET_KEY_RE.search(key):
            continue
        if not value:
            issues.append(issue(IssueKind.EMPTY_SECRET, subject=key))
        elif len(value) < MIN_SECRET_LENGTH and "SECRET" in key.upper():
            issues.append(issue(IssueKind.WEAK_SECRET, subject=key))
        elif len(value) < MIN_KEY_LENGTH and _PASSWORD_KEY_RE.search(key):
            warnings.append(warning(IssueKind.SHORT_SECRET, subject=key))

    if example_exists:
        unused = [key for key in actual if key not in expected]
        if unused:
            warnings.append(warning(IssueKind.UNUSED_ENV_VARS, detail=", ".join(unused)))

    for key, value in actual.items():
        if not value:
            continue
        if "URL" in key and not is_placeholder(value) and not is_valid_url(value):
            warnings.append(warning(IssueKind.INVALID_URL, subject=key))
        if "EMAIL" in key and not is_placeholder(value) and not is_valid_email(value):
            warnings.append(warning(IssueKind.INVALID_EMAIL, subject=key))
        if "PORT" in key and not is_placeholder(value) and not is_valid_number(value):
            warnings.append(warning(IssueKind.INVALID_PORT, subject=key))

    notes = []
    if not issues and not warnings:
        notes.append("All environment variables are properly configured")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
    )

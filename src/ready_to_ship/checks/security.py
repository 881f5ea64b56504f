"""
SECURITY DETECTION MODULE — regex patterns used to DETECT missing security
middleware and dangerous constructs in user codebases. READ-ONLY static
analysis; nothing here executes user code.

Covers CORS, security headers, rate limiting, eval() and dynamic RegExp.
"""

import logging
import re

from ..fact_store import ScanContext
from ..file_walker import MAIN_FILE_GLOB, load_package_json
from ..models import IssueKind, ValidatorResult, issue, warning

logger = logging.getLogger(__name__)

MODULE = "security"

SECURITY_FILE_GLOBS = [
    MAIN_FILE_GLOB,
    "**/config/**/*.{js,ts}",
    "**/middleware/**/*.{js,ts}",
]

_CORS_RE = re.compile(r"cors", re.IGNORECASE)
_CORS_CALL_RE = re.compile(r"cors\s*\([^)]*\)", re.IGNORECASE)
_CORS_WILDCARD_RE = re.compile(r"origin\s*:\s*['\"]\*['\"]", re.IGNORECASE)

_HELMET_RE = re.compile(r"helmet", re.IGNORECASE)
_SECURITY_HEADERS_RE = re.compile(
    r"x-frame-options|x-content-type-options|x-xss-protection|strict-transport-security",
    re.IGNORECASE,
)
_RATE_LIMIT_RE = re.compile(r"rateLimit|rate-limit|express-rate-limit|limiter", re.IGNORECASE)

_EVAL_RE = re.compile(r"\beval\s*\(", re.IGNORECASE)
_DYNAMIC_REGEX_RE = re.compile(r"new RegExp\([^)]*\+", re.IGNORECASE)


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Scan app, config and middleware files for security middleware."""
    issues = []
    warnings = []

    files = ctx.facts.find(*SECURITY_FILE_GLOBS)
    logger.debug(f"Security scan over {len(files)} candidate files")

    has_cors = False
    has_helmet = False
    has_security_headers = False
    has_rate_limit = False

    for path in files[:ctx.limits.security_feature_files]:
        code = ctx.facts.read(path)
        if not code:
            continue

        if _CORS_RE.search(code):
            has_cors = True
            cors_call = _CORS_CALL_RE.search(code)
            if cors_call and _CORS_WILDCARD_RE.search(cors_call.group(0)):
                issues.append(issue(IssueKind.CORS_WILDCARD, file=ctx.facts.relative(path)))

        if _HELMET_RE.search(code):
            has_helmet = True
            has_security_headers = True
        if _SECURITY_HEADERS_RE.search(code):
            has_security_headers = True
        if _RATE_LIMIT_RE.search(code):
            has_rate_limit = True

    deps = load_package_json(ctx.root).dependencies
    if "helmet" not in deps and not has_helmet:
        warnings.append(warning(IssueKind.SECURITY_PACKAGE_MISSING, subject="helmet"))

    if not has_cors:
        warnings.append(warning(IssueKind.CORS_MISSING))
    if not has_security_headers:
        issues.append(issue(IssueKind.SECURITY_HEADERS_MISSING))
    if not has_rate_limit:
        warnings.append(warning(IssueKind.RATE_LIMIT_MISSING))

    for path in files[:ctx.limits.security_antipattern_files]:
        code = ctx.facts.read(path)
        if not code:
            continue
        rel = ctx.facts.relative(path)
        if _EVAL_RE.search(code):
            issues.append(issue(IssueKind.EVAL_USAGE, file=rel))
        if _DYNAMIC_REGEX_RE.search(code):
            warnings.append(warning(IssueKind.DYNAMIC_REGEX, file=rel))

    notes = []
    if has_cors:
        notes.append("CORS configured")
    if has_security_headers:
        notes.append("Security headers configured")
    if has_rate_limit:
        notes.append("Rate limiting detected")
    if not issues and not warnings:
        notes.append("Security configuration looks good")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
    )

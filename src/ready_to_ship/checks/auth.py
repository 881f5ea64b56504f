"""
Authentication coverage checks.

Every route whose path looks sensitive must have an auth-flavored token
within its five-line window. JWT expiry settings are flagged when they are
far longer than an access token should live.
"""

import logging

from ..classifiers import format_duration, is_sensitive_route
from ..extractors import DAY, YEAR
from ..fact_store import ScanContext
from ..models import IssueKind, ValidatorResult, issue, warning
from .common import find_route_files

logger = logging.getLogger(__name__)

MODULE = "auth"

MAX_RECOMMENDED_EXPIRY = 7 * DAY
MAX_ALLOWED_EXPIRY = YEAR


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Check route protection and JWT expiry across route files."""
    issues = []
    warnings = []
    vulnerable = []

    route_files = find_route_files(ctx, include_controllers=True)
    if not route_files:
        return ValidatorResult(
            module=MODULE,
            passed=False,
            issues=[issue(IssueKind.NO_ROUTE_FILES)],
            vulnerable_routes=[],
        )

    logger.debug(f"Checking auth coverage in {len(route_files)} files")

    for path in route_files:
        code = ctx.facts.read(path)
        if not code:
            continue

        for route in ctx.facts.routes(path):
            if not is_sensitive_route(route.path):
                continue
            if ctx.extractor.has_auth_middleware(code, route.line):
                continue
            vulnerable.append(route)
            issues.append(issue(
                IssueKind.UNPROTECTED_ROUTE,
                method=route.method,
                path=route.path,
                file=route.file,
                line=route.line,
            ))

        expiry = ctx.extractor.extract_jwt_expiry(code)
        if expiry is None:
            continue
        rel = ctx.facts.relative(path)
        if expiry > MAX_ALLOWED_EXPIRY:
            issues.append(issue(IssueKind.JWT_EXPIRY_TOO_LONG, detail=format_duration(expiry), file=rel))
        elif expiry > MAX_RECOMMENDED_EXPIRY:
            warnings.append(warning(IssueKind.JWT_EXPIRY_LONG, detail=format_duration(expiry), file=rel))

    notes = []
    if not issues and not warnings:
        notes.append("All routes are properly protected")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
        vulnerable_routes=vulnerable,
    )

"""API shape checks: a health endpoint plus basic REST consistency."""

from collections import defaultdict

from ..classifiers import collection_path, is_health_route
from ..fact_store import ScanContext
from ..models import IssueKind, ValidatorResult, issue, warning
from .common import find_route_files

MODULE = "api"


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Validate health endpoint presence and route consistency."""
    issues = []
    warnings = []

    route_files = find_route_files(ctx)
    if not route_files:
        return ValidatorResult(
            module=MODULE,
            passed=False,
            issues=[issue(IssueKind.NO_ROUTE_FILES)],
            routes=[],
        )

    all_routes = []
    for path in route_files:
        all_routes.extend(ctx.facts.routes(path))

    has_health = any(is_health_route(r.path) for r in all_routes)
    if not has_health:
        issues.append(issue(IssueKind.MISSING_HEALTH_ENDPOINT))

    methods_by_path: dict[str, list[str]] = defaultdict(list)
    for route in all_routes:
        methods_by_path[route.path].append(route.method)

    for route_path, methods in methods_by_path.items():
        if "POST" in methods and "GET" not in methods:
            parent = collection_path(route_path)
            if parent != route_path and "GET" not in methods_by_path.get(parent, []):
                warnings.append(warning(IssueKind.POST_WITHOUT_COLLECTION_GET, path=route_path))

        if "GET" not in methods:
            update = next((m for m in methods if m in ("PUT", "PATCH")), None)
            if update:
                warnings.append(warning(IssueKind.UPDATE_WITHOUT_GET, method=update, path=route_path))

    notes = []
    if has_health:
        notes.append("Health endpoint found")
    if not issues and not warnings:
        notes.append("API structure looks good")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
        routes=all_routes,
    )

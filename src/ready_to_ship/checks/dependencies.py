"""
Dependency health checks.

Only a missing or malformed package.json fails this module; everything
else is advisory.
"""

import re
from typing import Optional

from packaging.version import InvalidVersion, Version

from ..fact_store import ScanContext
from ..file_walker import load_package_json
from ..models import IssueKind, ValidatorResult, issue, warning

MODULE = "dependencies"

LOCK_FILES = ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")

WEB_FRAMEWORKS = {
    "express": "Express.js",
    "fastify": "Fastify",
    "koa": "Koa",
    "nestjs": "NestJS",
    "@nestjs/core": "NestJS",
}

SECURITY_PACKAGES = ["helmet", "cors", "express-rate-limit", "bcrypt", "jsonwebtoken"]

# package -> (minimum safe version, reason)
MINIMUM_VERSIONS = {
    "express": ("4.17.0", "Older versions have security vulnerabilities"),
    "lodash": ("4.17.21", "Older versions have security vulnerabilities"),
}

DEV_START_TOOLS = ("nodemon", "ts-node-dev")

MAX_DEPENDENCIES = 100

_VERSION_RE = re.compile(r"\d+(?:\.\d+)*")


def declared_version(spec: str) -> Optional[Version]:
    """Lowest version a semver range like ``^4.16.0`` admits, when it has one."""
    match = _VERSION_RE.search(spec)
    if not match:
        return None
    try:
        return Version(match.group(0))
    except InvalidVersion:
        return None


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Validate package.json, lock file and dependency choices."""
    warnings = []
    notes = []

    manifest = load_package_json(ctx.root)
    if not manifest.found:
        return ValidatorResult(module=MODULE, passed=False, issues=[issue(IssueKind.PACKAGE_JSON_MISSING)])
    if manifest.malformed:
        return ValidatorResult(
            module=MODULE,
            passed=False,
            issues=[issue(IssueKind.PACKAGE_JSON_MALFORMED, file="package.json")],
        )

    if any((ctx.root / name).is_file() for name in LOCK_FILES):
        notes.append("Lock file found")
    else:
        warnings.append(warning(IssueKind.LOCK_FILE_MISSING))

    deps = manifest.dependencies
    if any(name in deps for name in WEB_FRAMEWORKS):
        notes.append("Web framework detected")
    else:
        warnings.append(warning(IssueKind.NO_WEB_FRAMEWORK))

    missing_security = [name for name in SECURITY_PACKAGES if name not in deps]
    if missing_security:
        warnings.append(warning(IssueKind.MISSING_SECURITY_PACKAGES, detail=", ".join(missing_security)))

    for name, (minimum, reason) in MINIMUM_VERSIONS.items():
        if name not in deps:
            continue
        version = declared_version(deps[name])
        if version is not None and version < Version(minimum):
            warnings.append(warning(IssueKind.OUTDATED_PACKAGE, subject=name, detail=reason, file="package.json"))

    total = len(deps)
    if total > MAX_DEPENDENCIES:
        warnings.append(warning(IssueKind.TOO_MANY_DEPENDENCIES, detail=str(total)))

    start_script = str(manifest.scripts.get("start") or "")
    if any(tool in start_script for tool in DEV_START_TOOLS):
        warnings.append(warning(IssueKind.DEV_TOOLS_IN_START, file="package.json"))

    if not warnings:
        notes.append("Dependencies look good")

    return ValidatorResult(
        module=MODULE,
        passed=True,
        warnings=warnings,
        notes=notes,
        total_dependencies=total,
    )

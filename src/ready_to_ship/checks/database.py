"""
Database wiring checks.

Skipped entirely (and counted as passed) when neither .env nor package.json
shows any sign of a database.
"""

import logging
import re
from typing import Optional

from ..fact_store import ScanContext
from ..file_walker import load_package_json, parse_env_file
from ..models import IssueKind, ValidatorResult, issue, warning

logger = logging.getLogger(__name__)

MODULE = "database"

_DB_ENV_KEY_RE = re.compile(r"DATABASE|DB|MONGO|POSTGRES|MYSQL|REDIS", re.IGNORECASE)
_CONNECTION_HANDLING_RE = re.compile(r"catch|error|on\(['\"]error['\"]\)", re.IGNORECASE)
_POOLING_RE = re.compile(r"pool|pooling|max.*connection", re.IGNORECASE)

# package -> database it implies, checked in this order
DB_PACKAGES = {
    "mongoose": "MongoDB",
    "mongodb": "MongoDB",
    "pg": "PostgreSQL",
    "mysql2": "MySQL",
    "mysql": "MySQL",
    "redis": "Redis",
    "ioredis": "Redis",
    "prisma": "Prisma ORM",
    "sequelize": "Sequelize ORM",
    "typeorm": "TypeORM",
}

URL_SCHEMES = [
    ("mongodb", "MongoDB"),
    ("postgres", "PostgreSQL"),
    ("mysql", "MySQL"),
    ("redis", "Redis"),
]

CONNECTION_GLOBS = ["**/{db,database,config}/**/*.{js,ts}", "**/*connection*.{js,ts}"]
MODEL_GLOB = "**/{models,schemas}/**/*.{js,ts}"
MIGRATION_GLOB = "**/{migrations,migrate}/**/*.{js,ts,sql}"


def db_type_from_url(url: str) -> Optional[str]:
    lowered = url.lower()
    for marker, name in URL_SCHEMES:
        if marker in lowered:
            return name
    return None


def run_checks(ctx: ScanContext) -> ValidatorResult:
    """Detect the database and check connection handling, pooling and migrations."""
    issues = []
    warnings = []
    notes = []

    env = parse_env_file(ctx.root / ".env")
    has_db_config = any(_DB_ENV_KEY_RE.search(key) for key in env)
    database_url = env.get("DATABASE_URL", "")
    db_type = db_type_from_url(database_url) if database_url else None

    deps = load_package_json(ctx.root).dependencies
    detected_package = None
    for package, name in DB_PACKAGES.items():
        if package in deps:
            detected_package = name
            if db_type is None:
                db_type = name

    if not has_db_config and detected_package is None:
        logger.debug("No database indicators found, skipping database checks")
        return ValidatorResult(module=MODULE, passed=True, skipped=True)

    if db_type:
        notes.append(f"Database type detected: {db_type}")

    connection_files = ctx.facts.find(*CONNECTION_GLOBS)[:ctx.limits.database_connection_files]
    sources = [code for code in (ctx.facts.read(p) for p in connection_files) if code]

    has_connection_handling = any(_CONNECTION_HANDLING_RE.search(code) for code in sources)
    has_pooling = any(_POOLING_RE.search(code) for code in sources)

    if database_url and ("localhost" in database_url or "127.0.0.1" in database_url):
        warnings.append(warning(IssueKind.DB_LOCALHOST_URL, subject="DATABASE_URL"))

    if connection_files and not has_connection_handling:
        issues.append(issue(IssueKind.DB_CONNECTION_HANDLING_MISSING))

    if detected_package and not has_pooling:
        warnings.append(warning(IssueKind.DB_POOLING_MISSING))

    if detected_package and not ctx.facts.find(MIGRATION_GLOB):
        warnings.append(warning(IssueKind.DB_MIGRATIONS_MISSING))

    if connection_files:
        notes.append("Database connection file found")
    if ctx.facts.find(MODEL_GLOB):
        notes.append("Database models/schemas found")
    if has_connection_handling:
        notes.append("Connection error handling found")
    if not issues and not warnings:
        notes.append("Database configuration looks good")

    return ValidatorResult(
        module=MODULE,
        passed=not issues,
        issues=issues,
        warnings=warnings,
        notes=notes,
        db_type=db_type,
    )

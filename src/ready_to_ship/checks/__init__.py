"""Validator modules, one per quality dimension."""

from .env import run_checks as run_env_checks
from .auth import run_checks as run_auth_checks
from .api import run_checks as run_api_checks
from .project import run_checks as run_project_checks
from .security import run_checks as run_security_checks
from .dependencies import run_checks as run_dependency_checks
from .database import run_checks as run_database_checks

# Report order.
VALIDATORS = {
    "env": run_env_checks,
    "auth": run_auth_checks,
    "api": run_api_checks,
    "project": run_project_checks,
    "security": run_security_checks,
    "dependencies": run_dependency_checks,
    "database": run_database_checks,
}

__all__ = [
    "VALIDATORS",
    "run_env_checks",
    "run_auth_checks",
    "run_api_checks",
    "run_project_checks",
    "run_security_checks",
    "run_dependency_checks",
    "run_database_checks",
]

"""Pydantic models for the ready-to-ship validators."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


MODULE_ORDER = ("env", "auth", "api", "project", "security", "dependencies", "database")


class Severity(str, Enum):
    ISSUE = "issue"
    WARNING = "warning"


class IssueKind(str, Enum):
    """Tag for every finding a validator can emit."""

    # env
    ENV_FILE_MISSING = "env_file_missing"
    ENV_EXAMPLE_MISSING = "env_example_missing"
    MISSING_ENV_VAR = "missing_env_var"
    EMPTY_SECRET = "empty_secret"
    WEAK_SECRET = "weak_secret"
    SHORT_SECRET = "short_secret"
    UNUSED_ENV_VARS = "unused_env_vars"
    INVALID_URL = "invalid_url"
    INVALID_EMAIL = "invalid_email"
    INVALID_PORT = "invalid_port"
    # auth / api
    NO_ROUTE_FILES = "no_route_files"
    UNPROTECTED_ROUTE = "unprotected_route"
    JWT_EXPIRY_TOO_LONG = "jwt_expiry_too_long"
    JWT_EXPIRY_LONG = "jwt_expiry_long"
    MISSING_HEALTH_ENDPOINT = "missing_health_endpoint"
    POST_WITHOUT_COLLECTION_GET = "post_without_collection_get"
    UPDATE_WITHOUT_GET = "update_without_get"
    # project
    README_MISSING = "readme_missing"
    README_TOO_SHORT = "readme_too_short"
    README_NO_INSTRUCTIONS = "readme_no_instructions"
    NO_STANDARD_STRUCTURE = "no_standard_structure"
    NO_ERROR_HANDLER = "no_error_handler"
    PACKAGE_JSON_MISSING = "package_json_missing"
    PACKAGE_JSON_MALFORMED = "package_json_malformed"
    MISSING_START_SCRIPT = "missing_start_script"
    MISSING_DESCRIPTION = "missing_description"
    # security
    CORS_WILDCARD = "cors_wildcard"
    CORS_MISSING = "cors_missing"
    SECURITY_HEADERS_MISSING = "security_headers_missing"
    RATE_LIMIT_MISSING = "rate_limit_missing"
    SECURITY_PACKAGE_MISSING = "security_package_missing"
    EVAL_USAGE = "eval_usage"
    DYNAMIC_REGEX = "dynamic_regex"
    # dependencies
    LOCK_FILE_MISSING = "lock_file_missing"
    NO_WEB_FRAMEWORK = "no_web_framework"
    MISSING_SECURITY_PACKAGES = "missing_security_packages"
    OUTDATED_PACKAGE = "outdated_package"
    TOO_MANY_DEPENDENCIES = "too_many_dependencies"
    DEV_TOOLS_IN_START = "dev_tools_in_start"
    # database
    DB_CONNECTION_HANDLING_MISSING = "db_connection_handling_missing"
    DB_LOCALHOST_URL = "db_localhost_url"
    DB_POOLING_MISSING = "db_pooling_missing"
    DB_MIGRATIONS_MISSING = "db_migrations_missing"
    # aggregator
    MODULE_ERROR = "module_error"


# Rendered with str.format over the finding's payload fields.
MESSAGE_TEMPLATES: dict[IssueKind, str] = {
    IssueKind.ENV_FILE_MISSING: "MISSING: .env file not found",
    IssueKind.ENV_EXAMPLE_MISSING: ".env.example missing ({detail} for team collaboration)",
    IssueKind.MISSING_ENV_VAR: "MISSING: {subject}",
    IssueKind.EMPTY_SECRET: "EMPTY: {subject} is empty",
    IssueKind.WEAK_SECRET: "WEAK SECRET: {subject} (length < 32)",
    IssueKind.SHORT_SECRET: "WEAK: {subject} might be too short (length < 16)",
    IssueKind.UNUSED_ENV_VARS: "UNUSED: Variables in .env but not in .env.example: {detail}",
    IssueKind.INVALID_URL: "INVALID URL: {subject} does not appear to be a valid URL",
    IssueKind.INVALID_EMAIL: "INVALID EMAIL: {subject} does not appear to be a valid email",
    IssueKind.INVALID_PORT: "INVALID PORT: {subject} should be a number",
    IssueKind.NO_ROUTE_FILES: "No route files found. Make sure your project structure is standard.",
    IssueKind.UNPROTECTED_ROUTE: "Route {method} {path} missing auth middleware ({file})",
    IssueKind.JWT_EXPIRY_TOO_LONG: "JWT expiry too long: {detail} (recommended: < 7 days)",
    IssueKind.JWT_EXPIRY_LONG: "JWT expiry is {detail} (recommended: < 7 days)",
    IssueKind.MISSING_HEALTH_ENDPOINT: "/health endpoint missing (recommended for monitoring and load balancers)",
    IssueKind.POST_WITHOUT_COLLECTION_GET: "POST {path} exists but no GET endpoint for collection",
    IssueKind.UPDATE_WITHOUT_GET: "{method} {path} exists but no GET endpoint",
    IssueKind.README_MISSING: "README missing",
    IssueKind.README_TOO_SHORT: "README exists but seems too short or empty",
    IssueKind.README_NO_INSTRUCTIONS: "README missing installation or usage instructions",
    IssueKind.NO_STANDARD_STRUCTURE: "No standard project structure detected (src/, routes/, etc.)",
    IssueKind.NO_ERROR_HANDLER: "Error handling middleware not found (recommended: global error handler)",
    IssueKind.PACKAGE_JSON_MISSING: "package.json not found",
    IssueKind.PACKAGE_JSON_MALFORMED: "package.json is malformed",
    IssueKind.MISSING_START_SCRIPT: 'package.json missing "start" script',
    IssueKind.MISSING_DESCRIPTION: 'package.json missing "description" field',
    IssueKind.CORS_WILDCARD: "CORS configured with wildcard origin (*) - security risk ({file})",
    IssueKind.CORS_MISSING: "CORS middleware not detected (recommended for API security)",
    IssueKind.SECURITY_HEADERS_MISSING: "Security headers not configured (use Helmet.js or configure manually)",
    IssueKind.RATE_LIMIT_MISSING: "Rate limiting not detected (recommended to prevent abuse)",
    IssueKind.SECURITY_PACKAGE_MISSING: 'Security package "{subject}" not found (recommended: npm install {subject})',
    IssueKind.EVAL_USAGE: "eval() usage detected in {file} - security risk",
    IssueKind.DYNAMIC_REGEX: "Dynamic regex construction in {file} - potential ReDoS risk",
    IssueKind.LOCK_FILE_MISSING: "Lock file (package-lock.json, yarn.lock or pnpm-lock.yaml) not found (recommended for reproducible builds)",
    IssueKind.NO_WEB_FRAMEWORK: "No major web framework detected (Express, Fastify, Koa, NestJS)",
    IssueKind.MISSING_SECURITY_PACKAGES: "Missing security packages: {detail}",
    IssueKind.OUTDATED_PACKAGE: "{subject} version might be outdated - {detail}",
    IssueKind.TOO_MANY_DEPENDENCIES: "Large number of dependencies ({detail}) - consider reviewing for unused packages",
    IssueKind.DEV_TOOLS_IN_START: "Development tools in start script (use production tools in production)",
    IssueKind.DB_CONNECTION_HANDLING_MISSING: "Database connection error handling not detected",
    IssueKind.DB_LOCALHOST_URL: "Database URL points to localhost (ensure production uses remote database)",
    IssueKind.DB_POOLING_MISSING: "Connection pooling not detected (recommended for production)",
    IssueKind.DB_MIGRATIONS_MISSING: "No migration files detected (recommended for database versioning)",
    IssueKind.MODULE_ERROR: "Check module '{subject}' encountered an error: {detail}",
}


class Finding(BaseModel):
    """A single issue (blocking) or warning (advisory) from a validator."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    severity: Severity
    subject: Optional[str] = Field(default=None, description="Variable, package or module the finding is about")
    method: Optional[str] = Field(default=None, description="HTTP method for route findings")
    path: Optional[str] = Field(default=None, description="Route path for route findings")
    file: Optional[str] = Field(default=None, description="Project-relative file path")
    line: Optional[int] = Field(default=None)
    detail: Optional[str] = Field(default=None, description="Pre-formatted payload (durations, name lists)")

    @computed_field
    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATES[self.kind].format(
            subject=self.subject,
            method=self.method,
            path=self.path,
            file=self.file,
            line=self.line,
            detail=self.detail,
        )

    def __str__(self) -> str:
        return self.message


def issue(kind: IssueKind, **payload: Any) -> Finding:
    return Finding(kind=kind, severity=Severity.ISSUE, **payload)


def warning(kind: IssueKind, **payload: Any) -> Finding:
    return Finding(kind=kind, severity=Severity.WARNING, **payload)


class RouteRecord(BaseModel):
    """A route registration found in source text."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(description="GET, POST, PUT, DELETE or PATCH")
    path: str = Field(description="Literal path string from the registration call")
    line: int = Field(ge=1, description="1-based line of the match start")
    file: str = Field(default="", description="Project-relative file path")


class ValidatorResult(BaseModel):
    """Verdict of one validator module."""

    model_config = ConfigDict(frozen=True)

    module: str
    passed: bool
    skipped: bool = False
    issues: list[Finding] = Field(default_factory=list)
    warnings: list[Finding] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list, description="Positive observations")
    routes: Optional[list[RouteRecord]] = None
    vulnerable_routes: Optional[list[RouteRecord]] = None
    db_type: Optional[str] = None
    total_dependencies: Optional[int] = None

    @property
    def counts_as_passed(self) -> bool:
        return self.passed or self.skipped


class PackageManifest(BaseModel):
    """Parsed package.json, tolerant of absence and malformed content."""

    found: bool = False
    malformed: bool = False
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def dependencies(self) -> dict[str, str]:
        deps: dict[str, str] = {}
        for section in ("dependencies", "devDependencies"):
            value = self.data.get(section)
            if isinstance(value, dict):
                deps.update({str(k): str(v) for k, v in value.items()})
        return deps

    @property
    def scripts(self) -> dict[str, str]:
        value = self.data.get("scripts")
        return value if isinstance(value, dict) else {}

    @property
    def description(self) -> str:
        value = self.data.get("description")
        return value if isinstance(value, str) else ""


class ModuleSummary(BaseModel):
    passed: bool
    issues: int
    warnings: int


class AggregateReport(BaseModel):
    """Merged verdict over the modules that were run."""

    timestamp: datetime
    project_path: str
    results: dict[str, ValidatorResult] = Field(default_factory=dict)

    @property
    def overall_passed(self) -> bool:
        return all(r.counts_as_passed for r in self.results.values())

    @property
    def total_issues(self) -> int:
        return sum(len(r.issues) for r in self.results.values())

    @property
    def total_warnings(self) -> int:
        return sum(len(r.warnings) for r in self.results.values())

    @property
    def verdict(self) -> str:
        return "READY" if self.overall_passed else "NOT_READY"

    def findings(self, include_warnings: bool = True) -> list[Finding]:
        collected: list[Finding] = []
        for result in self.results.values():
            collected.extend(result.issues)
            if include_warnings:
                collected.extend(result.warnings)
        return collected

    def to_export(self) -> dict[str, Any]:
        """Build the persisted JSON report structure."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "projectPath": self.project_path,
            "verdict": self.verdict,
            "summary": {
                name: ModuleSummary(
                    passed=result.passed,
                    issues=len(result.issues),
                    warnings=len(result.warnings),
                ).model_dump()
                for name, result in self.results.items()
            },
            "details": {
                name: result.model_dump(mode="json", exclude_none=True)
                for name, result in self.results.items()
            },
        }


class FixType(str, Enum):
    CREATE_FILE = "create_file"
    SUGGESTION = "suggestion"


class FixStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    WOULD_CREATE = "would_create"
    SUGGESTION = "suggestion"


class FixAction(BaseModel):
    """A single remediation derived from a finding."""

    model_config = ConfigDict(frozen=True)

    fix_type: FixType
    description: str = Field(description="Human-readable description of what will be done")
    file: Optional[str] = Field(default=None, description="Project-relative file to create")
    content: Optional[str] = Field(default=None, description="Template content for created files")
    source: IssueKind = Field(description="Kind of the finding this fix addresses")


class FixResult(BaseModel):
    """Outcome of applying (or previewing) one fix."""

    action: FixAction
    status: FixStatus
    file_path: Optional[str] = None
    reason: Optional[str] = None


class FixResponse(BaseModel):
    dry_run: bool
    results: list[FixResult] = Field(default_factory=list)
    summary: str = ""


class ReportRequest(BaseModel):
    """Request body for POST /report."""

    path: Optional[str] = Field(default=None, description="Local project directory to validate")
    repo_url: Optional[str] = Field(default=None, description="Git repository URL to clone and validate")
    branch: Optional[str] = Field(default=None, description="Branch to clone; defaults to the remote HEAD")
    skip: list[str] = Field(default_factory=list, description="Modules to leave out of the report")

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "ReportRequest":
        if (self.path is None) == (self.repo_url is None):
            raise ValueError("Provide exactly one of 'path' or 'repo_url'")
        return self

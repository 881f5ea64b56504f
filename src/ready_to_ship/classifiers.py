"""Classification helpers for extracted facts."""

import re
from urllib.parse import urlparse

_SENSITIVE_ROUTE_PATTERNS = [
    re.compile(r"^/admin", re.IGNORECASE),
    re.compile(r"^/api/admin", re.IGNORECASE),
    re.compile(r"/users", re.IGNORECASE),
    re.compile(r"/profile", re.IGNORECASE),
    re.compile(r"/settings", re.IGNORECASE),
    re.compile(r"/account", re.IGNORECASE),
    re.compile(r"/dashboard", re.IGNORECASE),
    re.compile(r"/delete", re.IGNORECASE),
    re.compile(r"/update", re.IGNORECASE),
    re.compile(r"/create", re.IGNORECASE),
    re.compile(r"/edit", re.IGNORECASE),
    re.compile(r"/password", re.IGNORECASE),
    re.compile(r"/auth/change", re.IGNORECASE),
    re.compile(r"/api/v\d+/.*(?:user|admin|auth|profile|settings)", re.IGNORECASE),
]

HEALTH_PATHS = ("/health", "/healthz", "/ping", "/status", "/api/health")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def is_sensitive_route(path: str) -> bool:
    """Heuristic: does this path look like it needs authentication? Method-independent."""
    return any(p.search(path) for p in _SENSITIVE_ROUTE_PATTERNS)


def is_health_route(path: str) -> bool:
    return any(path == h or path.startswith(h + "/") for h in HEALTH_PATHS)


def collection_path(path: str) -> str:
    """Strip the last path segment (``/users/:id`` -> ``/users``)."""
    return re.sub(r"/[^/]+$", "", path)


def format_duration(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds} seconds"
    if seconds < 3600:
        return f"{seconds // 60} minutes"
    if seconds < 86400:
        return f"{seconds // 3600} hours"
    if seconds < 2592000:
        return f"{seconds // 86400} days"
    if seconds < 31536000:
        return f"{seconds // 2592000} months"
    return f"{seconds // 31536000} years"


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    if not parsed.scheme or not _SCHEME_RE.match(parsed.scheme):
        return False
    return bool(parsed.netloc or parsed.path)


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_valid_number(value: str) -> bool:
    """Plain decimal literal; nan, inf and underscore separators are rejected."""
    return bool(_NUMBER_RE.fullmatch(value.strip()))


def is_placeholder(value: str) -> bool:
    """Template values like ``${DATABASE_URL}`` are not validated."""
    return value.startswith("${")

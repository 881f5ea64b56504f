"""
Text extractors: turn raw source text into structured facts.

Everything here is line/regex-based pattern matching over JavaScript and
TypeScript source. Nothing builds an AST; results are best-effort and
deliberately over-approximate.
"""

import re
from typing import Optional

from .models import RouteRecord

HTTP_VERBS = ("get", "post", "put", "delete", "patch")

# Variants are applied independently and concatenated; no dedup.
_ROUTE_PATTERNS = [
    re.compile(r"(?:app|router)\.(get|post|put|delete|patch)\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
    re.compile(r"Route\.(get|post|put|delete|patch)\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
]

_AUTH_CONTEXT_PATTERNS = [
    re.compile(r"authenticate|auth|jwt|verifyToken|requireAuth|isAuthenticated", re.IGNORECASE),
    re.compile(r"passport\.authenticate|express[jJ]wt\s*\("),
    re.compile(r"middleware.*auth", re.IGNORECASE),
]

# Lines before and after the route line that count as its context.
AUTH_CONTEXT_RADIUS = 2

_MIDDLEWARE_PATTERNS = [
    re.compile(r"\.use\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
    re.compile(r"\.use\s*\(\s*([a-zA-Z_$][a-zA-Z0-9_$]*)"),
]

_ERROR_HANDLING_PATTERNS = [
    re.compile(r"catch\s*\("),
    re.compile(r"\.catch\s*\("),
    re.compile(r"errorHandler|error-handler|errorMiddleware", re.IGNORECASE),
    re.compile(r"express\.errorHandler"),
    re.compile(r"app\.use.*error", re.IGNORECASE),
]

# First hit wins, in this order.
_JWT_EXPIRY_PATTERNS = [
    re.compile(r"expiresIn\s*[:=]\s*['\"`]?(\d+)[ \t]*([a-z]+)['\"`]?", re.IGNORECASE),
    re.compile(r"expiresIn\s*[:=]\s*['\"`]?(\d+)", re.IGNORECASE),
    re.compile(r"JWT_EXPIRY\s*[:=]\s*['\"`]?(\d+)[ \t]*([a-z]+)['\"`]?", re.IGNORECASE),
    re.compile(r"JWT_EXPIRY\s*[:=]\s*['\"`]?(\d+)", re.IGNORECASE),
]

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY


def unit_to_seconds(unit: str) -> int:
    """Multiplier for a duration unit token; unknown units count as seconds."""
    unit = unit.lower()
    if "year" in unit or unit in ("y", "yr", "yrs"):
        return YEAR
    # Bare "m" is a month; minutes need "min" or "minute".
    if "month" in unit or unit in ("m", "mo", "mon", "mos"):
        return MONTH
    if "week" in unit or unit in ("w", "wk", "wks"):
        return WEEK
    if "day" in unit or unit == "d":
        return DAY
    if "hour" in unit or unit in ("h", "hr", "hrs"):
        return HOUR
    if "min" in unit:
        return MINUTE
    return 1


def line_of(text: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return text.count("\n", 0, offset) + 1


class RegexExtractor:
    """Default fact extractor. Swap in another object with the same methods to change strategy."""

    def extract_routes(self, code: str, file: str = "") -> list[RouteRecord]:
        routes = []
        for pattern in _ROUTE_PATTERNS:
            for match in pattern.finditer(code):
                routes.append(RouteRecord(
                    method=match.group(1).upper(),
                    path=match.group(2),
                    line=line_of(code, match.start()),
                    file=file,
                ))
        return routes

    def has_auth_middleware(self, code: str, line: int) -> bool:
        lines = code.split("\n")
        start = max(0, line - 1 - AUTH_CONTEXT_RADIUS)
        context = "\n".join(lines[start:line + AUTH_CONTEXT_RADIUS])
        return any(p.search(context) for p in _AUTH_CONTEXT_PATTERNS)

    def extract_middleware(self, code: str) -> list[str]:
        middleware = []
        for pattern in _MIDDLEWARE_PATTERNS:
            middleware.extend(m.group(1) for m in pattern.finditer(code))
        return middleware

    def has_error_handling(self, code: str) -> bool:
        return any(p.search(code) for p in _ERROR_HANDLING_PATTERNS)

    def extract_jwt_expiry(self, code: str) -> Optional[int]:
        for pattern in _JWT_EXPIRY_PATTERNS:
            match = pattern.search(code)
            if match:
                value = int(match.group(1))
                unit = match.group(2) if pattern.groups > 1 else "s"
                return value * unit_to_seconds(unit)
        return None


default_extractor = RegexExtractor()


def extract_routes(code: str, file: str = "") -> list[RouteRecord]:
    """Find `app|router|Route.<verb>('<path>'` registrations."""
    return default_extractor.extract_routes(code, file)


def has_auth_middleware(code: str, line: int) -> bool:
    """Whether the five-line window around ``line`` mentions auth."""
    return default_extractor.has_auth_middleware(code, line)


def extract_middleware(code: str) -> list[str]:
    return default_extractor.extract_middleware(code)


def has_error_handling(code: str) -> bool:
    return default_extractor.has_error_handling(code)


def extract_jwt_expiry(code: str) -> Optional[int]:
    """JWT expiry in seconds from the first matching configuration, or None."""
    return default_extractor.extract_jwt_expiry(code)

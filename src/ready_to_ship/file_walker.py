"""Utilities for discovering and reading project files."""

import io
import json
import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

from dotenv import dotenv_values

from .models import PackageManifest

logger = logging.getLogger(__name__)


SKIP_DIRS = {"node_modules"}

MAIN_FILE_GLOB = "**/{app,server,index,main}.{js,ts}"

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def walk_repo(repo_path: str | Path) -> list[str]:
    """
    Walk a project and return relative POSIX paths of every visible file.

    Hidden directories and files and dependency caches are skipped. The result
    is sorted so glob lookups are deterministic.
    """
    root = Path(repo_path)
    if not root.is_dir():
        return []

    files = []
    for current, dirs, filenames in os.walk(root):
        dirs[:] = [d for d in dirs if d not in SKIP_DIRS and not is_hidden(d)]
        rel_dir = Path(current).relative_to(root)
        for name in filenames:
            if is_hidden(name):
                continue
            files.append((rel_dir / name).as_posix())

    return sorted(files)


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into separate glob patterns."""
    match = _BRACE_RE.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def _translate(pattern: str) -> str:
    out = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:[^/]+/)*")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return "".join(out)


@lru_cache(maxsize=128)
def compile_glob(pattern: str) -> re.Pattern:
    """Compile a glob with ``**``, ``*``, ``?`` and brace alternatives."""
    alternatives = [_translate(p) for p in expand_braces(pattern)]
    return re.compile("(?:" + "|".join(alternatives) + ")")


def match_files(pattern: str, relative_paths: Iterable[str]) -> list[str]:
    regex = compile_glob(pattern)
    return [p for p in relative_paths if regex.fullmatch(p)]


def find_files(pattern: str, root: str | Path) -> list[Path]:
    """Return absolute paths under ``root`` matching ``pattern``."""
    root = Path(root)
    return [root / p for p in match_files(pattern, walk_repo(root))]


def read_text(path: str | Path) -> Optional[str]:
    """Read a file as text; any failure yields None."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="ignore")
    except (IOError, OSError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def parse_env_text(text: str) -> dict[str, str]:
    """Parse KEY=VALUE lines; comments, blanks and bare keys are ignored."""
    values = dotenv_values(stream=io.StringIO(text), interpolate=False)
    return {key.strip(): value for key, value in values.items() if value is not None and key.strip()}


def parse_env_file(path: str | Path) -> dict[str, str]:
    text = read_text(path)
    if not text:
        return {}
    return parse_env_text(text)


def load_package_json(project_path: str | Path) -> PackageManifest:
    """Load package.json, recording whether it was found and parseable."""
    pkg_path = Path(project_path) / "package.json"
    if not pkg_path.is_file():
        return PackageManifest(found=False)

    content = read_text(pkg_path)
    if content is None:
        return PackageManifest(found=True, malformed=True)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug(f"Malformed package.json in {project_path}: {e}")
        return PackageManifest(found=True, malformed=True)

    if not isinstance(data, dict):
        return PackageManifest(found=True, malformed=True)
    return PackageManifest(found=True, data=data)

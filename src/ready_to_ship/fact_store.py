"""Per-project cache of file listings, file text and extracted facts."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import ScanConfig, ScanLimits
from .extractors import RegexExtractor, default_extractor
from .file_walker import match_files, read_text, walk_repo
from .models import RouteRecord

logger = logging.getLogger(__name__)


def _mtime(path: Path) -> Optional[int]:
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


class FactStore:
    """
    Caches reads and route extraction keyed by path + modification time.

    Validators stay independent: each asks the store for what it needs and the
    store only saves repeat work. A file that changes on disk is re-read.
    """

    def __init__(self, root: Path, extractor: Optional[RegexExtractor] = None):
        self.root = root
        self.extractor = extractor or default_extractor
        self._listing: Optional[list[str]] = None
        self._text: dict[Path, tuple[Optional[int], Optional[str]]] = {}
        self._routes: dict[Path, tuple[Optional[int], list[RouteRecord]]] = {}

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    def listing(self) -> list[str]:
        if self._listing is None:
            self._listing = walk_repo(self.root)
            logger.debug(f"Indexed {len(self._listing)} files under {self.root}")
        return self._listing

    def find(self, *patterns: str) -> list[Path]:
        """Absolute paths matching any pattern, in pattern order, each path once."""
        found: dict[Path, None] = {}
        for pattern in patterns:
            for rel in match_files(pattern, self.listing()):
                found.setdefault(self.root / rel, None)
        return list(found)

    def exists(self, name: str) -> bool:
        return (self.root / name).exists()

    def read(self, path: Path) -> Optional[str]:
        marker = _mtime(path)
        cached = self._text.get(path)
        if cached is not None and cached[0] == marker:
            return cached[1]
        text = read_text(path) if marker is not None else None
        self._text[path] = (marker, text)
        return text

    def routes(self, path: Path) -> list[RouteRecord]:
        marker = _mtime(path)
        cached = self._routes.get(path)
        if cached is not None and cached[0] == marker:
            return cached[1]
        code = self.read(path)
        routes = self.extractor.extract_routes(code, self.relative(path)) if code else []
        self._routes[path] = (marker, routes)
        return routes


@dataclass
class ScanContext:
    """Everything a validator needs: where to look, how much to open, and shared facts."""

    root: Path
    limits: ScanLimits = field(default_factory=ScanLimits)
    facts: Optional[FactStore] = None

    def __post_init__(self):
        if self.facts is None:
            self.facts = FactStore(self.root)

    @property
    def extractor(self) -> RegexExtractor:
        return self.facts.extractor

    @classmethod
    def from_config(cls, config: ScanConfig) -> "ScanContext":
        root = config.root
        return cls(root=root, limits=config.limits, facts=FactStore(root))

    @classmethod
    def for_path(cls, project_path: str | Path) -> "ScanContext":
        return cls.from_config(ScanConfig(project_path=Path(project_path)))

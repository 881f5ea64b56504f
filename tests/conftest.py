"""Shared fixtures: build throwaway Node.js projects on disk."""

import json
from pathlib import Path

import pytest

from ready_to_ship.fact_store import ScanContext


@pytest.fixture
def make_project(tmp_path):
    """Write ``{relative path: content}`` into a temp project and return its root.

    Dict values are dumped as JSON, everything else is written as text.
    """

    def build(files: dict) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                content = json.dumps(content)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return build


@pytest.fixture
def make_context(make_project):
    """Like make_project but returns a ScanContext over the project."""

    def build(files: dict) -> ScanContext:
        return ScanContext.for_path(make_project(files))

    return build

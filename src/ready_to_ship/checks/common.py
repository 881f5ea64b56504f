"""Shared helpers for validator modules."""

from pathlib import Path

from ..fact_store import ScanContext
from ..file_walker import MAIN_FILE_GLOB

ROUTE_GLOBS = [
    "**/routes/**/*.{js,ts,jsx,tsx}",
    "**/routes.{js,ts,jsx,tsx}",
    "**/api/**/*.{js,ts,jsx,tsx}",
    "**/src/**/*.{js,ts,jsx,tsx}",
]

CONTROLLER_GLOB = "**/controllers/**/*.{js,ts,jsx,tsx}"


def find_route_files(ctx: ScanContext, include_controllers: bool = False) -> list[Path]:
    """Route-bearing source files, falling back to the main app files."""
    globs = list(ROUTE_GLOBS)
    if include_controllers:
        globs.insert(3, CONTROLLER_GLOB)
    files = ctx.facts.find(*globs)
    if not files:
        files = ctx.facts.find(MAIN_FILE_GLOB)
    return files

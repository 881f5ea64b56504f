"""FastAPI application for ready-to-ship."""

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import ScanConfig
from .git_utils import cloned_repo
from .models import ReportRequest
from .report import run_validation

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ready-to-Ship",
    description="Checks a Node.js backend project for production readiness",
    version=__version__,
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


def validate_project(project_path: Path, skip: list[str]) -> dict[str, Any]:
    report = run_validation(ScanConfig(project_path=project_path, skip=skip))
    return report.to_export()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/report")
async def report(request: ReportRequest) -> dict[str, Any]:
    """
    Run every validator not skipped and return the exported report.

    - **path**: local project directory
    - **repo_url**: git repository to shallow-clone instead
    - **branch**: branch to clone with repo_url
    - **skip**: module names to leave out
    """
    if request.path is not None:
        project_path = Path(request.path).expanduser()
        if not project_path.is_dir():
            raise HTTPException(status_code=400, detail=f"Project path not found: {request.path}")

    try:
        if request.repo_url is not None:
            logger.info(f"Validating repository: {request.repo_url}")
            with cloned_repo(request.repo_url, request.branch) as repo_path:
                return validate_project(repo_path, request.skip)

        logger.info(f"Validating project: {project_path}")
        return validate_project(project_path, request.skip)

    except Exception as e:
        logger.error(f"Validation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Validation failed: {str(e)}")

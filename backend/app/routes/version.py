"""Deployment diagnostics route."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Response

from ..config import Settings, get_settings
from ..models import DeploymentInfo, GitInfo, VersionResponse

router = APIRouter(tags=["diagnostics"])

NO_STORE = "no-store, max-age=0"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/version", response_model=VersionResponse)
async def version(response: Response, settings: Annotated[Settings, Depends(get_settings)]):
    """Current server time and the deployment this process belongs to. Never cached."""
    response.headers["Cache-Control"] = NO_STORE
    return VersionResponse(
        time=utc_timestamp(),
        vercel=DeploymentInfo(
            env=settings.vercel_env,
            deploymentId=settings.vercel_deployment_id,
            url=settings.vercel_url,
            git=GitInfo(
                commitSha=settings.vercel_git_commit_sha,
                commitRef=settings.vercel_git_commit_ref,
                commitMessage=settings.vercel_git_commit_message,
            ),
        ),
    )

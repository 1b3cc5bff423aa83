"""HTTP API exposing the skill manifest, skill content and task composition."""

import logging
import secrets
from typing import Annotated, Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field, StringConstraints

from skill_hub import __version__
from skill_hub.core.exceptions import (
    ContentNotFoundError,
    FetchError,
    SkillNotFoundError,
)
from skill_hub.service import SkillService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

bearer_scheme = HTTPBearer(auto_error=False)


class TaskRequest(BaseModel):
    """Body of POST /api/v1/task."""

    prompt: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        description="Task for the code assistant"
    )
    skills: list[str] = Field(
        default_factory=list, description="Skill ids to inject ahead of the prompt"
    )


class TaskResponse(BaseModel):
    """Composed task returned by POST /api/v1/task."""

    prompt: str
    skills: list[str]
    context: str


def _service(request: Request) -> SkillService:
    return request.app.state.service


def _require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> None:
    expected = request.app.state.api_token
    if not expected:
        return
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=401,
            detail="Invalid or missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def create_app(service: SkillService, api_token: Optional[str] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Service backing every endpoint
        api_token: Bearer token required by POST /api/v1/task; when None the
                   endpoint is unauthenticated

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="skill-hub", version=__version__)
    app.state.service = service
    app.state.api_token = api_token

    if not api_token:
        logger.warning("No API token configured; POST %s/task is unauthenticated", API_PREFIX)

    @app.exception_handler(SkillNotFoundError)
    async def _skill_not_found(request: Request, exc: SkillNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ContentNotFoundError)
    async def _content_not_found(request: Request, exc: ContentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(FetchError)
    async def _fetch_failed(request: Request, exc: FetchError) -> JSONResponse:
        logger.error("Upstream fetch failed: %s", exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.get("/healthz")
    def healthz(service: SkillService = Depends(_service)) -> dict[str, Any]:
        return {"status": "ok", "skills": len(service.registry)}

    @app.get(f"{API_PREFIX}/skills")
    def list_skills(
        tag: Optional[str] = Query(None, max_length=64),
        verified: bool = Query(False, description="Only verified skills"),
        service: SkillService = Depends(_service),
    ) -> list[dict[str, Any]]:
        return service.list_skills(tag=tag, verified_only=verified)

    @app.get(f"{API_PREFIX}/manifest")
    def manifest(service: SkillService = Depends(_service)) -> dict[str, Any]:
        return service.manifest()

    @app.get(f"{API_PREFIX}/skills/{{skill_id}}", response_class=PlainTextResponse)
    async def get_skill(
        skill_id: str,
        refresh: bool = Query(False, description="Bypass the content cache"),
        service: SkillService = Depends(_service),
    ) -> PlainTextResponse:
        content = await service.get_skill(skill_id, force_refresh=refresh)
        return PlainTextResponse(content, media_type="text/markdown")

    @app.post(
        f"{API_PREFIX}/task",
        response_model=TaskResponse,
        dependencies=[Depends(_require_token)],
    )
    async def create_task(
        body: TaskRequest, service: SkillService = Depends(_service)
    ) -> TaskResponse:
        skills = list(dict.fromkeys(body.skills))
        context = await service.compose_task(body.prompt, skills)
        logger.info("Composed task with %d skill(s)", len(skills))
        return TaskResponse(prompt=body.prompt, skills=skills, context=context)

    return app

"""
HTTP API for OrganAIzer.

POST /organize runs one operation on a submitted folder tree; GET / reports
that the service is up.
"""

import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .config import Settings
from .errors import InvalidRequestError
from .llm import create_client
from .service import OPTIONS, Organizer

logger = logging.getLogger(__name__)


class OrganizeRequest(BaseModel):
    """Request body for POST /organize."""

    model_config = ConfigDict(populate_by_name=True)

    folder_data: Any = Field(
        None,
        alias="folderData",
        description="Root node of the folder tree (files and directories)",
    )
    option: str | None = Field(
        None,
        description=f"Operation to run: {', '.join(OPTIONS)}",
        examples=["categorize"],
    )
    user_input: str | None = Field(
        None,
        alias="userInput",
        description="Rename pattern or search query, depending on the option",
    )


def get_organizer(request: Request) -> Organizer:
    return request.app.state.organizer


router = APIRouter()


@router.get("/")
def status(request: Request):
    """Static status indicator."""
    settings = request.app.state.settings
    return {
        "status": "OrganAIzer API is running",
        "version": __version__,
        "aiEnabled": request.app.state.organizer.ai_enabled,
        "model": settings.model,
    }


@router.post("/organize")
def organize(body: OrganizeRequest, organizer: Organizer = Depends(get_organizer)):
    """
    Run one organize operation.

    Client mistakes give 400 with an error message; anything unexpected
    gives 500 with details. AI failures are handled inside the operation
    and still produce a 200 result.
    """
    try:
        return organizer.organize(body.folder_data, body.option, body.user_input)
    except InvalidRequestError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception("Error processing request")
        return JSONResponse(
            status_code=500,
            content={"error": "Error processing request", "details": str(e)},
        )


def create_app(settings: Settings | None = None, client=None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings, read from the environment when omitted.
        client: Completion client; built from settings when omitted.
    """
    if settings is None:
        settings = Settings.from_env()
    if client is None:
        client = create_client(settings)

    app = FastAPI(
        title="OrganAIzer API",
        description="File organization suggestions for a submitted folder tree.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.organizer = Organizer(settings, client)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request, call_next):
        """Add processing time to response headers."""
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    app.include_router(router)

    if settings.ai_enabled:
        logger.info("AI enabled with model %s", settings.model)
    else:
        logger.warning("OPENROUTER_API_KEY not configured, using fallback responses")

    return app

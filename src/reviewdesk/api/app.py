"""ReviewDesk FastAPI application.

Usage:
    uvicorn reviewdesk.api.app:app --port 3000 --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.errors import ReviewDeskError, ReviewValidationError
from .routes import review_router

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ())[1:]) or "body"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "Invalid request - " + "; ".join(parts)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ReviewDesk API",
        description="Normalized guest reviews, totals and moderation",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(ReviewValidationError)
    async def handle_review_validation(request: Request, exc: ReviewValidationError):
        return _error(400, str(exc))

    @app.exception_handler(ReviewDeskError)
    async def handle_review_desk_error(request: Request, exc: ReviewDeskError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return _error(500, str(exc))

    app.include_router(review_router)
    return app


app = create_app()

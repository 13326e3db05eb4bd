from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bidforge.api.applications import router as applications_router
from bidforge.api.generation import router as generation_router
from bidforge.api.profiles import router as profiles_router
from bidforge.api.resumes import router as resumes_router
from bidforge.api.users import router as users_router
from bidforge.config import get_settings
from bidforge.db.init import init_database
from bidforge.errors import BidforgeError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        init_database()

    @app.exception_handler(BidforgeError)
    async def _domain_error(request: Request, exc: BidforgeError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return JSONResponse(status_code=405, content={"error": "Method not allowed"})
        return await http_exception_handler(request, exc)

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(generation_router)
    app.include_router(resumes_router)
    app.include_router(profiles_router)
    app.include_router(applications_router)
    app.include_router(users_router)
    return app

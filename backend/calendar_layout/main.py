from __future__ import annotations

from functools import lru_cache
import logging
import uuid

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .errors import LayoutRequestError
from .models import DayLayout, DayLayoutRequest, ErrorResponse, HealthResponse, WeekLayout, WeekLayoutRequest
from .service import LayoutService

logger = logging.getLogger(__name__)


@lru_cache
def get_service() -> LayoutService:
    settings = get_settings()
    return LayoutService(settings=settings)


def create_app() -> FastAPI:
    settings: Settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Calendar Layout API",
        version="1.0.0",
        description="Column assignment and pixel geometry for day and week time grids.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(LayoutRequestError)
    async def layout_request_exception_handler(request: Request, exc: LayoutRequestError):
        payload = ErrorResponse(detail=str(exc), request_id=getattr(request.state, "request_id", None))
        return JSONResponse(status_code=422, content=payload.model_dump(by_alias=True))

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error while serving %s", request.url.path, exc_info=exc)
        payload = ErrorResponse(
            detail="Internal server error.",
            request_id=getattr(request.state, "request_id", None),
        )
        return JSONResponse(status_code=500, content=payload.model_dump(by_alias=True))

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Calendar Layout API", "docs": "/docs"}

    @app.get("/api/v1/health", response_model=HealthResponse)
    def health(service: LayoutService = Depends(get_service)) -> HealthResponse:
        return service.health()

    @app.post("/api/v1/layout/day", response_model=DayLayout)
    def layout_day(body: DayLayoutRequest, service: LayoutService = Depends(get_service)) -> DayLayout:
        return service.get_day_layout(
            day_date=body.date,
            events=body.events,
            pixels_per_minute=body.pixels_per_minute,
            compact=body.compact,
        )

    @app.post("/api/v1/layout/week", response_model=WeekLayout)
    def layout_week(body: WeekLayoutRequest, service: LayoutService = Depends(get_service)) -> WeekLayout:
        return service.get_week_layout(
            anchor_date=body.anchor_date,
            events=body.events,
            pixels_per_minute=body.pixels_per_minute,
            compact=body.compact,
        )

    return app


app = create_app()

from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from .config import default_per_page, max_per_page
from .db import get_session, init_db
from .errors import ConfigurationError, InvalidArgument
from .log import setup_logging
from .services.ranking import TrendingPage
from .services.trending import trending_questions


EMPTY_MESSAGE = "There is no trending questions right now"


def page_to_dict(result: TrendingPage) -> dict:
    items = []
    for s in result.items:
        payload = s.item.content or {}
        items.append(
            {
                "id": s.item.id,
                "content": payload.get("content"),
                "answer": payload.get("answer"),
                "answered_at": s.item.answered_at.isoformat() if s.item.answered_at else None,
                "likes_count": s.item.likes_count,
                "comments_count": s.item.comments_count,
                "score": s.score,
            }
        )
    return {
        "page": result.page,
        "per_page": result.per_page,
        "total": result.total,
        "has_more": result.has_more,
        "empty": result.is_empty,
        "message": EMPTY_MESSAGE if result.is_empty else None,
        "items": items,
    }


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Trending", version="0.1.0")

    @app.on_event("startup")
    async def _startup() -> None:
        init_db()

    @app.exception_handler(InvalidArgument)
    async def _invalid_argument(request: Request, exc: InvalidArgument):
        return JSONResponse(status_code=422, content={"error": "invalid_argument", "detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def _configuration_error(request: Request, exc: ConfigurationError):
        logger.error("trending config error on {}: {}", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "configuration_error", "key": exc.key, "detail": str(exc)},
        )

    @app.get("/trending")
    async def trending(page: int = 0, per_page: Optional[int] = None, db: Session = Depends(get_session)):
        size = default_per_page() if per_page is None else per_page
        if size > max_per_page():
            raise InvalidArgument(f"per_page must be <= {max_per_page()}, got {size}")
        return page_to_dict(trending_questions(db, page=page, per_page=size))

    return app


app = create_app()

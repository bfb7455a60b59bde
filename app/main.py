from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.http.health import router as health_router
from app.api.http.users import router as users_router
from app.core.config import settings
from app.core.db import dispose_engine, ping_database
from app.core.logging_config import setup_logging
from app.core.middleware import REQUEST_ID_HEADER, add_default_middlewares, get_request_id
from app.domains.users.exceptions import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.ENV, settings.LOG_LEVEL)
    logger.info("Starting User API server...")
    await ping_database()
    yield
    await dispose_engine()
    logger.info("User API server stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="User API",
        description="CRUD для пользователей с вычислением возраста и пагинацией",
        version="1.0.0",
        lifespan=lifespan
    )

    add_default_middlewares(app)

    # Ошибки формы запроса отдаём как 400, а не 422
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.error(f"Validation failed: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": jsonable_errors(exc)}
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )

    # Вызывается из ServerErrorMiddleware, снаружи RequestIDMiddleware,
    # поэтому заголовок X-Request-ID выставляется здесь
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Request error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
            headers={REQUEST_ID_HEADER: get_request_id(request)}
        )

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(users_router)

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Список ошибок валидации без несериализуемых полей (ctx с исключениями)"""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server starting on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

import logging
import time
import uuid

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

logger = logging.getLogger("app.requests")

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Присваивает каждому запросу UUID и возвращает его в заголовке"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestDurationMiddleware(BaseHTTPMiddleware):
    """Логирует метод, путь, статус и длительность каждого запроса"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Ответ 500 сформирует обработчик Exception в ServerErrorMiddleware
            self._log(request, 500, start)
            raise

        self._log(request, response.status_code, start)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Request completed request_id={get_request_id(request)} method={request.method} "
            f"path={request.url.path} status={status_code} "
            f"duration={duration_ms:.2f}ms"
        )


def add_default_middlewares(app: FastAPI) -> None:
    # Последний добавленный middleware выполняется первым:
    # RequestID должен отработать раньше RequestDuration
    app.add_middleware(RequestDurationMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

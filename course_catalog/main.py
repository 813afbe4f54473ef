import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.rate_limit import limiter
from .infrastructure.store import JsonStore
from .interfaces.http.errors import register_error_handlers
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import courses as courses_router
from .interfaces.http.routers import schedule as schedule_router
from .config import settings

# Настройка структурированного логирования
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Course Catalog Service", version="0.1.0")

# Хранилище создаётся один раз и передаётся в обработчики через Depends(get_store)
app.state.store = JsonStore(settings.DATA_DIR)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Добавляем middleware для правильной кодировки и метрик
@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception:
        # ответ 500 отдаст обработчик ошибок, но запрос всё равно учитываем
        _record_request(request, 500, time.time() - start_time)
        raise

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    _record_request(request, response.status_code, time.time() - start_time)
    return response


def _record_request(request: Request, status_code: int, duration: float) -> None:
    method = request.method
    # шаблон маршрута вместо сырого пути, чтобы id не плодили метки
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)

    # Метрики
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    # Логирование
    logger.info(
        "http_request",
        method=method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )


@app.on_event("startup")
def on_startup():
    logger.info("Starting course catalog service", version="0.1.0", data_dir=settings.DATA_DIR)
    app.state.store.ensure_collections()
    logger.info("Data files ready")


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Backend is running!"


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(courses_router.router)
app.include_router(schedule_router.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("course_catalog.main:app", host="0.0.0.0", port=settings.PORT)

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# ✅ Import All API Routes
from mockprep.api.routes import auth, health, interview, interview_session
from mockprep.core import config
from mockprep.core.errors import AppError
from mockprep.core.logging_config import setup_logging, sanitize_log_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL)
    if config.RUN_MIGRATIONS:
        from mockprep.db.migrate import run_migrations
        run_migrations()
    settings = sanitize_log_data({
        "database_url": config.DATABASE_URL,
        "openai_api_key": config.OPENAI_API_KEY,
        "model": config.OPENAI_MODEL or "routed",
        "question_count": config.QUESTION_COUNT,
        "api_base_url": config.API_BASE_URL,
        "cors_origins": config.CORS_ORIGINS,
    })
    logger.info(f"Mock interview API starting: {settings}")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(
    title="Mock Interview API",
    version="1.0.0",
    servers=[{"url": config.API_BASE_URL}],
    lifespan=lifespan,
)

# ✅ CORS LOCKDOWN: ONLY ALLOW CONFIGURED FRONTENDS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR RESPONSES: {"success": false, "error": ...}
# ============================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: code={exc.code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} code={exc.code}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"Invalid request: {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(500, "Internal server error")


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(interview.router)
app.include_router(interview_session.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"status": "Mock Interview API running"}

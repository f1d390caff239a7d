import uvicorn
from datetime import datetime
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.exceptions.handlers import (
    application_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from app.exceptions.errors import ApplicationException
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from fastapi.exceptions import RequestValidationError
from app.core.config import settings
from app.database.connection import engine, init_models

from app.api.v1.routes import (
    auth_router, user_router, subscription_router, stripe_router,
    workspace_router, task_router, habit_router, metric_router,
    pomodoro_router, countdown_router, integration_router, ai_router,
    file_router, tabstash_router, sync_router, quote_router
)
from app.middlewares.auth import JWTAuthMiddleware, whitelisted_routes
from app.middlewares.upload_limit import LimitUploadSizeMiddleware

from app.core.logger import get_logger

logger = get_logger("main")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 FastAPI app is starting...")
    try:
        await init_models()
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise e

    yield

    await engine.dispose()
    logger.info("🛑 FastAPI app is shutting down...")

swagger_ui_parameters = {
    "deepLinking": True,
    "displayRequestDuration": True,
    "tryItOutEnabled": True,
    "filter": True,
}

if settings.IS_DEVELOPMENT:
    swagger_ui_parameters["persistAuthorization"] = True

app = FastAPI(
    title="Momentum Backend",
    version="1.0.0",
    lifespan=lifespan,
    description="""
    Momentum productivity API: tasks, habits, metrics, pomodoro sessions,
    countdowns, workspaces, AI notes, image uploads, tab stashes and
    cross-device sync.

    ## Authentication

    Sign in through `/api/v1/auth/google` or `/api/v1/auth/github`, then send the
    access token on every request:
    ```
    Authorization: Bearer <access-token>
    ```
    Expired access tokens are exchanged at `/api/v1/auth/refresh`.

    Most resources additionally require an active Pro subscription (403 otherwise).
    """,
    swagger_ui_parameters=swagger_ui_parameters,
)

# Last added runs first: CORS, then the session cookie, then auth
app.add_middleware(
    LimitUploadSizeMiddleware,
    max_upload_size=settings.MAX_UPLOAD_SIZE
)

app.add_middleware(
    JWTAuthMiddleware,
    whitelisted_routes=whitelisted_routes
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    https_only=not settings.IS_DEVELOPMENT
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(user_router, prefix="/api/v1")
app.include_router(subscription_router, prefix="/api/v1")
app.include_router(stripe_router, prefix="/api/v1")
app.include_router(workspace_router, prefix="/api/v1")
app.include_router(task_router, prefix="/api/v1")
app.include_router(habit_router, prefix="/api/v1")
app.include_router(metric_router, prefix="/api/v1")
app.include_router(pomodoro_router, prefix="/api/v1")
app.include_router(countdown_router, prefix="/api/v1")
app.include_router(integration_router, prefix="/api/v1")
app.include_router(ai_router, prefix="/api/v1")
app.include_router(file_router, prefix="/api/v1")
app.include_router(tabstash_router, prefix="/api/v1")
app.include_router(sync_router, prefix="/api/v1")
app.include_router(quote_router, prefix="/api/v1")

@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Momentum Backend API",
        "docs": "/docs",
        "development_mode": settings.IS_DEVELOPMENT,
        "version": "1.0.0"
    }

@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}

# Exception handlers
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.IS_DEVELOPMENT,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30
    )

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
import redis.asyncio as redis
import sentry_sdk

from api import activity, auth, project, user, workflow
from core.exceptions import AppError
from db import SessionLocal
from logging_config import setup_logging
from utils.project_helpers import backfill_project_workflows

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
SENTRY_DSN = os.getenv("SENTRY_DSN")
API_PREFIX = "/api"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

setup_logging(APP_ENV, os.getenv("LOG_FILE"))
logger = logging.getLogger(__name__)

if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, environment=APP_ENV)

app = FastAPI(
    title="Project Tracker",
    description="Project tracking backend: projects, lifecycle workflow and activity history",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    redoc_url="/api/redoc",
    openapi_tags=[
        {"name": "Auth", "description": "Authentication and tokens"},
        {"name": "Project Workflow", "description": "Project lifecycle transitions and approval"},
    ],
)


# ✔ Request logger middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.debug(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    return response


# ✔ Domain errors -> 4xx JSON
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# ✔ Anything else -> logged 500
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Server error"})


# ✔ Custom OpenAPI security schema
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # JWT security scheme
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }

    # Apply Bearer auth (except the public auth endpoints)
    public_paths = [
        f"{API_PREFIX}/auth/login",
        f"{API_PREFIX}/auth/register",
        f"{API_PREFIX}/auth/refresh-token",
    ]

    for path in openapi_schema["paths"]:
        for method in openapi_schema["paths"][path]:
            if path not in public_paths:
                openapi_schema["paths"][path][method]["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


# ✔ CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ✔ Startup: redis rate limiter + workflow backfill
@app.on_event("startup")
async def startup_event():
    redis_connection = redis.from_url(
        REDIS_URL,
        encoding="utf-8",
        decode_responses=True
    )

    db = SessionLocal()
    try:
        backfill_project_workflows(db)
    finally:
        db.close()

    await FastAPILimiter.init(redis_connection)


@app.on_event("shutdown")
async def shutdown_event():
    await FastAPILimiter.close()


# ✔ Routers
app.include_router(auth.router, prefix=API_PREFIX, tags=["Auth"])
app.include_router(user.router, prefix=API_PREFIX, tags=["Users"])
app.include_router(project.router, prefix=API_PREFIX, tags=["Projects"])
app.include_router(workflow.router, prefix=API_PREFIX, tags=["Project Workflow"])
app.include_router(activity.router, prefix=API_PREFIX, tags=["Activities"])

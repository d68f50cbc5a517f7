from contextlib import asynccontextmanager

from collabx.core.exceptions import CollabXException, collabx_exception_handler
from collabx.core.logging import configure_logging, get_logger
from collabx.core.middleware import RequestLoggingMiddleware
from collabx.core.rate_limit import limiter
from collabx.core.settings import settings
from collabx.db import Base, engine, get_db, get_db_path
from collabx.routers import admin, api_router, auth, join_requests, me, projects
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup and log where the database lives."""
    import collabx.models  # noqa: F401 - ensure models are imported for metadata

    db_path = get_db_path()
    if db_path:
        logger.info("using_sqlite_database", path=db_path)
    else:
        logger.info("using_database", url=engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    logger.info(
        "application_starting",
        environment=settings.environment,
        enforce_team_capacity=settings.enforce_team_capacity,
    )

    yield

    logger.info("application_shutdown")


app = FastAPI(title="CollabX Backend", version="0.1.0", lifespan=lifespan)

# ============================================================================
# CORS
# ============================================================================
ALLOWED_ORIGINS = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "Accept", "Origin"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

# ============================================================================
# Rate limiting (SlowAPI)
# ============================================================================
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# ============================================================================
# Request logging (added last so it wraps everything)
# ============================================================================
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(CollabXException, collabx_exception_handler)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request, exc):
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded. {exc.detail}"},
    )


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "collabx-backend"}


@app.get("/health/ready")
def readiness_check(db=Depends(get_db)):
    """Readiness probe: verifies database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ready", "database": "connected"}
    except Exception as e:
        logger.warning("readiness_check_failed", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "database": "disconnected", "error": str(e)},
        )


app.include_router(api_router, prefix="/api")
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(join_requests.router)
app.include_router(me.router)
app.include_router(admin.router)

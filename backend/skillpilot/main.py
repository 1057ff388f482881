"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillpilot.api.routes import explore, generation, skill_paths
from skillpilot.core.config import get_settings
from skillpilot.core.database import close_db, init_db
from skillpilot.core.logging import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    configure_logging(debug=settings.DEBUG, level=settings.LOG_LEVEL)
    logger.info(
        "Starting SkillPilot",
        version=settings.APP_VERSION,
        env=settings.ENV,
        debug=settings.DEBUG,
        provider_configured=bool(settings.OPENAI_API_KEY),
    )
    await init_db()
    yield
    # Shutdown
    logger.info("Shutting down SkillPilot")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="AI-generated week-by-week learning roadmaps",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generation.router, prefix="/api")
app.include_router(skill_paths.router, prefix="/api")
app.include_router(explore.router, prefix="/api")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "env": settings.ENV,
    }


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }

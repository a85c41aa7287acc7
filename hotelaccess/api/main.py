import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotelaccess import __version__
from hotelaccess.common.logger import setup_logger
from hotelaccess.core.config import get_settings
from hotelaccess.core.rbac import install_policy
from hotelaccess.core.rbac.loader import load_policy_file
from hotelaccess.api.routers import access, health
from hotelaccess.api.middleware import AccessLogMiddleware

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(
        "hotelaccess",
        log_dir=settings.log_dir,
        level=settings.log_level,
        file_logging=settings.log_to_file,
    )
    # A broken policy file must stop startup rather than fall back silently
    if settings.policy_file:
        install_policy(load_policy_file(settings.policy_file))
    else:
        logger.info("Using built-in access policy")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Role-based navigation, route and permission decisions for the hotel dashboard",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Logs all API requests with the caller's role
app.add_middleware(AccessLogMiddleware)

app.include_router(health.router)
app.include_router(access.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else None,
    }

"""Family Calendar Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from family_calendar.core.config import settings
from family_calendar.core.database import create_db_and_tables
from family_calendar.routes import auth, backgrounds, events, family

# Configure logging
log_dir = Path.home() / ".logs" / "family_calendar"
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Family Calendar application")
    create_db_and_tables()
    yield
    logger.info("Family Calendar application shut down")


app = FastAPI(
    title=settings.app_name,
    description="A shared family calendar with private events and yearly recurrence",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(events.router)
app.include_router(family.router)
app.include_router(backgrounds.router)


@app.get("/")
async def root(request: Request):
    """Redirect root to the rolling agenda."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/events/agenda")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}

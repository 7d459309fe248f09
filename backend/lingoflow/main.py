import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from lingoflow.db import get_settings, verify_connection, close_client
from lingoflow.routers import cards_router, study_router
from lingoflow.auth import get_auth_settings

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    auth_settings = get_auth_settings()

    if auth_settings.enabled:
        if auth_settings.is_configured():
            logger.info("Token authentication enabled (%s)", auth_settings.jwt_algorithm)
        else:
            logger.warning("Authentication enabled but not configured (missing JWT_SECRET)")
    else:
        logger.warning("Authentication DISABLED - using X-User-Id header fallback (dev mode)")

    if settings.is_configured():
        if verify_connection():
            logger.info("Connected to Cosmos DB")
        else:
            logger.error("Failed to connect to Cosmos DB - check configuration")
    else:
        logger.warning("Cosmos DB not configured (COSMOS_ENDPOINT not set)")

    yield

    # Shutdown
    close_client()
    logger.info("Cosmos DB connection closed")


app = FastAPI(
    title="LingoFlow API",
    description="Vocabulary flashcards with spaced-repetition scheduling and multi-device sync",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cards_router)
app.include_router(study_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "LingoFlow API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "cards": "/cards",
            "sync": "/cards/sync",
            "import": "/cards/import",
            "study": "/study",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}

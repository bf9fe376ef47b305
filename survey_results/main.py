"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from survey_results.api import results
from survey_results.core.config import settings
from survey_results.core.http_client import get_survey_api_client

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = get_survey_api_client()
    await client.startup()
    logger.info("Survey results service started (%s)", settings.ENVIRONMENT)
    yield
    await client.shutdown()


app = FastAPI(
    title="Survey Results API",
    description="Per-question results derived from survey API snapshots",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(results.router)


@app.get("/health", tags=["Health"])
def health():
    """Liveness check."""
    return {"status": "ok", "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("survey_results.main:app", host="0.0.0.0", port=8000)

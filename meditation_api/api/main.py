# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from meditation_api.config import get_settings
from meditation_api.api.routes import health, recommendations
from meditation_api.services.recommendation_service import shutdown_recommendation_orchestrator

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release the MongoDB/Qdrant connection pools and HTTP sessions
    shutdown_recommendation_orchestrator()


app = FastAPI(title="Meditation Recommendation Service", version="1.0.0", lifespan=lifespan)

app.include_router(recommendations.router, tags=["recommendations"])
app.include_router(health.router, tags=["health"])


# Catch-all for unhandled exceptions; no internal detail leaves the process
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

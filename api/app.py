# uvicorn - server to post and run
# uvicorn api.app:app --reload
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import load_settings
from api.routers.russian import router as russian_router
from common.http_client import get_client
from common.logging import setup_logging
from core.errors import AnalysisFailedError, ConfigurationError

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Single pooled client for every outbound call, closed on shutdown
    app.state.settings = load_settings()
    app.state.http = get_client()
    try:
        yield
    finally:
        await app.state.http.aclose()


app = FastAPI(lifespan=lifespan)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logging.error(f"Configuration error: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server is not configured"})


@app.exception_handler(AnalysisFailedError)
async def analysis_failed_handler(request: Request, exc: AnalysisFailedError):
    logging.error(f"Analysis failed: {exc}")
    return JSONResponse(status_code=502, content={"error": "Analysis failed"})


app.include_router(russian_router)

"""FastAPI application entrypoint."""

import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from dormant_leads.adapters.inbound.http.redirects import router as redirects_router
from dormant_leads.adapters.inbound.http.routes import load_in_memory_catalog, router
from dormant_leads.infrastructure.config.settings import settings
from dormant_leads.infrastructure.db import create_tables, dispose_engine
from dormant_leads.infrastructure.logging.logger import log_event, log_request

# Load environment variables from .env file
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        log_event(component="startup", tables=create_tables())
    loaded = await load_in_memory_catalog()
    log_event(component="startup", phone_models_loaded=loaded)
    yield
    dispose_engine()


app = FastAPI(
    title="Dormant Lead Service",
    description="Detects dormant phone lines after a SIM swap and tracks trade-in leads",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_logger(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=(time.perf_counter() - started) * 1000,
        client=request.client.host if request.client else None,
    )
    return response


app.include_router(router)
app.include_router(redirects_router)

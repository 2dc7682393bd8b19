"""
FastAPI app

- CORS configured for the caregiver web app
- Single router for all endpoints under /api/v1
- Basic health check
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from disfagia_monitor.api import router
from disfagia_monitor.core.config import CORS_ORIGINS, LOG_LEVEL
from disfagia_monitor.api.middleware import TimingMiddleware

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="DisfagiaMonitor", version="1.0.0")

# Logs request duration and caregiver_id for all requests
app.add_middleware(TimingMiddleware)

# Explicitly allow X-Caregiver-ID header for caregiver context
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    """
    Basic health check
    """
    return {"status": "ok"}

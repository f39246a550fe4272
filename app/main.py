from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes_health, routes_knowledge, routes_transcripts
from app.core.config import get_settings
from app.core.logger import get_logger
from app.services.voiceflow_client import get_voiceflow_client

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        # Shutdown
        await get_voiceflow_client().aclose()


app = FastAPI(
    title="Voiceflow Relay API",
    description="Knowledge-base and transcript relay for Voiceflow agents",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(routes_knowledge.router, prefix="/api", tags=["Knowledge"])
app.include_router(routes_transcripts.router, prefix="/api", tags=["Transcripts"])
app.include_router(routes_health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {"status": "Voiceflow relay running"}


def run() -> None:
    settings = get_settings()
    log.info("Server running on port %d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.error_handlers import register_error_handlers
from core.logging import RequestLoggingMiddleware, setup_logging
from routers import (
    auth as auth_router,
    cards as cards_router,
    decks as decks_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("PokemonTCG API starting")
    yield
    logger.info("PokemonTCG API stopped")


app = FastAPI(title="PokemonTCG", lifespan=lifespan)
register_error_handlers(app)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(cards_router.router)
app.include_router(decks_router.router)


@app.get("/status")
async def status():
    return {"status": "ok"}

if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)

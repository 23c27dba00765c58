import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import engine, Base
from app.routers import profile, recordings, shop, stats
from app.services.sentence_corpus import get_corpus

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    corpus = get_corpus()
    logger.info(f"SesBank ready with {len(corpus)} sentences")
    yield


app = FastAPI(title="SesBank Voice Donation API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile.router)
app.include_router(recordings.router)
app.include_router(shop.router)
app.include_router(stats.router)


@app.get("/")
def root():
    return {"app": "sesbank", "version": "0.1.0"}

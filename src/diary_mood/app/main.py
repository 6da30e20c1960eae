import logging
import secrets
from contextlib import asynccontextmanager
from typing import Callable

import requests
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.middleware.sessions import SessionMiddleware

from ..core.catalog import SpotifyCatalog
from ..core.classifier import SentimentClassifier
from ..core.config import (
    OPENAI_MODEL,
    SESSION_SECRET,
    configure_logging_from_env,
    get_db_client,
    get_openai_client,
)
from ..core.spotify_oauth import SpotifyOAuth
from ..core.store import DiaryStore
from . import schemas, services
from .auth import router as auth_router
from .dependencies import (
    Principal,
    get_catalog,
    get_classifier,
    get_current_user,
    get_principal,
    get_store,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Anything not injected through create_app is built from the environment.
    if app.state.store is None:
        app.state.store = DiaryStore(get_db_client())
    if app.state.classifier is None:
        app.state.classifier = SentimentClassifier(get_openai_client(), OPENAI_MODEL)
    if app.state.oauth is None:
        app.state.oauth = SpotifyOAuth(session=app.state.http_session)
    yield
    app.state.http_session.close()


def create_app(
    store: DiaryStore | None = None,
    classifier: SentimentClassifier | None = None,
    oauth: SpotifyOAuth | None = None,
    catalog_factory: Callable[[str, requests.Session], SpotifyCatalog] = SpotifyCatalog,
    session_secret: str | None = None,
) -> FastAPI:
    configure_logging_from_env()

    app = FastAPI(title="Diary Mood API", lifespan=lifespan)
    app.state.store = store
    app.state.classifier = classifier
    app.state.oauth = oauth
    app.state.catalog_factory = catalog_factory
    # One connection pool for all outbound Spotify calls, closed on shutdown.
    app.state.http_session = requests.Session()

    secret_key = session_secret or SESSION_SECRET
    if not secret_key:
        logger.warning("SESSION_SECRET not set; sessions will not survive a restart.")
        secret_key = secrets.token_urlsafe(32)
    app.add_middleware(SessionMiddleware, secret_key=secret_key)

    app.include_router(auth_router)

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/health")
    def health_check():
        """Health check endpoint for Docker containers."""
        return {"status": "healthy", "service": "diary-mood"}

    @app.post("/api/sentiment", response_model=schemas.SentimentResponse)
    def analyze_sentiment(
        request: schemas.SentimentRequest,
        principal: Principal = Depends(get_principal),
        classifier: SentimentClassifier = Depends(get_classifier),
    ):
        """
        Endpoint to classify the sentiment and mood of a diary entry.
        """
        if not request.text.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
        return services.analyze_text(request.text, classifier)

    @app.post("/api/spotify/recommendations", response_model=schemas.RecommendationResponse)
    def recommend_tracks(
        request: schemas.RecommendationRequest,
        catalog: SpotifyCatalog = Depends(get_catalog),
    ):
        """
        Endpoint to get track recommendations for a sentiment and mood.
        """
        return services.get_recommendations(request.sentiment, request.mood, catalog)

    @app.post("/api/spotify/playlists", response_model=schemas.PlaylistResponse)
    def create_playlist(
        request: schemas.PlaylistRequest,
        catalog: SpotifyCatalog = Depends(get_catalog),
    ):
        return services.create_playlist(request.name, request.track_ids, catalog)

    @app.post(
        "/api/entries",
        response_model=schemas.EntryResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def create_entry(
        request: schemas.EntryCreate,
        user: dict = Depends(get_current_user),
        store: DiaryStore = Depends(get_store),
    ):
        return services.save_entry(user, request, store)

    @app.get("/api/entries", response_model=list[schemas.EntryResponse])
    def list_entries(
        user: dict = Depends(get_current_user),
        store: DiaryStore = Depends(get_store),
    ):
        """
        Endpoint to list the 50 most recent entries of the signed-in user, newest first.
        """
        return services.list_recent_entries(user, store)

    return app


app = create_app()

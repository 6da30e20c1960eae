import logging

from ..core.catalog import SpotifyCatalog
from ..core.classifier import SentimentClassifier
from ..core.mood_mapper import map_to_recommendation_query
from ..core.store import MAX_ENTRIES, DiaryStore
from .schemas import (
    EntryCreate,
    EntryResponse,
    PlaylistResponse,
    RecommendationResponse,
    SentimentResponse,
    TargetFeatures,
)

logger = logging.getLogger(__name__)


def analyze_text(text: str, classifier: SentimentClassifier) -> SentimentResponse:
    """
    Service layer function to classify a diary entry.
    """
    result = classifier.analyze(text.strip())
    return SentimentResponse(**result.model_dump())


def get_recommendations(
    sentiment: str, mood: str | None, catalog: SpotifyCatalog
) -> RecommendationResponse:
    query = map_to_recommendation_query(sentiment, mood)
    tracks = catalog.recommend(query)
    return RecommendationResponse(
        tracks=tracks,
        seed_genres=list(query.seed_genres),
        target_features=TargetFeatures(
            valence=query.features.valence,
            energy=query.features.energy,
            danceability=query.features.danceability,
        ),
    )


def create_playlist(name: str, track_ids: list[str], catalog: SpotifyCatalog) -> PlaylistResponse:
    playlist = catalog.create_playlist(name, track_ids)
    if playlist is None:
        logger.warning(f"No playlist created for '{name}'")
    return PlaylistResponse(playlist=playlist)


def save_entry(user: dict, payload: EntryCreate, store: DiaryStore) -> EntryResponse:
    entry = store.create_entry(str(user["_id"]), payload.model_dump())
    return EntryResponse(**entry.model_dump())


def list_recent_entries(user: dict, store: DiaryStore) -> list[EntryResponse]:
    entries = store.list_entries(str(user["_id"]), limit=MAX_ENTRIES)
    return [EntryResponse(**entry.model_dump()) for entry in entries]

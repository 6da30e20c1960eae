from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from ..core.models import Entry, Playlist, SentimentResult, Track
from ..core.mood_mapper import Mood, Sentiment


class SentimentRequest(BaseModel):
    text: str = ""


class SentimentResponse(SentimentResult):
    pass


class RecommendationRequest(BaseModel):
    sentiment: str
    mood: Optional[str] = None


class TargetFeatures(BaseModel):
    valence: float
    energy: float
    danceability: float


class RecommendationResponse(BaseModel):
    tracks: list[Track]
    seed_genres: list[str]
    target_features: TargetFeatures


class PlaylistRequest(BaseModel):
    name: str = Field(..., min_length=1)
    track_ids: list[str] = []


class PlaylistResponse(BaseModel):
    playlist: Optional[Playlist] = None


class EntryCreate(BaseModel):
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    sentiment: Sentiment
    confidence: float = Field(..., ge=0.0, le=1.0)
    mood: Mood
    song_id: Optional[str] = None
    song_name: Optional[str] = None
    artist_name: Optional[str] = None
    song_url: Optional[str] = None


class EntryResponse(Entry):
    pass

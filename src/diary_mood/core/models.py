from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .mood_mapper import Mood, Sentiment


class SentimentResult(BaseModel):
    sentiment: Sentiment
    confidence: float = Field(..., ge=0.0, le=1.0)
    mood: Mood
    explanation: Optional[str] = None

    @field_validator("sentiment", "mood", mode="before")
    def lowercase_labels(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @classmethod
    def neutral(cls) -> "SentimentResult":
        return cls(sentiment="neutral", confidence=0.5, mood="calm")


class Track(BaseModel):
    id: str
    name: str
    artists: List[str]
    external_url: Optional[str] = None
    preview_url: Optional[str] = None

    @classmethod
    def from_spotify(cls, item: dict) -> "Track":
        return cls(
            id=item["id"],
            name=item["name"],
            artists=[a["name"] for a in item.get("artists") or [] if a.get("name")],
            external_url=(item.get("external_urls") or {}).get("spotify"),
            preview_url=item.get("preview_url"),
        )


class Playlist(BaseModel):
    id: str
    external_url: Optional[str] = None


class Entry(BaseModel):
    id: str
    user_id: str
    content: str
    sentiment: Sentiment
    confidence: float = Field(..., ge=0.0, le=1.0)
    mood: Mood
    created_at: datetime
    song_id: Optional[str] = None
    song_name: Optional[str] = None
    artist_name: Optional[str] = None
    song_url: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "665f1c2e9b1e8a3d4c2b1a00",
                "user_id": "665f1c2e9b1e8a3d4c2b19ff",
                "content": "Went for a long run by the river, felt great.",
                "sentiment": "positive",
                "confidence": 0.92,
                "mood": "energetic",
                "created_at": "2026-10-19T08:30:00Z",
                "song_id": "4uLU6hMCjMI75M1A2tKUQC",
                "song_name": "Never Gonna Give You Up",
                "artist_name": "Rick Astley",
                "song_url": "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC",
            }
        }
    }

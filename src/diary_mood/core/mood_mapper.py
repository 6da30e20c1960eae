# src/diary_mood/core/mood_mapper.py
from dataclasses import dataclass, replace
from typing import Literal, get_args

Sentiment = Literal["positive", "negative", "neutral"]
Mood = Literal[
    "happy",
    "sad",
    "energetic",
    "calm",
    "anxious",
    "excited",
    "melancholy",
    "peaceful",
    "angry",
    "content",
]

SENTIMENTS: tuple[str, ...] = get_args(Sentiment)
MOODS: tuple[str, ...] = get_args(Mood)

DEFAULT_SENTIMENT = "neutral"

# The recommendations endpoint rejects more than 3 genre seeds.
MAX_SEED_GENRES = 3


@dataclass(frozen=True)
class AudioFeatureTarget:
    valence: float
    energy: float
    danceability: float


@dataclass(frozen=True)
class RecommendationQuery:
    seed_genres: tuple[str, ...]
    features: AudioFeatureTarget

    def to_params(self, limit: int = 10) -> dict[str, str]:
        """Renders the query as Spotify `/recommendations` parameters."""
        return {
            "seed_genres": ",".join(self.seed_genres),
            "target_valence": str(self.features.valence),
            "target_energy": str(self.features.energy),
            "target_danceability": str(self.features.danceability),
            "limit": str(limit),
        }


SENTIMENT_GENRES: dict[str, list[str]] = {
    "positive": ["pop", "indie", "electronic", "dance", "funk"],
    "negative": ["indie", "alternative", "blues", "folk", "ambient"],
    "neutral": ["chill", "acoustic", "indie-folk", "ambient", "jazz"],
}

MOOD_GENRES: dict[str, list[str]] = {
    "happy": ["pop", "dance", "funk", "disco"],
    "energetic": ["electronic", "dance", "rock", "pop"],
    "calm": ["ambient", "chill", "acoustic", "classical"],
    "sad": ["blues", "indie", "folk", "alternative"],
    "anxious": ["ambient", "chill", "classical"],
    "excited": ["pop", "electronic", "dance"],
    "melancholy": ["indie", "alternative", "folk"],
    "peaceful": ["ambient", "classical", "acoustic"],
    "angry": ["rock", "alternative", "metal"],
    "content": ["indie", "folk", "acoustic"],
}

SENTIMENT_FEATURES: dict[str, AudioFeatureTarget] = {
    "positive": AudioFeatureTarget(valence=0.7, energy=0.6, danceability=0.6),
    "negative": AudioFeatureTarget(valence=0.3, energy=0.4, danceability=0.4),
    "neutral": AudioFeatureTarget(valence=0.5, energy=0.5, danceability=0.5),
}

# Partial overrides: only the listed fields replace the sentiment defaults.
MOOD_FEATURE_OVERRIDES: dict[str, dict[str, float]] = {
    "energetic": {"energy": 0.8, "danceability": 0.7},
    "calm": {"energy": 0.3, "valence": 0.6},
    "excited": {"energy": 0.9, "valence": 0.8, "danceability": 0.8},
    "sad": {"valence": 0.2, "energy": 0.3},
    "peaceful": {"valence": 0.7, "energy": 0.2},
}


def _normalize(label: str | None) -> str:
    return (label or "").strip().lower()


def genres_for(sentiment: str | None, mood: str | None = None) -> list[str]:
    """
    Returns the full, untruncated genre list: sentiment genres followed by mood genres.

    Duplicates are kept; callers truncate to `MAX_SEED_GENRES`.
    """
    sentiment_key = _normalize(sentiment)
    base = SENTIMENT_GENRES.get(sentiment_key, SENTIMENT_GENRES[DEFAULT_SENTIMENT])
    return [*base, *MOOD_GENRES.get(_normalize(mood), [])]


def audio_features_for(sentiment: str | None, mood: str | None = None) -> AudioFeatureTarget:
    base = SENTIMENT_FEATURES.get(
        _normalize(sentiment), SENTIMENT_FEATURES[DEFAULT_SENTIMENT]
    )
    overrides = MOOD_FEATURE_OVERRIDES.get(_normalize(mood), {})
    return replace(base, **overrides)


def map_to_recommendation_query(
    sentiment: str | None, mood: str | None = None
) -> RecommendationQuery:
    """
    Translates a (sentiment, mood) pair into genre seeds and target audio features.

    Unknown sentiments fall back to the neutral row; unknown moods contribute
    neither genres nor feature overrides. Seeds are cut to `MAX_SEED_GENRES`
    after concatenation, so sentiment genres take precedence over mood genres.
    """
    seeds = genres_for(sentiment, mood)[:MAX_SEED_GENRES]
    return RecommendationQuery(
        seed_genres=tuple(seeds),
        features=audio_features_for(sentiment, mood),
    )

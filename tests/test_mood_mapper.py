import pytest

from diary_mood.core.mood_mapper import (
    MAX_SEED_GENRES,
    MOODS,
    SENTIMENTS,
    AudioFeatureTarget,
    audio_features_for,
    genres_for,
    map_to_recommendation_query,
)


@pytest.mark.parametrize("sentiment", SENTIMENTS)
@pytest.mark.parametrize("mood", [*MOODS, None, "bored"])
def test_query_is_bounded(sentiment, mood):
    query = map_to_recommendation_query(sentiment, mood)
    assert 0 < len(query.seed_genres) <= MAX_SEED_GENRES
    for value in (query.features.valence, query.features.energy, query.features.danceability):
        assert 0.0 <= value <= 1.0


def test_positive_energetic():
    query = map_to_recommendation_query("positive", "energetic")
    assert query.features == AudioFeatureTarget(valence=0.7, energy=0.8, danceability=0.7)
    assert query.seed_genres[0] == "pop"


def test_unknown_sentiment_behaves_like_neutral():
    for mood in (None, "calm", "excited"):
        assert map_to_recommendation_query("ecstatic", mood) == map_to_recommendation_query("neutral", mood)
    assert audio_features_for(None) == AudioFeatureTarget(0.5, 0.5, 0.5)


def test_unknown_mood_contributes_nothing():
    assert map_to_recommendation_query("negative", "bored") == map_to_recommendation_query("negative")
    assert genres_for("negative", "bored") == genres_for("negative")
    assert audio_features_for("negative", "bored") == AudioFeatureTarget(0.3, 0.4, 0.4)


def test_mood_overrides_only_listed_fields():
    # calm sets energy and valence, danceability stays at the sentiment default
    assert audio_features_for("negative", "calm") == AudioFeatureTarget(valence=0.6, energy=0.3, danceability=0.4)
    # happy has no overrides at all
    assert audio_features_for("positive", "happy") == audio_features_for("positive")


def test_sentiment_genres_crowd_out_mood_genres():
    full = genres_for("neutral", "angry")
    assert full == ["chill", "acoustic", "indie-folk", "ambient", "jazz", "rock", "alternative", "metal"]
    assert map_to_recommendation_query("neutral", "angry").seed_genres == ("chill", "acoustic", "indie-folk")


def test_duplicates_are_kept():
    assert genres_for("positive", "happy").count("pop") == 2


def test_labels_are_normalized():
    assert map_to_recommendation_query(" Positive ", "ENERGETIC") == map_to_recommendation_query("positive", "energetic")


def test_to_params():
    params = map_to_recommendation_query("positive", "excited").to_params(limit=5)
    assert params == {
        "seed_genres": "pop,indie,electronic",
        "target_valence": "0.8",
        "target_energy": "0.9",
        "target_danceability": "0.8",
        "limit": "5",
    }

# src/diary_mood/core/config.py
import logging
import os

from dotenv import load_dotenv
from openai import OpenAI
from pymongo import MongoClient
from pymongo.database import Database

load_dotenv(".env")

logger = logging.getLogger(__name__)


# --- LLM ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

# --- MongoDB ---
MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("DB_NAME", "diary_mood")
USERS_COLLECTION = os.getenv("MONGO_USERS_COLLECTION", "users")
ENTRIES_COLLECTION = os.getenv("MONGO_ENTRIES_COLLECTION", "entries")

# --- Spotify ---
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://localhost:8000/auth/callback"
)
SPOTIFY_API_URL = os.getenv("SPOTIFY_API_URL", "https://api.spotify.com/v1")
SPOTIFY_ACCOUNTS_URL = os.getenv(
    "SPOTIFY_ACCOUNTS_URL", "https://accounts.spotify.com"
)
RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "10"))

# --- Web ---
SESSION_SECRET = os.getenv("SESSION_SECRET")
FRONTEND_URL = os.getenv("FRONTEND_URL", "/")


def configure_logging_from_env() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def get_db_client(mongo_uri: str | None = None, db_name: str | None = None) -> Database:
    """
    Builds a MongoDB database handle from the given settings or the environment.

    A new client is created on every call; the caller owns it and is expected
    to hand it to whatever needs it (see `create_app`).
    """
    mongo_uri = mongo_uri or MONGO_URI
    db_name = db_name or DB_NAME
    if not mongo_uri or not db_name:
        raise ValueError("MONGO_URI or DB_NAME not found in environment variables.")

    logger.info(f"Initializing MongoDB client for database '{db_name}'")
    client = MongoClient(mongo_uri, serverSelectionTimeoutMS=5000, tz_aware=True)
    return client[db_name]


def get_openai_client(api_key: str | None = None) -> OpenAI:
    """Returns an OpenAI client instance based on config."""
    api_key = api_key or OPENAI_API_KEY
    if not api_key:
        raise ValueError("OPENAI_API_KEY not found in environment variables.")
    return OpenAI(api_key=api_key)

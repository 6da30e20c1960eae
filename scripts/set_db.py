import logging
import os
from typing import Tuple

import pymongo
from dotenv import load_dotenv
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database


# Module logger
logger = logging.getLogger("diary_mood.set_db")


def configure_logging_from_env() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def load_env_variables() -> None:
    load_dotenv(".env")
    configure_logging_from_env()
    logger.info("Environment loaded")


def connect_to_mongo(db_name: str) -> Tuple[MongoClient, Database]:
    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ValueError("MONGO_URI not found in environment variables.")
    client = MongoClient(mongo_uri, serverSelectionTimeoutMS=5000)
    client.admin.command("ping")
    logger.info("Connected to MongoDB")
    return client, client[db_name]


def create_user_indexes(collection: pymongo.collection.Collection) -> list[str]:
    logger.info(f"Creating indexes on '{collection.name}'...")
    return [collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")]


def create_entry_indexes(collection: pymongo.collection.Collection) -> list[str]:
    # Serves the "latest entries of a user" listing.
    logger.info(f"Creating indexes on '{collection.name}'...")
    return [
        collection.create_index(
            [("user_id", ASCENDING), ("created_at", DESCENDING)],
            name="user_recent_entries",
        )
    ]


def setup_indexes(db: Database, users_collection: str, entries_collection: str) -> list[str]:
    created = create_user_indexes(db[users_collection])
    created += create_entry_indexes(db[entries_collection])
    logger.info(f"Indexes ready: {', '.join(created)}")
    return created


def main() -> None:
    load_env_variables()

    DB_NAME = os.getenv("DB_NAME", "diary_mood")
    USERS_COLLECTION = os.getenv("MONGO_USERS_COLLECTION", "users")
    ENTRIES_COLLECTION = os.getenv("MONGO_ENTRIES_COLLECTION", "entries")

    client = None
    try:
        client, db = connect_to_mongo(DB_NAME)
        setup_indexes(db, USERS_COLLECTION, ENTRIES_COLLECTION)
    finally:
        if client:
            client.close()
            logger.info("MongoDB connection closed")


if __name__ == "__main__":
    main()

import structlog
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, PyMongoError

from moodtrack.config import Settings
from moodtrack.errors import UpstreamError

logger = structlog.get_logger()


def connect(settings: Settings) -> MongoClient:
    """Open a client and ping the deployment so a bad URI fails at startup."""
    client = MongoClient(settings.mongo_uri)
    try:
        client.admin.command("ping")
    except ConnectionFailure as e:
        client.close()
        logger.error("mongo_connect_failed", error=str(e))
        raise UpstreamError(f"Could not connect to MongoDB: {e}") from e

    logger.info("mongo_connected", db=settings.db_name)
    return client


def get_mood_collection(client: MongoClient, settings: Settings) -> Collection:
    return client[settings.db_name][settings.mood_collection]


def ensure_indexes(collection: Collection) -> None:
    # One record per user; lets create() detect a lost first-submission race
    try:
        collection.create_index([("userId", ASCENDING)], unique=True)
    except PyMongoError as e:
        logger.error("mongo_index_failed", error=str(e))
        raise UpstreamError(f"Could not create mood record index: {e}") from e

import logging
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from GlobalMarket.app.config import Config
from GlobalMarket.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_connection_string(config=Config):
    """Return MONGO_URI, or an Atlas SRV string built from user/password/host."""
    if config.MONGO_URI:
        return config.MONGO_URI

    if not config.MONGO_PWD:
        raise ConfigurationError("MONGO_URI or MONGO_PWD environment variable must be set")
    if not config.MONGO_USER or not config.MONGO_HOST:
        raise ConfigurationError("MONGO_USER and MONGO_HOST must be set together with MONGO_PWD")

    # URL encode the credentials
    user = quote_plus(config.MONGO_USER)
    password = quote_plus(config.MONGO_PWD)
    return f"mongodb+srv://{user}:{password}@{config.MONGO_HOST}/?retryWrites=true&w=majority&appName=GlobalMarket"


def get_client(config=Config, ping=True):
    """Create a MongoClient with short timeouts and check the server answers."""
    client = MongoClient(
        build_connection_string(config),
        serverSelectionTimeoutMS=5000,  # 5 second timeout
        connectTimeoutMS=5000
    )

    if ping:
        # Test the connection
        try:
            client.admin.command('ping')
        except PyMongoError:
            client.close()
            raise
        logger.info("Connected to MongoDB")
    return client


def get_database(client=None, config=Config):
    if client is None:
        client = get_client(config)
    return client[config.MONGO_DB_NAME]

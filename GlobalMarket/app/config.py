import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name):
    """Read a tri-state flag: True, False, or None when unset."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev_key")
    MONGO_URI = os.environ.get("MONGO_URI")
    MONGO_USER = os.environ.get("MONGO_USER")
    MONGO_PWD = os.environ.get("MONGO_PWD")
    MONGO_HOST = os.environ.get("MONGO_HOST")
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "globalmarket")
    # None defers to each collection's validationLevel
    VALIDATOR_STRICT = _env_flag("VALIDATOR_STRICT")

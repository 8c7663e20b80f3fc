"""
Configuration for the contact API.

Values come from the environment, with a local ``.env`` file loaded first.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Environment-backed settings"""

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    SERVER_URL: str = os.getenv("RENDER_EXTERNAL_URL") or f"http://localhost:{PORT}"

    # Database
    MONGODB_URI: Optional[str] = os.getenv("MONGODB_URI")
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "contactsDB")
    SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == "development"


def setup_logging() -> None:
    """Configure root logging from LOG_LEVEL and LOG_FORMAT."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=Config.LOG_FORMAT,
    )

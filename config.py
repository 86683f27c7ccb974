# config.py
import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from textual.logging import TextualHandler

load_dotenv()


@dataclass
class Config:
    """Holds all application configuration."""
    OMDB_URL: str = "https://www.omdbapi.com/"
    OMDB_API_KEY: str = field(default_factory=lambda: os.getenv("OMDB_API_KEY", ""))
    SEARCH_TIMEOUT: float = 8.0
    MAX_NOMINATIONS: int = 5
    NOMINATION_KEY: str = "SHOPPIES_LOCAL_NOMINATIONS"
    NOTIFICATION_TIMEOUT: float = 2.2
    DATABASE_FILENAME: str = "shoppies.db"
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


def setup_logging(level: str = "INFO") -> None:
    """Routes log records to the Textual devtools console."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[TextualHandler()],
        format="%(name)s: %(message)s",
    )

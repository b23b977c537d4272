"""
Environment-driven settings for the idea research pipeline.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from .exceptions import ConfigurationError

load_dotenv()

# Resource caps for a single research request
MAX_PAGES = 1
MAX_CHARS_PER_PAGE = 12000  # ~3k tokens
MAX_TOTAL_CHARS = 20000
CHUNK_SIZE = 8000

DEFAULT_MODEL = "gpt-4o-mini"


def _int_from_env(name: str, default: int) -> int:
    """Read a positive integer from the environment"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    """Runtime configuration for providers, storage and caps"""
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    tavily_api_key: Optional[str] = None
    mongodb_uri: Optional[str] = None
    mongodb_db_name: str = 'research_db'
    mongodb_collection: str = 'research'
    max_pages: int = MAX_PAGES
    max_chars_per_page: int = MAX_CHARS_PER_PAGE
    max_total_chars: int = MAX_TOTAL_CHARS
    chunk_size: int = CHUNK_SIZE

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables (and .env)"""
        return cls(
            openai_api_key=os.getenv('OPENAI_API_KEY'),
            openai_model=os.getenv('OPENAI_MODEL', DEFAULT_MODEL),
            tavily_api_key=os.getenv('TAVILY_API_KEY'),
            mongodb_uri=os.getenv('MONGODB_URI'),
            mongodb_db_name=os.getenv('MONGODB_DB_NAME', 'research_db'),
            mongodb_collection=os.getenv('MONGODB_COLLECTION', 'research'),
            max_pages=_int_from_env('MAX_PAGES', MAX_PAGES),
            max_chars_per_page=_int_from_env('MAX_CHARS_PER_PAGE', MAX_CHARS_PER_PAGE),
            max_total_chars=_int_from_env('MAX_TOTAL_CHARS', MAX_TOTAL_CHARS),
            chunk_size=_int_from_env('CHUNK_SIZE', CHUNK_SIZE),
        )

    def require(self, field_name: str) -> str:
        """Return a required setting or raise ConfigurationError"""
        value = getattr(self, field_name)
        if not value:
            raise ConfigurationError(f"{field_name.upper()} environment variable not set")
        return value

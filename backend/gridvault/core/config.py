import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

TEN_MB = 10 * 1024 * 1024


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """
    Runtime configuration for the application.

    Every value can be overridden through an environment variable of the
    same name in upper case (see ``from_env``).
    """
    mongodb_uri: str = "mongodb+srv://abc.mongodb.net/?appName=ABCDemo"
    db_name: str = "abc_demo"
    host: str = "0.0.0.0"
    port: int = 3000

    # Storage: 'gridfs' (MongoDB) or 'memory' (demos and tests)
    storage_type: str = "gridfs"
    gridfs_bucket: str = "abc_uploads"

    # Atlas Search
    search_index: str = "default"
    search_limit: int = 50

    default_page_size: int = 20
    max_extract_bytes: int = TEN_MB

    environment: str = "development"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 100

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            mongodb_uri=os.getenv("MONGODB_URI", defaults.mongodb_uri),
            db_name=os.getenv("DB_NAME", defaults.db_name),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
            storage_type=os.getenv("STORAGE_TYPE", defaults.storage_type).lower(),
            gridfs_bucket=os.getenv("GRIDFS_BUCKET", defaults.gridfs_bucket),
            search_index=os.getenv("SEARCH_INDEX", defaults.search_index),
            search_limit=int(os.getenv("SEARCH_LIMIT", str(defaults.search_limit))),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", str(defaults.default_page_size))),
            max_extract_bytes=int(os.getenv("MAX_EXTRACT_BYTES", str(defaults.max_extract_bytes))),
            environment=os.getenv("ENVIRONMENT", defaults.environment),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            log_file=os.getenv("LOG_FILE") or None,
            cors_origins=[
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", ",".join(defaults.cors_origins)).split(",")
                if origin.strip()
            ],
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", "true"),
            rate_limit_per_minute=int(
                os.getenv("RATE_LIMIT_PER_MINUTE", str(defaults.rate_limit_per_minute))
            ),
        )

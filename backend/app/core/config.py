"""
Centralized application configuration
"""
from enum import Enum
from typing import List, Optional

from pydantic_settings import BaseSettings


class StockCheckMode(str, Enum):
    """How repeated lines for the same product are checked against stock"""

    # Each line is checked against what is left after earlier lines
    CUMULATIVE = "cumulative"
    # Each line is checked against the original stock figure (legacy)
    PER_LINE = "per_line"


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_TITLE: str = "Retail Orders API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Order placement backend for the retail catalog"
    API_DEBUG: bool = False

    # Database
    DATABASE_URL: Optional[str] = None
    DB_MAX_RETRIES: int = 3
    DB_RETRY_DELAY: float = 1.0

    # Logging
    LOG_LEVEL: str = "INFO"

    # Orders
    STOCK_CHECK_MODE: StockCheckMode = StockCheckMode.CUMULATIVE

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()

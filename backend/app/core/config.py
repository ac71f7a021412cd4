from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "ScaffoldAI"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5001

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty disables the rotating file handler

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Claude AI
    # ==========================================
    ANTHROPIC_API_KEY: str = ""  # Empty means AI routes answer with AI_SERVICE_ERROR
    ANTHROPIC_BASE_URL: str = ""  # Empty means use default Anthropic URL
    CLAUDE_HAIKU_MODEL: str = "claude-3-5-haiku-20241022"
    CLAUDE_SONNET_MODEL: str = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS: int = 4096
    CLAUDE_CODE_MAX_TOKENS: int = 8192
    CLAUDE_TEMPERATURE: float = 0.7
    CLAUDE_REQUEST_TIMEOUT: int = 300  # seconds
    CLAUDE_CONNECT_TIMEOUT: int = 60  # seconds
    CLAUDE_MAX_RETRIES: int = 3
    CLAUDE_RETRY_BASE_DELAY: float = 2.0  # seconds
    CLAUDE_RETRY_MAX_DELAY: float = 30.0  # seconds

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    AI_RATE_LIMIT: str = "20/15 minutes"

    # ==========================================
    # Project Generation
    # ==========================================
    MAX_PROMPT_LENGTH: int = 1000
    DEFAULT_ROOT_NAME: str = "project-root"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env that aren't defined in Settings
    )

    @property
    def AI_ENABLED(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY and self.ANTHROPIC_API_KEY.strip())


settings = Settings()

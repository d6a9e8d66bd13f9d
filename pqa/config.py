"""Configuration loaded from environment (.env) and defaults."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Locate the project root .env file: works regardless of CWD
_THIS_DIR = Path(__file__).resolve().parent          # pqa/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # LLM provider for query extraction: openai | anthropic
    pqa_llm_provider: str = "openai"

    # OpenAI
    openai_api_key: str | None = None
    pqa_openai_model: str = "gpt-4o-mini"

    # Azure OpenAI (takes precedence over plain OpenAI when endpoint + key are set)
    azure_openai_endpoint: str | None = None
    azure_openai_key: str | None = None
    azure_openai_deployment: str = "gpt-4o-mini"
    azure_openai_api_version: str = "2024-08-01-preview"

    # Anthropic
    anthropic_api_key: str | None = None
    pqa_anthropic_model: str = "claude-3-5-sonnet-20241022"

    # Datasheet directory (*.json); relative paths resolve against the project root
    pqa_data_dir: str = Field(
        default="./data",
        validation_alias=AliasChoices("pqa_data_dir", "data_path", "datasheet_directory"),
    )

    # Remote cache. Unset or unreachable -> in-process TTL cache for the whole process.
    redis_connection: str | None = Field(
        default=None,
        validation_alias=AliasChoices("redis_connection", "redis_connection_string"),
    )
    cache_ttl_hours: float = 24.0

    # Timeouts (seconds) for the two I/O collaborators
    extraction_timeout_s: float = 30.0
    cache_timeout_s: float = 2.0

    max_query_length: int = 1000

    # CORS origins (comma-separated). Defaults to localhost dev.
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Server port
    port: int = 8000

    @property
    def data_dir(self) -> Path:
        """Datasheet directory as an absolute Path.

        Relative paths are resolved against the project root (not CWD),
        so the backend works whether started from project root or backend/.
        """
        p = Path(self.pqa_data_dir)
        if not p.is_absolute():
            return (_PROJECT_ROOT / p).resolve()
        return p.resolve()

    @property
    def cache_ttl_seconds(self) -> int:
        return int(self.cache_ttl_hours * 3600)

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def llm_api_key(self) -> str | None:
        """API key for the configured provider."""
        if self.pqa_llm_provider.lower() == "anthropic":
            return self.anthropic_api_key
        if self.azure_openai_endpoint:
            return self.azure_openai_key
        return self.openai_api_key


def get_settings() -> Settings:
    return Settings()

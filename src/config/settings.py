"""Application settings loaded from environment variables via pydantic-settings.

Sources, highest priority first:

  1. Environment variables, e.g. ``SEATGEEK_CLIENT_ID=abc123``
  2. A ``.env`` file in the working directory (local development)
  3. The defaults below

Field ``seatgeek_client_id`` maps to ``SEATGEEK_CLIENT_ID`` and so on.
An empty string means "not configured": the event search endpoint refuses
to run without a SeatGeek client id, and enrichment falls back to the
deterministic snippet when no LLM key is present.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """ShowFinder application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream event search ===
    seatgeek_client_id: str = ""
    seatgeek_base_url: str = "https://api.seatgeek.com/2"
    seatgeek_per_page: int = 25
    upstream_timeout_seconds: float = 15.0

    # === LLM providers (snippet generation) ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoints (TogetherAI, Groq, ...)
    openai_text_model: str = ""
    anthropic_api_key: str = ""
    anthropic_model: str = ""

    # === Enrichment ===
    enrichment_enabled: bool = True
    enrichment_concurrency: int = 5

    # === Query cache ===
    query_cache_max_size: int = 256
    query_cache_ttl_seconds: int = 3600

    # === App config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    def get_cors_origins(self) -> list[str]:
        """Split ``CORS_ORIGINS`` into a list, ignoring blanks."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

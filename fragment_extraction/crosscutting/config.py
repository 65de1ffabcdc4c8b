"""
Name: Pipeline Configuration (Settings)

Responsibilities:
  - One typed settings object for the worker, the CLI and the container
  - Reject invalid chunking / PDF limits before any document is touched
  - Defaults equal the operational constants (8000 / 500 / 50, 10 pages x 5)

Collaborators:
  - container.py: reads settings to build adapters and the orchestrator
  - infrastructure/services/retry.py: reads retry attempts/delays
  - worker/jobs.py: reads callback configuration

Constraints:
  - No business logic, pure configuration

Notes:
  - Env vars map 1:1 to field names (CHUNK_SIZE, S3_BUCKET, ...); .env is read when present
  - Singleton via lru_cache; tests clear it between cases
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Pipeline settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root log level (default: INFO)
        log_json: Emit JSON logs (default: True)
        google_api_key: Google Gemini API key
        fake_llm: Use deterministic fake extractor/recognizer (default: False)
        extraction_model_id: Gemini model for fragment extraction
        vision_model_id: Gemini model for PDF page transcription
        prompt_version: Prompt template version (default: v1)
        chunk_size: Characters per chunk (default: 8000)
        chunk_overlap: Overlap between chunks (default: 500)
        dedup_window_size: Fragments carried as dedup hints (default: 50)
        pdf_max_pages: Pages transcribed per PDF (default: 10)
        pdf_max_concurrency: Simultaneous page calls (default: 5)
        pdf_render_dpi: Rasterization DPI (default: 150)
        storage_root: Base directory for the local storage adapter
        s3_*: S3/MinIO storage (used when s3_bucket is set)
        redis_url / document_queue_name: RQ queue consumed by the worker
        metrics_port: Worker /metrics port (0 disables exposition)
        callback_url / callback_secret: Worker result delivery
        retry_*: Backoff policy for external calls
    """

    # Environment
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = True

    # AI provider
    google_api_key: str = ""
    fake_llm: bool = False
    extraction_model_id: str = "gemini-2.0-flash"
    vision_model_id: str = "gemini-2.0-flash"
    prompt_version: str = "v1"

    # Chunking (defaults mirror segmenter.CHUNK_SIZE / CHUNK_OVERLAP)
    chunk_size: int = 8000
    chunk_overlap: int = 500
    dedup_window_size: int = 50

    # PDF transcription
    pdf_max_pages: int = 10
    pdf_max_concurrency: int = 5
    pdf_render_dpi: int = 150

    # Storage - local filesystem
    storage_root: str = "."

    # Storage - S3/MinIO
    s3_endpoint_url: str = ""
    s3_bucket: str = ""
    s3_access_key: str = ""
    s3_secret_key: str = ""
    s3_region: str = ""

    # Worker queue (RQ + Redis)
    redis_url: str = ""
    document_queue_name: str = "documents"
    metrics_port: int = 9108

    # Worker callback
    callback_url: str = ""
    callback_secret: str = ""
    callback_timeout_seconds: float = 30.0

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0

    @field_validator(
        "chunk_size",
        "dedup_window_size",
        "pdf_max_pages",
        "pdf_max_concurrency",
        "pdf_render_dpi",
        "retry_max_attempts",
    )
    @classmethod
    def positive_limits(cls, v: int, info) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0, got {v}")
        return v

    @field_validator("chunk_overlap")
    @classmethod
    def overlap_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"chunk_overlap must be >= 0, got {v}")
        return v

    @model_validator(mode="after")
    def require_model_credentials(self):
        # R: FAKE_LLM=1 replaces both Gemini adapters, so no key is needed.
        if not self.fake_llm and not self.google_api_key.strip():
            raise ValueError("GOOGLE_API_KEY is required unless FAKE_LLM=1")
        return self

    def validate_chunk_params(self) -> None:
        """
        R: overlap < chunk_size, or the segmenter could not advance.

        Raised as ConfigurationError (pipeline taxonomy), not ValidationError.
        """
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"CHUNK_OVERLAP={self.chunk_overlap} must be less than "
                f"CHUNK_SIZE={self.chunk_size}"
            )

    def uses_s3(self) -> bool:
        return bool(self.s3_bucket.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Settings validados (cacheados).

    Raises:
        pydantic.ValidationError: env vars con valores inválidos
        ConfigurationError: CHUNK_OVERLAP >= CHUNK_SIZE
    """
    settings = Settings()
    settings.validate_chunk_params()
    return settings

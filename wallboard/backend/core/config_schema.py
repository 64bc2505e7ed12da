"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    FeaturesSchema     → features.yaml
    SharingSchema      → sharing.yaml
    ModerationSchema   → moderation.yaml
    ConcurrencySchema  → concurrency.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class PaginationSchema(_StrictBase):
    default_limit: int
    max_limit: int


class TimeoutsSchema(_StrictBase):
    database: int


class WallsSchema(_StrictBase):
    default_slug: str
    default_name: str


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    server: ServerSchema
    cors: CorsSchema
    pagination: PaginationSchema
    timeouts: TimeoutsSchema
    walls: WallsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    driver: str
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    moderation_enabled: bool
    external_shortener_enabled: bool
    schema_check_enabled: bool


# =============================================================================
# sharing.yaml
# =============================================================================


class ExternalShortenerSchema(_StrictBase):
    provider: str = ""
    shortio_domain: str = ""
    timeout_seconds: int = 5


class SharingSchema(_StrictBase):
    code_alphabet: str = Field(min_length=2)
    code_length: int = Field(ge=1)
    max_attempts: int = Field(ge=1)
    public_base_url: str = ""
    preview_description_length: int = Field(ge=2)
    crawler_signatures: list[str]
    external_shortener: ExternalShortenerSchema


# =============================================================================
# moderation.yaml
# =============================================================================


class ModerationCircuitBreakerSchema(_StrictBase):
    fail_max: int
    timeout_duration: int


class ModerationSchema(_StrictBase):
    endpoint: str
    model: str
    timeout_seconds: int
    thresholds: dict[str, float]
    circuit_breaker: ModerationCircuitBreakerSchema


# =============================================================================
# concurrency.yaml
# =============================================================================


class SemaphoresSchema(_StrictBase):
    database: int
    external_api: int


class ConcurrencySchema(_StrictBase):
    semaphores: SemaphoresSchema

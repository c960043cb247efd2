"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range

# LMI-EO economic region id for British Columbia
DEFAULT_REGION_ID = 59
DEFAULT_LMI_BASE_URL = (
    "https://lmi-outlooks-esdc-edsc-apicast-production.api.canada.ca/clmix-wsx/gcapis"
)


class OutlookSource(str, Enum):
    """Where employment outlooks are read from."""

    STATIC = "static"
    LMI = "lmi"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def _normalize_terms(terms: List[str]) -> List[str]:
    """Strip and lower-case terms, dropping empty ones."""
    normalized = []
    for term in terms:
        stripped = term.strip().lower()
        if stripped:
            normalized.append(stripped)
    return normalized


class DataConfig(BaseModel):
    """Locations of the NOC unit group and program data files."""

    unit_groups_path: Path = Field(..., description="JSON/YAML file of NOC unit groups")
    programs_path: Path = Field(..., description="JSON/YAML file of programs")
    outlooks_path: Optional[Path] = Field(
        None, description="JSON/YAML file of outlooks (static outlook source)"
    )

    def resolve_relative_to(self, base_dir: Path) -> "DataConfig":
        """Return a copy with relative paths resolved against base_dir."""

        def _resolve(path: Optional[Path]) -> Optional[Path]:
            if path is None or path.is_absolute():
                return path
            return base_dir / path

        return self.model_copy(
            update={
                "unit_groups_path": _resolve(self.unit_groups_path),
                "programs_path": _resolve(self.programs_path),
                "outlooks_path": _resolve(self.outlooks_path),
            }
        )


class MatchingConfig(BaseModel):
    """Requirement matching rules."""

    exclusion_phrases: List[str] = Field(
        default_factory=lambda: ["years of experience"],
        description="Extra phrases that stop a requirement item from matching; 'years of experience' always applies",
    )
    credential_synonyms: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Per-credential synonyms appended to the built-in table, or new labels",
    )

    @field_validator("exclusion_phrases")
    @classmethod
    def normalize_exclusion_phrases(cls, v: List[str]) -> List[str]:
        """Normalize phrases: strip, lower-case, remove empties."""
        return _normalize_terms(v)

    @field_validator("credential_synonyms")
    @classmethod
    def normalize_credential_synonyms(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Normalize labels and synonyms; every label needs at least one synonym."""
        normalized = {}
        for label, synonyms in v.items():
            key = label.strip().lower()
            if not key:
                raise ValueError("Credential label cannot be empty or whitespace-only")
            terms = _normalize_terms(synonyms)
            if not terms:
                raise ValueError(f"Credential '{key}' must list at least one synonym")
            normalized[key] = terms
        return normalized


class OutlooksConfig(BaseModel):
    """Employment outlook lookup settings."""

    source: OutlookSource = Field(OutlookSource.STATIC, description="static or lmi")
    region_id: int = Field(DEFAULT_REGION_ID, ge=1, description="LMI-EO economic region id")
    cache_ttl: str = Field("60d", description="How long fetched outlooks are cached")
    base_url: str = Field(DEFAULT_LMI_BASE_URL, min_length=1, description="LMI-EO API base URL")
    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for LMI-EO API calls (seconds)"
    )
    user_agent: str = Field("CareerOutlooks/1.0", min_length=1, description="HTTP User-Agent")

    # Computed field
    cache_ttl_seconds: Optional[int] = None

    @field_validator("cache_ttl")
    @classmethod
    def validate_cache_ttl(cls, v: str) -> str:
        """Cache TTL must parse and fall between one minute and one year."""
        try:
            seconds = parse_duration(v)
            validate_duration_range(seconds, min_seconds=60, max_seconds=366 * 86400, label="Cache TTL")
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("base_url", "user_agent")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined with "/", so drop a trailing slash."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def compute_cache_ttl_seconds(self):
        """Store the parsed TTL for callers."""
        self.cache_ttl_seconds = parse_duration(self.cache_ttl)
        return self

    model_config = {"use_enum_values": True, "validate_default": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for career outlook matching."""

    data: DataConfig = Field(..., description="Data file locations")
    matching: MatchingConfig = Field(default_factory=MatchingConfig, description="Matching rules")
    outlooks: OutlooksConfig = Field(
        default_factory=OutlooksConfig, description="Outlook lookup settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @model_validator(mode="after")
    def validate_outlook_source(self):
        """The static outlook source needs a data file."""
        if self.outlooks.source == OutlookSource.STATIC.value and self.data.outlooks_path is None:
            raise ValueError(
                "outlooks.source is 'static' but data.outlooks_path is not set"
            )
        return self

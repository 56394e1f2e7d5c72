"""
SOLARWATCH Configuration

Pydantic models describing the site and calculation defaults, loaded from
a YAML file and overridden by environment variables.

Lookup order for the config file (first existing wins):
    ./solarwatch.yaml
    ~/.solarwatch/config.yaml
    /etc/solarwatch/config.yaml

Environment overrides use SOLARWATCH_<SECTION>_<KEY>, for example:
    SOLARWATCH_SITE_LATITUDE=42.5
    SOLARWATCH_EVENTS_ZENITH=civil
"""

import os
import re
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from solarwatch.exceptions import ConfigurationError

ENV_PREFIX = "SOLARWATCH_"

# IANA "Area/Location" identifiers, or UTC/GMT
_TIMEZONE_PATTERN = re.compile(r"^(UTC|GMT|[A-Za-z_]+(/[A-Za-z0-9_+\-]+)+)$")

ZENITH_NAMES = ("official", "civil", "nautical", "astronomical")


class SiteConfig(BaseModel):
    """Observer location."""

    name: str = "SOLARWATCH Site"
    latitude: float = Field(default=39.1371, ge=-90.0, le=90.0)
    longitude: float = Field(default=-88.65, ge=-180.0, le=180.0)
    timezone: Optional[str] = Field(
        default=None, description="IANA timezone, None for the system zone"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "local":
            return None
        if not _TIMEZONE_PATTERN.match(value):
            raise ValueError(f"Invalid timezone identifier: {value}")
        return value


class EventConfig(BaseModel):
    """Calculation defaults."""

    zenith: Union[float, str] = "official"

    @field_validator("zenith")
    @classmethod
    def validate_zenith(cls, value: Union[float, str]) -> Union[float, str]:
        if isinstance(value, str):
            name = value.strip().lower()
            if name in ZENITH_NAMES:
                return name
            try:
                value = float(name)
            except ValueError:
                raise ValueError(
                    f"zenith must be one of {', '.join(ZENITH_NAMES)} or degrees"
                ) from None
        if not 0.0 < value < 180.0:
            raise ValueError("zenith must be between 0 and 180 degrees")
        return value


class SolarWatchConfig(BaseModel):
    """Master configuration."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    events: EventConfig = Field(default_factory=EventConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_file: Optional[str] = None


def get_config_paths() -> list[Path]:
    """Candidate config file locations, most specific first."""
    return [
        Path("./solarwatch.yaml"),
        Path.home() / ".solarwatch" / "config.yaml",
        Path("/etc/solarwatch/config.yaml"),
    ]


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Merge SOLARWATCH_<SECTION>_<KEY> variables into data.

    Values stay strings; pydantic converts them to the field types.
    """
    sections = {"site": SiteConfig, "events": EventConfig}
    for key, raw in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        remainder = key[len(ENV_PREFIX):].lower()
        if remainder in ("log_level", "log_file"):
            data[remainder] = raw.upper() if remainder == "log_level" else raw
            continue
        section, _, field_name = remainder.partition("_")
        model = sections.get(section)
        if model is None or field_name not in model.model_fields:
            continue
        section_data = data.get(section)
        if section_data is None:
            section_data = data[section] = {}
        elif not isinstance(section_data, dict):
            # left for validation to reject
            continue
        section_data[field_name] = raw
    return data


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", config_file=str(path)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Invalid YAML: top level must be a mapping", config_file=str(path)
        )
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> SolarWatchConfig:
    """Load configuration from YAML with environment overrides.

    Args:
        path: Explicit config file. When None the standard locations are
              searched and defaults are used if none exists.

    Returns:
        Validated SolarWatchConfig

    Raises:
        ConfigurationError: File missing, unparsable or failing validation
    """
    data: dict[str, Any] = {}
    source: Optional[Path] = None

    if path is not None:
        source = Path(path)
        if not source.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {source}", config_file=str(source)
            )
    else:
        source = next((p for p in get_config_paths() if p.is_file()), None)

    if source is not None:
        data = _read_yaml(source)

    data = _apply_env_overrides(data)

    try:
        return SolarWatchConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            config_file=str(source) if source else None,
        ) from e

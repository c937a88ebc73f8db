"""
Runtime settings.

Settings are a frozen pydantic model so a context cannot have its behaviour
changed after it is created. They can be built in code or loaded from YAML:

    log_level: DEBUG
    force_gc_on_collect: true
    collect_on_exit: true
    record_events: true
    max_recorded_events: 1000
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ._errors import SettingsLoadError, SettingsValidationError
from ._logging import resolve_log_level


class RuntimeSettings(BaseModel):
    """Knobs for a disposal context."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    log_level: str = Field(
        default="WARNING",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional file receiving the JSON log lines",
    )
    force_gc_on_collect: bool = Field(
        default=True,
        description="Run gc.collect() before draining so cyclic garbage is finalized too",
    )
    collect_on_exit: bool = Field(
        default=True,
        description="Drain pending automatic cleanups of the default context at exit",
    )
    record_events: bool = Field(
        default=True,
        description="Keep emitted lifecycle events in the event log",
    )
    max_recorded_events: Optional[int] = Field(
        default=None,
        ge=1,
        description="Drop the oldest events beyond this many; null keeps everything",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        resolve_log_level(value)
        return value.upper()


def _read_yaml_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SettingsLoadError(f"Settings file not found: {path}")

    if not path.is_file():
        raise SettingsLoadError(f"Settings path is not a file: {path}")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as err:
        raise SettingsLoadError(f"Cannot read settings file {path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise SettingsLoadError(f"Invalid YAML in {path}: {err}") from err

    # An empty file means "all defaults".
    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise SettingsLoadError(
            f"Settings file must contain a YAML mapping, got {type(parsed).__name__}"
        )

    return parsed


def load_settings(path: Path) -> RuntimeSettings:
    """
    Load and validate a YAML settings file.

    Raises:
        SettingsLoadError: The file is missing, unreadable or not a YAML mapping.
        SettingsValidationError: Unknown keys, wrong types or bad values.
    """
    raw_data = _read_yaml_file(Path(path))

    try:
        return RuntimeSettings.model_validate(raw_data)
    except ValidationError as err:
        raise SettingsValidationError(
            f"Settings validation failed for {path}:\n{err}"
        ) from err

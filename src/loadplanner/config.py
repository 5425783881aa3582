"""
Tuneable parameters of the allocation engine.

Every value has a default and can be overridden
from a YAML file:

    floor_space_ceiling: 0.85   # non-stackable floor occupancy limit
    volume_weight: 0.7          # optimality score blend
    weight_weight: 0.3
    volume_epsilon: 1.0e-9      # m³ slack on volume checks
    ordering: fragile_last      # see algorithms.ordering.ORDERING_STRATEGIES
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from loadplanner.core.errors import ConfigError

SETTINGS_ENV_VAR = "LOADPLANNER_SETTINGS"


@dataclass(frozen=True)
class EngineSettings:
    """
    Thresholds and weights shared by the gate, evaluator and diagnoser.

    Attributes:
        floor_space_ceiling: Fraction of the container floor above which no
                             further non-stackable item is accepted.
        volume_weight:       Share of volume utilization in the optimality score.
        weight_weight:       Share of weight utilization in the optimality score.
        volume_epsilon:      Floating-point slack (m³) on remaining volume.
        ordering:            Name of the ordering policy used to sequence items.
    """
    floor_space_ceiling: float = 0.85
    volume_weight: float = 0.7
    weight_weight: float = 0.3
    volume_epsilon: float = 1e-9
    ordering: str = "fragile_last"

    def __post_init__(self) -> None:
        if not 0.0 < self.floor_space_ceiling <= 1.0:
            raise ConfigError(
                f"floor_space_ceiling must be in (0, 1], got {self.floor_space_ceiling}"
            )
        if self.volume_weight < 0 or self.weight_weight < 0:
            raise ConfigError("score weights must be non-negative")
        if not math.isclose(self.volume_weight + self.weight_weight, 1.0, abs_tol=1e-9):
            raise ConfigError(
                "volume_weight + weight_weight must equal 1, got "
                f"{self.volume_weight + self.weight_weight}"
            )
        if self.volume_epsilon < 0:
            raise ConfigError(f"volume_epsilon must be >= 0, got {self.volume_epsilon}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "EngineSettings":
        """
        Build settings from a plain mapping (e.g. parsed YAML).

        Numeric fields are converted with ``float()``, so strings such as
        ``"1e-9"`` (which PyYAML reads as text) are accepted.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Unknown settings: {unknown}. Available: {sorted(known)}")

        values = dict(d)
        for name in _NUMERIC_FIELDS & set(values):
            value = values[name]
            if isinstance(value, bool):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            try:
                values[name] = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{name} must be a number, got {value!r}") from exc
        if "ordering" in values and not isinstance(values["ordering"], str):
            raise ConfigError(f"ordering must be a policy name, got {values['ordering']!r}")
        return cls(**values)


_NUMERIC_FIELDS = {"floor_space_ceiling", "volume_weight", "weight_weight", "volume_epsilon"}


DEFAULT_SETTINGS = EngineSettings()


def load_settings(path: Path | str | None = None) -> EngineSettings:
    """
    Load engine settings from a YAML file.

    Args:
        path: YAML file. Falls back to the ``LOADPLANNER_SETTINGS``
              environment variable, then to the defaults.

    Returns:
        EngineSettings instance.

    Raises:
        ConfigError: If the file is missing, unparsable or out of range.
    """
    if path is None:
        path = os.environ.get(SETTINGS_ENV_VAR) or None
    if path is None:
        return DEFAULT_SETTINGS

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return EngineSettings.from_dict(data)

"""Engine settings shared by the wire-sizing engine, the calculators and the CLI."""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from core.errors import InvalidInputError
from core.models import InsulationRating

ENV_PREFIX = "WIRESIZE_"

@dataclass(frozen=True)
class SizingSettings:
    # Terminal rating that governs the ampacity column (NEC 110.14(C))
    temperature_rating: InsulationRating = InsulationRating.TEMP_75
    # Voltage drop limit used for upsizing and compliance (NEC 210.19 IN No. 4)
    max_voltage_drop_percent: float = 3.0
    # Above this drop the engine suggests parallel conductors
    parallel_warning_percent: float = 5.0
    # Resistance tables are per 1000 ft
    reference_length_ft: float = 1000.0
    # NEC 240.4(D) small conductor overcurrent limits
    apply_small_conductor_rule: bool = True

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> "SizingSettings":
        """Copy with the given fields replaced; string values (env vars, CLI) are coerced.

        Raises InvalidInputError for a value the engine would reject.
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        values = dict(overrides)
        if "temperature_rating" in values and not isinstance(values["temperature_rating"], InsulationRating):
            try:
                values["temperature_rating"] = InsulationRating(int(values["temperature_rating"]))
            except (TypeError, ValueError):
                raise InvalidInputError("temperature_rating",
                                        f"expected 60, 75 or 90, got {values['temperature_rating']!r}") from None
        for key in ("max_voltage_drop_percent", "parallel_warning_percent", "reference_length_ft"):
            if key in values:
                try:
                    values[key] = float(values[key])
                except (TypeError, ValueError):
                    raise InvalidInputError(key, f"expected a number, got {values[key]!r}") from None
                if not values[key] > 0:
                    raise InvalidInputError(key, "must be greater than 0")
        if "apply_small_conductor_rule" in values and isinstance(values["apply_small_conductor_rule"], str):
            values["apply_small_conductor_rule"] = values["apply_small_conductor_rule"].strip().lower() in ("1", "true", "yes", "on")
        return replace(self, **values)

DEFAULT_SETTINGS = SizingSettings()

def load_settings(environ: Optional[Mapping[str, str]] = None) -> SizingSettings:
    """Build settings from WIRESIZE_* environment variables on top of the defaults.

    Example: WIRESIZE_MAX_VOLTAGE_DROP_PERCENT=5 relaxes the upsizing limit.
    """
    environ = os.environ if environ is None else environ
    overrides = {}
    for f in fields(SizingSettings):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            overrides[f.name] = environ[key]
    return DEFAULT_SETTINGS.with_overrides(overrides)

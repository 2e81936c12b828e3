import logging
import math
from dataclasses import replace
from numbers import Real
from typing import List, Optional

from core.config import DEFAULT_SETTINGS, SizingSettings
from core.converters import parse_material, parse_phase, round_up_hundredth
from core.errors import InvalidInputError
from core.models import (CircuitSpecification, ConductorMaterial, InsulationRating, Phase,
                         SizingStatus, VoltageDropResult, WireSizeResult)
from standards.nec_grounding import ground_wire_for_breaker
from standards.nec_tables import (available_gauges, format_awg, gauge_index, get_ampacity,
                                  get_grouping_factor, get_temp_correction, next_larger_gauge,
                                  next_standard_breaker, small_conductor_limit)
from standards.wire_properties import get_wire_resistance

logger = logging.getLogger(__name__)

# Below this drop the selection is reported as excellent
VOLTAGE_DROP_EXCELLENT = 2.0

def _require_number(field_name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InvalidInputError(field_name, f"expected a finite number, got {value!r}")
    return float(value)

class NECLogic:
    @staticmethod
    def validate_specification(spec: CircuitSpecification,
                               settings: SizingSettings = DEFAULT_SETTINGS) -> CircuitSpecification:
        """Reject malformed input and normalise enums. Returns a new specification."""
        current = _require_number("current", spec.current)
        if current <= 0:
            raise InvalidInputError("current", "must be greater than 0")
        distance = _require_number("distance_ft", spec.distance_ft)
        if distance < 0:
            raise InvalidInputError("distance_ft", "must not be negative")
        voltage = _require_number("voltage", spec.voltage)
        if voltage <= 0:
            raise InvalidInputError("voltage", "must be greater than 0")

        phase = parse_phase(spec.phase)
        material = parse_material(spec.material)

        rating = spec.temperature_rating or settings.temperature_rating
        if not isinstance(rating, InsulationRating):
            try:
                rating = InsulationRating(int(rating))
            except (TypeError, ValueError):
                raise InvalidInputError("temperature_rating", f"unsupported rating {rating!r}") from None

        ambient = _require_number("ambient_temp_c", spec.ambient_temp_c)
        if get_temp_correction(ambient, rating) <= 0:
            raise InvalidInputError("ambient_temp_c",
                                    f"{ambient:g}°C exceeds what {rating.value}°C insulation permits")

        conductors = spec.current_carrying_conductors
        if isinstance(conductors, bool) or not isinstance(conductors, int) or conductors < 1:
            raise InvalidInputError("current_carrying_conductors", "must be a positive integer")

        ocpd = spec.overcurrent_device_rating
        if ocpd is not None and _require_number("overcurrent_device_rating", ocpd) <= 0:
            raise InvalidInputError("overcurrent_device_rating", "must be greater than 0")

        max_vd = spec.max_voltage_drop_percent
        if max_vd is not None and _require_number("max_voltage_drop_percent", max_vd) <= 0:
            raise InvalidInputError("max_voltage_drop_percent", "must be greater than 0")

        return replace(spec, current=current, distance_ft=distance, voltage=voltage,
                       phase=phase, material=material, temperature_rating=rating, ambient_temp_c=ambient)

    @staticmethod
    def select_overcurrent_device(current: float) -> int:
        """Smallest NEC 240.6(A) standard rating that carries the current."""
        return next_standard_breaker(round_up_hundredth(current))

    @staticmethod
    def calculate_voltage_drop(
        awg: str,
        distance_ft: float,
        current: float,
        voltage: float,
        material: ConductorMaterial,
        phase: Phase,
        max_percent: float = DEFAULT_SETTINGS.max_voltage_drop_percent,
        reference_length_ft: float = DEFAULT_SETTINGS.reference_length_ft,
        parallel_warning_percent: float = DEFAULT_SETTINGS.parallel_warning_percent,
    ) -> VoltageDropResult:
        # VD = k * I * R * D / 1000, k = 2 for the single-phase pair, sqrt(3) line-to-line
        resistance = get_wire_resistance(awg, material)
        k = math.sqrt(3) if phase is Phase.THREE else 2.0

        vd_volts = (k * current * resistance * distance_ft) / reference_length_ft
        vd_percent = round((vd_volts / voltage) * 100.0, 2)

        if vd_percent <= VOLTAGE_DROP_EXCELLENT:
            recommendation = "Excellent - well within NEC recommendations"
        elif vd_percent <= max_percent:
            recommendation = f"Good - meets NEC {max_percent:g}% recommendation"
        elif vd_percent <= parallel_warning_percent:
            recommendation = f"Marginal - exceeds {max_percent:g}% but within {parallel_warning_percent:g}% limit"
        else:
            recommendation = "Poor - consider upsizing wire"

        return VoltageDropResult(
            voltage_drop=round(vd_volts, 2),
            voltage_drop_percent=vd_percent,
            voltage_at_load=round(voltage - vd_volts, 2),
            is_acceptable=vd_percent <= max_percent,
            recommendation=recommendation,
        )

    @staticmethod
    def calculate_wire_size(spec: CircuitSpecification,
                            settings: Optional[SizingSettings] = None) -> WireSizeResult:
        settings = settings or DEFAULT_SETTINGS
        spec = NECLogic.validate_specification(spec, settings)

        amps = round_up_hundredth(spec.current)
        material = spec.material
        insulation = spec.temperature_rating
        # Terminals limit the usable column even for 90°C insulation (NEC 110.14(C))
        governing = min(insulation, settings.temperature_rating, key=lambda r: r.value)
        max_vd = spec.max_voltage_drop_percent or settings.max_voltage_drop_percent

        # Temperature Correction: NEC 310.15(B)(1)
        # Grouping Adjustment: NEC 310.15(C)(1)
        f_temp = get_temp_correction(spec.ambient_temp_c, insulation)
        f_group = get_grouping_factor(spec.current_carrying_conductors)
        total_derating = f_temp * f_group

        def adjusted_ampacity(size: str) -> float:
            derated = get_ampacity(size, material, insulation) * total_derating
            return min(get_ampacity(size, material, governing), derated)

        def vd_for(size: str) -> VoltageDropResult:
            return NECLogic.calculate_voltage_drop(
                size, spec.distance_ft, amps, spec.voltage, material, spec.phase,
                max_percent=max_vd,
                reference_length_ft=settings.reference_length_ft,
                parallel_warning_percent=settings.parallel_warning_percent,
            )

        warnings: List[str] = []
        sizes = available_gauges(material)

        # CHECK 1: ampacity, first fit ascending
        selected = None
        for size in sizes:
            if adjusted_ampacity(size) < amps:
                continue
            limit = small_conductor_limit(size, material) if settings.apply_small_conductor_rule else None
            if limit is not None and amps > limit:
                continue
            selected = size
            break

        ampacity_found = selected is not None
        if not ampacity_found:
            selected = sizes[-1]
            warnings.append(f"No single {material.value} conductor in NEC 310.16 carries {amps:g}A "
                            f"- consider parallel conductors")
        minimum_size = selected
        logger.debug("Ampacity pass: %sA %s -> %s (derating %.2f)", amps, material.value, selected, total_derating)

        # CHECK 2: voltage drop, advance one size at a time
        vd = vd_for(selected)
        if ampacity_found and spec.distance_ft > 0:
            while vd.voltage_drop_percent > max_vd:
                larger = next_larger_gauge(selected, material)
                if larger is None:
                    warnings.append(f"Maximum wire size reached. Voltage drop is {vd.voltage_drop_percent:.2f}%")
                    break
                logger.debug("Upsizing %s -> %s (%.2f%% > %g%%)", selected, larger, vd.voltage_drop_percent, max_vd)
                selected = larger
                vd = vd_for(selected)

        ampacity = get_ampacity(selected, material, governing)
        adjusted = round(adjusted_ampacity(selected), 2)

        # Grounding conductor follows the protective device, not the circuit conductor
        ocpd = spec.overcurrent_device_rating or next_standard_breaker(amps)
        ground = ground_wire_for_breaker(ocpd, material)

        if not ampacity_found or adjusted < amps:
            status = SizingStatus.AMPACITY_EXCEEDED
        elif vd.voltage_drop_percent > max_vd:
            status = SizingStatus.VOLTAGE_DROP_EXCEEDED
        else:
            status = SizingStatus.COMPLIANT

        pct = vd.voltage_drop_percent
        if spec.distance_ft > 0 and max_vd < pct <= settings.parallel_warning_percent:
            warnings.append(f"Voltage drop exceeds {max_vd:g}% recommended maximum")
        if spec.distance_ft > 0 and pct > settings.parallel_warning_percent:
            warnings.append(f"Voltage drop exceeds {settings.parallel_warning_percent:g}% - consider parallel conductors")
        if spec.distance_ft == 0:
            warnings.append("Wire sized for ampacity only - verify voltage drop for actual installation distance")
        if selected != minimum_size:
            warnings.append(f"Upsized from {format_awg(minimum_size)} to {format_awg(selected)} for voltage drop "
                            f"- increase the equipment grounding conductor proportionally (NEC 250.122(B))")
        if material is ConductorMaterial.ALUMINUM and gauge_index(selected) < gauge_index("8"):
            warnings.append("Small aluminum conductors not recommended - consider copper")
        if total_derating < 1.0:
            warnings.append(f"Ampacity adjusted by {total_derating:.2f} (Temp {f_temp} * Grp {f_group}) per NEC 310.15")

        recommendation = NECLogic._recommendation(selected, material, ampacity, amps, pct, max_vd,
                                                  spec.distance_ft, status)
        logger.debug("Selected %s %s: %sA, %.2f%% drop, ground %s, %s",
                     selected, material.value, ampacity, pct, ground, status.value)

        return WireSizeResult(
            awg=selected,
            material=material,
            ampacity=ampacity,
            adjusted_ampacity=adjusted,
            voltage_drop=vd.voltage_drop,
            voltage_drop_percent=pct,
            voltage_at_load=vd.voltage_at_load,
            ground_wire=ground,
            overcurrent_device_rating=ocpd,
            status=status,
            warnings=tuple(warnings),
            nec_reference=f"NEC 310.16 ({governing.value}°C column), 250.122",
            recommendation=recommendation,
        )

    @staticmethod
    def _recommendation(awg: str, material: ConductorMaterial, ampacity: int, amps: float,
                        vd_percent: float, max_vd: float, distance_ft: float, status: SizingStatus) -> str:
        prefix = f"Use {format_awg(awg)} {material.label} wire (rated {ampacity}A)."
        if status is SizingStatus.AMPACITY_EXCEEDED:
            return (f"A single {format_awg(awg)} {material.label} conductor is not large enough for {amps:g}A. "
                    f"Use parallel conductors or a busway.")
        if distance_ft == 0:
            return f"{prefix} This size meets ampacity requirements. Calculate voltage drop when actual distance is known."
        if vd_percent <= max_vd:
            return f"{prefix} This selection meets NEC requirements with {vd_percent:.1f}% voltage drop."
        return f"{prefix} Note: Voltage drop is {vd_percent:.1f}% which exceeds the {max_vd:g}% recommendation."

def calculate_wire_size(spec: CircuitSpecification, settings: Optional[SizingSettings] = None) -> WireSizeResult:
    return NECLogic.calculate_wire_size(spec, settings)

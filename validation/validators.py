"""
Parameter validation before a run.

Catches problems early:
- Non-positive supply counts and range bounds
- Ranges whose max does not exceed their min
- Percentages outside (0, 100] (decimals outside (0, 1] for the fixed formula)
- Prediction-centric expected bands outside their range
- Too few (or fractional) simulations
- Non-numeric or non-finite values anywhere

Every validator is total: it never raises, whatever it is handed, and returns
an ordered list of field-scoped errors (empty when the parameters are usable).
Overlapping custom ranges are not errors; review_params reports them as warnings.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple

from core.config import MAX_RANGES_PER_SIDE, MIN_SIMULATIONS
from core.schema import ValidationError, ValidationResult

_SIDE_LABELS = {"fdv_ranges": "FDV", "drop_ranges": "Drop%"}


def _as_number(value: Any) -> Optional[float]:
    """Finite float value, or None for anything else (bools, text, nan, inf, huge ints)."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _number_field(params: Any, name: str, errors: List[ValidationError]) -> Optional[float]:
    number = _as_number(getattr(params, name, None))
    if number is None:
        errors.append(ValidationError(field=name, message=f"{name} must be a finite number"))
    return number


def _check_supply(params: Any, errors: List[ValidationError]) -> None:
    supply = _number_field(params, "supply_count", errors)
    if supply is not None and supply <= 0:
        errors.append(ValidationError(field="supply_count", message="NFT supply must be greater than 0"))


def _check_simulations(params: Any, errors: List[ValidationError]) -> None:
    count = _number_field(params, "simulation_count", errors)
    if count is None:
        return
    if not count.is_integer():
        errors.append(ValidationError(field="simulation_count", message="Simulations must be a whole number"))
    elif count < MIN_SIMULATIONS:
        errors.append(ValidationError(
            field="simulation_count",
            message=f"Simulations must be at least {MIN_SIMULATIONS:,}",
        ))


def _check_probability(params: Any, name: str, label: str, errors: List[ValidationError]) -> None:
    p = _number_field(params, name, errors)
    if p is not None and not 0.0 <= p <= 1.0:
        errors.append(ValidationError(field=name, message=f"{label} must be between 0 and 1"))


def _check_bounds(
    params: Any,
    min_name: str,
    max_name: str,
    label: str,
    errors: List[ValidationError],
    *,
    upper_limit: Optional[float] = None,
) -> Tuple[Optional[float], Optional[float]]:
    lo = _number_field(params, min_name, errors)
    hi = _number_field(params, max_name, errors)
    if lo is not None and lo <= 0:
        errors.append(ValidationError(field=min_name, message=f"{label} Min must be greater than 0"))
    if hi is not None and hi <= 0:
        errors.append(ValidationError(field=max_name, message=f"{label} Max must be greater than 0"))
    if upper_limit is not None and hi is not None and hi > upper_limit:
        errors.append(ValidationError(field=max_name, message=f"{label} Max cannot exceed {upper_limit:g}"))
    if lo is not None and hi is not None and hi <= lo:
        errors.append(ValidationError(field=max_name, message=f"{label} Max must be greater than {label} Min"))
    return lo, hi


# ---------------------------------------------------------------------------
# Fixed-formula engine
# ---------------------------------------------------------------------------

def validate_fixed_params(params: Any) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_supply(params, errors)

    _check_bounds(params, "fdv_min_a", "fdv_max_a", "FDV A", errors)
    _check_bounds(params, "fdv_min_b", "fdv_max_b", "FDV B", errors)
    _check_probability(params, "fdv_prob_a", "FDV A probability", errors)

    drop_min, drop_max = _check_bounds(params, "drop_min", "drop_max", "Drop", errors, upper_limit=1.0)
    mode = getattr(params, "drop_mode", None)
    if mode is not None:
        mode_value = _as_number(mode)
        if mode_value is None:
            errors.append(ValidationError(field="drop_mode", message="drop_mode must be a finite number"))
        elif drop_min is not None and drop_max is not None and not drop_min <= mode_value <= drop_max:
            errors.append(ValidationError(field="drop_mode", message="Drop Mode must lie between Drop Min and Drop Max"))

    _check_bounds(params, "drop_tail_min", "drop_tail_max", "Drop Tail", errors, upper_limit=1.0)
    _check_probability(params, "drop_tail_prob", "Drop tail probability", errors)

    _check_simulations(params, errors)
    return errors


# ---------------------------------------------------------------------------
# Custom-ranges engine
# ---------------------------------------------------------------------------

def _check_range(r: Any, side: str, errors: List[ValidationError]) -> None:
    label = _SIDE_LABELS[side]
    range_id = getattr(r, "id", None)
    range_id = str(range_id) if range_id is not None else None

    def err(message: str) -> None:
        errors.append(ValidationError(field=side, message=message, range_id=range_id))

    lo = _as_number(getattr(r, "min_val", None))
    hi = _as_number(getattr(r, "max_val", None))
    if lo is None or hi is None:
        err(f"{label} Min and Max must be finite numbers")
        return

    if side == "fdv_ranges":
        if lo < 0:
            err("FDV Min must be non-negative")
    else:
        if lo <= 0:
            err("Drop% Min must be greater than 0")
        if hi > 100:
            err("Drop% Max cannot exceed 100")
    if hi <= lo:
        err(f"{label} Max must be greater than Min")

    weight = getattr(r, "weight", None)
    if weight is not None:
        w = _as_number(weight)
        if w is None:
            err("Weight must be a finite number")
        elif w < 0:
            err("Weight cannot be negative")

    if getattr(r, "distribution_type", None) == "prediction_centric":
        exp_min = getattr(r, "expected_min", None)
        exp_max = getattr(r, "expected_max", None)
        if exp_min is None or exp_max is None:
            err("Expected range is required for Prediction-Centric")
            return
        exp_lo, exp_hi = _as_number(exp_min), _as_number(exp_max)
        if exp_lo is None or exp_hi is None:
            err("Expected Min and Max must be finite numbers")
            return
        if exp_lo < lo or exp_hi > hi:
            err("Expected range must be within the main range")
        if exp_hi <= exp_lo:
            err("Expected Max must be greater than Expected Min")


def _check_side(params: Any, side: str, errors: List[ValidationError]) -> None:
    label = _SIDE_LABELS[side]
    ranges = getattr(params, side, None)
    if ranges is None or isinstance(ranges, (str, bytes)):
        ranges = ()
    try:
        ranges = list(ranges)
    except TypeError:
        ranges = []

    if not ranges:
        noun = "FDV" if side == "fdv_ranges" else "Airdrop %"
        errors.append(ValidationError(field=side, message=f"At least one {noun} range is required"))
        return
    if len(ranges) > MAX_RANGES_PER_SIDE:
        errors.append(ValidationError(
            field=side,
            message=f"At most {MAX_RANGES_PER_SIDE} {label} ranges are allowed",
        ))

    for r in ranges:
        _check_range(r, side, errors)

    weights = [getattr(r, "weight", None) for r in ranges]
    if any(w is not None for w in weights):
        if not any((_as_number(w) or 0.0) > 0 for w in weights):
            errors.append(ValidationError(field=side, message="At least one range must have a non-zero weight"))


def validate_custom_params(params: Any) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_supply(params, errors)
    _check_side(params, "fdv_ranges", errors)
    _check_side(params, "drop_ranges", errors)
    _check_simulations(params, errors)
    return errors


# ---------------------------------------------------------------------------
# Auto-shaped engine
# ---------------------------------------------------------------------------

def validate_auto_params(params: Any) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_supply(params, errors)
    _check_bounds(params, "fdv_min_m", "fdv_max_m", "FDV", errors)
    _check_bounds(params, "drop_min_pct", "drop_max_pct", "Drop%", errors, upper_limit=100.0)
    for name in ("fdv_design", "drop_design"):
        design = getattr(params, name, "absolute")
        if design not in ("absolute", "range_invariant"):
            errors.append(ValidationError(field=name, message=f"Unknown zone design {design!r}"))
    _check_simulations(params, errors)
    return errors


_VALIDATORS = {
    "fixed_formula": validate_fixed_params,
    "custom_ranges": validate_custom_params,
    "auto_shaped": validate_auto_params,
}


def validate_params(params: Any) -> List[ValidationError]:
    """Dispatch on params.kind; an unknown kind is itself a validation error."""
    kind = getattr(params, "kind", None)
    validator = _VALIDATORS.get(kind) if isinstance(kind, str) else None
    if validator is None:
        return [ValidationError(
            field="kind",
            message=f"Unknown parameter kind {kind!r}. Available: {list(_VALIDATORS.keys())}",
        )]
    return validator(params)


# ---------------------------------------------------------------------------
# Advisory checks
# ---------------------------------------------------------------------------

def find_overlapping_ranges(ranges: Sequence[Any]) -> List[Tuple[str, str]]:
    """
    Pairs of range ids whose open intervals intersect, in list order.
    Overlaps are legal (their probability mass accumulates) but usually worth
    confirming with the user.
    """
    pairs: List[Tuple[str, str]] = []
    items = list(ranges)
    for i, a in enumerate(items):
        for j in range(i + 1, len(items)):
            b = items[j]
            a_lo, a_hi = _as_number(getattr(a, "min_val", None)), _as_number(getattr(a, "max_val", None))
            b_lo, b_hi = _as_number(getattr(b, "min_val", None)), _as_number(getattr(b, "max_val", None))
            if None in (a_lo, a_hi, b_lo, b_hi):
                continue
            if a_lo < b_hi and b_lo < a_hi:
                # id-less ranges are named by their position
                pairs.append((str(getattr(a, "id", i)), str(getattr(b, "id", j))))
    return pairs


def review_params(params: Any) -> ValidationResult:
    """Blocking errors from validate_params plus overlap warnings for custom ranges."""
    result = ValidationResult(errors=validate_params(params))
    if getattr(params, "kind", None) != "custom_ranges":
        return result

    for side in ("fdv_ranges", "drop_ranges"):
        ranges = getattr(params, side, None)
        if not isinstance(ranges, (list, tuple)):
            continue
        for a_id, b_id in find_overlapping_ranges(ranges):
            result.warnings.append(ValidationError(
                field=side,
                range_id=a_id,
                message=f"{_SIDE_LABELS[side]} range overlaps range {b_id}; overlapping values get combined probability",
            ))
    return result

"""
Salary Conversion.

Amounts move between monthly and yearly representations:

- monthly -> yearly multiplies by 12 (exact)
- yearly -> monthly divides by 12 and rounds half-up to the nearest
  integer, so monthly -> yearly -> monthly drifts by at most 1

Yearly is the canonical unit. A monthly preference derived from a yearly
one keeps the exact yearly amounts it came from (`yearly_basis`), and
toggling back restores them while the monthly values are unedited, so
repeated toggles never drift.

Thresholds are not free-form: they sit on a fixed ladder of
human-meaningful values per format, and the yearly ladder is the monthly
ladder times 12 so ladder values survive a toggle unchanged.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum

MONTHS_PER_YEAR = 12


class SalaryFormat(Enum):
    """Periodicity a salary amount is expressed in."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


# ₹ values: 10k ... 1L per month
MONTHLY_LADDER = (10_000, 15_000, 20_000, 25_000, 30_000, 40_000, 50_000, 60_000, 75_000, 100_000)
# 1.2L ... 12L per year
YEARLY_LADDER = tuple(step * MONTHS_PER_YEAR for step in MONTHLY_LADDER)

LADDERS = {
    SalaryFormat.MONTHLY: MONTHLY_LADDER,
    SalaryFormat.YEARLY: YEARLY_LADDER,
}


@dataclass
class SalaryRange:
    """Expected salary range in the owning preference's format."""
    min: int | None = None
    max: int | None = None


@dataclass
class SalaryPreference:
    """
    Salary expectations.

    Amounts are stored in `format`'s unit; `to_yearly` gives the canonical
    view that cross-field checks compare against. `yearly_basis` is the
    exact yearly (min, max, threshold) a monthly preference was converted
    from, or None.
    """
    format: SalaryFormat = SalaryFormat.MONTHLY
    range: SalaryRange = field(default_factory=SalaryRange)
    threshold: int | None = None  # Don't show jobs below this amount
    yearly_basis: tuple[int | None, int | None, int | None] | None = None


def _is_amount(value) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def convert(amount, from_format: SalaryFormat, to_format: SalaryFormat):
    """
    Convert an amount between formats.

    Returns `amount` unchanged for same-format calls (None passes through).
    Numeric strings convert like numbers; anything non-numeric passes
    through untouched for the validator to report.
    """
    if amount is None or from_format == to_format:
        return amount
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        return amount
    if not value.is_finite():
        return amount
    if from_format == SalaryFormat.MONTHLY:
        return round_half_up(value * MONTHS_PER_YEAR)
    return round_half_up(value / MONTHS_PER_YEAR)


def _yearly_amount(value, basis_value):
    """Monthly -> yearly, restoring the exact yearly amount `value` was derived from."""
    if value is not None and basis_value is not None:
        if convert(basis_value, SalaryFormat.YEARLY, SalaryFormat.MONTHLY) == value:
            return basis_value
    return convert(value, SalaryFormat.MONTHLY, SalaryFormat.YEARLY)


def nearest_ladder_step(value: int | None, salary_format: SalaryFormat) -> int | None:
    """
    Smallest ladder step at or above `value`.

    Values past the top of the ladder clamp to the top step.
    """
    if not _is_amount(value):
        return value
    ladder = LADDERS[salary_format]
    for step in ladder:
        if step >= value:
            return step
    return ladder[-1]


def closest_ladder_step(value: int, salary_format: SalaryFormat) -> int:
    """Ladder step with the smallest distance to `value` (lower step wins ties)."""
    return min(LADDERS[salary_format], key=lambda step: (abs(step - value), step))


def _clamp(pref: SalaryPreference) -> SalaryPreference:
    """Raise min to threshold and max to min where they fell behind."""
    low, high = pref.range.min, pref.range.max
    if _is_amount(pref.threshold) and _is_amount(low) and low < pref.threshold:
        low = pref.threshold
    if _is_amount(low) and _is_amount(high) and high < low:
        high = low
    if (low, high) == (pref.range.min, pref.range.max):
        return pref
    return replace(pref, range=SalaryRange(min=low, max=high))


def toggle_format(pref: SalaryPreference, to_format: SalaryFormat) -> SalaryPreference:
    """
    Re-express a preference in another format.

    Converts min, max and threshold in that order with the same format
    pair, snaps the threshold onto the target ladder, then clamps so that
    threshold <= min <= max still holds. Going monthly -> yearly reuses
    the yearly basis for any amount left unedited since the last toggle.
    """
    if pref.format == to_format:
        return pref

    amounts = (pref.range.min, pref.range.max, pref.threshold)
    if to_format == SalaryFormat.YEARLY:
        basis = pref.yearly_basis or (None, None, None)
        low, high, threshold = (_yearly_amount(v, b) for v, b in zip(amounts, basis))
        yearly_basis = None
    else:
        low, high, threshold = (convert(v, pref.format, to_format) for v in amounts)
        yearly_basis = amounts

    return _clamp(SalaryPreference(
        format=to_format,
        range=SalaryRange(min=low, max=high),
        threshold=nearest_ladder_step(threshold, to_format),
        yearly_basis=yearly_basis,
    ))


def apply_threshold(pref: SalaryPreference, value: int | None) -> SalaryPreference:
    """
    Set the threshold from a slider value.

    The value is snapped to the closest ladder step of the current format;
    if that pushes past the minimum, the minimum is raised to match.
    """
    threshold = None if value is None else closest_ladder_step(value, pref.format)
    return _clamp(replace(pref, threshold=threshold))


def to_yearly(pref: SalaryPreference) -> SalaryPreference:
    """Canonical (yearly) view of a preference. No ladder snapping."""
    if pref.format == SalaryFormat.YEARLY:
        return pref
    basis = pref.yearly_basis or (None, None, None)
    return SalaryPreference(
        format=SalaryFormat.YEARLY,
        range=SalaryRange(
            min=_yearly_amount(pref.range.min, basis[0]),
            max=_yearly_amount(pref.range.max, basis[1]),
        ),
        threshold=_yearly_amount(pref.threshold, basis[2]),
    )


def format_inr(amount: int) -> str:
    """Format an amount with Indian digit grouping, e.g. 360000 -> '₹3,60,000'."""
    sign = "-" if amount < 0 else ""
    digits = str(abs(int(amount)))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"

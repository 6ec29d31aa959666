"""Date range validation for the export filter.

The range is stored as the user typed it and only checked at the moment
an export is requested, so a half-edited range is never an error on its
own.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum

from pyorders.exceptions import OrdersValidationError
from pyorders.models.export import DateRange


class RangeProblem(enum.StrEnum):
    """Why a date range cannot be exported."""

    MISSING_START = "missing_start"
    MISSING_END = "missing_end"
    END_BEFORE_START = "end_before_start"

    @property
    def message(self) -> str:
        """User-facing explanation."""
        return _MESSAGES[self]


_MESSAGES: dict[RangeProblem, str] = {
    RangeProblem.MISSING_START: "Please select a start date",
    RangeProblem.MISSING_END: "Please select an end date",
    RangeProblem.END_BEFORE_START: "End date must not be before start date",
}


@dataclasses.dataclass(frozen=True, slots=True)
class RangeOk:
    """A range that passed validation; both bounds are guaranteed set."""

    start: dt.date
    end: dt.date

    @property
    def ok(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True, slots=True)
class RangeErr:
    reason: RangeProblem

    @property
    def ok(self) -> bool:
        return False


RangeCheck = RangeOk | RangeErr


def validate_range(date_range: DateRange) -> RangeCheck:
    """Check *date_range*; the first failing rule wins.

    Equal start and end dates are a valid one-day range.  No upper bound on
    the range length is enforced here.
    """
    if date_range.start is None:
        return RangeErr(RangeProblem.MISSING_START)
    if date_range.end is None:
        return RangeErr(RangeProblem.MISSING_END)
    if date_range.end < date_range.start:
        return RangeErr(RangeProblem.END_BEFORE_START)
    return RangeOk(start=date_range.start, end=date_range.end)


def require_valid_range(date_range: DateRange) -> RangeOk:
    """Like :func:`validate_range` but raises :class:`OrdersValidationError`."""
    check = validate_range(date_range)
    if isinstance(check, RangeErr):
        raise OrdersValidationError(check.reason.message, reason=check.reason)
    return check

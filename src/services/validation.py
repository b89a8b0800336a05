from datetime import datetime, timezone
from typing import Optional

from src.domain.dto import ForecastConfiguration, Query
from src.domain.errors import InvalidCount, InvalidStartDate
from src.domain.result import Err, Ok, Result, bind


def ensure_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """Read a naive datetime as UTC; aware values pass through unchanged."""
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _shift_years(moment: datetime, years: int) -> datetime:
    """Move `moment` by whole calendar years, clamping Feb 29 to Feb 28."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


def validate_count(config: ForecastConfiguration, count: int) -> Result:
    """Check the requested number of forecasts against the configured maximum."""
    if count < 1:
        return Err(InvalidCount(count, "Count must be at least 1"))
    if count > config.max_forecast_count:
        return Err(InvalidCount(count, f"Count cannot exceed {config.max_forecast_count}"))
    return Ok(count)


def validate_start_date(start_date: Optional[datetime], reference_time: datetime) -> Result:
    """
    Check that a supplied start date lies within one year of `reference_time`.

    A missing start date is always valid. The reference time is passed in by
    the caller so the check stays free of clock reads. Naive values on either
    side are read as UTC.
    """
    if start_date is None:
        return Ok(None)
    start_date = ensure_utc(start_date)
    reference_time = ensure_utc(reference_time)
    if start_date > _shift_years(reference_time, 1):
        return Err(InvalidStartDate("Start date cannot be more than 1 year in the future"))
    if start_date < _shift_years(reference_time, -1):
        return Err(InvalidStartDate("Start date cannot be more than 1 year in the past"))
    return Ok(start_date)


def validate_query(config: ForecastConfiguration, query: Query) -> Result:
    return bind(validate_count(config, query.count), lambda _: Ok(query))


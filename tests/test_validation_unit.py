from datetime import datetime, timezone

from src.domain.dto import ForecastConfiguration, Query
from src.domain.errors import InvalidCount, InvalidStartDate
from src.domain.result import Err, Ok
from src.services.validation import validate_count, validate_query, validate_start_date


CONFIG = ForecastConfiguration(
    summaries=("Cold", "Warm"),
    min_temperature=10,
    max_temperature=20,
    max_forecast_count=5,
)
NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_count_boundaries():
    assert isinstance(validate_count(CONFIG, 0), Err)
    assert validate_count(CONFIG, 1) == Ok(1)
    assert validate_count(CONFIG, 5) == Ok(5)

    result = validate_count(CONFIG, 6)
    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidCount)
    assert result.error.count == 6
    assert "5" in result.error.message


def test_negative_count_message():
    result = validate_count(CONFIG, -1)
    assert result == Err(InvalidCount(-1, "Count must be at least 1"))


def test_validation_is_idempotent():
    query = Query(count=7)
    assert validate_query(CONFIG, query) == validate_query(CONFIG, query)
    assert validate_query(CONFIG, Query(count=3)) == Ok(Query(count=3))


def test_missing_start_date_is_valid():
    assert validate_start_date(None, NOW) == Ok(None)


def test_start_date_window():
    inside = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert validate_start_date(inside, NOW) == Ok(inside)

    # Exactly one calendar year away is still allowed
    assert isinstance(validate_start_date(datetime(2026, 1, 1, tzinfo=timezone.utc), NOW), Ok)
    assert isinstance(validate_start_date(datetime(2024, 1, 1, tzinfo=timezone.utc), NOW), Ok)

    future = validate_start_date(datetime(2026, 1, 2, tzinfo=timezone.utc), NOW)
    assert isinstance(future, Err)
    assert isinstance(future.error, InvalidStartDate)
    assert "future" in future.error.message

    past = validate_start_date(datetime(2023, 12, 31, tzinfo=timezone.utc), NOW)
    assert isinstance(past, Err)
    assert "past" in past.error.message


def test_start_date_window_from_leap_day():
    leap_day = datetime(2024, 2, 29, tzinfo=timezone.utc)
    assert isinstance(validate_start_date(datetime(2025, 2, 28, tzinfo=timezone.utc), leap_day), Ok)
    assert isinstance(validate_start_date(datetime(2025, 3, 1, tzinfo=timezone.utc), leap_day), Err)


def test_naive_values_are_read_as_utc():
    naive_now = datetime(2025, 1, 1)

    assert validate_start_date(datetime(2025, 6, 1), NOW) == Ok(datetime(2025, 6, 1, tzinfo=timezone.utc))
    assert isinstance(validate_start_date(datetime(2025, 6, 1, tzinfo=timezone.utc), naive_now), Ok)
    assert isinstance(validate_start_date(datetime(2027, 1, 1), NOW), Err)

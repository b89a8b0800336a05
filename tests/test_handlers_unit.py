from datetime import datetime, timedelta, timezone

from src.domain.dto import Command, CommandResult, ForecastConfiguration, Query
from src.domain.errors import GenerationFailed, InvalidCount, InvalidStartDate
from src.domain.result import Err, Ok
from src.infrastructure.providers import (
    ForecastDependencies,
    create_random_provider,
    create_test_random_provider,
    create_test_time_provider,
    create_time_provider,
)
from src.services import generate_forecast_service, get_forecast_service


CONFIG = ForecastConfiguration(
    summaries=("Cold", "Warm"),
    min_temperature=10,
    max_temperature=20,
    max_forecast_count=5,
)
NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


class RecordingClock:
    """Fixed clock that counts how often it is read."""

    def __init__(self, fixed_time):
        self.reads = 0
        self._now = create_test_time_provider(fixed_time)

    def __call__(self):
        self.reads += 1
        return self._now()


class RecordingRandom:
    """Replays values like the test provider and records every call."""

    def __init__(self, values):
        self.calls = []
        self._replay = create_test_random_provider(values)

    def __call__(self, min_value, max_value):
        self.calls.append((min_value, max_value))
        return self._replay(min_value, max_value)


def make_deps(values, config=CONFIG):
    return ForecastDependencies(
        config=config,
        now=RecordingClock(NOW),
        random_int=RecordingRandom(values),
    )


def test_query_scenario():
    deps = make_deps([10, 0])

    result = get_forecast_service.handle(deps, Query(count=1))

    assert isinstance(result, Ok)
    [forecast] = result.value
    assert forecast.date == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert forecast.temperature_c == 10
    assert forecast.summary == "Cold"


def test_command_scenario():
    deps = make_deps([15, 1])
    command = Command(count=1, start_date=datetime(2025, 6, 1, tzinfo=timezone.utc))

    result = generate_forecast_service.handle(deps, command)

    assert isinstance(result, Ok)
    payload = result.value
    assert isinstance(payload, CommandResult)
    assert payload.count == 1
    assert payload.generated_at == NOW
    [forecast] = payload.forecasts
    assert forecast.date == datetime(2025, 6, 2, tzinfo=timezone.utc)
    assert forecast.temperature_c == 15
    assert forecast.summary == "Warm"


def test_command_without_start_date_uses_clock():
    deps = make_deps([11, 12, 0, 1])

    result = generate_forecast_service.handle(deps, Command(count=2))

    assert isinstance(result, Ok)
    dates = [f.date for f in result.value.forecasts]
    assert dates == [NOW + timedelta(days=1), NOW + timedelta(days=2)]


def test_invalid_count_touches_no_provider():
    deps = make_deps([15, 1])

    result = generate_forecast_service.handle(deps, Command(count=-1))

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidCount)
    assert result.error.count == -1
    # Validation short-circuits before the clock or the random source is touched
    assert deps.random_int.calls == []
    assert deps.now.reads == 0


def test_query_invalid_count_draws_nothing():
    deps = make_deps([15, 1])

    result = get_forecast_service.handle(deps, Query(count=CONFIG.max_forecast_count + 1))

    assert result == Err(InvalidCount(6, "Count cannot exceed 5"))
    assert deps.random_int.calls == []


def test_count_boundary_succeeds():
    deps = make_deps([])
    result = get_forecast_service.handle(deps, Query(count=CONFIG.max_forecast_count))
    assert isinstance(result, Ok)
    assert len(result.value) == CONFIG.max_forecast_count


def test_temperatures_drawn_before_summary_indices():
    deps = make_deps([10, 11, 12, 1, 0, 1])

    result = get_forecast_service.handle(deps, Query(count=3))

    assert deps.random_int.calls == [(10, 20)] * 3 + [(0, 2)] * 3
    assert [f.temperature_c for f in result.value] == [10, 11, 12]
    assert [f.summary for f in result.value] == ["Warm", "Cold", "Warm"]


def test_invalid_start_date():
    deps = make_deps([15, 1])
    command = Command(count=1, start_date=NOW + timedelta(days=400))

    result = generate_forecast_service.handle(deps, command)

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidStartDate)
    assert deps.random_int.calls == []


def test_malformed_provider_output_becomes_generation_failed():
    # Summary index 5 does not exist in a two-item list
    deps = make_deps([10, 5])

    result = generate_forecast_service.handle(deps, Command(count=1))

    assert isinstance(result, Err)
    assert isinstance(result.error, GenerationFailed)


def test_properties_hold_with_production_random():
    deps = ForecastDependencies(
        config=CONFIG,
        now=create_test_time_provider(NOW),
        random_int=create_random_provider(),
    )

    for count in range(1, CONFIG.max_forecast_count + 1):
        result = get_forecast_service.handle(deps, Query(count=count))
        assert isinstance(result, Ok)
        assert len(result.value) == count
        for i, f in enumerate(result.value):
            assert f.date == NOW + timedelta(days=i + 1)
            assert CONFIG.min_temperature <= f.temperature_c < CONFIG.max_temperature
            assert f.summary in CONFIG.summaries


def test_invalid_count_with_start_date_touches_no_provider():
    deps = make_deps([15, 1])
    command = Command(count=0, start_date=datetime(2025, 6, 1, tzinfo=timezone.utc))

    result = generate_forecast_service.handle(deps, command)

    assert isinstance(result.error, InvalidCount)
    assert deps.random_int.calls == []
    assert deps.now.reads == 0


def test_naive_start_date_with_production_clock():
    deps = ForecastDependencies(
        config=CONFIG,
        now=create_time_provider(),
        random_int=create_random_provider(),
    )
    today = create_time_provider()()
    naive_start = datetime(today.year, today.month, today.day)

    result = generate_forecast_service.handle(deps, Command(count=1, start_date=naive_start))

    assert isinstance(result, Ok)
    [forecast] = result.value.forecasts
    # Naive input is read as UTC, so the output dates are aware
    assert forecast.date == naive_start.replace(tzinfo=timezone.utc) + timedelta(days=1)


def test_naive_start_date_outside_window_is_rejected():
    deps = make_deps([15, 1])
    command = Command(count=1, start_date=datetime(2027, 1, 1))

    result = generate_forecast_service.handle(deps, command)

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidStartDate)

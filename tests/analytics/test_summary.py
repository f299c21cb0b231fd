"""Unit tests for one-line series summaries."""

import logging
from datetime import datetime

from chronoscharts.analytics.entries import Series, SeriesType
from chronoscharts.analytics.ranges import RelativeRange
from chronoscharts.analytics.stats import StatId
from chronoscharts.analytics.summary import SummaryConfig, format_stat, series_summary

NOW = datetime(2024, 1, 10, 12, 0)


def test_default_summary_is_mean(make_entry):
    series = Series(id=1, name="Weight")
    entries = [make_entry("2024-01-01T00:00:00", 10), make_entry("2024-01-02T00:00:00", 15)]
    assert series_summary(series, entries, now=NOW) == "Avg: 12.5"


def test_duration_series_formats_as_duration(make_entry):
    series = Series(id=2, name="Reading", type=SeriesType.DURATION)
    entries = [make_entry("2024-01-09T00:00:00", 3600), make_entry("2024-01-10T00:00:00", 1200)]
    config = SummaryConfig(range=RelativeRange.WEEK, operation=StatId.SUM)
    assert series_summary(series, entries, config, now=NOW) == "Total: 1h 20m"


def test_nothing_in_range_gives_none(make_entry):
    series = Series(id=1, name="Weight")
    entries = [make_entry("2023-06-01T00:00:00", 10)]
    config = SummaryConfig(range=RelativeRange.WEEK)
    assert series_summary(series, entries, config, now=NOW) is None
    assert series_summary(series, [], now=NOW) is None


def test_count_and_daily_average(make_entry):
    series = Series(id=1, name="Coffee")
    entries = [
        make_entry("2024-01-09T08:00:00", 1),
        make_entry("2024-01-09T14:00:00", 1),
        make_entry("2024-01-10T08:00:00", 2),
    ]
    assert series_summary(series, entries, SummaryConfig(operation=StatId.COUNT), now=NOW) == "Count: 3"
    assert series_summary(series, entries, SummaryConfig(operation=StatId.DAY_MEAN), now=NOW) == "Daily Avg: 2"


def test_format_stat_number_uses_separators():
    assert format_stat(12345.678) == "12,345.68"
    assert format_stat(90, Series(id=1, name="t", type=SeriesType.DURATION)) == "1m 30s"


def test_config_round_trip():
    config = SummaryConfig(range=RelativeRange.CUSTOM, operation=StatId.MEDIAN, custom_days=14)
    assert SummaryConfig.from_dict(config.to_dict()) == config
    assert config.range_label == "14d"
    assert SummaryConfig().range_label == "All"


def test_config_from_dict_tolerates_bad_values(caplog):
    with caplog.at_level(logging.WARNING, logger="chronoscharts"):
        config = SummaryConfig.from_dict({"period": "nonsense", "operation": "mode", "customDays": "x"})
    assert config == SummaryConfig()
    assert "Unknown summary operation" in caplog.text

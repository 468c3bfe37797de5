# tests/test_roster_utils.py
from datetime import date, datetime

import pandas as pd
import pytest

from roster_utils import (
    compute_monthly_stats,
    create_schedule_dataframe,
    create_statistics_dataframe,
    date_range,
    export_schedule_to_csv,
    get_deviation,
    get_fairness_metrics,
    get_month_dates,
    get_shift_symbol,
    get_weekends,
    is_blank,
    is_weekend,
    parse_bool,
    parse_date,
    validate_nurse_data,
)
from ward_scheduler import ScheduleEntry, ShiftType


def entry(nurse_id, d, shift_type, locked=False):
    return ScheduleEntry("W1", nurse_id, d, shift_type, locked)


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("year,month,days", [(2024, 2, 29), (2025, 2, 28), (2025, 9, 30), (2025, 12, 31)])
def test_get_month_dates(year, month, days):
    dates = get_month_dates(year, month)
    assert len(dates) == days
    assert dates[0] == date(year, month, 1)
    assert dates == sorted(dates)


def test_weekends():
    weekends = get_weekends(2025, 9)
    assert len(weekends) == 8
    assert date(2025, 9, 6) in weekends and date(2025, 9, 7) in weekends
    assert is_weekend(date(2025, 9, 6))
    assert not is_weekend(date(2025, 9, 5))


def test_date_range():
    assert date_range(date(2025, 9, 30), date(2025, 10, 1)) == [date(2025, 9, 30), date(2025, 10, 1)]
    assert date_range(date(2025, 9, 3), date(2025, 9, 3)) == [date(2025, 9, 3)]
    assert date_range(date(2025, 9, 3), date(2025, 9, 1)) == []


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("value", [
    date(2025, 9, 1),
    datetime(2025, 9, 1, 7, 30),
    pd.Timestamp("2025-09-01"),
    "2025-09-01",
    " 2025-09-01T00:00:00 ",
])
def test_parse_date(value):
    assert parse_date(value) == date(2025, 9, 1)


@pytest.mark.parametrize("value", [None, "", "1/9/2025", 20250901])
def test_parse_date_rejects(value):
    with pytest.raises(ValueError):
        parse_date(value)


@pytest.mark.parametrize("value,expected", [
    (None, True),
    (float("nan"), True),
    ("", True),
    ("  ", True),
    ("nan", True),
    ("N1", False),
    (0, False),
])
def test_is_blank(value, expected):
    assert is_blank(value) is expected


@pytest.mark.parametrize("value,expected", [
    (None, True),
    ("yes", True),
    ("False", False),
    (0, False),
    (True, True),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_validate_nurse_data():
    good = pd.DataFrame({"Id": ["N1", "N2"], "Name": ["Kim", "Lee"], "ExperienceLevel": ["SENIOR", "JUNIOR"]})
    assert validate_nurse_data(good) == (True, "")

    ok, msg = validate_nurse_data(good.drop(columns=["ExperienceLevel"]))
    assert not ok and "ExperienceLevel" in msg

    ok, msg = validate_nurse_data(good.iloc[0:0])
    assert (ok, msg) == (False, "Nurse list is empty")

    dup = pd.DataFrame({"Id": ["N1", "N1"], "Name": ["Kim", "Lee"], "ExperienceLevel": ["SENIOR", "JUNIOR"]})
    assert validate_nurse_data(dup) == (False, "Duplicate nurse ids found")


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------
def test_monthly_stats_bucket_vacation_separately():
    entries = [
        entry("N1", date(2025, 9, 5), ShiftType.NIGHT),
        entry("N1", date(2025, 9, 6), ShiftType.DAY),         # Saturday
        entry("N1", date(2025, 9, 7), ShiftType.VACATION, True),  # Sunday, not weekend work
        entry("N1", date(2025, 9, 8), ShiftType.ANNUAL_LEAVE),
        entry("N1", date(2025, 9, 9), ShiftType.OFF),
        entry("N2", date(2025, 9, 6), ShiftType.SPLIT),
        entry("N2", date(2025, 9, 7), ShiftType.EVENING),
    ]

    stats = compute_monthly_stats(entries)

    assert stats["N1"] == {
        "day": 1, "evening": 0, "night": 1, "off": 1, "split": 0, "vacation": 2, "weekend_work": 1,
    }
    assert stats["N2"]["split"] == 1
    assert stats["N2"]["weekend_work"] == 2


def test_monthly_stats_count_weekend_annual_leave_as_weekend_work():
    entries = [
        entry("N1", date(2025, 9, 13), ShiftType.ANNUAL_LEAVE),  # Saturday
        entry("N1", date(2025, 9, 14), ShiftType.OFF),           # Sunday
        entry("N2", date(2025, 9, 13), ShiftType.VACATION, True),
    ]

    stats = compute_monthly_stats(entries)

    assert stats["N1"]["vacation"] == 1
    assert stats["N1"]["weekend_work"] == 1
    assert stats["N2"]["vacation"] == 1
    assert stats["N2"]["weekend_work"] == 0


def test_get_deviation():
    assert get_deviation([]) == 0.0
    assert get_deviation([3, 3, 3]) == 0.0
    assert get_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)


def test_fairness_metrics():
    stats = {
        "N1": {"night": 2, "weekend_work": 1},
        "N2": {"night": 4, "weekend_work": 3},
    }
    metrics = get_fairness_metrics(stats)
    assert metrics["night_shifts_mean"] == 3
    assert metrics["night_shifts_deviation"] == pytest.approx(1.0)
    assert metrics["weekend_work_mean"] == 2
    assert get_fairness_metrics({}) == {}


# ---------------------------------------------------------------------------
# Tabular views
# ---------------------------------------------------------------------------
def test_create_schedule_dataframe():
    dates = [date(2025, 9, 1), date(2025, 9, 2)]
    entries = [
        entry("N1", dates[0], ShiftType.DAY),
        entry("N1", dates[1], ShiftType.NIGHT),
        entry("N2", dates[0], ShiftType.VACATION, True),
    ]

    df = create_schedule_dataframe(["N1", "N2"], dates, entries)

    assert list(df.columns) == ["1", "2"]
    assert df.index.name == "Nurse"
    assert df.loc["N1", "1"] == "D"
    assert df.loc["N1", "2"] == "N"
    assert df.loc["N2", "1"] == "V"
    assert df.loc["N2", "2"] == ""


def test_create_statistics_dataframe():
    stats = {
        "N2": {"day": 3, "night": 1, "off": 2, "weekend_work": 1},
        "N1": {"day": 1, "vacation": 4},
    }
    df = create_statistics_dataframe(stats, names={"N1": "Kim"})

    assert list(df["Nurse"]) == ["N1", "N2"]
    assert list(df["Name"]) == ["Kim", "N2"]
    assert df.loc[0, "Vacation"] == 4
    assert df.loc[1, "Day"] == 3
    assert df.loc[1, "Evening"] == 0
    assert create_statistics_dataframe({}).empty


@pytest.mark.parametrize("shift,symbol", [("DAY", "D"), ("ANNUAL_LEAVE", "AL"), ("UNKNOWN", "")])
def test_get_shift_symbol(shift, symbol):
    assert get_shift_symbol(shift) == symbol


def test_export_schedule_to_csv():
    dates = [date(2025, 9, 1)]
    schedule_df = create_schedule_dataframe(["N1"], dates, [entry("N1", dates[0], ShiftType.OFF)])
    stats_df = create_statistics_dataframe({"N1": {"off": 1}})

    csv = export_schedule_to_csv(schedule_df, stats_df)

    assert csv.startswith("=== SHIFT SCHEDULE ===\n")
    assert "Nurse,1\nN1,O\n" in csv
    assert "=== STATISTICS ===" in csv


def test_export_schedule_to_csv_with_coverage():
    dates = [date(2025, 9, 1)]
    schedule_df = create_schedule_dataframe(["N1"], dates, [entry("N1", dates[0], ShiftType.DAY)])
    stats_df = create_statistics_dataframe({"N1": {"day": 1}})
    coverage = [{
        "date": dates[0],
        "day_of_week": "Mon",
        "day_coverage": 1,
        "day_required": 2,
        "evening_coverage": 0,
        "evening_required": 1,
        "night_coverage": 0,
        "night_required": 1,
        "day_staff": ["N1"],
        "understaffed": True,
    }]

    csv = export_schedule_to_csv(schedule_df, stats_df, coverage)

    assert "\n\n=== COVERAGE ===\n" in csv
    assert csv.endswith(
        "date,day_coverage,day_required,evening_coverage,evening_required,"
        "night_coverage,night_required,understaffed\n"
        "2025-09-01,1,2,0,1,0,1,True\n"
    )
    assert "day_staff" not in csv

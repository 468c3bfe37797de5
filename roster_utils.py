"""
Utility functions for the Ward Shift Scheduler.
Handles calendar operations, roster parsing, statistics and tabular views.
"""

import calendar
import math
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple
import pandas as pd


# Store-side statistics buckets. VACATION and ANNUAL_LEAVE share their own
# bucket here, unlike the generator's run state which folds them into "off".
STAT_BUCKETS = {
    "DAY": "day",
    "EVENING": "evening",
    "NIGHT": "night",
    "OFF": "off",
    "SPLIT": "split",
    "VACATION": "vacation",
    "ANNUAL_LEAVE": "vacation",
}

# Shifts that never count as weekend work. ANNUAL_LEAVE on a weekend does count.
NON_WEEKEND_WORK = {"OFF", "VACATION"}

WEEKEND_DAYS = (5, 6)  # Saturday, Sunday

COVERAGE_COLUMNS = [
    "date",
    "day_coverage",
    "day_required",
    "evening_coverage",
    "evening_required",
    "night_coverage",
    "night_required",
    "understaffed",
]

SHIFT_SYMBOLS = {
    "DAY": "D",
    "EVENING": "E",
    "NIGHT": "N",
    "OFF": "O",
    "SPLIT": "S",
    "VACATION": "V",
    "ANNUAL_LEAVE": "AL",
}


def date_range(start: date, end: date) -> List[date]:
    """All dates from start to end, both inclusive. Empty if end < start."""
    days = (end - start).days
    return [start + timedelta(days=offset) for offset in range(days + 1)]


def get_month_dates(year: int, month: int) -> List[date]:
    """Every date of the scheduling month, ascending."""
    last_day = calendar.monthrange(year, month)[1]
    return date_range(date(year, month, 1), date(year, month, last_day))


def is_weekend(d: date) -> bool:
    return d.weekday() in WEEKEND_DAYS


def get_weekends(year: int, month: int) -> Set[date]:
    """Saturdays and Sundays of the scheduling month."""
    return {d for d in get_month_dates(year, month) if is_weekend(d)}


def parse_date(value) -> date:
    """
    Coerce a roster cell into a date.
    Accepts date, datetime / pandas Timestamp and ISO strings (YYYY-MM-DD).
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Cannot parse date from {value!r}")


def is_blank(value) -> bool:
    """True for None, NaN and empty strings coming out of a DataFrame."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return str(value).strip().lower() in ("", "nan", "nat", "none")


def parse_bool(value, default: bool = True) -> bool:
    """Parse a checkbox-like roster cell."""
    if is_blank(value):
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def validate_nurse_data(df: pd.DataFrame) -> Tuple[bool, str]:
    """
    Validate nurse DataFrame has required columns.

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_cols = ["Id", "Name", "ExperienceLevel"]
    missing = [col for col in required_cols if col not in df.columns]

    if missing:
        return False, f"Missing required columns: {', '.join(missing)}"

    if df.empty:
        return False, "Nurse list is empty"

    if df["Id"].duplicated().any():
        return False, "Duplicate nurse ids found"

    return True, ""


def compute_monthly_stats(entries: Iterable) -> Dict[str, Dict[str, int]]:
    """
    Count stored schedule entries per nurse.

    Unlike the generator's run state, vacation and annual leave are reported
    in a separate "vacation" bucket and are not counted as "off".
    Weekend work counts every entry on a Saturday or Sunday except OFF and
    VACATION, so an annual leave day on a weekend is counted.
    """
    stats: Dict[str, Dict[str, int]] = {}
    for entry in entries:
        nurse_stats = stats.setdefault(entry.nurse_id, {
            "day": 0,
            "evening": 0,
            "night": 0,
            "off": 0,
            "split": 0,
            "vacation": 0,
            "weekend_work": 0,
        })
        shift = entry.shift_type.value
        nurse_stats[STAT_BUCKETS[shift]] += 1
        if shift not in NON_WEEKEND_WORK and is_weekend(entry.date):
            nurse_stats["weekend_work"] += 1
    return stats


def get_deviation(values: List[float]) -> float:
    """Population standard deviation, 0 for an empty list."""
    if not values:
        return 0.0
    avg = sum(values) / len(values)
    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def get_fairness_metrics(stats: Dict[str, Dict[str, int]]) -> dict:
    """Mean and deviation of night and weekend workload across nurses."""
    if not stats:
        return {}

    nights = [s["night"] for s in stats.values()]
    weekends = [s["weekend_work"] for s in stats.values()]

    return {
        "night_shifts_mean": sum(nights) / len(nights),
        "night_shifts_deviation": get_deviation(nights),
        "weekend_work_mean": sum(weekends) / len(weekends),
        "weekend_work_deviation": get_deviation(weekends),
    }


def create_schedule_dataframe(
    nurse_ids: List[str], dates: List[date], entries: Iterable
) -> pd.DataFrame:
    """
    Create a DataFrame from schedule entries.

    Args:
        nurse_ids: Nurse ids in display order
        dates: List of dates in the month
        entries: ScheduleEntry values for the month

    Returns:
        DataFrame with nurses as rows and day numbers as columns
    """
    lookup = {(e.nurse_id, e.date): e.shift_type.value for e in entries}

    data = {}
    for d in dates:
        col_name = f"{d.day}"
        data[col_name] = [
            get_shift_symbol(lookup.get((nurse_id, d), "")) for nurse_id in nurse_ids
        ]

    df = pd.DataFrame(data, index=nurse_ids)
    df.index.name = "Nurse"
    return df


def create_statistics_dataframe(
    stats: Dict[str, Dict[str, int]], names: Optional[Dict[str, str]] = None
) -> pd.DataFrame:
    """
    Create statistics DataFrame from per-nurse counts.

    Args:
        stats: Dict of nurse id -> counts (run state or stored entries)
        names: Optional nurse id -> display name

    Returns:
        DataFrame with one row per nurse
    """
    names = names or {}
    rows = []
    for nurse_id, counts in stats.items():
        rows.append({
            "Nurse": nurse_id,
            "Name": names.get(nurse_id, nurse_id),
            "Day": counts.get("day", 0),
            "Evening": counts.get("evening", 0),
            "Night": counts.get("night", 0),
            "Off": counts.get("off", 0),
            "Split": counts.get("split", 0),
            "Vacation": counts.get("vacation", 0),
            "Weekend": counts.get("weekend_work", 0),
        })

    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values("Nurse").reset_index(drop=True)
    return df


def get_shift_symbol(shift_type: str) -> str:
    """Get display symbol for shift type."""
    return SHIFT_SYMBOLS.get(shift_type, "")


def export_schedule_to_csv(
    schedule_df: pd.DataFrame,
    stats_df: pd.DataFrame,
    coverage: Optional[List[dict]] = None,
) -> str:
    """
    Export the roster grid and per-nurse counts as one CSV string.

    When a coverage summary (as returned by get_coverage_summary) is given,
    a third section lists staffed and required counts per date.
    """
    sections = [
        ("SHIFT SCHEDULE", schedule_df.to_csv()),
        ("STATISTICS", stats_df.to_csv(index=False)),
    ]
    if coverage:
        coverage_df = pd.DataFrame(coverage, columns=COVERAGE_COLUMNS)
        coverage_df["date"] = coverage_df["date"].map(lambda d: d.isoformat())
        sections.append(("COVERAGE", coverage_df.to_csv(index=False)))

    return "\n\n".join(f"=== {title} ===\n{body}" for title, body in sections)

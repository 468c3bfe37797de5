"""
Core Scheduler Logic for the Ward Shift Scheduling System.
Builds a monthly roster one date at a time with a greedy, rule-checked
allocation of Day, Evening and Night teams.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Set, Tuple
from enum import Enum
import functools
import logging
import math

from roster_utils import (
    date_range,
    get_month_dates,
    is_blank,
    is_weekend,
    parse_bool,
    parse_date,
)


logger = logging.getLogger(__name__)


class ShiftType(Enum):
    DAY = "DAY"
    EVENING = "EVENING"
    NIGHT = "NIGHT"
    OFF = "OFF"
    SPLIT = "SPLIT"
    VACATION = "VACATION"
    ANNUAL_LEAVE = "ANNUAL_LEAVE"


@functools.total_ordering
class ExperienceLevel(Enum):
    """Ordered experience scale, INTERN < JUNIOR < SENIOR < CHARGE."""
    INTERN = "INTERN"
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    CHARGE = "CHARGE"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other):
        if not isinstance(other, ExperienceLevel):
            return NotImplemented
        return self.rank < other.rank


class RequestStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class VacationType(Enum):
    ANNUAL_LEAVE = "ANNUAL_LEAVE"
    SICK_LEAVE = "SICK_LEAVE"
    SPECIAL_LEAVE = "SPECIAL_LEAVE"


# Shifts that break a working run
REST_SHIFTS = frozenset({ShiftType.OFF, ShiftType.VACATION, ShiftType.ANNUAL_LEAVE})

# Working shift -> run state tally
WORK_TALLIES = {
    ShiftType.DAY: "day",
    ShiftType.EVENING: "evening",
    ShiftType.NIGHT: "night",
    ShiftType.SPLIT: "split",
}

# Monthly quota per nurse as a fraction of the days in the month.
# Quotas only steer ranking, they are not enforced.
SHIFT_QUOTA_FRACTIONS = {
    ShiftType.DAY: 0.25,
    ShiftType.EVENING: 0.25,
    ShiftType.NIGHT: 0.20,
    ShiftType.OFF: 0.30,
}

OFF_PRIORITY_BIAS = 10

SENIOR_LEVELS = frozenset({ExperienceLevel.SENIOR, ExperienceLevel.CHARGE})

ACTIVE_REQUEST_STATUSES = frozenset({RequestStatus.PENDING, RequestStatus.APPROVED})


@dataclass
class Ward:
    """Staffing rules for one ward."""
    id: str
    name: str
    min_staff_day: int = 1
    min_staff_evening: int = 1
    min_staff_night: int = 1
    max_consecutive_nights: int = 3
    min_rest_hours: int = 12
    require_mixed_experience: bool = True


@dataclass
class Nurse:
    """A ward nurse. The generator never mutates these records."""
    id: str
    ward_id: str
    name: str
    experience_level: ExperienceLevel = ExperienceLevel.JUNIOR
    is_active: bool = True
    employee_number: str = ""
    annual_leave_total: int = 15
    annual_leave_used: int = 0

    @property
    def is_senior(self) -> bool:
        return self.experience_level in SENIOR_LEVELS


@dataclass
class ShiftRequest:
    nurse_id: str
    date: date
    requested_shift: ShiftType
    status: RequestStatus = RequestStatus.PENDING
    reason: str = ""


@dataclass
class VacationRequest:
    nurse_id: str
    start_date: date
    end_date: date
    status: RequestStatus = RequestStatus.PENDING
    vacation_type: VacationType = VacationType.ANNUAL_LEAVE
    reason: str = ""

    def dates(self) -> List[date]:
        """Every date in the inclusive range."""
        return date_range(self.start_date, self.end_date)


@dataclass
class GenerationConfig:
    """
    Tunables for one generation run.

    `max_consecutive_nights` is kept as a copy of the ward's setting; the
    ward's own value is the one enforced. `balance_holidays` and
    `balance_night_shifts` are accepted but not used by the allocation.
    `require_mixed_experience` overrides the ward's flag for the run.
    """
    ward_id: str
    year: int
    month: int
    max_consecutive_work_days: int = 5
    max_consecutive_nights: int = 3
    min_rest_after_night: bool = True
    balance_weekends: bool = True
    balance_holidays: bool = False
    balance_night_shifts: bool = True
    require_mixed_experience: bool = True


@dataclass(frozen=True)
class ScheduleEntry:
    """One nurse's assignment for one date. Locked entries come from approved leave."""
    ward_id: str
    nurse_id: str
    date: date
    shift_type: ShiftType
    is_locked: bool = False

    def to_dict(self) -> dict:
        return {
            "ward_id": self.ward_id,
            "nurse_id": self.nurse_id,
            "date": self.date.isoformat(),
            "shift_type": self.shift_type.value,
            "is_locked": self.is_locked,
        }


@dataclass
class NurseRunState:
    """Per-nurse counters for a single generation run."""
    consecutive_work_days: int = 0
    consecutive_nights: int = 0
    last_shift: Optional[ShiftType] = None

    # Monthly tallies. Vacation and annual leave are counted as off.
    day: int = 0
    evening: int = 0
    night: int = 0
    off: int = 0
    split: int = 0
    weekend_work: int = 0

    def get_stats_dict(self) -> dict:
        """Return tallies as dictionary."""
        return {
            "day": self.day,
            "evening": self.evening,
            "night": self.night,
            "off": self.off,
            "split": self.split,
            "weekend_work": self.weekend_work,
        }


class ScheduleGenerator:
    """
    Monthly schedule generator for one ward.

    Dates are processed in ascending order. For each date, nurses on approved
    leave are locked to VACATION first, then Day, Evening and Night teams are
    picked in that order from whoever is left, and everyone remaining is OFF.
    Picks are never revisited, so an earlier shift can use up a nurse who
    would have suited a later one.
    """

    SHIFT_STAGES = (ShiftType.DAY, ShiftType.EVENING, ShiftType.NIGHT)

    def __init__(
        self,
        ward: Ward,
        nurses: List[Nurse],
        config: GenerationConfig,
        shift_requests: List[ShiftRequest] = None,
        vacation_requests: List[VacationRequest] = None,
    ):
        self.ward = ward
        self.config = config
        self.nurses = [n for n in nurses if n.is_active]
        self.nurse_by_id = {n.id: n for n in self.nurses}
        self.dates = get_month_dates(config.year, config.month)

        # (nurse_id, date) -> request, last one wins
        self.shift_requests: Dict[Tuple[str, date], ShiftRequest] = {}
        for req in shift_requests or []:
            if req.status in ACTIVE_REQUEST_STATUSES:
                self.shift_requests[(req.nurse_id, req.date)] = req

        # nurse_id -> dates on approved leave
        self.vacation_dates: Dict[str, Set[date]] = {}
        for vac in vacation_requests or []:
            if vac.status == RequestStatus.APPROVED:
                self.vacation_dates.setdefault(vac.nurse_id, set()).update(vac.dates())

        self.targets = self._calculate_targets()
        self.states: Dict[str, NurseRunState] = {}
        self.entries: List[ScheduleEntry] = []
        self._initialize_states()

    def _calculate_targets(self) -> Dict[ShiftType, int]:
        """Per-nurse monthly quota for each balanced shift type."""
        total_days = len(self.dates)
        return {
            shift_type: math.floor(total_days * fraction)
            for shift_type, fraction in SHIFT_QUOTA_FRACTIONS.items()
        }

    def _initialize_states(self):
        self.states = {n.id: NurseRunState() for n in self.nurses}

    def is_on_vacation(self, nurse_id: str, d: date) -> bool:
        return d in self.vacation_dates.get(nurse_id, ())

    def get_request(self, nurse_id: str, d: date) -> Optional[ShiftRequest]:
        return self.shift_requests.get((nurse_id, d))

    def _is_senior(self, nurse_id: str) -> bool:
        nurse = self.nurse_by_id.get(nurse_id)
        return nurse is not None and nurse.is_senior

    def _required_count(self, shift_type: ShiftType) -> int:
        if shift_type == ShiftType.DAY:
            return self.ward.min_staff_day
        if shift_type == ShiftType.EVENING:
            return self.ward.min_staff_evening
        if shift_type == ShiftType.NIGHT:
            return self.ward.min_staff_night
        raise ValueError(f"No staffing minimum for {shift_type}")

    # ==================== NURSE STATE TRACKING ====================

    def update_state(self, nurse_id: str, shift_type: ShiftType, is_weekend_day: bool):
        """Record one day's assignment in the nurse's run state."""
        state = self.states[nurse_id]

        if shift_type in REST_SHIFTS:
            state.consecutive_work_days = 0
            state.consecutive_nights = 0
            state.off += 1
        elif shift_type in WORK_TALLIES:
            state.consecutive_work_days += 1
            if is_weekend_day:
                state.weekend_work += 1

            if shift_type == ShiftType.NIGHT:
                state.consecutive_nights += 1
            else:
                state.consecutive_nights = 0

            tally = WORK_TALLIES[shift_type]
            setattr(state, tally, getattr(state, tally) + 1)
        else:
            raise ValueError(f"Unhandled shift type: {shift_type}")

        state.last_shift = shift_type

    # ==================== CONSTRAINTS AND SCORING ====================

    def can_assign(
        self, nurse_id: str, shift_type: ShiftType, d: date
    ) -> Tuple[bool, str]:
        """
        Check if a nurse can take a shift on a given date.
        Returns (can_assign, reason). Does not modify run state.

        Night followed by Evening is allowed; only Night followed by Day is
        blocked by the rest rule.
        """
        state = self.states[nurse_id]

        if self.is_on_vacation(nurse_id, d):
            return False, "On vacation"

        if (
            shift_type != ShiftType.OFF
            and state.consecutive_work_days >= self.config.max_consecutive_work_days
        ):
            return False, "Max consecutive work days reached"

        if (
            shift_type == ShiftType.NIGHT
            and state.consecutive_nights >= self.ward.max_consecutive_nights
        ):
            return False, "Max consecutive nights reached"

        if (
            self.config.min_rest_after_night
            and state.last_shift == ShiftType.NIGHT
            and shift_type == ShiftType.DAY
        ):
            return False, "Need rest after night shift"

        return True, "OK"

    def get_shift_priority(self, nurse_id: str, shift_type: ShiftType) -> int:
        """
        Calculate how much a nurse should get this shift today.
        Higher score = further below the monthly quota.
        """
        state = self.states[nurse_id]

        if shift_type in (ShiftType.DAY, ShiftType.EVENING, ShiftType.NIGHT):
            return self.targets[shift_type] - getattr(state, WORK_TALLIES[shift_type])
        if shift_type == ShiftType.OFF:
            if state.off < self.targets[ShiftType.OFF]:
                return OFF_PRIORITY_BIAS
            return -OFF_PRIORITY_BIAS
        if shift_type in (ShiftType.SPLIT, ShiftType.VACATION, ShiftType.ANNUAL_LEAVE):
            return 0
        raise ValueError(f"Unhandled shift type: {shift_type}")

    # ==================== TEAM SELECTION ====================

    def select_nurses_for_shift(
        self,
        d: date,
        shift_type: ShiftType,
        count: int,
        available: List[str],
        is_weekend_day: bool,
    ) -> List[str]:
        """
        Pick up to `count` nurses for a shift from `available`.

        Nurses who asked for this shift on this date go first, in pool order.
        Remaining slots are filled by ranking everyone else: fewest weekend
        shifts first (weekends only, when weekend balancing is on), then
        highest priority score. Ties keep pool order. Every pick must pass
        `can_assign`; falling short of `count` is allowed.
        """
        selected: List[str] = []

        requested = []
        for nurse_id in available:
            req = self.get_request(nurse_id, d)
            if req is not None and req.requested_shift == shift_type:
                requested.append(nurse_id)

        for nurse_id in requested:
            if len(selected) >= count:
                break
            if self.can_assign(nurse_id, shift_type, d)[0]:
                selected.append(nurse_id)

        if len(selected) < count:
            balance_weekend = self.config.balance_weekends and is_weekend_day
            requested_set = set(requested)

            def rank_key(nurse_id: str):
                priority = self.get_shift_priority(nurse_id, shift_type)
                if balance_weekend:
                    return (self.states[nurse_id].weekend_work, -priority)
                return (-priority,)

            remaining = [
                nurse_id for nurse_id in available
                if nurse_id not in selected and nurse_id not in requested_set
            ]
            remaining.sort(key=rank_key)

            for nurse_id in remaining:
                if len(selected) >= count:
                    break
                if self.can_assign(nurse_id, shift_type, d)[0]:
                    selected.append(nurse_id)

        if len(selected) < count:
            logger.debug(
                "%s %s under-filled: %d of %d",
                d.isoformat(), shift_type.value, len(selected), count,
            )

        return selected

    def ensure_mixed_experience(
        self,
        selected: List[str],
        shift_type: ShiftType,
        d: date,
        available: List[str],
    ) -> List[str]:
        """
        Make sure a team of two or more has a senior or charge nurse.
        Swaps the first feasible senior from the pool in for the first
        non-senior member. Left unchanged if no senior can be found.
        """
        if not self.config.require_mixed_experience or len(selected) < 2:
            return selected

        if any(self._is_senior(nurse_id) for nurse_id in selected):
            return selected

        seniors = [
            nurse_id for nurse_id in available
            if nurse_id not in selected
            and self._is_senior(nurse_id)
            and self.can_assign(nurse_id, shift_type, d)[0]
        ]
        if not seniors:
            logger.debug(
                "%s %s team left without a senior nurse", d.isoformat(), shift_type.value
            )
            return selected

        revised = list(selected)
        idx = next(i for i, nurse_id in enumerate(revised) if not self._is_senior(nurse_id))
        logger.debug(
            "%s %s: swapping %s for senior %s",
            d.isoformat(), shift_type.value, revised[idx], seniors[0],
        )
        revised[idx] = seniors[0]
        return revised

    # ==================== DAY ORCHESTRATION ====================

    def _make_entry(self, nurse_id: str, d: date, shift_type: ShiftType,
                    is_locked: bool = False) -> ScheduleEntry:
        return ScheduleEntry(
            ward_id=self.ward.id,
            nurse_id=nurse_id,
            date=d,
            shift_type=shift_type,
            is_locked=is_locked,
        )

    def _schedule_date(self, d: date) -> List[ScheduleEntry]:
        """
        Produce every nurse's entry for one date.
        Order: vacation lock, Day, Evening, Night, Off.
        """
        weekend_day = is_weekend(d)
        entries: List[ScheduleEntry] = []

        # Vacation lock
        pool: List[str] = []
        for nurse in self.nurses:
            if self.is_on_vacation(nurse.id, d):
                entries.append(self._make_entry(nurse.id, d, ShiftType.VACATION, is_locked=True))
                self.update_state(nurse.id, ShiftType.VACATION, weekend_day)
            else:
                pool.append(nurse.id)

        # Day -> Evening -> Night, each from what the previous stage left
        teams: List[Tuple[ShiftType, List[str]]] = []
        for shift_type in self.SHIFT_STAGES:
            team = self.select_nurses_for_shift(
                d, shift_type, self._required_count(shift_type), pool, weekend_day
            )
            team = self.ensure_mixed_experience(team, shift_type, d, pool)
            teams.append((shift_type, team))
            pool = [nurse_id for nurse_id in pool if nurse_id not in team]

        for shift_type, team in teams:
            for nurse_id in team:
                recorded = shift_type
                if shift_type == ShiftType.DAY:
                    req = self.get_request(nurse_id, d)
                    if req is not None and req.requested_shift == ShiftType.SPLIT:
                        recorded = ShiftType.SPLIT
                entries.append(self._make_entry(nurse_id, d, recorded))
                self.update_state(nurse_id, recorded, weekend_day)

        # Off
        for nurse_id in pool:
            entries.append(self._make_entry(nurse_id, d, ShiftType.OFF))
            self.update_state(nurse_id, ShiftType.OFF, weekend_day)

        return entries

    def generate(self) -> List[ScheduleEntry]:
        """
        Generate the month's schedule.

        Run state is rebuilt on every call, so repeated calls on the same
        inputs give identical results. Returns an empty list when the ward
        has no active nurses.
        """
        self._initialize_states()
        self.entries = []

        logger.info(
            "Generating schedule for ward %s, %04d-%02d (%d active nurses)",
            self.ward.id, self.config.year, self.config.month, len(self.nurses),
        )

        if not self.nurses:
            return []

        for d in self.dates:
            self.entries.extend(self._schedule_date(d))

        logger.info("Generated %d schedule entries for ward %s", len(self.entries), self.ward.id)
        return list(self.entries)

    # ==================== RESULTS ====================

    def get_statistics(self) -> Dict[str, dict]:
        """Run-state tallies per nurse (vacation counted as off)."""
        return {nurse_id: state.get_stats_dict() for nurse_id, state in self.states.items()}

    def validate_schedule(
        self, entries: List[ScheduleEntry] = None
    ) -> Tuple[bool, List[str]]:
        """
        Validate the hard rules on a generated schedule.
        Returns (is_valid, list_of_violations).

        Checked:
        1. Exactly one entry per active nurse per date
        2. Approved leave dates are locked VACATION
        3. Working runs within the consecutive work day limit
        4. Night runs within the ward's consecutive night limit
        5. No Day straight after Night when rest after night is on
        """
        if entries is None:
            entries = self.entries
        violations = []

        by_key: Dict[Tuple[str, date], List[ScheduleEntry]] = {}
        for entry in entries:
            by_key.setdefault((entry.nurse_id, entry.date), []).append(entry)
            if entry.nurse_id not in self.nurse_by_id:
                violations.append(f"VIOLATION: entry for unknown or inactive nurse {entry.nurse_id}")

        for nurse in self.nurses:
            work_run = 0
            night_run = 0
            previous: Optional[ShiftType] = None

            for d in self.dates:
                found = by_key.get((nurse.id, d), [])
                if len(found) != 1:
                    violations.append(
                        f"VIOLATION: {nurse.id} has {len(found)} entries on {d.isoformat()}"
                    )
                    previous = None
                    continue

                entry = found[0]
                shift_type = entry.shift_type

                if self.is_on_vacation(nurse.id, d) and not (
                    shift_type == ShiftType.VACATION and entry.is_locked
                ):
                    violations.append(
                        f"VIOLATION: {nurse.id} is on approved leave on {d.isoformat()} "
                        f"but has {shift_type.value}"
                    )

                if shift_type in REST_SHIFTS:
                    work_run = 0
                    night_run = 0
                else:
                    work_run += 1
                    night_run = night_run + 1 if shift_type == ShiftType.NIGHT else 0

                if work_run > self.config.max_consecutive_work_days:
                    violations.append(
                        f"VIOLATION: {nurse.id} works {work_run} days in a row up to {d.isoformat()}"
                    )
                if night_run > self.ward.max_consecutive_nights:
                    violations.append(
                        f"VIOLATION: {nurse.id} works {night_run} nights in a row up to {d.isoformat()}"
                    )
                if (
                    self.config.min_rest_after_night
                    and previous == ShiftType.NIGHT
                    and shift_type == ShiftType.DAY
                ):
                    violations.append(
                        f"VIOLATION: {nurse.id} has Day on {d.isoformat()} right after a Night"
                    )

                previous = shift_type

        return len(violations) == 0, violations

    def get_coverage_summary(self, entries: List[ScheduleEntry] = None) -> List[dict]:
        """Get coverage summary for each day."""
        if entries is None:
            entries = self.entries

        staff_by_date: Dict[date, Dict[str, List[str]]] = {
            d: {"day": [], "evening": [], "night": []} for d in self.dates
        }
        for entry in entries:
            slots = staff_by_date.get(entry.date)
            if slots is None:
                continue
            if entry.shift_type in (ShiftType.DAY, ShiftType.SPLIT):
                slots["day"].append(entry.nurse_id)
            elif entry.shift_type == ShiftType.EVENING:
                slots["evening"].append(entry.nurse_id)
            elif entry.shift_type == ShiftType.NIGHT:
                slots["night"].append(entry.nurse_id)

        summary = []
        for d in self.dates:
            slots = staff_by_date[d]
            summary.append({
                "date": d,
                "day_of_week": d.strftime("%a"),
                "is_weekend": is_weekend(d),
                "day_coverage": len(slots["day"]),
                "evening_coverage": len(slots["evening"]),
                "night_coverage": len(slots["night"]),
                "day_required": self.ward.min_staff_day,
                "evening_required": self.ward.min_staff_evening,
                "night_required": self.ward.min_staff_night,
                "day_staff": slots["day"],
                "evening_staff": slots["evening"],
                "night_staff": slots["night"],
                "understaffed": (
                    len(slots["day"]) < self.ward.min_staff_day
                    or len(slots["evening"]) < self.ward.min_staff_evening
                    or len(slots["night"]) < self.ward.min_staff_night
                ),
            })

        return summary


def generate_schedule(
    ward: Ward,
    nurses: List[Nurse],
    config: GenerationConfig,
    shift_requests: List[ShiftRequest] = None,
    vacation_requests: List[VacationRequest] = None,
) -> List[ScheduleEntry]:
    """Run one generation and return the month's entries."""
    generator = ScheduleGenerator(ward, nurses, config, shift_requests, vacation_requests)
    return generator.generate()


# ==================== ROSTER ADAPTERS ====================

def _int_cell(value, default: int) -> int:
    if is_blank(value):
        return default
    return int(value)


def _enum_cell(enum_cls, value, default=None):
    if is_blank(value):
        if default is None:
            raise ValueError(f"Missing {enum_cls.__name__}")
        return default
    return enum_cls(str(value).strip().upper())


def create_nurses_from_dataframe(df, ward_id: str = "") -> List[Nurse]:
    """
    Create Nurse objects from a pandas DataFrame.

    Expected columns:
    - Id: str
    - Name: str
    - ExperienceLevel: INTERN / JUNIOR / SENIOR / CHARGE
    - WardId, EmployeeNumber, Active, AnnualLeaveTotal, AnnualLeaveUsed: optional

    Rows with a missing id or an unknown experience level are skipped.
    """
    nurses = []

    for _, row in df.iterrows():
        raw_id = row.get("Id")
        if is_blank(raw_id):
            continue

        try:
            level = _enum_cell(ExperienceLevel, row.get("ExperienceLevel"), ExperienceLevel.JUNIOR)
            nurse = Nurse(
                id=str(raw_id).strip(),
                ward_id=ward_id if is_blank(row.get("WardId")) else str(row.get("WardId")).strip(),
                name=str(row.get("Name", "")).strip(),
                experience_level=level,
                is_active=parse_bool(row.get("Active"), default=True),
                employee_number="" if is_blank(row.get("EmployeeNumber")) else str(row.get("EmployeeNumber")),
                annual_leave_total=_int_cell(row.get("AnnualLeaveTotal"), 15),
                annual_leave_used=_int_cell(row.get("AnnualLeaveUsed"), 0),
            )
        except (ValueError, TypeError):
            logger.warning("Skipping nurse row %r", raw_id)
            continue

        nurses.append(nurse)

    return nurses


def create_shift_requests_from_dataframe(df) -> List[ShiftRequest]:
    """
    Create ShiftRequest objects from a pandas DataFrame.

    Expected columns: NurseId, Date, RequestedShift, Status (default PENDING),
    Reason (optional). Rows that cannot be parsed are skipped.
    """
    requests = []

    for _, row in df.iterrows():
        if is_blank(row.get("NurseId")):
            continue
        try:
            req = ShiftRequest(
                nurse_id=str(row.get("NurseId")).strip(),
                date=parse_date(row.get("Date")),
                requested_shift=_enum_cell(ShiftType, row.get("RequestedShift")),
                status=_enum_cell(RequestStatus, row.get("Status"), RequestStatus.PENDING),
                reason="" if is_blank(row.get("Reason")) else str(row.get("Reason")),
            )
        except (ValueError, TypeError):
            logger.warning("Skipping shift request row for %s", row.get("NurseId"))
            continue
        requests.append(req)

    return requests


def create_vacation_requests_from_dataframe(df) -> List[VacationRequest]:
    """
    Create VacationRequest objects from a pandas DataFrame.

    Expected columns: NurseId, StartDate, EndDate, VacationType (default
    ANNUAL_LEAVE), Status (default PENDING), Reason (optional).
    """
    requests = []

    for _, row in df.iterrows():
        if is_blank(row.get("NurseId")):
            continue
        try:
            vac = VacationRequest(
                nurse_id=str(row.get("NurseId")).strip(),
                start_date=parse_date(row.get("StartDate")),
                end_date=parse_date(row.get("EndDate")),
                status=_enum_cell(RequestStatus, row.get("Status"), RequestStatus.PENDING),
                vacation_type=_enum_cell(VacationType, row.get("VacationType"), VacationType.ANNUAL_LEAVE),
                reason="" if is_blank(row.get("Reason")) else str(row.get("Reason")),
            )
        except (ValueError, TypeError):
            logger.warning("Skipping vacation row for %s", row.get("NurseId"))
            continue
        requests.append(vac)

    return requests

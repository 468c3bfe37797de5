import logging

import pytest

from ward_scheduler import (
    ExperienceLevel,
    GenerationConfig,
    Nurse,
    ScheduleGenerator,
    Ward,
)

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
)


@pytest.fixture
def ward():
    return Ward(
        id="W1",
        name="Internal Medicine 3",
        min_staff_day=2,
        min_staff_evening=1,
        min_staff_night=1,
        max_consecutive_nights=2,
        require_mixed_experience=True,
    )


@pytest.fixture
def config():
    # September 2025: 30 days, starting on a Monday
    return GenerationConfig(ward_id="W1", year=2025, month=9)


@pytest.fixture
def make_nurse():
    def _make(nurse_id, level=ExperienceLevel.JUNIOR, active=True):
        return Nurse(
            id=nurse_id,
            ward_id="W1",
            name=f"Nurse {nurse_id}",
            experience_level=level,
            is_active=active,
        )
    return _make


@pytest.fixture
def make_generator(ward, config):
    """Build a generator on the shared ward; keyword arguments override config fields."""
    def _make(nurses, shift_requests=None, vacation_requests=None, **config_overrides):
        for key, value in config_overrides.items():
            setattr(config, key, value)
        return ScheduleGenerator(ward, nurses, config, shift_requests, vacation_requests)
    return _make

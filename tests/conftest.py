from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest


@pytest.fixture
def karachi() -> ZoneInfo:
    return ZoneInfo("Asia/Karachi")


@pytest.fixture
def fixed_now(karachi) -> datetime:
    # Wednesday evening, inside a 21:00-05:00 shift
    return datetime(2025, 1, 15, 22, 0, tzinfo=karachi)

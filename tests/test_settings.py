from __future__ import annotations

import sys
import types
from datetime import date, datetime
from decimal import Decimal

import pytest

from shift_payroll.agents.model import AgentProfile
from shift_payroll.config import get_settings_module
from shift_payroll.container import build_container
from shift_payroll.core.enums import AttendanceStatus, ReviewStatus, Role
from shift_payroll.core.exceptions import ConfigurationError
from shift_payroll.settings import configure_logging, load_settings
from shift_payroll.shifts.model import ShiftSpec
from shift_payroll.storage.memory import InMemoryAgentRepository


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "shift_payroll.config.production"),
        ("prod", "shift_payroll.config.production"),
        ("TEST", "shift_payroll.config.testing"),
        ("anything", "shift_payroll.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_testing_settings():
    settings = load_settings("shift_payroll.config.testing", setup_logging=False)

    assert settings.timezone.key == "Asia/Karachi"
    assert settings.system_launch_date == date(2024, 1, 1)
    assert settings.free_lates == 3
    assert settings.commission_rate == Decimal("0.05")
    assert settings.clamp_negative_total is False
    assert (settings.grace_minutes, settings.late_threshold_minutes) == (30, 90)


def _fake_settings(monkeypatch, **values):
    module = types.ModuleType("fake_payroll_settings")
    for key, value in values.items():
        setattr(module, key, value)
    monkeypatch.setitem(sys.modules, "fake_payroll_settings", module)
    return "fake_payroll_settings"


@pytest.mark.parametrize(
    "values",
    [
        {"TIMEZONE": "Mars/Olympus_Mons"},
        {"COMMISSION_RATE": "five percent"},
        {"COMMISSION_RATE": "1.5"},
        {"SYSTEM_LAUNCH_DATE": "2024/01/01"},
        {"SYSTEM_LAUNCH_DATE": "2024-02-30"},
        {"FREE_LATES": "-1"},
        {"GRACE_MINUTES": "120", "LATE_THRESHOLD_MINUTES": "90"},
        {"CLAMP_NEGATIVE_TOTAL": "maybe"},
    ],
)
def test_bad_settings_raise_configuration_error(monkeypatch, values):
    name = _fake_settings(monkeypatch, **{"SYSTEM_LAUNCH_DATE": "2024-01-01", **values})
    with pytest.raises(ConfigurationError):
        load_settings(name, setup_logging=False)


def test_launch_date_is_parsed_as_iso(monkeypatch):
    name = _fake_settings(monkeypatch, SYSTEM_LAUNCH_DATE=" 2025-01-10 ")

    assert load_settings(name, setup_logging=False).system_launch_date == date(2025, 1, 10)


def test_missing_launch_date_means_start_of_current_month(monkeypatch):
    name = _fake_settings(monkeypatch, SYSTEM_LAUNCH_DATE="")
    settings = load_settings(name, setup_logging=False)

    assert settings.system_launch_date.day == 1


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ConfigurationError):
        configure_logging("chatty")


def test_container_wires_services_with_settings(monkeypatch, karachi):
    name = _fake_settings(monkeypatch, SYSTEM_LAUNCH_DATE="2024-01-01", GRACE_MINUTES="5", CLAMP_NEGATIVE_TOTAL="1")
    settings = load_settings(name, setup_logging=False)
    agents = InMemoryAgentRepository(
        [AgentProfile(agent_id=1, full_name="Zara", base_salary=23000.0, shift=ShiftSpec.parse("21:00", "05:00"))]
    )

    container = build_container(settings, agents=agents)
    rec = container.attendance_service.check_in(1, now=datetime(2025, 1, 15, 21, 10, tzinfo=karachi))

    assert rec.status == AttendanceStatus.LATE
    assert container.agents_repo is agents
    assert container.salary_service.build_snapshot(1, now=datetime(2025, 1, 15, 23, 0, tzinfo=karachi)).today.calls == 0

    lead = container.lead_service.submit_lead(current_role=Role.AGENT, agent_id=1, customer_name="Acme")
    container.lead_service.review_lead(
        current_role=Role.HR, lead_id=lead.lead_id, approve=True, attributed_date=date(2025, 1, 15)
    )
    assert container.leads_repo.get_by_id(lead.lead_id).status == ReviewStatus.APPROVED
    assert container.telemetry_repo.get_for_agent_and_date(1, date(2025, 1, 15)).leads_approved == 1

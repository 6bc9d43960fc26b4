from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from fakes import FakeOfficeRepo, office
from src.office_payroll.office_payroll.core.enums import OfficeStatus
from src.office_payroll.office_payroll.core.exceptions import AuthorizationError, ValidationError
from src.office_payroll.office_payroll.offices.service import OfficeService, office_status


def test_resolve_scope_walks_tree():
    repo = FakeOfficeRepo([office("A"), office("B", "A"), office("C", "B"), office("X")])
    scope = OfficeService(repo).resolve_scope("A")
    assert scope.root_id == "A"
    assert scope.office_ids[0] == "A"
    assert set(scope.office_ids) == {"A", "B", "C"}
    assert scope.complete is True


def test_resolve_scope_falls_back_to_root_when_store_fails():
    repo = FakeOfficeRepo([office("A"), office("B", "A")], fail_links=True)
    scope = OfficeService(repo).resolve_scope("A")
    assert scope.office_ids == ("A",)
    assert scope.complete is False


def test_office_status():
    now = datetime(2025, 6, 30, 12, 0)
    assert office_status(office("A", is_active=False, created_at=now), now=now) == OfficeStatus.INACTIVE
    recent = office("A", is_active=True, created_at=now - timedelta(days=10))
    assert office_status(recent, now=now) == OfficeStatus.ACTIVE
    stale = office("A", is_active=True, created_at=now - timedelta(days=31))
    assert office_status(stale, now=now) == OfficeStatus.EXPIRED
    assert office_status(stale, now=now, activation_days=60) == OfficeStatus.ACTIVE


def test_create_office_one_per_owner():
    repo = FakeOfficeRepo()
    service = OfficeService(repo)
    office_id = service.create_office(owner_id="u1", name="  مديرية التربية ")
    created = repo.get_by_id(office_id)
    assert created.name == "مديرية التربية"
    assert created.is_active is False

    with pytest.raises(ValidationError):
        service.create_office(owner_id="u1", name="مكتب ثان")


def test_create_office_rejects_missing_parent_and_blank_name():
    service = OfficeService(FakeOfficeRepo())
    with pytest.raises(ValidationError):
        service.create_office(owner_id="u1", name="   ")
    with pytest.raises(ValidationError):
        service.create_office(owner_id="u1", name="مكتب", parent_id="nope")


def test_activate_and_list_offices():
    repo = FakeOfficeRepo([office("A", name="الرصافة", is_active=False, phone="0770")])
    service = OfficeService(repo)
    service.activate_office("A")

    items = service.list_offices(search="رصا")
    assert [i.office.office_id for i in items] == ["A"]
    assert items[0].status == OfficeStatus.ACTIVE
    assert service.list_offices(search="0770")[0].office.office_id == "A"
    assert service.list_offices(search="الكرخ") == []

    with pytest.raises(ValidationError):
        service.activate_office("missing")


def test_deactivate_office():
    repo = FakeOfficeRepo([office("A", is_active=True, created_at=datetime(2025, 6, 1))])
    service = OfficeService(repo)
    service.deactivate_office("A")
    assert repo.get_by_id("A").is_active is False
    assert repo.get_by_id("A").created_at == datetime(2025, 6, 1)
    with pytest.raises(ValidationError):
        service.deactivate_office("missing")


def test_list_options_sorted_by_name():
    service = OfficeService(FakeOfficeRepo([office("2", name="نينوى"), office("1", name="البصرة"), office("3", name="بابل")]))
    assert [o.name for o in service.list_options()] == ["البصرة", "بابل", "نينوى"]


def test_require_in_scope():
    service = OfficeService(FakeOfficeRepo([office("A"), office("B", "A"), office("X")]))
    service.require_in_scope("A", "B")
    with pytest.raises(AuthorizationError):
        service.require_in_scope("A", "X")
    with pytest.raises(AuthorizationError):
        service.require_in_scope("B", "A")
    with pytest.raises(AuthorizationError):
        service.require_in_scope("A", None)

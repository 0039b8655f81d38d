"""
Distributor service unit tests: every change lands in the audit log.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

import pytest

from src.adapters.clock import FixedClock
from src.components.crud import (
    CreateInput,
    DeleteInput,
    UpdateInput,
    run_create,
    run_delete,
    run_update,
)
from src.components.distributors import AuditLogService, DistributorService
from src.domain.entities import Distributor, DistributorAuditLog
from tests.fakes import InMemoryRepo

NOW = datetime(2025, 3, 1, 9, 30)


@pytest.fixture
def audit_repo() -> InMemoryRepo[DistributorAuditLog]:
    return InMemoryRepo()


@pytest.fixture
def service(audit_repo: InMemoryRepo[DistributorAuditLog]) -> DistributorService:
    return DistributorService(InMemoryRepo[Distributor](), audit_repo, clock=FixedClock(NOW))


def test_create_records_created(
    service: DistributorService, audit_repo: InMemoryRepo[DistributorAuditLog]
) -> None:
    actor = uuid4()
    result = run_create(CreateInput(data={"name": "Acme"}, actor_id=actor), service)

    entries = list(audit_repo.items.values())
    assert len(entries) == 1
    entry = entries[0]
    assert entry.action == "CREATED"
    assert entry.entity == "Distributor"
    assert entry.entity_id == str(result.entity.id)
    assert entry.distributor_id == result.entity.id
    assert entry.user_id == actor
    assert entry.timestamp == NOW


def test_update_records_changed_fields(
    service: DistributorService, audit_repo: InMemoryRepo[DistributorAuditLog]
) -> None:
    distributor = run_create(CreateInput(data={"name": "Acme"}), service).entity

    run_update(
        UpdateInput(entity_id=distributor.id, data={"city": "Porto", "name": "Acme"}), service
    )

    entry = audit_repo.find_by(action="UPDATED")[0]
    assert entry.metadata == {"changed": ["city"]}


def test_termination_is_recorded(
    service: DistributorService, audit_repo: InMemoryRepo[DistributorAuditLog]
) -> None:
    distributor = run_create(CreateInput(data={"name": "Acme"}), service).entity

    run_update(
        UpdateInput(
            entity_id=distributor.id, data={"terminated_at": NOW, "is_active": False}
        ),
        service,
    )

    assert len(audit_repo.find_by(action="TERMINATED")) == 1
    assert audit_repo.find_by(action="UPDATED") == []


def test_delete_is_recorded(
    service: DistributorService, audit_repo: InMemoryRepo[DistributorAuditLog]
) -> None:
    distributor = run_create(CreateInput(data={"name": "Acme"}), service).entity

    result = run_delete(DeleteInput(entity_id=distributor.id), service)

    assert result.success is True
    entry = audit_repo.find_by(action="TERMINATED")[0]
    assert entry.metadata == {"name": "Acme", "deleted": True}


def test_failed_update_is_not_recorded(
    service: DistributorService, audit_repo: InMemoryRepo[DistributorAuditLog]
) -> None:
    distributor = run_create(CreateInput(data={"name": "Acme"}), service).entity

    result = run_update(UpdateInput(entity_id=distributor.id, data={"email": "nope"}), service)

    assert result.success is False
    assert len(audit_repo.items) == 1


def test_audit_log_service_stamps_timestamp() -> None:
    service = AuditLogService(InMemoryRepo[DistributorAuditLog](), clock=FixedClock(NOW))
    distributor_id = uuid4()

    result = run_create(
        CreateInput(
            data={"action": "UPDATED", "entity": "Agency", "entity_id": "42"},
            scope={"distributor_id": distributor_id},
        ),
        service,
    )

    assert result.success is True
    assert result.entity.timestamp == NOW
    assert result.entity.distributor_id == distributor_id

"""
Pytest configuration and fixtures.

Database fixtures use in-memory SQLite shared across sessions through a
StaticPool, so every unit of work in a test sees the same data.
"""

import uuid
from dataclasses import dataclass
from typing import Optional
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from database.database import build_session_factory, create_schema
from database.models import (
    Tenant, User, Job, JobSettings, Application, Assessment, WebhookConfig
)
from tests import SAMPLE_ASSESSMENT


@dataclass
class SeededApplication:
    tenant_id: uuid.UUID
    job_id: uuid.UUID
    candidate_id: uuid.UUID
    admin_id: uuid.UUID
    application_id: uuid.UUID
    assessment_id: uuid.UUID


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


def seed_application(
    session_factory,
    threshold: Optional[float] = None,
    stage: str = 'assessment_submitted',
    content: str = SAMPLE_ASSESSMENT,
    tenant_name: str = "Acme Content",
    with_settings: bool = True
) -> SeededApplication:
    """Insert a tenant with one published job, a candidate, an admin and a submitted assessment."""
    session = session_factory()
    try:
        tenant = Tenant(id=uuid.uuid4(), name=tenant_name)
        candidate = User(
            id=uuid.uuid4(), tenant_id=tenant.id, email="jane@example.com",
            first_name="Jane", last_name="Writer", role='candidate'
        )
        admin = User(
            id=uuid.uuid4(), tenant_id=tenant.id, email="hiring@acme.example",
            first_name="Hiring", last_name="Manager", role='admin'
        )
        job = Job(
            id=uuid.uuid4(), tenant_id=tenant.id, title="Content Writer",
            description="Long-form blog content", job_type="full_time",
            location="Remote", remote_allowed=True, status='published'
        )
        session.add_all([tenant, candidate, admin, job])
        session.flush()

        if with_settings:
            session.add(JobSettings(
                id=uuid.uuid4(), job_id=job.id, tenant_id=tenant.id,
                shortlist_threshold=threshold, role_type='content_writing'
            ))

        application = Application(
            id=uuid.uuid4(), tenant_id=tenant.id, job_id=job.id,
            candidate_id=candidate.id, stage=stage, status='submitted'
        )
        session.add(application)
        session.flush()

        assessment = Assessment(
            id=uuid.uuid4(), tenant_id=tenant.id,
            application_id=application.id, content=content
        )
        session.add(assessment)
        session.commit()

        return SeededApplication(
            tenant_id=tenant.id,
            job_id=job.id,
            candidate_id=candidate.id,
            admin_id=admin.id,
            application_id=application.id,
            assessment_id=assessment.id
        )
    finally:
        session.close()


def seed_webhook(session_factory, tenant_id: uuid.UUID, secret: str = "whsec_test", enabled: bool = True) -> uuid.UUID:
    session = session_factory()
    try:
        webhook = WebhookConfig(
            id=uuid.uuid4(), tenant_id=tenant_id, name="Careers site",
            secret=secret, enabled=enabled
        )
        session.add(webhook)
        session.commit()
        return webhook.id
    finally:
        session.close()


@pytest.fixture
def seeded(session_factory):
    return seed_application(session_factory)


@pytest.fixture
def mock_redis():
    """Create a mock Redis client."""
    mock = Mock()
    mock.ping.return_value = True
    mock.get.return_value = None
    mock.setex.return_value = True
    mock.delete.return_value = 1
    mock.exists.return_value = 0
    mock.incr.return_value = 1
    mock.expire.return_value = True
    mock.ttl.return_value = 3600
    mock.info.return_value = {"used_memory_human": "1M", "connected_clients": 2}
    mock.scan.return_value = (0, [])
    return mock


@pytest.fixture
def error_reporter():
    return Mock()

"""
Repository tests against in-memory SQLite.

Every tenant-owned lookup must return nothing for another tenant's ids.
"""

import uuid

import pytest

from core.utils import sha256_hex
from database.uow import ats_uow
from tests.conftest import seed_application, seed_webhook


class TestTenantScoping:

    def test_assessment_visible_to_owner(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            assessment = repo.assessments.get_by_id(seeded.tenant_id, seeded.assessment_id)
            assert assessment is not None
            assert assessment.application_id == seeded.application_id

    def test_assessment_hidden_from_other_tenant(self, session_factory, seeded):
        other = seed_application(session_factory, tenant_name="Globex")

        with ats_uow(session_factory) as repo:
            assert repo.assessments.get_by_id(other.tenant_id, seeded.assessment_id) is None
            assert repo.assessments.get_scoring_context(other.tenant_id, seeded.assessment_id) is None
            assert repo.applications.get_by_id(other.tenant_id, seeded.application_id) is None
            assert repo.jobs.get_by_id(other.tenant_id, seeded.job_id) is None
            assert repo.users.get_by_id(other.tenant_id, seeded.candidate_id) is None

    def test_update_stage_for_other_tenant_raises(self, session_factory, seeded):
        other = seed_application(session_factory, tenant_name="Globex")

        with pytest.raises(LookupError):
            with ats_uow(session_factory) as repo:
                repo.applications.update_stage(other.tenant_id, seeded.application_id, 'shortlisted', 'shortlisted')

        with ats_uow(session_factory) as repo:
            assert repo.applications.get_by_id(seeded.tenant_id, seeded.application_id).stage == 'assessment_submitted'

    def test_list_for_tenant_only_returns_own_rows(self, session_factory, seeded):
        seed_application(session_factory, tenant_name="Globex")

        with ats_uow(session_factory) as repo:
            applications = repo.applications.list_for_tenant(seeded.tenant_id)
            assert [a.id for a in applications] == [seeded.application_id]

    def test_list_for_tenant_stage_filter(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            assert repo.applications.list_for_tenant(seeded.tenant_id, stage='shortlisted') == []
            assert len(repo.applications.list_for_tenant(seeded.tenant_id, stage='assessment_submitted')) == 1

    def test_list_admins(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            admins = repo.users.list_admins(seeded.tenant_id)
            assert [a.email for a in admins] == ["hiring@acme.example"]


class TestScoringContext:

    def test_loads_job_and_settings(self, session_factory):
        seeded = seed_application(session_factory, threshold=80)

        with ats_uow(session_factory) as repo:
            context = repo.assessments.get_scoring_context(seeded.tenant_id, seeded.assessment_id)

            assert context.application.id == seeded.application_id
            assert context.job.title == "Content Writer"
            assert context.job_settings["shortlist_threshold"] == 80
            assert context.job_settings["role_type"] == 'content_writing'

    def test_missing_settings(self, session_factory):
        seeded = seed_application(session_factory, with_settings=False)

        with ats_uow(session_factory) as repo:
            context = repo.assessments.get_scoring_context(seeded.tenant_id, seeded.assessment_id)
            assert context.job_settings is None

    def test_unknown_assessment(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            assert repo.assessments.get_scoring_context(seeded.tenant_id, uuid.uuid4()) is None


class TestSaveScores:

    def test_save_scores_sets_status(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            repo.assessments.save_scores(seeded.tenant_id, seeded.assessment_id, {"seo": {"score": 90}}, 82.5)

        with ats_uow(session_factory) as repo:
            assessment = repo.assessments.get_by_id(seeded.tenant_id, seeded.assessment_id)
            assert assessment.status == 'ai_scored'
            assert assessment.ai_total_score == 82.5
            assert assessment.ai_scores == {"seo": {"score": 90}}
            assert assessment.scored_at is not None

    def test_rollback_on_error(self, session_factory, seeded):
        with pytest.raises(RuntimeError):
            with ats_uow(session_factory) as repo:
                repo.assessments.save_scores(seeded.tenant_id, seeded.assessment_id, {}, 50.0)
                raise RuntimeError("boom")

        with ats_uow(session_factory) as repo:
            assert repo.assessments.get_by_id(seeded.tenant_id, seeded.assessment_id).ai_total_score is None


class TestJobListing:

    def test_only_published(self, session_factory, seeded):
        from database.models import Job
        session = session_factory()
        session.add(Job(
            id=uuid.uuid4(), tenant_id=seeded.tenant_id, title="Draft role",
            description="", job_type="contract", location="Berlin", status='draft'
        ))
        session.commit()
        session.close()

        with ats_uow(session_factory) as repo:
            jobs, total = repo.jobs.list_published(tenant_id=seeded.tenant_id)
            assert total == 1
            assert jobs[0].title == "Content Writer"

    def test_filters_and_pagination(self, session_factory, seeded):
        seed_application(session_factory, tenant_name="Globex")

        with ats_uow(session_factory) as repo:
            jobs, total = repo.jobs.list_published()
            assert total == 2

            jobs, total = repo.jobs.list_published(tenant_id=seeded.tenant_id, search="blog")
            assert total == 1

            jobs, total = repo.jobs.list_published(job_type="contract")
            assert (jobs, total) == ([], 0)

            jobs, total = repo.jobs.list_published(location="remote", page=2, limit=1)
            assert total == 2
            assert len(jobs) == 1


class TestWebhookRepository:

    def test_secret_hash_kept_in_sync(self, session_factory, seeded):
        webhook_id = seed_webhook(session_factory, seeded.tenant_id, secret="whsec_hashed")

        with ats_uow(session_factory) as repo:
            config = repo.webhooks.get_by_id(seeded.tenant_id, webhook_id)
            assert config.secret_hash == sha256_hex("whsec_hashed")
            config.secret = "whsec_rotated"

        with ats_uow(session_factory) as repo:
            assert repo.webhooks.find_enabled_by_secret("whsec_hashed") == []
            (found,) = repo.webhooks.find_enabled_by_secret("whsec_rotated")
            assert found.id == webhook_id

    def test_find_enabled_by_secret(self, session_factory, seeded):
        seed_webhook(session_factory, seeded.tenant_id, secret="whsec_on")
        seed_webhook(session_factory, seeded.tenant_id, secret="whsec_off", enabled=False)

        with ats_uow(session_factory) as repo:
            assert len(repo.webhooks.find_enabled_by_secret("whsec_on")) == 1
            assert repo.webhooks.find_enabled_by_secret("whsec_off") == []

    def test_log_event(self, session_factory, seeded):
        webhook_id = seed_webhook(session_factory, seeded.tenant_id)

        with ats_uow(session_factory) as repo:
            repo.webhooks.log_event(
                tenant_id=seeded.tenant_id, webhook_id=webhook_id,
                event_type='application.created', payload={"event": "application.created"},
                status='processed'
            )

        with ats_uow(session_factory) as repo:
            logs = repo.webhooks.list_logs(seeded.tenant_id, webhook_id)
            assert [(log.event_type, log.status) for log in logs] == [('application.created', 'processed')]


class TestAuditLog:

    def test_append_and_list(self, session_factory, seeded):
        with ats_uow(session_factory) as repo:
            repo.audit_logs.append(
                seeded.tenant_id, 'applications', seeded.application_id, 'auto_shortlist',
                {"stage": {"from": "assessment_submitted", "to": "shortlisted"}}
            )

        with ats_uow(session_factory) as repo:
            entries = repo.audit_logs.list_for_record(seeded.tenant_id, 'applications', seeded.application_id)
            assert len(entries) == 1
            assert entries[0].performed_by == 'system'
            assert entries[0].changes["stage"]["to"] == "shortlisted"

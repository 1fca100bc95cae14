#!/usr/bin/env python3
"""
Notification Triggers - candidate and admin emails for pipeline events.

Each trigger loads what it needs in a short tenant-scoped unit of work,
sends outside any transaction, then records an EmailLog row per message.
A missing application or assessment is logged and skipped.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy.orm import sessionmaker

from core.monitoring import ErrorReporter, LoggingErrorReporter
from database.models import DEFAULT_SHORTLIST_THRESHOLD
from database.uow import ats_uow
from notification.channels import NotificationChannel, _mask_email
from notification.message_builder import EmailContext, NotificationMessageBuilder

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "We have decided to move forward with other candidates."


@dataclass
class ApplicationSnapshot:
    """Plain copy of the rows an email needs, safe to use after the session closes."""
    application_id: Any
    tenant_id: Any
    stage: str
    candidate_email: Optional[str]
    candidate_name: str
    job_title: str
    company_name: str


class NotificationTriggers:
    def __init__(
        self,
        session_factory: sessionmaker,
        channel: NotificationChannel,
        base_url: str,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self.session_factory = session_factory
        self.channel = channel
        self.base_url = base_url
        self.error_reporter = error_reporter or LoggingErrorReporter()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def on_application_submitted(self, tenant_id: Any, application_id: Any) -> int:
        """Confirmation to the candidate plus an alert to every tenant admin."""
        snapshot = self._load_application(tenant_id, application_id)
        if snapshot is None:
            return 0

        context = self._context(snapshot)
        sent = self._send(snapshot, 'application_confirmation', snapshot.candidate_email, context)

        for email in self.admin_recipients(tenant_id):
            sent += self._send(snapshot, 'admin_application_alert', email, context)

        return sent

    def on_assessment_required(self, tenant_id: Any, application_id: Any) -> int:
        snapshot = self._load_application(tenant_id, application_id)
        if snapshot is None:
            return 0
        return self._send(snapshot, 'assessment_invitation', snapshot.candidate_email, self._context(snapshot))

    def on_candidate_shortlisted(self, tenant_id: Any, application_id: Any, score: float) -> int:
        snapshot = self._load_application(tenant_id, application_id)
        if snapshot is None:
            return 0
        context = self._context(snapshot, aiScore=score)
        return self._send(snapshot, 'shortlist_notification', snapshot.candidate_email, context)

    def on_candidate_rejected(self, tenant_id: Any, application_id: Any, reason: Optional[str] = None) -> int:
        snapshot = self._load_application(tenant_id, application_id)
        if snapshot is None:
            return 0
        context = self._context(snapshot, reason=reason or DEFAULT_REJECTION_REASON)
        return self._send(snapshot, 'rejection_notification', snapshot.candidate_email, context)

    def on_assessment_scored(self, tenant_id: Any, assessment_id: Any, stage_changed: bool = True) -> int:
        """
        Shortlist email only when this scoring run moved the application to
        shortlisted and the composite clears the job threshold. Re-scoring an
        application that was already shortlisted sends nothing.
        """
        if not stage_changed:
            logger.debug(f"Assessment {assessment_id}: stage unchanged, no shortlist email")
            return 0

        with ats_uow(self.session_factory) as repo:
            ctx = repo.assessments.get_scoring_context(tenant_id, assessment_id)
            if ctx is None:
                logger.warning(f"Assessment {assessment_id} not found for tenant {tenant_id}; no email sent")
                return 0
            composite = ctx.assessment.ai_total_score
            stage = ctx.application.stage
            application_id = ctx.application.id
            threshold = (ctx.job_settings or {}).get('shortlist_threshold')

        if threshold is None:
            threshold = DEFAULT_SHORTLIST_THRESHOLD

        if composite is None or composite < threshold or stage != 'shortlisted':
            logger.debug(f"Assessment {assessment_id}: no shortlist email (score={composite}, stage={stage})")
            return 0

        return self.on_candidate_shortlisted(tenant_id, application_id, composite)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_application(self, tenant_id: Any, application_id: Any) -> Optional[ApplicationSnapshot]:
        with ats_uow(self.session_factory) as repo:
            application = repo.applications.get_with_relations(tenant_id, application_id)
            if application is None:
                logger.warning(f"Application {application_id} not found for tenant {tenant_id}; no email sent")
                return None

            candidate = application.candidate
            return ApplicationSnapshot(
                application_id=application.id,
                tenant_id=application.tenant_id,
                stage=application.stage,
                candidate_email=candidate.email if candidate else None,
                candidate_name=candidate.full_name if candidate else '',
                job_title=application.job.title if application.job else '',
                company_name=application.tenant.name if application.tenant else '',
            )

    def _context(self, snapshot: ApplicationSnapshot, **extra: Any) -> EmailContext:
        return EmailContext(
            candidateName=snapshot.candidate_name,
            jobTitle=snapshot.job_title,
            companyName=snapshot.company_name,
            applicationUrl=NotificationMessageBuilder.application_url(self.base_url, snapshot.application_id),
            assessmentUrl=NotificationMessageBuilder.assessment_url(self.base_url, snapshot.application_id),
            adminUrl=NotificationMessageBuilder.admin_url(self.base_url, snapshot.application_id),
            **extra
        )

    def _send(
        self,
        snapshot: ApplicationSnapshot,
        template_name: str,
        recipient: Optional[str],
        context: EmailContext
    ) -> int:
        """Send one templated email and log it. Returns 1 if delivered to the provider."""
        if not recipient:
            logger.warning(f"No recipient for {template_name} on application {snapshot.application_id}")
            return 0

        message = NotificationMessageBuilder.build(template_name, context)
        result = self.channel.send(
            recipient,
            message.subject,
            message.text,
            {'html': message.html, 'from_name': snapshot.company_name}
        )

        if not result:
            logger.error(f"Failed to send {template_name} to {_mask_email(recipient)}: {result.error}")

        try:
            with ats_uow(self.session_factory) as repo:
                repo.email_logs.record_sent(
                    tenant_id=snapshot.tenant_id,
                    template_name=template_name,
                    recipient_email=recipient,
                    subject=message.subject,
                    provider_message_id=result.message_id,
                    status='sent' if result else 'failed',
                    error_message=result.error
                )
        except Exception as e:
            logger.warning(f"Could not record email log for {template_name}: {e}")
            self.error_reporter.report_error(e, {'step': 'email_log', 'template': template_name})

        return 1 if result else 0

    def admin_recipients(self, tenant_id: Any) -> List[str]:
        with ats_uow(self.session_factory) as repo:
            return [u.email for u in repo.users.list_admins(tenant_id) if u.email]

#!/usr/bin/env python3
"""
Webhook ingestion.

External webhook: authenticate by a registered secret (and optionally an
HMAC signature), parse the event, dispatch notifications or scoring, then
log exactly one WebhookLog row for the event.

Email-provider webhook: map delivery events onto EmailLog rows keyed by
the provider's message id. Always acknowledged unless the body is not JSON.
"""

import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import sessionmaker

from core.exceptions import Unauthorized, ValidationError
from core.monitoring import ErrorReporter, LoggingErrorReporter
from core.utils import parse_uuid
from database.uow import ats_uow
from notification import tasks
from notification.dispatcher import TaskDispatcher
from web.backend.models.requests import ExternalWebhookEvent, EmailProviderEvent
from web.backend.services.scoring_client import ScoringTriggerClient

logger = logging.getLogger(__name__)

SUPPORTED_EVENTS = [
    'application.created',
    'application.updated',
    'assessment.submitted',
    'candidate.shortlisted',
    'candidate.rejected',
]


def compute_signature(secret: str, raw_body: bytes) -> str:
    return hmac.new(secret.encode('utf-8'), raw_body, hashlib.sha256).hexdigest()


def verify_signature(secret: str, raw_body: bytes, signature: str) -> bool:
    expected = compute_signature(secret, raw_body)
    return hmac.compare_digest(expected, signature.strip().lower())


class WebhookIngestionService:
    def __init__(
        self,
        session_factory: sessionmaker,
        dispatcher: TaskDispatcher,
        scoring_client: ScoringTriggerClient,
        require_hmac: bool = False,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self.session_factory = session_factory
        self.dispatcher = dispatcher
        self.scoring_client = scoring_client
        self.require_hmac = require_hmac
        self.error_reporter = error_reporter or LoggingErrorReporter()

    def ingest(self, signature: Optional[str], secret: Optional[str], raw_body: bytes) -> Dict[str, Any]:
        if not signature or not secret:
            raise Unauthorized("Missing webhook authentication")

        webhook_id, tenant_id = self._authenticate(secret)

        if self.require_hmac and not verify_signature(secret, raw_body, signature):
            logger.warning(f"Webhook {webhook_id}: signature mismatch")
            raise Unauthorized("Invalid webhook signature")

        event = self._parse(raw_body)
        logger.info(f"Received webhook event: {event.event} (tenant {tenant_id})")

        status, error_message = 'processed', None
        try:
            self._dispatch(tenant_id, event)
        except Exception as e:
            logger.error(f"Webhook {webhook_id}: handling {event.event} failed: {e}")
            self.error_reporter.report_error(e, {'step': 'webhook_dispatch', 'event': event.event})
            status, error_message = 'failed', str(e)

        self._log(tenant_id, webhook_id, event, status, error_message)
        return {'received': True, 'event': event.event}

    def _authenticate(self, secret: str):
        with ats_uow(self.session_factory) as repo:
            for config in repo.webhooks.find_enabled_by_secret(secret):
                if hmac.compare_digest(config.secret.encode('utf-8'), secret.encode('utf-8')):
                    return config.id, config.tenant_id
        raise Unauthorized("Invalid webhook")

    @staticmethod
    def _parse(raw_body: bytes) -> ExternalWebhookEvent:
        try:
            return ExternalWebhookEvent.model_validate_json(raw_body)
        except PydanticValidationError as e:
            raise ValidationError(f"Malformed webhook body: {e.errors()[0].get('msg', 'invalid')}")

    def _dispatch(self, tenant_id: Any, event: ExternalWebhookEvent) -> None:
        data = event.data
        tenant = str(tenant_id)

        if event.event == 'application.created':
            if data.application_id:
                application_id = self._id(data.application_id)
                self.dispatcher.dispatch(tasks.application_submitted_task, tenant, application_id)
                # Every application moves on to the writing assessment
                self.dispatcher.dispatch(tasks.assessment_required_task, tenant, application_id)

        elif event.event == 'application.updated':
            if data.application_id and data.stage_changed and data.new_stage:
                self._dispatch_stage_change(tenant, data.new_stage, data)

        elif event.event == 'assessment.submitted':
            if data.assessment_id:
                self.scoring_client.request_scoring(tenant_id, self._id(data.assessment_id))

        elif event.event == 'candidate.shortlisted':
            if data.application_id:
                self.dispatcher.dispatch(
                    tasks.candidate_shortlisted_task, tenant, self._id(data.application_id), data.ai_score or 0
                )

        elif event.event == 'candidate.rejected':
            if data.application_id:
                self.dispatcher.dispatch(
                    tasks.candidate_rejected_task, tenant, self._id(data.application_id), data.reason
                )

        else:
            logger.info(f"Unhandled webhook event: {event.event}")

    def _dispatch_stage_change(self, tenant: str, new_stage: str, data) -> None:
        application_id = self._id(data.application_id)
        if new_stage == 'shortlisted':
            self.dispatcher.dispatch(tasks.candidate_shortlisted_task, tenant, application_id, data.ai_score or 0)
        elif new_stage == 'rejected':
            self.dispatcher.dispatch(tasks.candidate_rejected_task, tenant, application_id, data.reason)

    @staticmethod
    def _id(value: str) -> str:
        return str(parse_uuid(value, "id"))

    def _log(self, tenant_id, webhook_id, event: ExternalWebhookEvent, status: str, error_message: Optional[str]):
        try:
            with ats_uow(self.session_factory) as repo:
                repo.webhooks.log_event(
                    tenant_id=tenant_id,
                    webhook_id=webhook_id,
                    event_type=event.event,
                    payload=event.model_dump(mode='json'),
                    status=status,
                    error_message=error_message
                )
        except Exception as e:
            logger.warning(f"Could not write webhook log for {event.event}: {e}")
            self.error_reporter.report_error(e, {'step': 'webhook_log', 'event': event.event})


# email event type -> (EmailLog status, timestamp column or None)
DELIVERY_EVENTS = {
    'email.sent': ('sent', 'delivered_at'),
    'email.delivered': ('delivered', 'delivered_at'),
    'email.delivery_delayed': ('delayed', None),
    'email.bounced': ('bounced', 'bounced_at'),
    'email.complained': ('complained', 'complained_at'),
}

ENGAGEMENT_EVENTS = {
    'email.clicked': 'click',
    'email.opened': 'open',
}


class EmailEventService:
    def __init__(
        self,
        session_factory: sessionmaker,
        webhook_secret: Optional[str] = None,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self.session_factory = session_factory
        self.webhook_secret = webhook_secret
        self.error_reporter = error_reporter or LoggingErrorReporter()

    def handle(self, raw_body: bytes, signature: Optional[str] = None) -> Dict[str, Any]:
        """
        Apply one provider event. Raises only for a body that is not JSON;
        every other problem is logged and acknowledged.
        """
        payload = json.loads(raw_body)  # JSONDecodeError propagates -> 500

        if self.webhook_secret:
            if not signature or not verify_signature(self.webhook_secret, raw_body, signature):
                logger.warning("Email provider webhook signature mismatch; event ignored")
                return {'received': True}

        try:
            event = EmailProviderEvent.model_validate(payload)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed email provider event: {e}")
            return {'received': True}

        try:
            self._apply(event)
        except Exception as e:
            logger.error(f"Error processing email provider event {event.type}: {e}")
            self.error_reporter.report_error(e, {'step': 'email_event', 'type': event.type})

        return {'received': True}

    def _apply(self, event: EmailProviderEvent) -> None:
        message_id = event.data.get('email_id')

        if event.type not in DELIVERY_EVENTS and event.type not in ENGAGEMENT_EVENTS:
            logger.info(f"Unhandled email provider event: {event.type}")
            return

        if not message_id:
            logger.warning(f"Email provider event {event.type} has no email_id")
            return

        with ats_uow(self.session_factory) as repo:
            email_log = repo.email_logs.get_by_provider_id(message_id)
            if email_log is None:
                logger.warning(f"No email log for provider message {message_id} ({event.type})")
                return

            if event.type in DELIVERY_EVENTS:
                status, timestamp_field = DELIVERY_EVENTS[event.type]
                fields: Dict[str, Any] = {'status': status}
                if timestamp_field:
                    fields[timestamp_field] = datetime.now(timezone.utc)
                if event.data.get('reason'):
                    fields['error_message'] = event.data['reason']
                repo.email_logs.update_delivery(email_log, **fields)
            else:
                repo.email_logs.add_event(email_log, ENGAGEMENT_EVENTS[event.type], event.data)

        logger.info(f"Applied email provider event {event.type} to message {message_id}")

#!/usr/bin/env python3
"""
Notification tasks - module-level entry points run by TaskDispatcher.

Arguments are plain strings so jobs serialize cleanly on the queue. The
triggers instance is registered once per process by whoever builds the
application context; a worker that never registered one builds it from
config on first use.
"""

import logging
from typing import Optional

from core.utils import parse_uuid
from notification.triggers import NotificationTriggers

logger = logging.getLogger(__name__)

_triggers: Optional[NotificationTriggers] = None


def configure_tasks(triggers: Optional[NotificationTriggers]) -> None:
    global _triggers
    _triggers = triggers


def get_triggers() -> NotificationTriggers:
    global _triggers
    if _triggers is None:
        from core.app_context import AppContext
        from core.config_loader import get_config

        logger.info("Building notification triggers from config")
        _triggers = AppContext.build(get_config()).triggers
    return _triggers


def assessment_scored_task(tenant_id: str, assessment_id: str, stage_changed: bool = True) -> int:
    return get_triggers().on_assessment_scored(
        parse_uuid(tenant_id, "tenant_id"), parse_uuid(assessment_id, "assessment_id"), stage_changed
    )


def application_submitted_task(tenant_id: str, application_id: str) -> int:
    return get_triggers().on_application_submitted(
        parse_uuid(tenant_id, "tenant_id"), parse_uuid(application_id, "application_id")
    )


def assessment_required_task(tenant_id: str, application_id: str) -> int:
    return get_triggers().on_assessment_required(
        parse_uuid(tenant_id, "tenant_id"), parse_uuid(application_id, "application_id")
    )


def candidate_shortlisted_task(tenant_id: str, application_id: str, score: float) -> int:
    return get_triggers().on_candidate_shortlisted(
        parse_uuid(tenant_id, "tenant_id"), parse_uuid(application_id, "application_id"), score
    )


def candidate_rejected_task(tenant_id: str, application_id: str, reason: Optional[str] = None) -> int:
    return get_triggers().on_candidate_rejected(
        parse_uuid(tenant_id, "tenant_id"), parse_uuid(application_id, "application_id"), reason
    )

"""
Notification Module

Candidate and admin emails for pipeline events, delivered through an HTTP
email provider and dispatched one-way through an RQ queue.

Usage:
    from notification import TaskDispatcher
    from notification.tasks import application_submitted_task

    dispatcher.dispatch(application_submitted_task, str(tenant_id), str(application_id))
"""

from notification.channels import (
    NotificationChannel,
    EmailChannel,
    DeliveryResult,
)

from notification.message_builder import (
    EmailContext,
    NotificationMessageBuilder,
    DEFAULT_TEMPLATES,
)

from notification.triggers import NotificationTriggers, DEFAULT_REJECTION_REASON
from notification.dispatcher import TaskDispatcher

__all__ = [
    # Channels
    'NotificationChannel',
    'EmailChannel',
    'DeliveryResult',
    # Messages
    'EmailContext',
    'NotificationMessageBuilder',
    'DEFAULT_TEMPLATES',
    # Triggers
    'NotificationTriggers',
    'DEFAULT_REJECTION_REASON',
    'TaskDispatcher',
]

from .base import Base
from .tenant import Tenant
from .user import User
from .job import Job, JobSettings, DEFAULT_SHORTLIST_THRESHOLD
from .application import Application, Assessment
from .audit import AuditLog
from .webhook import WebhookConfig, WebhookLog
from .email import EmailLog, EmailEvent

__all__ = [
    'Base',
    'Tenant',
    'User',
    'Job',
    'JobSettings',
    'DEFAULT_SHORTLIST_THRESHOLD',
    'Application',
    'Assessment',
    'AuditLog',
    'WebhookConfig',
    'WebhookLog',
    'EmailLog',
    'EmailEvent',
]

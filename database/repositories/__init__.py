from database.repositories.base import BaseRepository
from database.repositories.assessment import AssessmentRepository, ScoringContext
from database.repositories.application import ApplicationRepository
from database.repositories.job import JobRepository
from database.repositories.audit import AuditLogRepository
from database.repositories.webhook import WebhookRepository
from database.repositories.email import EmailLogRepository
from database.repositories.user import UserRepository

__all__ = [
    'BaseRepository',
    'AssessmentRepository',
    'ScoringContext',
    'ApplicationRepository',
    'JobRepository',
    'AuditLogRepository',
    'WebhookRepository',
    'EmailLogRepository',
    'UserRepository',
]

from sqlalchemy.orm import Session

from database.repositories import (
    AssessmentRepository,
    ApplicationRepository,
    JobRepository,
    AuditLogRepository,
    WebhookRepository,
    EmailLogRepository,
    UserRepository,
)


class AtsRepository:
    """All repositories bound to one Session, handed out by ``ats_uow``."""

    def __init__(self, db: Session):
        self.db = db
        self.assessments = AssessmentRepository(db)
        self.applications = ApplicationRepository(db)
        self.jobs = JobRepository(db)
        self.audit_logs = AuditLogRepository(db)
        self.webhooks = WebhookRepository(db)
        self.email_logs = EmailLogRepository(db)
        self.users = UserRepository(db)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

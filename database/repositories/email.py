import logging
from typing import Optional, Any, Dict

from sqlalchemy import select

from database.models import EmailLog, EmailEvent
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EmailLogRepository(BaseRepository):
    def record_sent(
        self,
        tenant_id: Any,
        template_name: str,
        recipient_email: str,
        subject: str,
        provider_message_id: Optional[str],
        status: str = 'sent',
        error_message: Optional[str] = None
    ) -> EmailLog:
        entry = EmailLog(
            tenant_id=tenant_id,
            template_name=template_name,
            recipient_email=recipient_email,
            subject=subject,
            provider_message_id=provider_message_id,
            status=status,
            error_message=error_message
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def get_by_provider_id(self, provider_message_id: str) -> Optional[EmailLog]:
        stmt = select(EmailLog).where(EmailLog.provider_message_id == provider_message_id)
        return self.db.execute(stmt).scalars().first()

    def update_delivery(self, email_log: EmailLog, **fields: Any) -> EmailLog:
        for name, value in fields.items():
            setattr(email_log, name, value)
        self.db.flush()
        return email_log

    def add_event(self, email_log: EmailLog, event_type: str, event_data: Dict[str, Any]) -> EmailEvent:
        event = EmailEvent(
            tenant_id=email_log.tenant_id,
            email_log_id=email_log.id,
            event_type=event_type,
            event_data=event_data
        )
        self.db.add(event)
        self.db.flush()
        return event

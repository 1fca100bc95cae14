from typing import List, Optional, Any, Dict

from sqlalchemy import select

from core.utils import sha256_hex
from database.models import WebhookConfig, WebhookLog
from database.repositories.base import BaseRepository


class WebhookRepository(BaseRepository):
    def find_enabled_by_secret(self, secret: str) -> List[WebhookConfig]:
        """
        Candidate configs for a presented secret, found by its SHA-256 digest.
        The caller compares the secrets themselves in constant time.
        """
        stmt = select(WebhookConfig).where(
            WebhookConfig.secret_hash == sha256_hex(secret),
            WebhookConfig.enabled.is_(True)
        )
        return self.db.execute(stmt).scalars().all()

    def get_by_id(self, tenant_id: Any, webhook_id: Any) -> Optional[WebhookConfig]:
        stmt = select(WebhookConfig).where(
            WebhookConfig.id == webhook_id,
            WebhookConfig.tenant_id == tenant_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def log_event(
        self,
        tenant_id: Any,
        webhook_id: Any,
        event_type: str,
        payload: Dict[str, Any],
        status: str,
        error_message: Optional[str] = None
    ) -> WebhookLog:
        entry = WebhookLog(
            tenant_id=tenant_id,
            webhook_id=webhook_id,
            event_type=event_type,
            payload=payload,
            status=status,
            error_message=error_message
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_logs(self, tenant_id: Any, webhook_id: Any) -> List[WebhookLog]:
        stmt = select(WebhookLog).where(
            WebhookLog.tenant_id == tenant_id,
            WebhookLog.webhook_id == webhook_id
        ).order_by(WebhookLog.processed_at)
        return self.db.execute(stmt).scalars().all()

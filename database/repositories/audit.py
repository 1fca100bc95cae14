from typing import List, Any, Dict

from sqlalchemy import select

from database.models import AuditLog
from database.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository):
    def append(
        self,
        tenant_id: Any,
        table_name: str,
        record_id: Any,
        action: str,
        changes: Dict[str, Any],
        performed_by: str = 'system'
    ) -> AuditLog:
        entry = AuditLog(
            tenant_id=tenant_id,
            table_name=table_name,
            record_id=record_id,
            action=action,
            changes=changes,
            performed_by=performed_by
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_for_record(self, tenant_id: Any, table_name: str, record_id: Any) -> List[AuditLog]:
        stmt = select(AuditLog).where(
            AuditLog.tenant_id == tenant_id,
            AuditLog.table_name == table_name,
            AuditLog.record_id == record_id
        ).order_by(AuditLog.created_at)
        return self.db.execute(stmt).scalars().all()

import logging
from typing import List, Optional, Any

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import Application
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def get_by_id(self, tenant_id: Any, application_id: Any) -> Optional[Application]:
        stmt = select(Application).where(
            Application.id == application_id,
            Application.tenant_id == tenant_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_with_relations(self, tenant_id: Any, application_id: Any) -> Optional[Application]:
        """Application with its job, candidate and tenant eagerly loaded (for emails)."""
        stmt = (
            select(Application)
            .options(
                joinedload(Application.job),
                joinedload(Application.candidate),
                joinedload(Application.tenant)
            )
            .where(
                Application.id == application_id,
                Application.tenant_id == tenant_id
            )
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def update_stage(self, tenant_id: Any, application_id: Any, stage: str, status: str) -> Application:
        application = self.get_by_id(tenant_id, application_id)
        if application is None:
            raise LookupError(f"Application {application_id} not found for tenant {tenant_id}")

        application.stage = stage
        application.status = status
        self.db.flush()
        logger.info(f"Application {application_id} moved to stage '{stage}'")
        return application

    def list_for_tenant(
        self,
        tenant_id: Any,
        stage: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[Application]:
        stmt = select(Application).where(Application.tenant_id == tenant_id)

        if stage is not None:
            stmt = stmt.where(Application.stage == stage)

        stmt = stmt.order_by(Application.created_at.desc()).limit(limit).offset(offset)
        return self.db.execute(stmt).scalars().all()

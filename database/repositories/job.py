from typing import List, Optional, Any, Tuple

from sqlalchemy import select, func, or_

from database.models import Job
from database.repositories.base import BaseRepository


class JobRepository(BaseRepository):
    def get_by_id(self, tenant_id: Any, job_id: Any) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id, Job.tenant_id == tenant_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_published(
        self,
        tenant_id: Optional[Any] = None,
        search: Optional[str] = None,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Job], int]:
        """Published jobs, newest first, scoped to ``tenant_id`` when given. Returns (page, total)."""
        conditions = [Job.status == 'published']
        if tenant_id is not None:
            conditions.append(Job.tenant_id == tenant_id)

        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Job.title.ilike(pattern), Job.description.ilike(pattern)))
        if job_type:
            conditions.append(Job.job_type == job_type)
        if location:
            conditions.append(Job.location.ilike(f"%{location}%"))

        total = self.db.execute(select(func.count()).select_from(Job).where(*conditions)).scalar_one()

        stmt = (
            select(Job)
            .where(*conditions)
            .order_by(Job.created_at.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        return self.db.execute(stmt).scalars().all(), total

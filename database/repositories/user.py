from typing import List, Optional, Any

from sqlalchemy import select

from database.models import User
from database.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    def get_by_id(self, tenant_id: Any, user_id: Any) -> Optional[User]:
        stmt = select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_admins(self, tenant_id: Any) -> List[User]:
        stmt = select(User).where(User.tenant_id == tenant_id, User.role == 'admin')
        return self.db.execute(stmt).scalars().all()

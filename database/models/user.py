import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index, Uuid

from .base import Base, utcnow

class User(Base):
    """
    Tenant member. Candidates apply to jobs; admins receive application alerts.
    """
    __tablename__ = 'users'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    email = Column(Text, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)
    role = Column(Text, nullable=False, default='candidate')  # candidate | admin
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_users_tenant_role', 'tenant_id', 'role'),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

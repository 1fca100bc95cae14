import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index, Uuid

from .base import Base, JSONType, utcnow

class AuditLog(Base):
    """Append-only record of automated changes."""
    __tablename__ = 'audit_logs'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    table_name = Column(Text, nullable=False)
    record_id = Column(Uuid(as_uuid=True), nullable=False)
    action = Column(Text, nullable=False)
    changes = Column(JSONType, default=dict)
    performed_by = Column(Text, nullable=False, default='system')
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_audit_logs_record', 'tenant_id', 'table_name', 'record_id'),
    )

import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, ForeignKey, Index, Uuid
from sqlalchemy.orm import validates

from core.utils import sha256_hex
from .base import Base, JSONType, utcnow


class WebhookConfig(Base):
    """
    Registered inbound webhook for a tenant. ``secret`` is shared with the sender.

    Lookups go through ``secret_hash`` so the presented secret is never
    compared against stored secrets by the database; the final comparison
    is done in constant time by the caller.
    """
    __tablename__ = 'webhooks'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    secret = Column(Text, nullable=False)
    secret_hash = Column(Text, nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_webhooks_secret_hash_enabled', 'secret_hash', 'enabled'),
    )

    @validates('secret')
    def _set_secret_hash(self, key, value):
        self.secret_hash = sha256_hex(value)
        return value


class WebhookLog(Base):
    __tablename__ = 'webhook_logs'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    webhook_id = Column(Uuid(as_uuid=True), ForeignKey('webhooks.id', ondelete='CASCADE'), nullable=False)
    event_type = Column(Text, nullable=False)
    payload = Column(JSONType, default=dict)
    status = Column(Text, nullable=False)  # processed | failed
    error_message = Column(Text)
    processed_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_webhook_logs_webhook', 'webhook_id', 'processed_at'),
    )

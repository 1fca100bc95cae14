import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index, Uuid

from .base import Base, JSONType, utcnow

class EmailLog(Base):
    """
    One outbound email. Delivery status is updated from the email provider's
    webhook, keyed by ``provider_message_id``.
    """
    __tablename__ = 'email_logs'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    template_name = Column(Text, nullable=False)
    recipient_email = Column(Text, nullable=False)
    subject = Column(Text)
    provider_message_id = Column(Text, index=True)

    # queued | sent | delivered | delayed | bounced | complained | failed
    status = Column(Text, nullable=False, default='queued')
    error_message = Column(Text)

    delivered_at = Column(TIMESTAMP(timezone=True))
    bounced_at = Column(TIMESTAMP(timezone=True))
    complained_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class EmailEvent(Base):
    """Engagement event (open/click) reported by the email provider."""
    __tablename__ = 'email_events'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    email_log_id = Column(Uuid(as_uuid=True), ForeignKey('email_logs.id', ondelete='CASCADE'), nullable=False)
    event_type = Column(Text, nullable=False)  # click | open
    event_data = Column(JSONType, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_email_events_log', 'email_log_id'),
    )

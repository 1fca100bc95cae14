import uuid

from sqlalchemy import Column, Text, Float, TIMESTAMP, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow

class Application(Base):
    """
    A candidate's application to a job.

    ``stage`` is the pipeline stage (see core.pipeline.stages.PipelineStage);
    ``status`` is the coarse label shown to humans.
    """
    __tablename__ = 'applications'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Uuid(as_uuid=True), ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    candidate_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    stage = Column(Text, nullable=False, default='applied')
    status = Column(Text, nullable=False, default='submitted')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    hired_at = Column(TIMESTAMP(timezone=True))

    job = relationship("Job", back_populates="applications")
    candidate = relationship("User")
    tenant = relationship("Tenant")
    assessments = relationship("Assessment", back_populates="application")

    __table_args__ = (
        Index('idx_applications_tenant_stage', 'tenant_id', 'stage'),
        Index('idx_applications_job', 'job_id'),
    )


class Assessment(Base):
    """
    A candidate's writing submission. Never deleted; only its status moves on.
    """
    __tablename__ = 'assessments'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    application_id = Column(Uuid(as_uuid=True), ForeignKey('applications.id', ondelete='CASCADE'), nullable=False)

    content = Column(Text, nullable=False, default='')
    status = Column(Text, nullable=False, default='submitted')  # submitted | ai_scored | manual_review | finalized

    ai_scores = Column(JSONType)
    ai_total_score = Column(Float)

    submitted_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    scored_at = Column(TIMESTAMP(timezone=True))

    application = relationship("Application", back_populates="assessments")

    __table_args__ = (
        Index('idx_assessments_tenant_application', 'tenant_id', 'application_id'),
    )

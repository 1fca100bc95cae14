import uuid

from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow

DEFAULT_SHORTLIST_THRESHOLD = 75.0


class Job(Base):
    __tablename__ = 'jobs'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text)
    job_type = Column(Text)  # full_time, part_time, contract, freelance
    location = Column(Text)
    remote_allowed = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default='draft')  # draft | published | closed
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    settings = relationship("JobSettings", back_populates="job", uselist=False, cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job")

    __table_args__ = (
        Index('idx_jobs_tenant_status', 'tenant_id', 'status'),
    )


class JobSettings(Base):
    """
    Per-job scoring configuration.

    Weights are optional percentage overrides (20 means 20%) on the default
    scorer weights 20/30/20/15/15; NULL means "use the default" for that
    dimension. The merged set is normalised to sum 1 before scoring.
    """
    __tablename__ = 'job_settings'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid(as_uuid=True), ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, unique=True)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False)

    shortlist_threshold = Column(Float)
    role_type = Column(Text, default='content_writing')

    readability_weight = Column(Float)
    writing_quality_weight = Column(Float)
    seo_weight = Column(Float)
    english_proficiency_weight = Column(Float)
    ai_detection_weight = Column(Float)

    job = relationship("Job", back_populates="settings")

    def to_scoring_dict(self) -> dict:
        """Plain-dict view consumed by the scorer (no ORM objects cross that boundary)."""
        return {
            'shortlist_threshold': self.shortlist_threshold,
            'role_type': self.role_type,
            'readability_weight': self.readability_weight,
            'writing_quality_weight': self.writing_quality_weight,
            'seo_weight': self.seo_weight,
            'english_proficiency_weight': self.english_proficiency_weight,
            'ai_detection_weight': self.ai_detection_weight,
        }

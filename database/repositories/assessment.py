import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import Assessment, Application, Job
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


@dataclass
class ScoringContext:
    """Everything the scoring pipeline needs, loaded in one query."""
    assessment: Assessment
    application: Application
    job: Job
    job_settings: Optional[Dict[str, Any]]


class AssessmentRepository(BaseRepository):
    def get_by_id(self, tenant_id: Any, assessment_id: Any) -> Optional[Assessment]:
        stmt = select(Assessment).where(
            Assessment.id == assessment_id,
            Assessment.tenant_id == tenant_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_scoring_context(self, tenant_id: Any, assessment_id: Any) -> Optional[ScoringContext]:
        stmt = (
            select(Assessment)
            .options(
                joinedload(Assessment.application)
                .joinedload(Application.job)
                .joinedload(Job.settings)
            )
            .where(
                Assessment.id == assessment_id,
                Assessment.tenant_id == tenant_id
            )
        )
        assessment = self.db.execute(stmt).unique().scalar_one_or_none()
        if assessment is None:
            return None

        application = assessment.application
        if application is None or application.tenant_id != tenant_id:
            logger.warning(f"Assessment {assessment_id} has no application in tenant {tenant_id}")
            return None

        job = application.job
        settings = job.settings.to_scoring_dict() if job.settings else None
        return ScoringContext(
            assessment=assessment,
            application=application,
            job=job,
            job_settings=settings
        )

    def save_scores(
        self,
        tenant_id: Any,
        assessment_id: Any,
        scores: Dict[str, Any],
        composite_score: float
    ) -> Assessment:
        assessment = self.get_by_id(tenant_id, assessment_id)
        if assessment is None:
            raise LookupError(f"Assessment {assessment_id} not found for tenant {tenant_id}")

        assessment.ai_scores = scores
        assessment.ai_total_score = composite_score
        assessment.status = 'ai_scored'
        assessment.scored_at = datetime.now(timezone.utc)
        self.db.flush()
        return assessment

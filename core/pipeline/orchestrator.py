"""
Scoring Orchestrator - score an assessment and advance its application.

Steps, each in its own unit of work so a late failure never rolls back
earlier committed work:

1. Load assessment, application, job and job settings (tenant scoped).
2. Score the content. ScoringUnavailable propagates with nothing written.
3. Persist scores. Failure raises PersistenceError and stops the run.
4. Apply the stage rule and persist the stage. Failure raises
   PersistenceError(partial=True); the scores stay committed.
5. Append an audit entry (best effort).
6. Dispatch the assessment-scored notification (best effort).
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.orm import sessionmaker

from core.exceptions import NotFound, PersistenceError
from core.monitoring import ErrorReporter, LoggingErrorReporter
from core.pipeline.stages import apply_stage_rule, can_auto_transition
from core.scorer import AIScorer, AIScoreRecord
from database.uow import ats_uow

logger = logging.getLogger(__name__)


@dataclass
class ScoringOutcome:
    scores: AIScoreRecord
    stage: str
    stage_changed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scores': self.scores.to_dict(),
            'stage': self.stage,
            'stage_changed': self.stage_changed,
        }


class ScoringOrchestrator:
    """
    Runs one assessment through scoring, persistence and stage transition.

    No per-assessment locking: concurrent runs for the same assessment are
    tolerated and the last write wins.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        scorer: AIScorer,
        dispatcher: Optional[Any] = None,
        error_reporter: Optional[ErrorReporter] = None,
        default_threshold: Optional[float] = None
    ):
        self.session_factory = session_factory
        self.default_threshold = default_threshold
        self.scorer = scorer
        self.dispatcher = dispatcher
        self.error_reporter = error_reporter or LoggingErrorReporter()

    def score_assessment(self, tenant_id: Any, assessment_id: Any) -> ScoringOutcome:
        start = time.time()

        with ats_uow(self.session_factory) as repo:
            ctx = repo.assessments.get_scoring_context(tenant_id, assessment_id)
            if ctx is None:
                raise NotFound(f"Assessment {assessment_id} not found")
            content = ctx.assessment.content or ''
            job_settings = ctx.job_settings
            application_id = ctx.application.id
            current_stage = ctx.application.stage

        # Scoring happens outside any transaction
        scores = self.scorer.score_assessment(content, job_settings)

        try:
            with ats_uow(self.session_factory) as repo:
                repo.assessments.save_scores(
                    tenant_id, assessment_id, scores.to_dict(), scores.composite_score
                )
        except Exception as e:
            logger.error(f"Failed to persist scores for assessment {assessment_id}: {e}")
            raise PersistenceError(f"Failed to save scores: {e}", partial=False, step="save_scores") from e

        threshold = (job_settings or {}).get('shortlist_threshold')
        if threshold is None:
            threshold = self.default_threshold
        decision = apply_stage_rule(scores.composite_score, threshold)

        final_stage = current_stage
        stage_changed = False
        if not can_auto_transition(current_stage, decision.stage):
            logger.info(
                f"Application {application_id} is at '{current_stage}'; "
                f"keeping it instead of moving to '{decision.stage}'"
            )
        elif decision.stage != current_stage:
            try:
                with ats_uow(self.session_factory) as repo:
                    repo.applications.update_stage(tenant_id, application_id, decision.stage, decision.status)
            except Exception as e:
                logger.error(f"Scores saved but stage update failed for application {application_id}: {e}")
                raise PersistenceError(
                    f"Scores saved but stage update failed: {e}", partial=True, step="update_stage"
                ) from e
            final_stage = decision.stage
            stage_changed = True

        self._audit(tenant_id, assessment_id, scores, final_stage, stage_changed)
        self._notify(tenant_id, assessment_id, stage_changed)

        logger.info(
            f"Scored assessment {assessment_id}: composite={scores.composite_score}, "
            f"stage={final_stage} ({time.time() - start:.2f}s)"
        )
        return ScoringOutcome(scores=scores, stage=final_stage, stage_changed=stage_changed)

    def _audit(
        self,
        tenant_id: Any,
        assessment_id: Any,
        scores: AIScoreRecord,
        final_stage: Optional[str],
        stage_changed: bool
    ):
        try:
            with ats_uow(self.session_factory) as repo:
                repo.audit_logs.append(
                    tenant_id=tenant_id,
                    table_name='assessments',
                    record_id=assessment_id,
                    action='ai_scored',
                    changes={
                        'ai_scores': scores.to_dict(),
                        'composite_score': scores.composite_score,
                        'stage_updated': final_stage,
                        'stage_changed': stage_changed,
                    },
                )
        except Exception as e:
            logger.warning(f"Audit log write failed for assessment {assessment_id}: {e}")
            self.error_reporter.report_error(e, {'step': 'audit', 'assessment_id': str(assessment_id)})

    def _notify(self, tenant_id: Any, assessment_id: Any, stage_changed: bool):
        if self.dispatcher is None:
            return
        # Imported here: notification depends on core, not the other way round
        from notification.tasks import assessment_scored_task

        try:
            self.dispatcher.dispatch(assessment_scored_task, str(tenant_id), str(assessment_id), stage_changed)
        except Exception as e:
            logger.warning(f"Notification dispatch failed for assessment {assessment_id}: {e}")
            self.error_reporter.report_error(e, {'step': 'notify', 'assessment_id': str(assessment_id)})

"""
Application pipeline stages and the automatic shortlist rule.

    applied -> assessment_submitted -> ai_reviewed -> shortlisted | rejected
            -> manual_review -> paid_assignment -> hired

Only the scoring pipeline moves applications automatically, and only out of
the early stages. Anything a human has already advanced is left alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from database.models import DEFAULT_SHORTLIST_THRESHOLD


class PipelineStage(str, Enum):
    APPLIED = "applied"
    ASSESSMENT_SUBMITTED = "assessment_submitted"
    AI_REVIEWED = "ai_reviewed"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    MANUAL_REVIEW = "manual_review"
    PAID_ASSIGNMENT = "paid_assignment"
    HIRED = "hired"


AUTO_TRANSITION_STAGES = frozenset({
    PipelineStage.APPLIED.value,
    PipelineStage.ASSESSMENT_SUBMITTED.value,
    PipelineStage.AI_REVIEWED.value,
})


@dataclass(frozen=True)
class StageDecision:
    stage: str
    status: str


def apply_stage_rule(score: float, threshold: Optional[float] = None) -> StageDecision:
    """Shortlist when ``score >= threshold`` (75 when unset), otherwise mark reviewed."""
    if threshold is None:
        threshold = DEFAULT_SHORTLIST_THRESHOLD

    if score >= threshold:
        return StageDecision(stage=PipelineStage.SHORTLISTED.value, status="shortlisted")
    return StageDecision(stage=PipelineStage.AI_REVIEWED.value, status="reviewed")


def can_auto_transition(current_stage: Optional[str], target_stage: Optional[str] = None) -> bool:
    """
    Whether scoring may move an application out of ``current_stage``.

    A shortlisted application re-scored as shortlisted is allowed (no-op);
    every other stage past ai_reviewed is never regressed.
    """
    if current_stage is None or current_stage in AUTO_TRANSITION_STAGES:
        return True
    return (
        current_stage == PipelineStage.SHORTLISTED.value
        and target_stage == PipelineStage.SHORTLISTED.value
    )

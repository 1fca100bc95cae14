"""Assessment scoring pipeline: stage rule and orchestration."""

from core.pipeline.stages import (
    PipelineStage,
    StageDecision,
    DEFAULT_SHORTLIST_THRESHOLD,
    apply_stage_rule,
    can_auto_transition,
)
from core.pipeline.orchestrator import ScoringOrchestrator, ScoringOutcome

__all__ = [
    'PipelineStage',
    'StageDecision',
    'DEFAULT_SHORTLIST_THRESHOLD',
    'apply_stage_rule',
    'can_auto_transition',
    'ScoringOrchestrator',
    'ScoringOutcome',
]

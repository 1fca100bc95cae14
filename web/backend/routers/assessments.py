#!/usr/bin/env python3
"""
Assessment endpoints - AI scoring and stage progression.
"""

import logging
import uuid
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from core.exceptions import RateLimited
from core.utils import parse_uuid
from ..dependencies import get_context, get_tenant_id
from ..models.requests import ScoreAssessmentRequest
from ..models.responses import ScoreAssessmentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessments", tags=["assessments"])


def enforce_rate_limit(ctx: AppContext, tenant_id: uuid.UUID) -> None:
    limits = ctx.config.rate_limit
    if not limits.enabled:
        return

    status = ctx.cache.increment_rate_limit(
        f"score:{tenant_id}",
        window_seconds=limits.window_seconds,
        max_requests=limits.max_requests
    )
    if status.exceeded(limits.max_requests):
        raise RateLimited(
            f"Rate limit exceeded: {limits.max_requests} scoring requests per {limits.window_seconds}s",
            reset_seconds=status.reset_seconds
        )


@router.post("/score", response_model=ScoreAssessmentResponse)
def score_assessment(
    request: ScoreAssessmentRequest,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    ctx: AppContext = Depends(get_context)
):
    """
    Score a submitted assessment and advance the application's stage.

    Runs the analyzers (or reuses cached scores for identical content),
    saves the scores, moves the application to ``shortlisted`` or
    ``ai_reviewed`` against the job's threshold, and queues the
    scored notification.
    """
    enforce_rate_limit(ctx, tenant_id)
    assessment_id = parse_uuid(request.assessment_id, "assessment id")

    outcome = ctx.orchestrator.score_assessment(tenant_id, assessment_id)

    return ScoreAssessmentResponse(success=True, **outcome.to_dict())

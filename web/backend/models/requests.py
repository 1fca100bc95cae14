#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class ScoreAssessmentRequest(BaseModel):
    """Request to score one assessment."""
    model_config = ConfigDict(populate_by_name=True)

    assessment_id: str = Field(..., alias="assessmentId", min_length=1, description="Assessment to score")


class ExternalWebhookData(BaseModel):
    """Payload of an external webhook event. Unknown keys are kept for the log."""
    model_config = ConfigDict(extra="allow")

    application_id: Optional[str] = None
    assessment_id: Optional[str] = None
    stage_changed: bool = False
    new_stage: Optional[str] = None
    ai_score: Optional[float] = None
    reason: Optional[str] = None


class ExternalWebhookEvent(BaseModel):
    event: str = Field(..., min_length=1)
    data: ExternalWebhookData = Field(default_factory=ExternalWebhookData)


class EmailProviderEvent(BaseModel):
    """Delivery event posted by the email provider."""
    model_config = ConfigDict(extra="allow")

    type: str
    data: Dict[str, Any] = Field(default_factory=dict)

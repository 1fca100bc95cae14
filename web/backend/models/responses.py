#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class ScoreAssessmentResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "scores": {
                    "readability_score": 82,
                    "writing_quality_score": 77,
                    "seo_score": 70,
                    "english_proficiency_score": 85,
                    "ai_detection_score": 64,
                    "composite_score": 76.15
                },
                "stage": "shortlisted",
                "stage_changed": True
            }
        }
    )

    success: bool = True
    scores: Dict[str, Any]
    stage: str
    stage_changed: bool = False


class WebhookReceivedResponse(BaseModel):
    received: bool = True
    event: Optional[str] = None


class WebhookInfoResponse(BaseModel):
    message: str
    events: List[str] = Field(default_factory=list)


class JobSummary(BaseModel):
    id: str
    tenant_id: str
    title: str
    description: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None
    remote_allowed: bool = False
    created_at: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class JobListResponse(BaseModel):
    success: bool = True
    jobs: List[JobSummary]
    pagination: Pagination
    cached: bool = False


class ApplicationSummary(BaseModel):
    id: str
    job_id: str
    candidate_id: str
    stage: str
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ApplicationListResponse(BaseModel):
    success: bool = True
    applications: List[ApplicationSummary]
    count: int


class HealthResponse(BaseModel):
    status: str
    service: str = "ats-scoring"
    details: Dict[str, Any] = Field(default_factory=dict)

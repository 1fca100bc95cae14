"""
Pydantic models for structured LLM responses.

The JSON schema sent to the model is generated from the model so the
two never drift apart.
"""
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class AssessmentReview(BaseModel):
    """Advisory narrative review of a writing assessment."""
    model_config = ConfigDict(extra='forbid')

    thought_process: str = Field(description="Brief reasoning before the verdict.")
    summary: str = Field(description="Two or three sentence overall impression.")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    role_fit: Literal['strong', 'moderate', 'weak'] = 'moderate'
    suspected_ai_generated: bool = False


ASSESSMENT_REVIEW_SCHEMA = {
    'name': 'assessment_review',
    'strict': False,
    'schema': AssessmentReview.model_json_schema(),
}

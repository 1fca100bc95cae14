#!/usr/bin/env python3
"""
HTTP client that asks the scoring endpoint to score an assessment.

Used by webhook ingestion for assessment.submitted events. Failures are
logged and swallowed; the caller never waits on scoring.
"""

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class ScoringTriggerClient:
    def __init__(self, endpoint: str, timeout: int = 10, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self._http = session or requests.Session()

    def request_scoring(self, tenant_id: Any, assessment_id: Any) -> bool:
        try:
            response = self._http.post(
                self.endpoint,
                json={'assessmentId': str(assessment_id)},
                headers={'X-Tenant-ID': str(tenant_id)},
                timeout=self.timeout
            )
            if not response.ok:
                logger.error(f"Failed to trigger AI scoring ({response.status_code}): {response.text[:200]}")
                return False
            return True
        except requests.RequestException as e:
            logger.error(f"Error triggering AI scoring for assessment {assessment_id}: {e}")
            return False

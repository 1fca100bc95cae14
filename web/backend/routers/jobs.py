#!/usr/bin/env python3
"""
Job board endpoints.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.utils import parse_uuid
from ..dependencies import get_listing_service
from ..models.responses import JobListResponse
from ..services.listing_service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    tenant_id: Optional[str] = Query(default=None, description="Restrict to one tenant's jobs"),
    search: Optional[str] = Query(default=None, description="Match title or description"),
    type: Optional[str] = Query(default=None, description="Job type, e.g. full_time"),
    location: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: ListingService = Depends(get_listing_service)
):
    """
    Published jobs, newest first. Served from cache for repeated filters.
    """
    tenant = parse_uuid(tenant_id, "tenant id") if tenant_id else None
    return service.list_jobs(
        tenant_id=tenant,
        search=search,
        job_type=type,
        location=location,
        page=page,
        limit=limit
    )

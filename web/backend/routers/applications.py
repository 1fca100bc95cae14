#!/usr/bin/env python3
"""
Application endpoints - the calling tenant's candidate pipeline.
"""

import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_listing_service, get_tenant_id
from ..models.responses import ApplicationListResponse
from ..services.listing_service import ListingService

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=ApplicationListResponse)
def list_applications(
    stage: Optional[str] = Query(default=None, description="Only applications in this stage"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    service: ListingService = Depends(get_listing_service)
):
    return service.list_applications(tenant_id, stage=stage, limit=limit, offset=offset)

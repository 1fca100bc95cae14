#!/usr/bin/env python3
"""
Listing service - cached job board and tenant application lists.
"""

import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy.orm import sessionmaker

from core.cache import CacheService, JOB_LISTINGS_TTL_SECONDS
from database.uow import ats_uow
from ..models.responses import (
    ApplicationListResponse,
    ApplicationSummary,
    JobListResponse,
    JobSummary,
    Pagination,
)
from ..utils import safe_str, safe_datetime_iso

logger = logging.getLogger(__name__)


class ListingService:
    """Read-only views. Every query is scoped by tenant."""

    def __init__(
        self,
        session_factory: sessionmaker,
        cache: Optional[CacheService] = None,
        job_listings_ttl: int = JOB_LISTINGS_TTL_SECONDS
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.job_listings_ttl = job_listings_ttl

    def list_jobs(
        self,
        tenant_id: Optional[Any] = None,
        search: Optional[str] = None,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> JobListResponse:
        """
        Published jobs, served from cache when the same filters were asked recently.

        The cache key covers every filter, tenant included, so tenants never
        see each other's cached listings.
        """
        filters: Dict[str, Any] = {
            'tenant_id': safe_str(tenant_id) or None,
            'search': search,
            'type': job_type,
            'location': location,
            'page': page,
            'limit': limit,
        }

        if self.cache is not None:
            cached = self.cache.get_cached_job_listings(filters)
            if cached is not None:
                response = JobListResponse.model_validate(cached)
                response.cached = True
                return response

        with ats_uow(self.session_factory) as repo:
            jobs, total = repo.jobs.list_published(
                tenant_id=tenant_id,
                search=search,
                job_type=job_type,
                location=location,
                page=page,
                limit=limit
            )
            summaries = [
                JobSummary(
                    id=str(job.id),
                    tenant_id=str(job.tenant_id),
                    title=job.title,
                    description=job.description,
                    job_type=job.job_type,
                    location=job.location,
                    remote_allowed=bool(job.remote_allowed),
                    created_at=safe_datetime_iso(job.created_at),
                )
                for job in jobs
            ]

        response = JobListResponse(
            jobs=summaries,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit) if limit else 0,
            ),
        )

        if self.cache is not None:
            self.cache.cache_job_listings(filters, response.model_dump(), ttl=self.job_listings_ttl)

        return response

    def list_applications(
        self,
        tenant_id: Any,
        stage: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> ApplicationListResponse:
        with ats_uow(self.session_factory) as repo:
            applications = repo.applications.list_for_tenant(tenant_id, stage=stage, limit=limit, offset=offset)
            summaries = [
                ApplicationSummary(
                    id=str(a.id),
                    job_id=str(a.job_id),
                    candidate_id=str(a.candidate_id),
                    stage=a.stage,
                    status=a.status,
                    created_at=safe_datetime_iso(a.created_at),
                    updated_at=safe_datetime_iso(a.updated_at),
                )
                for a in applications
            ]

        return ApplicationListResponse(applications=summaries, count=len(summaries))

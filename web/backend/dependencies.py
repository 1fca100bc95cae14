#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
import threading
import uuid
from typing import Optional

from fastapi import Depends, Header, Request

from core.app_context import AppContext
from core.config_loader import get_config
from core.exceptions import ValidationError
from core.utils import parse_uuid
from .services import (
    EmailEventService,
    ListingService,
    ScoringTriggerClient,
    WebhookIngestionService,
)

logger = logging.getLogger(__name__)

_build_lock = threading.Lock()


def get_context(request: Request) -> AppContext:
    """
    The process-wide AppContext, stored on ``app.state``.

    Built from config on first use unless the app was created with one.
    """
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        with _build_lock:
            ctx = getattr(request.app.state, "ctx", None)
            if ctx is None:
                logger.info("Building application context from config")
                ctx = AppContext.build(get_config())
                request.app.state.ctx = ctx
    return ctx


def get_tenant_id(x_tenant_id: Optional[str] = Header(None)) -> uuid.UUID:
    """Tenant from the ``X-Tenant-ID`` header. Required."""
    if not x_tenant_id:
        raise ValidationError("Missing X-Tenant-ID header")
    return parse_uuid(x_tenant_id, "tenant id")


def get_listing_service(ctx: AppContext = Depends(get_context)) -> ListingService:
    cache = ctx.cache if ctx.config.cache.enabled else None
    return ListingService(
        ctx.session_factory,
        cache=cache,
        job_listings_ttl=ctx.config.cache.job_listings_ttl_seconds
    )


def get_webhook_service(ctx: AppContext = Depends(get_context)) -> WebhookIngestionService:
    webhooks_config = ctx.config.webhooks
    return WebhookIngestionService(
        session_factory=ctx.session_factory,
        dispatcher=ctx.dispatcher,
        scoring_client=ScoringTriggerClient(
            webhooks_config.scoring_endpoint,
            timeout=webhooks_config.request_timeout_seconds
        ),
        require_hmac=webhooks_config.require_hmac,
        error_reporter=ctx.error_reporter
    )


def get_email_event_service(ctx: AppContext = Depends(get_context)) -> EmailEventService:
    return EmailEventService(
        session_factory=ctx.session_factory,
        webhook_secret=ctx.config.email.webhook_secret,
        error_reporter=ctx.error_reporter
    )


async def get_raw_body(request: Request) -> bytes:
    """Unparsed request body, for signature checks over the exact bytes."""
    return await request.body()

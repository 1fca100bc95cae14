#!/usr/bin/env python3
"""
Webhook endpoints - external ATS events and email provider delivery events.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header

from ..dependencies import get_raw_body, get_webhook_service, get_email_event_service
from ..models.responses import WebhookReceivedResponse, WebhookInfoResponse
from ..services.webhook_service import (
    SUPPORTED_EVENTS,
    DELIVERY_EVENTS,
    ENGAGEMENT_EVENTS,
    WebhookIngestionService,
    EmailEventService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/external", response_model=WebhookReceivedResponse)
def receive_external_webhook(
    raw_body: bytes = Depends(get_raw_body),
    x_webhook_signature: Optional[str] = Header(None),
    x_webhook_secret: Optional[str] = Header(None),
    service: WebhookIngestionService = Depends(get_webhook_service)
):
    """
    Receive an event from an integrated system.

    Authenticated by the tenant's registered webhook secret. Every
    authenticated event is logged once, whether or not handling succeeded.
    """
    result = service.ingest(x_webhook_signature, x_webhook_secret, raw_body)
    return WebhookReceivedResponse(**result)


@router.get("/external", response_model=WebhookInfoResponse)
def external_webhook_info():
    return WebhookInfoResponse(
        message="ATS webhook endpoint. POST events with x-webhook-signature and x-webhook-secret headers.",
        events=list(SUPPORTED_EVENTS)
    )


@router.post("/email-provider", response_model=WebhookReceivedResponse)
def receive_email_provider_webhook(
    raw_body: bytes = Depends(get_raw_body),
    resend_signature: Optional[str] = Header(None),
    service: EmailEventService = Depends(get_email_event_service)
):
    """Delivery, bounce and engagement events for sent emails."""
    result = service.handle(raw_body, resend_signature)
    return WebhookReceivedResponse(**result)


@router.get("/email-provider", response_model=WebhookInfoResponse)
def email_provider_webhook_info():
    return WebhookInfoResponse(
        message="Email provider webhook endpoint",
        events=list(DELIVERY_EVENTS) + list(ENGAGEMENT_EVENTS)
    )

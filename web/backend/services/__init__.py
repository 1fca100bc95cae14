"""Business logic services."""

from .listing_service import ListingService
from .scoring_client import ScoringTriggerClient
from .webhook_service import WebhookIngestionService, EmailEventService

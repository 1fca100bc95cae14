"""API route handlers."""

from .assessments import router as assessments_router
from .webhooks import router as webhooks_router
from .jobs import router as jobs_router
from .applications import router as applications_router

import hashlib
import json
import uuid
from typing import Any

from core.exceptions import ValidationError


def stable_json(value: Any) -> str:
    """Serialize with sorted keys so equal mappings always give equal strings."""
    return json.dumps(value, sort_keys=True, separators=(',', ':'), default=str)


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


class ContentFingerprinter:
    """
    Pure logic for creating deterministic cache keys.
    """

    @staticmethod
    def for_filters(filters: Any) -> str:
        """Hash of a filter mapping. Insertion order of keys never matters."""
        return sha256_hex(stable_json(filters))

    @staticmethod
    def for_scoring(content: str, settings: Any) -> str:
        """
        Key for a scoring result.
        Formula: SHA256(content) + "_" + SHA256(stable_json(settings))[:8]
        """
        return f"{sha256_hex(content)}_{sha256_hex(stable_json(settings))[:8]}"


def parse_uuid(value: Any, field: str = "id") -> uuid.UUID:
    """Coerce ``value`` to a UUID. Raises ValidationError for anything else."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"Invalid {field}: {value!r}")

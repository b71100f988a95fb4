"""Read the webhook notification that triggers a transfer.

Until the service is wired to a live Adobe Sign webhook, the notification is
read from a local JSON file with the same shape.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .models import WebhookEvent

__all__ = ["load_webhook_event"]

_LOG = logging.getLogger(__name__)


def load_webhook_event(path: str | Path) -> WebhookEvent:
    """Parse the webhook JSON at *path*.

    Raises:
        FileNotFoundError: fixture missing.
        ValueError: not JSON, no ``agreement.id``, or a malformed ``eventDate``.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ValueError(f"webhook fixture {path} is not valid JSON") from exc
    try:
        event = WebhookEvent.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"webhook fixture {path} is not a valid webhook notification: {exc}") from exc
    _LOG.debug("Loaded webhook event=%s agreement=%s", event.event, event.agreement_id)
    return event

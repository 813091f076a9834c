"""Outbound webhook notifications for new quotes."""
import logging
from typing import Optional

import httpx

from config import settings
from models.quote import Quote

logger = logging.getLogger(__name__)


def notify_quote_created(webhook_url: Optional[str], quote: Quote) -> bool:
    """
    POST {event, quote} to the configured webhook.
    Best-effort: failures are logged and reported as False, never raised.
    """
    if not webhook_url or not webhook_url.strip():
        return False
    payload = {"event": "quote.created", "quote": quote.model_dump(mode="json", by_alias=True)}
    try:
        resp = httpx.post(webhook_url.strip(), json=payload, timeout=settings.WEBHOOK_TIMEOUT_SECONDS)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Webhook delivery for quote %s failed: %s", quote.id, e)
        return False
    logger.info("Webhook notified for quote %s", quote.id)
    return True

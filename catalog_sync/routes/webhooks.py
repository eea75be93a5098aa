# catalog_sync/routes/webhooks.py
"""
Shopify webhook receiver.

Verifies the HMAC signature, then hands the trusted topic, shop and payload
to the sync coordinator and maps the outcome onto a status code Shopify
understands: 200 acknowledges, 4xx rejects, 5xx asks for redelivery.
"""

import base64
import hashlib
import hmac
import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from catalog_sync.core.config import Settings, get_settings
from catalog_sync.core.exceptions import StorageError, ValidationError
from catalog_sync.dependencies import get_coordinator
from catalog_sync.services.sync_coordinator import SyncCoordinator

router = APIRouter(tags=["webhooks"])

logger = logging.getLogger(__name__)


def compute_webhook_hmac(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


async def verify_shopify_webhook(
    request: Request,
    x_shopify_hmac_sha256: str = Header(default=""),
    settings: Settings = Depends(get_settings),
) -> bytes:
    """Verify the webhook signature and return the raw body"""
    if not settings.SHOPIFY_API_SECRET:
        logger.error("SHOPIFY_API_SECRET is not configured; rejecting webhook")
        raise HTTPException(status_code=401, detail="Webhook secret not configured")
    if not x_shopify_hmac_sha256:
        raise HTTPException(status_code=401, detail="No signature provided")

    body = await request.body()
    expected_signature = compute_webhook_hmac(settings.SHOPIFY_API_SECRET, body)

    # Header values arrive latin-1 decoded
    if not hmac.compare_digest(x_shopify_hmac_sha256.encode("latin-1"), expected_signature.encode()):
        raise HTTPException(status_code=401, detail="Invalid signature")
    return body


@router.post("/webhooks/shopify")
async def shopify_webhook(
    x_shopify_topic: str = Header(default=""),
    x_shopify_shop_domain: str = Header(default=""),
    body: bytes = Depends(verify_shopify_webhook),
    coordinator: SyncCoordinator = Depends(get_coordinator),
):
    """Endpoint to receive product webhooks from Shopify"""
    logger.info(f"Webhook received: {x_shopify_topic} from {x_shopify_shop_domain}")

    try:
        payload = json.loads(body or b"{}")
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise HTTPException(status_code=400, detail="Webhook body is not valid JSON")

    try:
        await coordinator.ingest_event(x_shopify_topic, x_shopify_shop_domain, payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to process webhook")

    return {"status": "received"}

"""
Identity provider webhooks.

Clerk delivers user lifecycle events signed with Svix. Created and updated
users are mirrored into the users table; every other event is acknowledged
and ignored.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from svix.webhooks import Webhook, WebhookVerificationError

from hirehub.api.common import SuccessResponse
from hirehub.core.config import settings
from hirehub.core.exceptions import BadRequestException
from hirehub.core.logger import setup_logger
from hirehub.db.session import get_db
from hirehub.services import sync_user

router = APIRouter()
logger = setup_logger("hirehub.webhooks")

SYNCED_EVENTS = ("user.created", "user.updated")


def user_fields(data: dict) -> dict:
    """Map a Clerk user object onto our User columns."""
    emails = data.get("email_addresses") or []
    name = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()
    return {
        "user_id": data.get("id") or "",
        "name": name,
        "email": emails[0].get("email_address", "") if emails else "",
        "image": data.get("image_url") or "",
    }


@router.post("", response_model=SuccessResponse)
async def clerk_webhook(request: Request, db: Session = Depends(get_db)):
    """Verify the Svix signature and apply the user event."""
    if not settings.CLERK_WEBHOOK_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook secret not configured",
        )

    body = await request.body()
    headers = {
        "svix-id": request.headers.get("svix-id", ""),
        "svix-timestamp": request.headers.get("svix-timestamp", ""),
        "svix-signature": request.headers.get("svix-signature", ""),
    }
    try:
        event = Webhook(settings.CLERK_WEBHOOK_SECRET).verify(body, headers)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected webhook {headers['svix-id']}: {e}")
        raise BadRequestException("Invalid webhook signature")

    event_type = event.get("type", "")
    if event_type not in SYNCED_EVENTS:
        logger.info(f"Ignoring webhook event {event_type}")
        return SuccessResponse(message="Event ignored")

    fields = user_fields(event.get("data") or {})
    if not (fields["user_id"] and fields["email"]):
        raise BadRequestException("Webhook user is missing an id or email")

    sync_user(db, **fields)
    return SuccessResponse(message="User synced")

"""
Webhook Routes

POST /webhooks/user-registered - Auth provider sign-up notification
"""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException

from sensai.core.config import get_settings
from sensai.services.email_service import send_registration_mails
from sensai.schemas.schemas import UserRegisteredWebhook, WebhookResponse

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/user-registered", response_model=WebhookResponse)
def user_registered(
    payload: UserRegisteredWebhook,
    x_webhook_secret: Optional[str] = Header(None)
):
    """
    Send the welcome mail and notify the owner.

    When WEBHOOK_SECRET is configured the X-Webhook-Secret header must match.
    """
    if settings.webhook_secret and not hmac.compare_digest(x_webhook_secret or "", settings.webhook_secret):
        raise HTTPException(status_code=401, detail="Invalid webhook secret")

    emails = [e.email_address for e in payload.data.email_addresses if e.email_address]
    if not emails:
        raise HTTPException(status_code=400, detail="Missing user email")

    user_name = payload.data.first_name or "User"
    result = send_registration_mails(emails[0], user_name)
    logger.info("Registration webhook handled for %s", emails[0])

    return WebhookResponse(success=result["welcome_sent"], **result)

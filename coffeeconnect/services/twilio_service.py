"""
Twilio SMS Service
Sends meeting notifications through the Twilio Messaging REST API
"""

import logging
from typing import Optional

import httpx
from sqlalchemy.orm import Session

from .. import config
from ..models import SMSLog

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


def _log_attempt(db: Optional[Session], **fields) -> None:
    """Persist an SMS attempt; logging failures never affect the send result"""
    if db is None:
        return
    try:
        db.add(SMSLog(**fields))
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to record SMS log: {e}")


def send_sms(
    to_phone: str,
    message_body: str,
    message_type: str,
    db: Optional[Session] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> tuple[bool, Optional[str]]:
    """
    Send SMS via Twilio

    Args:
        to_phone: Recipient phone number (must be in E.164 format)
        message_body: SMS message content
        message_type: Type of message (meeting_confirmation, meeting_cancellation, ...)
        db: Optional session used to record the attempt in sms_logs
        entity_type: Optional entity type (Meeting, Timeslot, ...)
        entity_id: Optional entity ID
        client: Optional httpx client (tests inject a MockTransport)

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not to_phone:
        logger.debug("No phone number provided")
        return False, "No phone number provided"

    if not to_phone.startswith("+"):
        logger.warning(f"Phone number not in E.164 format: {to_phone}")
        return False, "Phone number must be in E.164 format (e.g., +1234567890)"

    if not config.SMS_ENABLED:
        logger.debug(f"SMS disabled, skipping {message_type} to {to_phone}")
        return False, "SMS disabled"

    account_sid = config.TWILIO_ACCOUNT_SID
    auth_token = config.TWILIO_AUTH_TOKEN
    if not account_sid or not auth_token:
        logger.debug(f"Twilio not configured, skipping {message_type} to {to_phone}")
        return False, "Twilio not configured"

    data = {"To": to_phone, "Body": message_body}
    if config.TWILIO_MESSAGING_SERVICE_SID:
        data["MessagingServiceSid"] = config.TWILIO_MESSAGING_SERVICE_SID
    elif config.TWILIO_FROM_NUMBER:
        data["From"] = config.TWILIO_FROM_NUMBER
    else:
        logger.warning("Twilio has neither a From number nor a Messaging Service SID")
        return False, "No sender configured"

    log_fields = {
        "to_phone": to_phone,
        "message_body": message_body,
        "message_type": message_type,
        "entity_type": entity_type,
        "entity_id": entity_id,
    }

    try:
        logger.info(f"📱 Sending SMS: type={message_type}, to={to_phone}")
        http = client or httpx.Client(timeout=config.TWILIO_TIMEOUT)
        try:
            response = http.post(
                f"{TWILIO_API_BASE}/Accounts/{account_sid}/Messages.json",
                auth=(account_sid, auth_token),
                data=data,
            )
        finally:
            if client is None:
                http.close()

        logger.info(f"📡 Twilio API response status: {response.status_code}")

        if response.status_code in [200, 201]:
            message_sid = response.json().get("sid")
            _log_attempt(db, twilio_message_sid=message_sid, status="sent", **log_fields)
            logger.info(f"✅ SMS sent successfully: {message_type} to {to_phone} (SID: {message_sid})")
            return True, None

        error_data = response.json()
        error_message = error_data.get("message", "Unknown error")
        error_code = error_data.get("code")
        _log_attempt(
            db,
            status="failed",
            error_message=f"[{error_code}] {error_message}" if error_code else error_message,
            **log_fields,
        )
        logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
        return False, error_message

    except httpx.HTTPError as e:
        logger.error(f"Twilio API error: {str(e)}")
        _log_attempt(db, status="failed", error_message=str(e), **log_fields)
        return False, str(e)
    except Exception as e:
        logger.error(f"Error sending SMS: {str(e)}")
        return False, str(e)

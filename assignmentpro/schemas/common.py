# assignmentpro/schemas/common.py
from typing import Optional

MIN_TELEGRAM_LENGTH = 3
MIN_WHATSAPP_LENGTH = 8

CONTACT_CHANNEL_MESSAGE = (
    "Either Telegram username (min 3 characters) or WhatsApp number (min 8 digits) is required"
)

def blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value

def has_contact_channel(telegram: Optional[str], whatsapp: Optional[str]) -> bool:
    """At least one delivery channel for solutions must be usable"""
    has_telegram = bool(telegram) and len(telegram) >= MIN_TELEGRAM_LENGTH
    has_whatsapp = bool(whatsapp) and len(whatsapp) >= MIN_WHATSAPP_LENGTH
    return has_telegram or has_whatsapp

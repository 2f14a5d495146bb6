"""
Email Service - registration mails over SMTP.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from sensai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def send_mail(to: str, subject: str, text: str) -> bool:
    """Send a plain-text mail. Returns False when mail is not configured or fails."""
    if not settings.email_address or not settings.email_password:
        logger.warning("Email credentials not configured; skipping mail to %s", to)
        return False

    msg = MIMEMultipart()
    msg["From"] = settings.email_address
    msg["To"] = to
    msg["Subject"] = subject
    msg.attach(MIMEText(text, "plain"))

    try:
        with smtplib.SMTP(settings.smtp_server, settings.smtp_port) as server:
            server.starttls()
            server.login(settings.email_address, settings.email_password)
            server.send_message(msg)
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send mail to %s: %s", to, e)
        return False


def send_registration_mails(user_email: str, user_name: str) -> dict:
    """Welcome the new user and notify the owner."""
    welcomed = send_mail(
        to=user_email,
        subject="Welcome to SensAI!",
        text=f"Hi {user_name},\n\nThanks for registering at SensAI!"
    )

    notified = False
    if settings.owner_email:
        notified = send_mail(
            to=settings.owner_email,
            subject="New User Registered",
            text=f"User {user_name} ({user_email}) just registered."
        )

    return {"welcome_sent": welcomed, "owner_notified": notified}

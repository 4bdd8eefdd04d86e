import html
import logging
from typing import Optional

import resend

from app.core.config import Settings

logger = logging.getLogger(__name__)

SIGNUP_SUBJECT = "🚀 New Stable Alpha V.2 Signup"


class EmailService:
    def __init__(self, api_key: str, recipient: str, sender: str):
        # The Resend SDK reads its key from module state
        resend.api_key = api_key
        self.recipient = recipient
        self.sender = sender

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["EmailService"]:
        """Build the service, or return None when Resend is not configured."""
        if not settings.notifications_enabled:
            return None
        return cls(
            api_key=settings.RESEND_API_KEY,
            recipient=settings.SECRET_RECIPIENT_MAIL,
            sender=settings.EMAIL_FROM,
        )

    def send(self, to: str, subject: str, html_body: str) -> bool:
        try:
            resend.Emails.send({
                "from": self.sender,
                "to": [to],
                "subject": subject,
                "html": html_body,
            })
            return True
        except Exception as e:
            logger.error(f"❌ Email send to {to} failed: {e}")
            return False

    def notify_signup(self, email: str) -> bool:
        return self.send(self.recipient, SIGNUP_SUBJECT, render_signup_html(email))


def render_signup_html(email: str) -> str:
    return f"""
    <div style="font-family: Inter, system-ui, sans-serif; padding: 24px; background: #0a0a0a; color: #ededed;">
        <h2 style="margin: 0 0 16px; color: #ffffff;">New Waitlist Signup</h2>
        <p style="margin: 0 0 8px; color: #999999;">Someone joined the Stable Alpha V.2 waitlist:</p>
        <p style="margin: 0; padding: 16px; background: #1a1a1a; border-radius: 8px; font-size: 18px;">
            <strong>{html.escape(email)}</strong>
        </p>
        <p style="margin: 16px 0 0; color: #666666; font-size: 12px;">
            Sent from Anveshan Identity Platform
        </p>
    </div>
    """

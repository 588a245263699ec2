"""
Chefini Email Service.

Handles password-reset OTP and password-changed notifications using the
Resend API.
"""

import asyncio
import logging
from datetime import datetime, timezone

import resend
from settings import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Email service for password reset and account notifications."""

    def __init__(self):
        """Initialize Resend API with API key."""
        resend.api_key = settings.RESEND_API_KEY

    @staticmethod
    def create_otp_email_html(name: str, otp_code: str) -> str:
        """
        Create the HTML body for the password reset OTP email.

        Args:
            name: User's name
            otp_code: 6-digit OTP code

        Returns:
            HTML string
        """
        return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Chefini - Password Reset</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4; color: #333;">
    <table width="100%" cellpadding="0" cellspacing="0" style="padding: 20px;">
        <tr>
            <td align="center">
                <table width="600" cellpadding="0" cellspacing="0" style="max-width: 600px; background: #ffffff; border: 4px solid #000;">
                    <tr>
                        <td align="center" style="background: #FFC72C; padding: 30px;">
                            <h1 style="margin: 0; color: #000; font-size: 36px; font-weight: 900;">CHEFINI</h1>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 40px 30px;">
                            <h2 style="margin: 0 0 16px 0;">Hi {name},</h2>
                            <p style="margin: 0 0 24px 0;">
                                We received a request to reset your Chefini password. Use this code to continue:
                            </p>
                            <div style="background: #FFC72C; border: 4px solid #000; padding: 30px; text-align: center; margin-bottom: 24px;">
                                <span style="font-size: 48px; font-weight: 900; letter-spacing: 8px; font-family: 'Courier New', monospace;">
                                    {otp_code}
                                </span>
                            </div>
                            <p style="background: #FFF3CD; border: 2px solid #000; padding: 15px; margin: 0 0 24px 0;">
                                This code expires in <strong>{settings.OTP_EXPIRY_MINUTES} minutes</strong> and can only be used once.
                            </p>
                            <p style="color: #666; font-size: 13px; margin: 0;">
                                If you didn't request a password reset, you can ignore this email. Your password stays the same.
                            </p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
        """

    @staticmethod
    def create_password_changed_html(name: str, changed_at: datetime) -> str:
        """Create the HTML body for the password-changed confirmation."""
        return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Chefini - Password Changed</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4; color: #333;">
    <table width="100%" cellpadding="0" cellspacing="0" style="padding: 20px;">
        <tr>
            <td align="center">
                <table width="600" cellpadding="0" cellspacing="0" style="max-width: 600px; background: #ffffff; border: 4px solid #000;">
                    <tr>
                        <td align="center" style="background: #FFC72C; padding: 30px;">
                            <h1 style="margin: 0; color: #000; font-size: 36px; font-weight: 900;">CHEFINI</h1>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 40px 30px;">
                            <h2 style="margin: 0 0 16px 0;">Hi {name},</h2>
                            <p style="background: #E5FFE5; border: 3px solid #00AA00; padding: 20px; margin: 0 0 24px 0;">
                                Your password was changed on {changed_at.strftime('%Y-%m-%d %H:%M UTC')}.
                            </p>
                            <p style="background: #FFE5E5; border: 3px solid #FF0000; padding: 20px; margin: 0;">
                                If this wasn't you, reset your password immediately and contact support.
                            </p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
        """

    async def _send(self, params: dict) -> bool:
        try:
            # The Resend SDK is synchronous
            await asyncio.to_thread(resend.Emails.send, params)
            return True
        except Exception as e:
            # Log error but don't expose details to user
            logger.error(f"Failed to send email '{params.get('subject')}': {e}")
            return False

    async def send_password_reset_otp(
        self,
        to_email: str,
        name: str,
        otp_code: str
    ) -> bool:
        """
        Send password reset OTP email using Resend.

        Args:
            to_email: Recipient email address
            name: Recipient's name
            otp_code: 6-digit OTP code (plaintext only travels in this email)

        Returns:
            True if email sent successfully, False otherwise
        """
        logger.info(f"Sending password reset code to {to_email}")
        return await self._send({
            "from": settings.EMAIL_FROM,
            "to": [to_email],
            "subject": "Your Chefini Password Reset OTP",
            "text": f"Your OTP is {otp_code}. It expires in {settings.OTP_EXPIRY_MINUTES} minutes.",
            "html": self.create_otp_email_html(name, otp_code),
        })

    async def send_password_changed_email(self, to_email: str, name: str) -> bool:
        """
        Send password-changed confirmation.

        Returns:
            True if email sent successfully, False otherwise
        """
        changed_at = datetime.now(timezone.utc)
        return await self._send({
            "from": settings.EMAIL_FROM,
            "to": [to_email],
            "subject": "Your Chefini Password Was Changed",
            "text": f"Hi {name}, your password was changed successfully on {changed_at.isoformat()}.",
            "html": self.create_password_changed_html(name, changed_at),
        })


# Singleton instance
email_service = EmailService()

# FILE: backend/secondbrain/services/email_service.py
# 1. USES: Standard 'smtplib' with STARTTLS.
# 2. ASYNC: Callers run these functions via asyncio.to_thread.
# 3. Delivery is best effort: a failed send is logged, never raised.

import smtplib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from ..core.config import settings

logger = logging.getLogger(__name__)

def send_email_sync(to: str, subject: str, html_body: str) -> bool:
    if not settings.SMTP_USER or not settings.SMTP_PASSWORD:
        logger.warning("Email configuration missing. Skipping email to %s.", to)
        return False

    try:
        msg = MIMEMultipart()
        msg['From'] = settings.SMTP_USER
        msg['To'] = to
        msg['Subject'] = subject
        msg.attach(MIMEText(html_body, 'html'))

        with smtplib.SMTP(settings.SMTP_SERVER, settings.SMTP_PORT, timeout=15) as server:
            server.starttls()
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.send_message(msg)

        logger.info(f"📧 Email '{subject}' sent to {to}")
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to}: {e}")
        return False

def send_verification_code(to: str, username: str, code: str) -> bool:
    html = f"<h1>Welcome {username}</h1><p>Please verify your email with the given code: <b>{code}</b></p>"
    return send_email_sync(to, "Email Verification Code", html)

def send_password_reset_code(to: str, username: str, code: str) -> bool:
    html = f"<h1>Hello {username}</h1><p>Use this code to reset your password: <b>{code}</b></p>"
    return send_email_sync(to, "Password Reset Code", html)

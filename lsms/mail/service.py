"""
Mail dispatch for lecturer notifications: welcome mail on signup, credentials on
password recovery, login OTPs and account-approval (KYC) requests.

Delivery failures are logged and reported as False; nothing is retried.
"""
import os
import logging
from dataclasses import dataclass
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

import aiosmtplib

from lsms.config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
    # Set to reference the attachment from HTML as cid:<content_id>
    content_id: Optional[str] = None


def load_logo_attachment() -> Optional[Attachment]:
    """The logo embedded in the HTML mails, if the image is present on disk."""
    if not settings.LOGO_PATH or not os.path.exists(settings.LOGO_PATH):
        return None
    with open(settings.LOGO_PATH, "rb") as f:
        return Attachment(
            filename=os.path.basename(settings.LOGO_PATH),
            content=f.read(),
            content_type="image/png",
            content_id="landmarklogo",
        )


class MailService:
    """Async SMTP mail service"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.from_email = settings.EMAIL_FROM or settings.SMTP_USER
        self.from_name = settings.EMAIL_FROM_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_password)

    def build_message(
        self,
        to_email: str,
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
        from_name: Optional[str] = None,
    ) -> MIMEMultipart:
        message = MIMEMultipart("mixed")
        message["From"] = f"{from_name or self.from_name} <{self.from_email}>"
        message["To"] = to_email
        message["Subject"] = subject

        body = MIMEMultipart("alternative")
        if text_content:
            body.attach(MIMEText(text_content, "plain"))
        if html_content:
            body.attach(MIMEText(html_content, "html"))
        message.attach(body)

        for attachment in attachments or []:
            maintype, _, subtype = attachment.content_type.partition("/")
            part = MIMEBase(maintype, subtype or "octet-stream")
            part.set_payload(attachment.content)
            encoders.encode_base64(part)
            if attachment.content_id:
                part.add_header("Content-ID", f"<{attachment.content_id}>")
                part.add_header("Content-Disposition", "inline", filename=attachment.filename)
            else:
                part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            message.attach(part)

        return message

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
        from_name: Optional[str] = None,
    ) -> bool:
        """
        Send an email asynchronously.

        Returns True if successful, False otherwise.
        """
        if not self.is_configured:
            logger.warning(f"Mail service not configured, skipping '{subject}' to {to_email}")
            return False

        try:
            message = self.build_message(to_email, subject, html_content, text_content, attachments, from_name)
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=settings.SMTP_USE_TLS,
                timeout=settings.SMTP_TIMEOUT,
            )
            logger.info(f"Sent email to {to_email}: {subject}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False


_mail_service = None


def get_mail_service() -> MailService:
    """FastAPI dependency returning the shared mail service."""
    global _mail_service
    if _mail_service is None:
        _mail_service = MailService()
    return _mail_service

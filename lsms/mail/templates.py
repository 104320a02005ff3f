from html import escape
from typing import Tuple

from lsms.config.settings import settings

_NAVY = "#0a2342"


def _layout(greeting_name: str, inner_html: str) -> str:
    return f"""
<div style="max-width:700px;margin:40px auto;background:#fff;border-radius:18px;font-family:'Segoe UI',Arial,sans-serif;overflow:hidden;border:1px solid #e0e6ed;">
    <div style="background:{_NAVY};padding:40px 0 24px 0;text-align:center;">
        <img src="cid:landmarklogo" alt="Landmark Logo" width="90" height="90" style="border-radius:50%;background:#fff;margin-bottom:12px;">
        <h1 style="color:#fff;margin:0;font-weight:700;font-size:2em;">Landmark Student Management System</h1>
    </div>
    <div style="padding:36px 40px 24px 40px;color:{_NAVY};">
        <h2 style="margin-top:0;font-size:1.3em;">Welcome, {escape(greeting_name)}!</h2>
        {inner_html}
        <div style="text-align:center;margin:32px 0;">
            <a href="{escape(settings.LANDING_PAGE_URL)}" style="background:{_NAVY};color:#fff;text-decoration:none;padding:14px 36px;border-radius:24px;font-weight:600;">Visit Website</a>
        </div>
        <p>Best regards,<br>Landmark Student Record Team</p>
    </div>
    <div style="background:{_NAVY};color:#fff;text-align:center;padding:14px 0;">
        &copy; Landmark Student Management System
    </div>
</div>
"""


def _portal_credentials() -> str:
    return (
        f"<p><b>LSMS_Email:</b> {escape(settings.PORTAL_EMAIL)}<br>"
        f"<b>LSMS_password:</b> {escape(settings.PORTAL_PASSWORD)}</p>"
    )


def welcome_email(lec_name: str) -> Tuple[str, str]:
    """Subject and HTML body sent after a lecturer signs up."""
    inner = (
        "<p>Your lecturer account has been created successfully.<br>"
        "You can now login with the credential below:</p>" + _portal_credentials()
    )
    return "Welcome to Landmark Student Management System", _layout(lec_name, inner)


def credentials_email(lec_name: str) -> Tuple[str, str]:
    inner = "<p>Your lecturer account credentials:</p>" + _portal_credentials()
    return "Your LSMS Account Credentials", _layout(lec_name, inner)


def otp_email(otp: str, ttl_seconds: int) -> Tuple[str, str]:
    minutes = max(1, ttl_seconds // 60)
    unit = "minute" if minutes == 1 else "minutes"
    text = f"Your LSMS login OTP is: {otp}\n\nThis code is valid for {minutes} {unit}."
    return "Your LSMS Login OTP", text


def kyc_email(user_email: str) -> Tuple[str, str]:
    text = (
        "Greetings sir/madam, I am a lecturer at landmark, and I want your permission "
        f"to create an account in the LSMS.\n\nMy email address is: {user_email}"
    )
    return "LSMS Account Approval Request", text

"""
One-time login codes.

Per email the challenge moves NoChallenge -> Issued -> Consumed | Expired.
Expiry is only checked when a code is validated; stale entries stay in
`otp_temp.json` until the next issuance overwrites them.
"""
import random
import time
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import Depends

from lsms.config.levels import OTP_FILE
from lsms.config.settings import settings
from lsms.exceptions import ValidationError, LecturerNotFound, NoChallenge, ChallengeExpired, OtpMismatch
from lsms.lecturers.directory import LecturerDirectory
from lsms.mail.service import MailService
from lsms.mail.templates import otp_email
from lsms.storage import JsonStore, get_store

logger = logging.getLogger(__name__)


@dataclass
class OtpChallenge:
    otp: str
    expires: int  # epoch milliseconds


def generate_otp() -> str:
    """Four-digit code. Not cryptographically strong."""
    return str(random.randint(1000, 9999))


class OtpService:
    def __init__(
        self,
        store: JsonStore,
        directory: LecturerDirectory,
        clock: Callable[[], float] = time.time,
        ttl_seconds: Optional[int] = None,
    ):
        self.store = store
        self.directory = directory
        self.clock = clock
        self.ttl_seconds = settings.OTP_TTL_SECONDS if ttl_seconds is None else ttl_seconds

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _read(self) -> Dict[str, Any]:
        challenges = self.store.read(OTP_FILE, default={})
        return challenges if isinstance(challenges, dict) else {}

    def _require_lecturer(self, email: Optional[str], message: str) -> str:
        if not email:
            raise ValidationError("Email required.")
        if not self.directory.email_exists(email):
            raise LecturerNotFound(message)
        return email.strip().lower()

    def get(self, email: str) -> Optional[OtpChallenge]:
        record = self._read().get(email.strip().lower())
        if not isinstance(record, dict):
            return None
        return OtpChallenge(otp=str(record.get("otp")), expires=int(record.get("expires", 0)))

    def issue(self, email: Optional[str]) -> OtpChallenge:
        """Store a fresh code for a registered lecturer, replacing any earlier one."""
        key = self._require_lecturer(email, "Email not found in lecturer records.")
        challenge = OtpChallenge(otp=generate_otp(), expires=self._now_ms() + self.ttl_seconds * 1000)
        with self.store.lock:
            challenges = self._read()
            challenges[key] = {"otp": challenge.otp, "expires": challenge.expires}
            self.store.write(OTP_FILE, challenges)
        logger.info(f"Issued OTP for {key}, expires at {challenge.expires}")
        return challenge

    async def send(self, email: Optional[str], mail_service: MailService) -> bool:
        """
        Issue a code and mail it. Returns whether the mail went out; the stored
        challenge stays valid even when delivery fails.
        """
        challenge = self.issue(email)
        subject, text = otp_email(challenge.otp, self.ttl_seconds)
        return await mail_service.send_email(email, subject, text_content=text)

    def validate(self, email: Optional[str], otp: Any) -> None:
        """Raise unless `otp` is the live code for `email`. A match consumes the code."""
        key = self._require_lecturer(email, "Lecturer email not found.")
        with self.store.lock:
            challenges = self._read()
            record = challenges.get(key)
            if not isinstance(record, dict):
                raise NoChallenge()
            if self._now_ms() > int(record.get("expires", 0)):
                raise ChallengeExpired()
            if otp is None or str(record.get("otp")) != str(otp).strip():
                raise OtpMismatch()

            del challenges[key]
            self.store.write(OTP_FILE, challenges)
        logger.info(f"OTP validated for {key}")


def get_otp_service(store: JsonStore = Depends(get_store)) -> OtpService:
    return OtpService(store, LecturerDirectory(store))

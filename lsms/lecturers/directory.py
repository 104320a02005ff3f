from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends

from lsms.config.levels import LECTURER_FILE, LOAD_LECTURER_FILE
from lsms.exceptions import ValidationError, DuplicateEmail, AuthError
from lsms.storage import JsonStore, get_store

logger = logging.getLogger(__name__)


def _same_email(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


class LecturerDirectory:
    """
    Lecturer accounts.

    `Lecturer.json` is the canonical list. `load_lecturer.json` is a mirror used
    only by login, and is rewritten from the canonical list on every write.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def _read(self, name: str) -> List[Dict[str, Any]]:
        lecturers = self.store.read(name, default=[])
        return lecturers if isinstance(lecturers, list) else []

    def list(self) -> List[Dict[str, Any]]:
        return self._read(LECTURER_FILE)

    def mirror(self) -> List[Dict[str, Any]]:
        return self._read(LOAD_LECTURER_FILE)

    def _save(self, lecturers: List[Dict[str, Any]]) -> None:
        self.store.write(LECTURER_FILE, lecturers)
        self.store.write(LOAD_LECTURER_FILE, lecturers)

    def get(self, email: Optional[str]) -> Optional[Dict[str, Any]]:
        for lecturer in self.list():
            if _same_email(lecturer.get("signin_email"), email):
                return lecturer
        return None

    def email_exists(self, email: Optional[str]) -> bool:
        return self.get(email) is not None

    def signup(self, lec_name: Optional[str], signin_email: Optional[str], signin_password: Optional[str]) -> Dict[str, Any]:
        if not lec_name or not signin_email or not signin_password:
            raise ValidationError("All fields are required.")

        account = {
            "lec_name": lec_name,
            "signin_email": signin_email,
            "signin_password": signin_password,
        }
        with self.store.lock:
            lecturers = self.list()
            if any(_same_email(l.get("signin_email"), signin_email) for l in lecturers):
                raise DuplicateEmail()
            lecturers.append(account)
            self._save(lecturers)

        logger.info(f"Registered lecturer {signin_email} ({len(lecturers)} accounts)")
        return account

    def login(self, signin_email: Optional[str], signin_password: Optional[str]) -> str:
        """Exact email and password match against the mirror. Returns the lecturer's name."""
        if not signin_email or not signin_password:
            raise ValidationError("Email and password are required.")

        for lecturer in self.mirror():
            if lecturer.get("signin_email") == signin_email and lecturer.get("signin_password") == signin_password:
                return lecturer.get("lec_name")

        logger.info(f"Failed login for {signin_email}")
        raise AuthError("Invalid email or password.")


def get_lecturer_directory(store: JsonStore = Depends(get_store)) -> LecturerDirectory:
    return LecturerDirectory(store)

import os
import pytest

os.environ.setdefault("APP_ENV", "development")

from fastapi.testclient import TestClient

from lsms.main import create_app
from lsms.mail.service import get_mail_service
from lsms.storage import JsonStore, get_store


class FakeMailService:
    """Stands in for SMTP; records every message and can be told to fail."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_email(self, to_email, subject, html_content=None, text_content=None,
                         attachments=None, from_name=None):
        if self.fail:
            return False
        self.sent.append({
            "to": to_email,
            "subject": subject,
            "html": html_content,
            "text": text_content,
            "attachments": attachments or [],
        })
        return True


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture()
def store(tmp_path):
    return JsonStore(str(tmp_path / "data"))


@pytest.fixture()
def mail():
    return FakeMailService()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def client(store, mail):
    """
    Provides a TestClient whose store lives in a temp directory and whose
    mail goes to the fake mail service.
    """
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_mail_service] = lambda: mail
    yield TestClient(app)
    app.dependency_overrides.clear()

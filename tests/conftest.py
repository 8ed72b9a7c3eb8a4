import pytest

from app import create_app
from config import TestConfig
from models import db


class RecordingDispatcher:
    """Stands in for the email sender and keeps every plaintext code it was handed."""

    def __init__(self, result=(True, None), exc=None):
        self.result = result
        self.exc = exc
        self.calls = []

    def __call__(self, to_email, code, app_logo, app_name, purpose):
        self.calls.append(
            {"to": to_email, "code": code, "logo": app_logo, "name": app_name, "purpose": purpose}
        )
        if self.exc is not None:
            raise self.exc
        return self.result

    @property
    def last_code(self):
        return self.calls[-1]["code"]


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def branding():
    return lambda: {"app_logo": "https://cdn.example.com/logo.png", "app_name": "Example Estates"}

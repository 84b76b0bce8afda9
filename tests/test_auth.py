"""Tests for app.services.auth credential checking."""

from app.config import Settings
from app.services.auth import hash_password, verify_credentials

_HASH = hash_password("kudu-2024")


def _settings(**overrides) -> Settings:
    values = {"admin_username": "admin", "admin_password_hash": _HASH}
    values.update(overrides)
    return Settings(**values)


class TestVerifyCredentials:
    def test_correct_credentials(self):
        assert verify_credentials("admin", "kudu-2024", _settings()) is True

    def test_wrong_password(self):
        assert verify_credentials("admin", "password123", _settings()) is False

    def test_wrong_username(self):
        assert verify_credentials("root", "kudu-2024", _settings()) is False

    def test_no_hash_configured_rejects_everything(self):
        assert verify_credentials("admin", "", _settings(admin_password_hash=None)) is False

    def test_malformed_hash_rejects(self):
        assert verify_credentials("admin", "kudu-2024", _settings(admin_password_hash="plain")) is False

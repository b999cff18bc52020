"""Shared helpers for tests (user creation, fake Redis, uploads, temp media)."""

from __future__ import annotations

import shutil
import tempfile
from typing import Dict
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from authentication.services import get_token_service
from users.managers import UserManager

User = get_user_model()

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01"
    b"\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


class FakeRedis:
    """Minimal Redis stub supporting the commands used by the token denylist."""

    def __init__(self):
        self._store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; the TTL is recorded but never enforced."""
        self._store[key] = value
        self.ttls[key] = ttl_seconds

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)

    def clear(self) -> None:
        self._store.clear()
        self.ttls.clear()


def create_user(email: str, password: str = "password123", name: str = "Test User", **extra):
    """Create a user with a bcrypt-hashed password for tests."""

    return User.objects.create(
        email=email,
        name=name,
        password_hash=UserManager.hash_password(password),
        **extra,
    )


def image_upload(name: str = "picture.png", content: bytes = PNG_BYTES) -> SimpleUploadedFile:
    return SimpleUploadedFile(name, content, content_type="image/png")


@override_settings(BCRYPT_ROUNDS=4)
class APITestCase(TestCase):
    """Base case: in-memory denylist and a throwaway MEDIA_ROOT per test class."""

    @classmethod
    def setUpClass(cls):
        """Patch the Redis client and point uploads at a temporary directory."""
        cls.fake_redis = FakeRedis()
        cls.media_root = tempfile.mkdtemp(prefix="content-api-media-")
        cls.patchers = [
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()
        cls.media_override = override_settings(MEDIA_ROOT=cls.media_root)
        cls.media_override.enable()
        super().setUpClass()

    @classmethod
    def tearDownClass(cls):
        """Stop patches and remove uploaded files after all tests complete."""
        super().tearDownClass()
        cls.media_override.disable()
        for patcher in cls.patchers:
            patcher.stop()
        shutil.rmtree(cls.media_root, ignore_errors=True)

    def setUp(self):
        """Fresh DRF APIClient and empty denylist per test."""
        self.fake_redis.clear()
        self.api_client: APIClient = APIClient()

    @staticmethod
    def auth_client(user) -> APIClient:
        """Return an APIClient authenticated with a fresh bearer token."""
        token = get_token_service().issue(user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

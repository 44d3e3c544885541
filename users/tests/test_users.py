import time
import uuid

import jwt
import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

User = get_user_model()

ISSUER = "https://idp.example.test"


def make_token(sub, **claims):
    payload = {"sub": sub, "iss": ISSUER, "exp": int(time.time()) + 3600, **claims}
    return jwt.encode(payload, settings.SIMPLE_JWT["SIGNING_KEY"], algorithm="HS256")


@pytest.mark.django_db
class TestStoreUser:
    URL = "/api/v1/users/store/"

    def setup_method(self):
        self.client = APIClient()

    def _auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_store_creates_user_from_identity(self):
        self._auth(make_token("abc", name="Ada", email="ada@example.test", picture="https://img.test/a.png"))
        res = self.client.post(self.URL)
        assert res.status_code == 200

        user = User.objects.get(id=res.json()["id"])
        assert user.token_identifier == f"{ISSUER}|abc"
        assert user.name == "Ada"
        assert user.email == "ada@example.test"
        assert user.image_url == "https://img.test/a.png"
        assert user.username is None

    def test_store_is_idempotent_and_patches_name(self):
        self._auth(make_token("abc", name="Ada"))
        first = self.client.post(self.URL).json()["id"]

        self._auth(make_token("abc", name="Ada Lovelace"))
        second = self.client.post(self.URL).json()["id"]

        assert first == second
        assert User.objects.count() == 1
        assert User.objects.get(id=first).name == "Ada Lovelace"

    def test_store_without_name_uses_anonymous(self):
        self._auth(make_token("noname"))
        user_id = self.client.post(self.URL).json()["id"]
        assert User.objects.get(id=user_id).name == "Anonymous"

    def test_store_requires_identity(self):
        res = self.client.post(self.URL)
        assert res.status_code == 401
        assert res.json()["detail"] == "Called storeUser without authentication present"

    def test_invalid_token_is_rejected(self):
        self._auth("not-a-jwt")
        assert self.client.post(self.URL).status_code == 401


@pytest.mark.django_db
class TestCurrentUser:
    URL = "/api/v1/users/me/"

    def setup_method(self):
        self.client = APIClient()

    def test_me_returns_profile(self):
        user = User.objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name="Grace", username="grace")
        self.client.force_authenticate(user)

        res = self.client.get(self.URL)
        assert res.status_code == 200
        body = res.json()
        assert body["id"] == str(user.id)
        assert body["username"] == "grace"
        assert isinstance(body["createdAt"], int)
        assert set(body) == {"id", "name", "email", "username", "imageUrl", "createdAt", "lastActiveAt"}

    def test_me_without_authentication(self):
        res = self.client.get(self.URL)
        assert res.status_code == 401
        assert res.json()["detail"] == "Not authenticated"

    def test_me_with_identity_but_no_record(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token('ghost')}")
        res = self.client.get(self.URL)
        assert res.status_code == 404
        assert res.json()["detail"] == "User not found"

    def test_token_resolves_existing_record(self):
        user = User.objects.create_user(token_identifier=f"{ISSUER}|known", name="Known")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token('known')}")
        res = self.client.get(self.URL)
        assert res.status_code == 200
        assert res.json()["id"] == str(user.id)


@pytest.mark.django_db
class TestUpdateUsername:
    URL = "/api/v1/users/me/username/"

    def setup_method(self):
        self.client = APIClient()
        self.user = User.objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name="Me")
        self.client.force_authenticate(self.user)

    def _patch(self, username):
        return self.client.patch(self.URL, {"username": username}, format="json")

    def test_sets_username(self):
        res = self._patch("ink_writer-1")
        assert res.status_code == 200
        assert res.json() == {"id": str(self.user.id)}
        self.user.refresh_from_db()
        assert self.user.username == "ink_writer-1"

    def test_rejects_invalid_characters(self):
        res = self._patch("bad name!")
        assert res.status_code == 400
        assert "Username can only contain letters, numbers, underscores, and hyphens" in str(res.content)

    def test_format_is_checked_before_length(self):
        res = self._patch("a!")
        assert "Username can only contain letters" in str(res.content)

    @pytest.mark.parametrize("username", ["ab", "a" * 21])
    def test_rejects_bad_length(self, username):
        res = self._patch(username)
        assert res.status_code == 400
        assert "Username must be between 3 and 20 characters" in str(res.content)

    def test_rejects_taken_username(self):
        User.objects.create_user(token_identifier=f"test|{uuid.uuid4()}", username="taken")
        res = self._patch("taken")
        assert res.status_code == 400
        assert "Username is already taken" in str(res.content)

    def test_keeping_own_username_is_allowed(self):
        self.user.username = "mine"
        self.user.save(update_fields=["username"])
        assert self._patch("mine").status_code == 200

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        assert self._patch("someone").status_code == 401

import uuid

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from posts.models import Post, PostStatus

pytestmark = pytest.mark.django_db

BASE = "/api/v1/posts/"


# ---------- Fixtures ----------
@pytest.fixture
def user():
    return get_user_model().objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name="Writer", username="writer")


@pytest.fixture
def other_user():
    return get_user_model().objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name="Other", username="other")


@pytest.fixture
def auth_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


def _create(client, **overrides):
    payload = {"title": "Hello", "content": "<p>body</p>", "status": "draft", **overrides}
    return client.post(BASE, payload, format="json")


# ---------- create ----------
def test_create_published_post_sets_published_at(auth_client, user):
    res = _create(auth_client, status="published", tags=["intro"], category="life")
    assert res.status_code == 201

    post = Post.objects.get(id=res.json()["id"])
    assert post.author_id == user.id
    assert post.status == PostStatus.PUBLISHED
    assert post.published_at is not None
    assert post.tags == ["intro"]
    assert post.category == "life"


def test_create_draft_has_no_published_at(auth_client):
    res = _create(auth_client)
    post = Post.objects.get(id=res.json()["id"])
    assert post.status == PostStatus.DRAFT
    assert post.published_at is None


def test_second_draft_reuses_existing_draft(auth_client, user):
    first = _create(auth_client, title="v1").json()["id"]
    second = _create(auth_client, title="v2", content="<p>v2</p>").json()["id"]

    assert first == second
    drafts = Post.objects.filter(author=user, status=PostStatus.DRAFT)
    assert drafts.count() == 1
    assert drafts.get().title == "v2"


def test_publishing_with_existing_draft_converts_it(auth_client, user):
    draft_id = _create(auth_client, title="draft").json()["id"]
    res = _create(auth_client, title="final", status="published")

    assert res.json()["id"] == draft_id
    post = Post.objects.get(id=draft_id)
    assert post.status == PostStatus.PUBLISHED
    assert post.title == "final"
    assert post.published_at is not None
    assert Post.objects.filter(author=user).count() == 1


def test_scheduled_for_is_stored_from_epoch_ms(auth_client):
    res = _create(auth_client, scheduledFor=1_700_000_000_000)
    post = Post.objects.get(id=res.json()["id"])
    assert int(post.scheduled_for.timestamp() * 1000) == 1_700_000_000_000


@pytest.mark.parametrize("title", ["", "   "])
def test_title_is_required(auth_client, title):
    res = _create(auth_client, title=title)
    assert res.status_code == 400
    assert "Title is required" in str(res.content)


@pytest.mark.parametrize("content", ["", "   ", "<p><br></p>"])
def test_publish_requires_content(auth_client, content):
    res = _create(auth_client, status="published", content=content)
    assert res.status_code == 400
    assert "Content is required to publish" in str(res.content)
    assert Post.objects.count() == 0


def test_draft_allows_empty_content(auth_client):
    assert _create(auth_client, content="").status_code == 201


def test_create_requires_authentication():
    res = APIClient().post(BASE, {"title": "t", "content": "c", "status": "draft"}, format="json")
    assert res.status_code == 401


# ---------- update / delete ----------
def test_update_publishes_draft_once(auth_client):
    post_id = _create(auth_client).json()["id"]

    res = auth_client.patch(f"{BASE}{post_id}/", {"status": "published"}, format="json")
    assert res.status_code == 200
    first = Post.objects.get(id=post_id).published_at
    assert first is not None

    auth_client.patch(f"{BASE}{post_id}/", {"title": "edited", "status": "published"}, format="json")
    post = Post.objects.get(id=post_id)
    assert post.published_at == first
    assert post.title == "edited"


def test_update_only_touches_given_fields(auth_client):
    post_id = _create(auth_client, tags=["a"]).json()["id"]
    auth_client.patch(f"{BASE}{post_id}/", {"category": "tech"}, format="json")

    post = Post.objects.get(id=post_id)
    assert post.category == "tech"
    assert post.tags == ["a"]
    assert post.title == "Hello"


def test_update_rejects_blank_title(auth_client):
    post_id = _create(auth_client).json()["id"]
    res = auth_client.patch(f"{BASE}{post_id}/", {"title": " "}, format="json")
    assert res.status_code == 400
    assert "Title is required" in str(res.content)


def test_update_by_other_user_is_forbidden(auth_client, other_user):
    post_id = _create(auth_client).json()["id"]
    c = APIClient()
    c.force_authenticate(other_user)
    res = c.patch(f"{BASE}{post_id}/", {"title": "hijack"}, format="json")
    assert res.status_code == 403
    assert res.json()["detail"] == "Not authorized"


def test_update_missing_post(auth_client):
    res = auth_client.patch(f"{BASE}{uuid.uuid4()}/", {"title": "x"}, format="json")
    assert res.status_code == 404
    assert res.json()["detail"] == "Post not found"


def test_delete_post(auth_client, other_user):
    post_id = _create(auth_client).json()["id"]

    c = APIClient()
    c.force_authenticate(other_user)
    assert c.delete(f"{BASE}{post_id}/").status_code == 403

    res = auth_client.delete(f"{BASE}{post_id}/")
    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert not Post.objects.filter(id=post_id).exists()

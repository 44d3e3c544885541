import uuid

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from comments.models import Comment
from comments.services import list_post_comments
from posts.models import Post, PostStatus

User = get_user_model()


@pytest.mark.django_db
class TestCommentsAPI:
    def setup_method(self):
        self.client = APIClient()
        self.author = self._make_user("Author", "author")
        self.reader = self._make_user("Reader", "reader")
        self.post = self._make_post(self.author)

    def _make_user(self, name, username=None):
        return User.objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name=name, email=f"{name.lower()}@example.test", username=username)

    def _make_post(self, author, status=PostStatus.PUBLISHED):
        return Post.objects.create(
            author=author,
            title="t",
            content="<p>c</p>",
            status=status,
            published_at=timezone.now() if status == PostStatus.PUBLISHED else None,
        )

    def _list_url(self, post_id=None):
        return f"/api/v1/posts/{post_id or self.post.id}/comments/"

    def _create(self, user, content, post_id=None):
        self.client.force_authenticate(user=user)
        return self.client.post(self._list_url(post_id), {"content": content}, format="json")

    # ---- create ----
    def test_create_comment_success(self):
        res = self._create(self.reader, "  nice post  ")
        assert res.status_code == 201

        comment = Comment.objects.get(id=res.json()["id"])
        assert comment.content == "nice post"
        assert comment.author_name == "Reader"
        assert comment.author_email == "reader@example.test"
        assert comment.status == "approved"

    def test_create_requires_login(self):
        res = self._create(None, "hi")
        assert res.status_code == 401
        assert res.json()["detail"] == "Must be logged in to comment"

    def test_create_on_draft_or_missing_post(self):
        draft = self._make_post(self.author, status=PostStatus.DRAFT)
        for post_id in (draft.id, uuid.uuid4()):
            res = self._create(self.reader, "hi", post_id=post_id)
            assert res.status_code == 404
            assert res.json()["detail"] == "Post not found or not published"

    @pytest.mark.parametrize("content", ["", "   ", "x" * 1001])
    def test_create_rejects_bad_length(self, content):
        res = self._create(self.reader, content)
        assert res.status_code == 400
        assert "Comment must be between 1-1000 characters" in str(res.content)
        assert Comment.objects.count() == 0

    def test_create_accepts_max_length(self):
        assert self._create(self.reader, "x" * 1000).status_code == 201

    # ---- list ----
    def test_list_oldest_first_with_author(self):
        first = self._create(self.reader, "first").json()["id"]
        second = self._create(self.author, "second").json()["id"]

        self.client.force_authenticate(None)
        res = self.client.get(self._list_url())
        assert res.status_code == 200
        body = res.json()
        assert [c["id"] for c in body] == [first, second]
        assert body[0]["author"] == {"id": str(self.reader.id), "name": "Reader", "username": "reader", "imageUrl": None}
        assert isinstance(body[0]["createdAt"], int)

    def test_list_hides_comments_of_deleted_users(self):
        self._create(self.reader, "gone soon")
        kept = self._create(self.author, "stays").json()["id"]
        self.reader.delete()

        assert Comment.objects.count() == 2
        assert [str(c.id) for c in list_post_comments(self.post.id)] == [kept]
        self.client.force_authenticate(None)
        assert [c["id"] for c in self.client.get(self._list_url()).json()] == [kept]

    # ---- delete ----
    def test_comment_author_can_delete(self):
        comment_id = self._create(self.reader, "mine").json()["id"]
        res = self.client.delete(f"/api/v1/comments/{comment_id}/")
        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert not Comment.objects.filter(id=comment_id).exists()

    def test_post_author_can_delete(self):
        comment_id = self._create(self.reader, "on your post").json()["id"]
        self.client.force_authenticate(self.author)
        assert self.client.delete(f"/api/v1/comments/{comment_id}/").status_code == 200

    def test_stranger_cannot_delete(self):
        comment_id = self._create(self.reader, "hands off").json()["id"]
        stranger = self._make_user("Stranger")
        self.client.force_authenticate(stranger)
        res = self.client.delete(f"/api/v1/comments/{comment_id}/")
        assert res.status_code == 403
        assert res.json()["detail"] == "Not authorized to delete this comment"
        assert Comment.objects.filter(id=comment_id).exists()

    def test_delete_missing_comment(self):
        self.client.force_authenticate(self.reader)
        res = self.client.delete(f"/api/v1/comments/{uuid.uuid4()}/")
        assert res.status_code == 404
        assert res.json()["detail"] == "Comment not found"

    def test_delete_requires_login(self):
        comment_id = self._create(self.reader, "x").json()["id"]
        self.client.force_authenticate(None)
        assert self.client.delete(f"/api/v1/comments/{comment_id}/").status_code == 401

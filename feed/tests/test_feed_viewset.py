import uuid
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from feed.services import get_suggested_users, get_trending_posts
from posts.models import Post, PostStatus
from relations.models import Follow

User = get_user_model()


def make_user(name="user", username=None):
    return User.objects.create_user(token_identifier=f"test|{uuid.uuid4()}", name=name, username=username)


def make_post(author, *, status=PostStatus.PUBLISHED, days_ago=0, views=0, likes=0, title="post"):
    published_at = timezone.now() - timedelta(days=days_ago) if status == PostStatus.PUBLISHED else None
    post = Post.objects.create(
        author=author,
        title=title,
        content="<p>body</p>",
        status=status,
        published_at=published_at,
        view_count=views,
        like_count=likes,
    )
    # created_at 은 auto_now_add 라 생성 후 보정
    Post.objects.filter(pk=post.pk).update(created_at=timezone.now() - timedelta(days=days_ago))
    post.refresh_from_db()
    return post


@pytest.mark.django_db
class TestFeedAPI:
    BASE = "/api/v1/feed/"

    def setup_method(self):
        self.client = APIClient()
        self.author = make_user("Author", "author")

    def test_feed_has_more_when_more_than_limit(self):
        for i in range(11):
            make_post(self.author, title=f"p{i}")

        res = self.client.get(self.BASE, {"limit": 10})
        assert res.status_code == 200
        body = res.json()
        assert body["hasMore"] is True
        assert len(body["posts"]) == 10

    def test_feed_exact_limit_has_no_more(self):
        for i in range(10):
            make_post(self.author, title=f"p{i}")

        body = self.client.get(self.BASE, {"limit": 10}).json()
        assert body["hasMore"] is False
        assert len(body["posts"]) == 10

    def test_feed_excludes_drafts_and_attaches_author(self):
        make_post(self.author, status=PostStatus.DRAFT, title="draft")
        published = make_post(self.author, title="live")

        body = self.client.get(self.BASE).json()
        assert [p["id"] for p in body["posts"]] == [str(published.id)]
        author = body["posts"][0]["author"]
        assert author["id"] == str(self.author.id)
        assert author["username"] == "author"
        assert "imageUrl" in author

    def test_feed_newest_first(self):
        old = make_post(self.author, days_ago=2, title="old")
        new = make_post(self.author, days_ago=0, title="new")

        body = self.client.get(self.BASE).json()
        assert [p["id"] for p in body["posts"]] == [str(new.id), str(old.id)]

    def test_negative_limit_is_rejected(self):
        res = self.client.get(self.BASE, {"limit": -1})
        assert res.status_code == 400


@pytest.mark.django_db
class TestTrending:
    BASE = "/api/v1/feed/trending/"

    def setup_method(self):
        self.client = APIClient()
        self.author = make_user("Author", "author")

    def test_score_orders_posts(self):
        low = make_post(self.author, views=10, likes=0)  # 10
        high = make_post(self.author, views=2, likes=5)  # 17
        mid = make_post(self.author, views=12, likes=1)  # 15

        res = self.client.get(self.BASE)
        assert res.status_code == 200
        body = res.json()
        assert [p["id"] for p in body] == [str(high.id), str(mid.id), str(low.id)]
        assert [p["trendingScore"] for p in body] == [17, 15, 10]
        assert body[0]["author"]["name"] == "Author"

    def test_dominating_post_ranks_higher(self):
        b = make_post(self.author, views=5, likes=5)
        a = make_post(self.author, views=5, likes=6)

        ranked = get_trending_posts(10)
        assert ranked.index(a) < ranked.index(b)
        assert ranked[0].trending_score > ranked[1].trending_score

    def test_only_last_seven_days_and_published(self):
        make_post(self.author, days_ago=8, views=1000)
        make_post(self.author, status=PostStatus.DRAFT, views=1000)
        recent = make_post(self.author, days_ago=1, views=1)

        body = self.client.get(self.BASE).json()
        assert [p["id"] for p in body] == [str(recent.id)]

    def test_limit_truncates(self):
        for i in range(4):
            make_post(self.author, views=i)
        assert len(self.client.get(self.BASE, {"limit": 2}).json()) == 2


@pytest.mark.django_db
class TestSuggestedUsers:
    BASE = "/api/v1/feed/suggested-users/"

    def setup_method(self):
        self.client = APIClient()
        self.me = make_user("Me", "me")

    def _ids(self, res):
        return [u["id"] for u in res.json()]

    def test_recent_author_outranks_high_engagement_stale_author(self):
        recent = make_user("Recent", "recent")
        stale = make_user("Stale", "stale")
        make_post(recent, days_ago=3, views=1)
        make_post(stale, days_ago=10, views=100000, likes=1000)

        self.client.force_authenticate(self.me)
        res = self.client.get(self.BASE)
        assert res.status_code == 200
        assert self._ids(res) == [str(recent.id), str(stale.id)]

    def test_engagement_score_breaks_ties_within_bucket(self):
        a = make_user("A", "aaa")
        b = make_user("B", "bbb")
        make_post(a, days_ago=1, views=10)  # 10
        make_post(b, days_ago=1, views=1, likes=2)  # 11
        Follow.objects.create(follower=a, following=b)  # +10

        body = self.client.get(self.BASE).json()
        by_id = {u["id"]: u for u in body}
        assert by_id[str(b.id)]["engagementScore"] == 21
        assert by_id[str(b.id)]["followerCount"] == 1
        assert by_id[str(a.id)]["engagementScore"] == 10
        assert [u["id"] for u in body][:2] == [str(b.id), str(a.id)]

    def test_excludes_self_followed_nameless_and_postless(self):
        followed = make_user("Followed", "followed")
        nameless = make_user("Nameless", None)
        postless = make_user("Postless", "postless")
        candidate = make_user("Candidate", "candidate")
        for u in (self.me, followed, nameless, candidate):
            make_post(u)
        make_post(postless, status=PostStatus.DRAFT)
        Follow.objects.create(follower=self.me, following=followed)

        self.client.force_authenticate(self.me)
        assert self._ids(self.client.get(self.BASE)) == [str(candidate.id)]

    def test_anonymous_gets_all_candidates(self):
        other = make_user("Other", "other")
        make_post(self.me)
        make_post(other)

        ids = self._ids(self.client.get(self.BASE))
        assert set(ids) == {str(self.me.id), str(other.id)}

    def test_score_uses_five_most_recent_posts_and_two_previews(self):
        author = make_user("Prolific", "prolific")
        make_post(author, days_ago=6, views=1000, title="oldest")
        for i in range(5):
            make_post(author, days_ago=5 - i, views=1, title=f"recent-{i}")

        [item] = get_suggested_users(self.me, 10)
        assert item.post_count == 5
        assert item.engagement_score == 5
        assert [p.title for p in item.recent_posts] == ["recent-4", "recent-3"]

        body = self.client.get(self.BASE).json()
        entry = next(u for u in body if u["username"] == "prolific")
        assert len(entry["recentPosts"]) == 2
        assert set(entry["recentPosts"][0]) == {"id", "title", "viewCount", "likeCount"}
        assert isinstance(entry["lastPostAt"], int)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, Prefetch
from django.utils import timezone

from posts.models import Post, PostStatus
from relations.models import Follow

User = get_user_model()

RECENT_WINDOW = timedelta(days=7)
TRENDING_LIKE_WEIGHT = 3

SUGGESTION_SAMPLE_POSTS = 5  # 점수 계산은 최근 발행 글 5개만
SUGGESTION_PREVIEW_POSTS = 2
SUGGESTION_LIKE_WEIGHT = 5
SUGGESTION_FOLLOWER_WEIGHT = 10


@dataclass(frozen=True)
class FeedPage:
    posts: List[Post]
    has_more: bool


@dataclass(frozen=True)
class RecentPost:
    id: object
    title: str
    view_count: int
    like_count: int


@dataclass(frozen=True)
class SuggestedUser:
    user: object
    follower_count: int
    post_count: int
    engagement_score: int
    last_post_at: Optional[datetime]
    recent_posts: List[RecentPost]

    def is_recent(self, now: datetime) -> bool:
        return self.last_post_at is not None and self.last_post_at > now - RECENT_WINDOW


def _published():
    return Post.objects.filter(status=PostStatus.PUBLISHED).select_related("author")


def trending_score(post: Post) -> int:
    return post.view_count + post.like_count * TRENDING_LIKE_WEIGHT


def get_feed(limit: int) -> FeedPage:
    """발행 글 전체를 최신순으로. limit+1 개를 읽어 다음 페이지 여부를 판단."""
    rows = list(_published().order_by("-created_at")[: limit + 1])
    return FeedPage(posts=rows[:limit], has_more=len(rows) > limit)


def get_trending_posts(limit: int, now: datetime | None = None) -> List[Post]:
    now = now or timezone.now()
    candidates = list(_published().filter(published_at__gte=now - RECENT_WINDOW).order_by("-created_at"))
    for post in candidates:
        post.trending_score = trending_score(post)
    # 동점은 조회 순서 유지(stable sort)
    candidates.sort(key=lambda p: p.trending_score, reverse=True)
    return candidates[:limit]


def get_suggested_users(user, limit: int, now: datetime | None = None) -> List[SuggestedUser]:
    now = now or timezone.now()

    candidates = User.objects.exclude(username__isnull=True).exclude(username="")
    if user is not None:
        followed = Follow.objects.filter(follower=user).values("following_id")
        candidates = candidates.exclude(id=user.id).exclude(id__in=followed)

    sample = Post.objects.filter(status=PostStatus.PUBLISHED).order_by("-created_at")[:SUGGESTION_SAMPLE_POSTS]
    candidates = candidates.annotate(follower_count=Count("followers", distinct=True)).prefetch_related(
        Prefetch("posts", queryset=sample, to_attr="sample_posts")
    )

    suggestions: List[SuggestedUser] = []
    for candidate in candidates:
        posts = candidate.sample_posts
        if not posts:
            continue
        total_views = sum(p.view_count for p in posts)
        total_likes = sum(p.like_count for p in posts)
        suggestions.append(
            SuggestedUser(
                user=candidate,
                follower_count=candidate.follower_count,
                post_count=len(posts),
                engagement_score=total_views + total_likes * SUGGESTION_LIKE_WEIGHT + candidate.follower_count * SUGGESTION_FOLLOWER_WEIGHT,
                last_post_at=posts[0].published_at,
                recent_posts=[RecentPost(p.id, p.title, p.view_count, p.like_count) for p in posts[:SUGGESTION_PREVIEW_POSTS]],
            )
        )

    # 1차: 최근 7일 내 발행 여부(참 우선), 2차: 참여 점수 내림차순
    suggestions.sort(key=lambda s: (not s.is_recent(now), -s.engagement_score))
    return suggestions[:limit]

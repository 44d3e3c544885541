"""
대시보드 집계.

- analytics / activity / posts 는 비로그인이면 빈 결과(null, [])
- daily views 만 엄격하게 인증을 요구
- 날짜 키는 UTC 기준 YYYY-MM-DD
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from django.conf import settings
from django.db.models import Count, Prefetch, Q, Sum
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated

from comments.models import Comment, CommentStatus
from posts.models import DailyStats, Post, PostLike
from relations.models import Follow

# 실제 증감률 계산이 아닌 고정 값. 활동이 있으면 그대로 노출한다
PLACEHOLDER_COMMENTS_GROWTH = 15
PLACEHOLDER_FOLLOWERS_GROWTH = 12


def _knob(key: str, default: int) -> int:
    return int(getattr(settings, "ANALYTICS", {}).get(key, default))


@dataclass(frozen=True)
class Analytics:
    total_views: int
    total_likes: int
    total_comments: int
    total_followers: int
    views_growth: float
    likes_growth: float
    comments_growth: int
    followers_growth: int


@dataclass(frozen=True)
class ActivityItem:
    type: str  # like | comment | follow
    user: str
    post: Optional[str]
    time: datetime


@dataclass(frozen=True)
class DailyViews:
    date: str
    views: int
    day: str
    full_date: str


def _round1(value: float) -> float:
    # 소수 첫째 자리 반올림(.5 는 올림)
    return math.floor(value * 10 + 0.5) / 10


def _share_percent(part: int, total: int) -> float:
    if total <= 0:
        return 0
    return _round1(part / total * 100)


def get_analytics(user, now: datetime | None = None) -> Analytics | None:
    if user is None:
        return None
    now = now or timezone.now()
    since = now - timedelta(days=_knob("GROWTH_WINDOW_DAYS", 30))

    posts = list(Post.objects.filter(author=user).only("view_count", "like_count", "created_at"))
    total_views = sum(p.view_count for p in posts)
    total_likes = sum(p.like_count for p in posts)
    recent = [p for p in posts if p.created_at > since]
    recent_views = sum(p.view_count for p in recent)
    recent_likes = sum(p.like_count for p in recent)

    total_comments = Comment.objects.filter(post__author=user, status=CommentStatus.APPROVED).count()
    total_followers = Follow.objects.filter(following=user).count()

    return Analytics(
        total_views=total_views,
        total_likes=total_likes,
        total_comments=total_comments,
        total_followers=total_followers,
        views_growth=_share_percent(recent_views, total_views),
        likes_growth=_share_percent(recent_likes, total_likes),
        comments_growth=PLACEHOLDER_COMMENTS_GROWTH if total_comments > 0 else 0,
        followers_growth=PLACEHOLDER_FOLLOWERS_GROWTH if total_followers > 0 else 0,
    )


def get_recent_activity(user, limit: int) -> List[ActivityItem]:
    if user is None:
        return []
    per_source = _knob("ACTIVITY_PER_SOURCE", 5)

    likes = PostLike.objects.select_related("user").order_by("-created_at")[:per_source]
    comments = Comment.objects.filter(status=CommentStatus.APPROVED).order_by("-created_at")[:per_source]
    posts = list(
        Post.objects.filter(author=user)
        .order_by("created_at")
        .prefetch_related(
            Prefetch("likes", queryset=likes, to_attr="recent_likes"),
            Prefetch("comments", queryset=comments, to_attr="recent_comments"),
        )
    )

    items: List[ActivityItem] = []
    for post in posts:
        for like in post.recent_likes:
            # 익명 좋아요는 표시할 이름이 없으므로 제외
            if like.user is None:
                continue
            items.append(ActivityItem("like", like.user.name, post.title, like.created_at))
    for post in posts:
        for comment in post.recent_comments:
            items.append(ActivityItem("comment", comment.author_name, post.title, comment.created_at))

    follows = Follow.objects.filter(following=user).select_related("follower").order_by("-created_at")[:per_source]
    for follow in follows:
        items.append(ActivityItem("follow", follow.follower.name, None, follow.created_at))

    # 같은 시각이면 수집 순서 유지
    items.sort(key=lambda item: item.time, reverse=True)
    return items[:limit]


def get_posts_with_analytics(user, limit: int) -> List[Post]:
    if user is None:
        return []
    approved = Q(comments__status=CommentStatus.APPROVED)
    return list(
        Post.objects.filter(author=user)
        .annotate(comment_count=Count("comments", filter=approved))
        .order_by("-created_at")[:limit]
    )


def _day_entry(day: date, views: int = 0) -> DailyViews:
    return DailyViews(
        date=day.isoformat(),
        views=views,
        day=day.strftime("%a"),
        full_date=f"{day.strftime('%b')} {day.day}",
    )


def get_daily_views(user, today: date | None = None) -> List[DailyViews]:
    if user is None:
        raise NotAuthenticated("Not authenticated")
    days = _knob("DAILY_VIEWS_DAYS", 30)
    today = today or timezone.now().date()
    start = today - timedelta(days=days - 1)

    rows = (
        DailyStats.objects.filter(post__author=user, date__gte=start, date__lte=today)
        .values("date")
        .annotate(total=Sum("views"))
    )
    views_by_date: Dict[date, int] = {row["date"]: row["total"] or 0 for row in rows}

    window = [start + timedelta(days=i) for i in range(days)]
    return [_day_entry(day, views_by_date.get(day, 0)) for day in window]

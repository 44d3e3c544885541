from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied, ValidationError

from .models import DailyStats, Post, PostLike, PostStatus

log = logging.getLogger(__name__)

User = get_user_model()

EMPTY_EDITOR_CONTENT = "<p><br></p>"
UPDATABLE_FIELDS = ("title", "content", "tags", "category", "featured_image", "scheduled_for")


@dataclass(frozen=True)
class LikeResult:
    liked: bool
    like_count: int


@dataclass(frozen=True)
class PublishedPage:
    posts: List[Post]
    has_more: bool
    next_cursor: Optional[str]


def _require_user(user):
    if user is None:
        raise NotAuthenticated("Not authenticated")
    return user


def _require_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError({"title": "Title is required"})
    return title


def _has_publishable_content(content: str | None) -> bool:
    content = (content or "").strip()
    return bool(content) and content != EMPTY_EDITOR_CONTENT


def _get_owned_post(user, post_id, *, for_update: bool = False) -> Post:
    qs = Post.objects.select_for_update() if for_update else Post.objects.all()
    post = qs.filter(pk=post_id).first()
    if post is None:
        raise NotFound("Post not found")
    if post.author_id != user.id:
        raise PermissionDenied("Not authorized")
    return post


# ---- 작성/수정/삭제 ----
@transaction.atomic
def create_post(
    *,
    author,
    title: str,
    content: str,
    status: str,
    tags: Sequence[str] | None = None,
    category: str | None = None,
    featured_image: str | None = None,
    scheduled_for: datetime | None = None,
) -> Post:
    """
    작성자당 draft 는 최대 1개.
    - 기존 draft 가 있으면 새로 만들지 않고 그 draft 를 갱신(발행 요청이면 발행으로 전환)
    - 작성자 행을 잠가 동시 저장으로 draft 가 둘 생기지 않게 한다
    """
    _require_user(author)
    title = _require_title(title)
    if status == PostStatus.PUBLISHED and not _has_publishable_content(content):
        raise ValidationError({"content": "Content is required to publish"})

    User.objects.select_for_update().filter(pk=author.pk).first()
    existing_draft = Post.objects.filter(author=author, status=PostStatus.DRAFT).order_by("-updated_at").first()

    now = timezone.now()
    values: Dict[str, Any] = {
        "title": title,
        "content": content,
        "tags": list(tags or []),
        "category": category,
        "featured_image": featured_image,
        "scheduled_for": scheduled_for,
    }

    if existing_draft is not None:
        for field, value in values.items():
            setattr(existing_draft, field, value)
        update_fields = [*values.keys(), "updated_at"]
        if status == PostStatus.PUBLISHED:
            existing_draft.status = PostStatus.PUBLISHED
            existing_draft.published_at = now
            update_fields += ["status", "published_at"]
        existing_draft.save(update_fields=update_fields)
        if existing_draft.is_published:
            log.info("Published draft %s of %s", existing_draft.id, author.id)
        return existing_draft

    post = Post.objects.create(
        author=author,
        status=status,
        published_at=now if status == PostStatus.PUBLISHED else None,
        **values,
    )
    if post.is_published:
        log.info("Published new post %s of %s", post.id, author.id)
    return post


@transaction.atomic
def update_post(*, user, post_id, changes: Dict[str, Any]) -> Post:
    _require_user(user)
    post = _get_owned_post(user, post_id, for_update=True)

    update_fields = ["updated_at"]
    for field in UPDATABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if field == "title":
            value = _require_title(value)
        if field == "tags":
            value = list(value or [])
        setattr(post, field, value)
        update_fields.append(field)

    new_status = changes.get("status")
    if new_status is not None:
        if new_status == PostStatus.PUBLISHED and not _has_publishable_content(post.content):
            raise ValidationError({"content": "Content is required to publish"})
        # published_at 은 draft -> published 전이에서만
        if new_status == PostStatus.PUBLISHED and post.status == PostStatus.DRAFT:
            post.published_at = timezone.now()
            update_fields.append("published_at")
            log.info("Published post %s via update", post.id)
        post.status = new_status
        update_fields.append("status")

    post.save(update_fields=update_fields)
    return post


@transaction.atomic
def delete_post(*, user, post_id) -> None:
    _require_user(user)
    post = _get_owned_post(user, post_id, for_update=True)
    post.delete()


# ---- 조회 ----
def get_user_draft(user) -> Post | None:
    if user is None:
        return None
    return Post.objects.filter(author=user, status=PostStatus.DRAFT).order_by("-updated_at").first()


def list_user_posts(user, status: str | None = None) -> List[Post]:
    if user is None:
        return []
    qs = Post.objects.filter(author=user).select_related("author").order_by("-created_at")
    if status:
        qs = qs.filter(status=status)
    return list(qs)


def get_post(post_id) -> Post | None:
    return Post.objects.select_related("author").filter(pk=post_id).first()


def list_published_by_username(username: str, *, limit: int, cursor: str | None = None) -> PublishedPage:
    author = User.objects.filter(username=username).first()
    if author is None:
        return PublishedPage(posts=[], has_more=False, next_cursor=None)

    qs = Post.objects.filter(author=author, status=PostStatus.PUBLISHED).select_related("author").order_by("-created_at", "-id")
    if cursor:
        try:
            anchor = Post.objects.filter(pk=uuid.UUID(str(cursor)), author=author).first()
        except ValueError:
            anchor = None
        if anchor is None:
            raise ValidationError({"cursor": "Invalid cursor"})
        # (created_at, id) 내림차순에서 커서 다음부터
        qs = qs.filter(Q(created_at__lt=anchor.created_at) | Q(created_at=anchor.created_at, id__lt=anchor.id))

    rows = list(qs[: limit + 1])
    has_more = len(rows) > limit
    rows = rows[:limit]
    return PublishedPage(posts=rows, has_more=has_more, next_cursor=str(rows[-1].id) if has_more else None)


def get_published_post(username: str, post_id) -> Post | None:
    post = Post.objects.select_related("author").filter(pk=post_id, status=PostStatus.PUBLISHED).first()
    if post is None or post.author.username != username:
        return None
    return post


# ---- 참여(좋아요/조회수) ----
@transaction.atomic
def toggle_like(*, post_id, user=None) -> LikeResult:
    """
    (post, user) 좋아요가 있으면 취소, 없으면 추가. user 가 없으면 익명 좋아요로 항상 추가.
    post 행을 잠근 상태에서 확인→쓰기를 수행하므로 같은 게시물에 대한 토글은 직렬화된다.
    """
    post = Post.objects.select_for_update().filter(pk=post_id).first()
    if post is None or not post.is_published:
        raise NotFound("Post not found or not published")

    existing = PostLike.objects.filter(post=post, user=user).first() if user is not None else None

    if existing is not None:
        existing.delete()
        post.like_count = max(0, post.like_count - 1)
        post.save(update_fields=["like_count"])
        return LikeResult(liked=False, like_count=post.like_count)

    PostLike.objects.create(post=post, user=user)
    post.like_count = post.like_count + 1
    post.save(update_fields=["like_count"])
    return LikeResult(liked=True, like_count=post.like_count)


def has_user_liked(*, post_id, user) -> bool:
    if user is None:
        return False
    return PostLike.objects.filter(post_id=post_id, user=user).exists()


@transaction.atomic
def increment_view_count(post_id) -> bool:
    """미발행/없는 게시물은 조용히 무시(False). 오늘(UTC) DailyStats 를 upsert."""
    post = Post.objects.filter(pk=post_id).first()
    if post is None or not post.is_published:
        return False

    Post.objects.filter(pk=post.pk).update(view_count=F("view_count") + 1)

    now = timezone.now()
    stats, created = DailyStats.objects.get_or_create(post=post, date=now.date(), defaults={"views": 1})
    if not created:
        DailyStats.objects.filter(pk=stats.pk).update(views=F("views") + 1, updated_at=now)
    return True


# ---- 예약 발행 ----
@transaction.atomic
def publish_scheduled_posts(now: datetime | None = None) -> int:
    now = now or timezone.now()
    due = list(
        Post.objects.select_for_update().filter(status=PostStatus.DRAFT, scheduled_for__isnull=False, scheduled_for__lte=now).values_list("id", flat=True)
    )
    if not due:
        return 0
    Post.objects.filter(id__in=due).update(status=PostStatus.PUBLISHED, published_at=now, updated_at=now)
    log.info("Published %d scheduled post(s)", len(due))
    return len(due)

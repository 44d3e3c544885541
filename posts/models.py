import uuid

from django.conf import settings
from django.db import models


class PostStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"


class Post(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="posts", db_index=True)
    title = models.CharField(max_length=300)
    content = models.TextField(blank=True, default="")
    status = models.CharField(max_length=16, choices=PostStatus.choices, default=PostStatus.DRAFT)
    tags = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=100, null=True, blank=True)
    featured_image = models.URLField(max_length=1024, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    # draft -> published 전이 시 단 한 번만 기록
    published_at = models.DateTimeField(null=True, blank=True)
    scheduled_for = models.DateTimeField(null=True, blank=True)
    view_count = models.PositiveIntegerField(default=0)
    like_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "posts"
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=["author", "-created_at"], name="idx_post_author_created"),
            models.Index(fields=["author", "status"], name="idx_post_author_status"),
            models.Index(fields=["status", "-published_at"], name="idx_post_status_published"),
        ]

    def __str__(self):
        return f"Post<{self.id}> by {self.author_id}"

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED


class PostLike(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey("posts.Post", on_delete=models.CASCADE, related_name="likes")
    # 익명 좋아요 허용
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name="post_likes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "post_likes"
        ordering = ("-created_at",)
        constraints = [
            models.UniqueConstraint(fields=["user", "post"], condition=models.Q(user__isnull=False), name="uniq_post_like_user"),
        ]
        indexes = [
            models.Index(fields=["post", "user"], name="idx_post_like_post_user"),
            models.Index(fields=["post", "-created_at"], name="idx_post_like_post_created"),
        ]


class DailyStats(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey("posts.Post", on_delete=models.CASCADE, related_name="daily_stats")
    date = models.DateField()
    views = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "daily_stats"
        constraints = [
            models.UniqueConstraint(fields=["post", "date"], name="uniq_daily_stats_post_date"),
        ]
        indexes = [
            models.Index(fields=["date"], name="idx_daily_stats_date"),
        ]

    def __str__(self):
        return f"DailyStats<{self.post_id} {self.date}: {self.views}>"

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=300)),
                ("content", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("published", "Published")], default="draft", max_length=16)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("category", models.CharField(blank=True, max_length=100, null=True)),
                ("featured_image", models.URLField(blank=True, max_length=1024, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("scheduled_for", models.DateTimeField(blank=True, null=True)),
                ("view_count", models.PositiveIntegerField(default=0)),
                ("like_count", models.PositiveIntegerField(default=0)),
                (
                    "author",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="posts", to=settings.AUTH_USER_MODEL),
                ),
            ],
            options={
                "db_table": "posts",
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["author", "-created_at"], name="idx_post_author_created"),
                    models.Index(fields=["author", "status"], name="idx_post_author_status"),
                    models.Index(fields=["status", "-published_at"], name="idx_post_status_published"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PostLike",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "post",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="posts.post"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="post_likes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "post_likes",
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["post", "user"], name="idx_post_like_post_user"),
                    models.Index(fields=["post", "-created_at"], name="idx_post_like_post_created"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("user__isnull", False)), fields=("user", "post"), name="uniq_post_like_user"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DailyStats",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateField()),
                ("views", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "post",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="daily_stats", to="posts.post"),
                ),
            ],
            options={
                "db_table": "daily_stats",
                "indexes": [
                    models.Index(fields=["date"], name="idx_daily_stats_date"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("post", "date"), name="uniq_daily_stats_post_date"),
                ],
            },
        ),
    ]

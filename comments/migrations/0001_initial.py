import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("posts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("author_name", models.CharField(max_length=255)),
                ("author_email", models.CharField(blank=True, default="", max_length=255)),
                ("content", models.TextField()),
                ("status", models.CharField(choices=[("approved", "Approved")], default="approved", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="comments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "post",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="posts.post"),
                ),
            ],
            options={
                "db_table": "comments",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["post", "status", "-created_at"], name="idx_comment_post_status"),
                    models.Index(fields=["author", "created_at"], name="idx_comment_author_created"),
                ],
            },
        ),
    ]

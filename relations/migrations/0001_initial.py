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
            name="Follow",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "follower",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="following", to=settings.AUTH_USER_MODEL),
                ),
                (
                    "following",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="followers", to=settings.AUTH_USER_MODEL),
                ),
            ],
            options={
                "db_table": "follows",
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["follower"], name="idx_follows_follower"),
                    models.Index(fields=["following", "-created_at"], name="idx_follows_following"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("follower", "following"), name="uq_follows_pair"),
                    models.CheckConstraint(condition=models.Q(("follower", models.F("following")), _negated=True), name="ck_follows_not_self"),
                ],
            },
        ),
    ]

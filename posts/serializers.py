from rest_framework import serializers

from common.fields import EpochMillisecondsField
from users.serializers import AuthorOut

from .models import PostStatus


class PostCreateIn(serializers.Serializer):
    # 빈 제목/본문 문구는 서비스에서 통일된 메시지로 검증
    title = serializers.CharField(max_length=300, allow_blank=True, trim_whitespace=True)
    content = serializers.CharField(allow_blank=True, trim_whitespace=False, required=False, default="")
    status = serializers.ChoiceField(choices=PostStatus.choices)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, allow_empty=True)
    category = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    featuredImage = serializers.URLField(source="featured_image", max_length=1024, required=False, allow_null=True)
    scheduledFor = EpochMillisecondsField(source="scheduled_for", required=False, allow_null=True)


class PostUpdateIn(PostCreateIn):
    title = serializers.CharField(max_length=300, allow_blank=True, trim_whitespace=True, required=False)
    content = serializers.CharField(allow_blank=True, trim_whitespace=False, required=False)
    status = serializers.ChoiceField(choices=PostStatus.choices, required=False)


class PostOut(serializers.Serializer):
    id = serializers.UUIDField()
    authorId = serializers.UUIDField(source="author_id")
    title = serializers.CharField()
    content = serializers.CharField()
    status = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    category = serializers.CharField(allow_null=True)
    featuredImage = serializers.CharField(source="featured_image", allow_null=True)
    createdAt = EpochMillisecondsField(source="created_at")
    updatedAt = EpochMillisecondsField(source="updated_at")
    publishedAt = EpochMillisecondsField(source="published_at", allow_null=True)
    scheduledFor = EpochMillisecondsField(source="scheduled_for", allow_null=True)
    viewCount = serializers.IntegerField(source="view_count")
    likeCount = serializers.IntegerField(source="like_count")


class UserPostOut(PostOut):
    username = serializers.CharField(source="author.username", allow_null=True)


class PostWithAuthorOut(PostOut):
    author = AuthorOut()


class PublishedPageOut(serializers.Serializer):
    posts = PostWithAuthorOut(many=True)
    hasMore = serializers.BooleanField(source="has_more")
    nextCursor = serializers.CharField(source="next_cursor", allow_null=True)


class ToggleLikeIn(serializers.Serializer):
    # 명시적으로 넘기지 않으면 현재 호출자(없으면 익명)
    userId = serializers.UUIDField(required=False, allow_null=True)

from rest_framework import serializers

from common.fields import EpochMillisecondsField
from users.serializers import AuthorOut


class CommentIn(serializers.Serializer):
    # 공백/길이 검증은 서비스에서 원문 기준으로 수행
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class CommentOut(serializers.Serializer):
    id = serializers.UUIDField()
    postId = serializers.UUIDField(source="post_id")
    authorId = serializers.UUIDField(source="author_id", allow_null=True)
    authorName = serializers.CharField(source="author_name")
    content = serializers.CharField()
    status = serializers.CharField()
    createdAt = EpochMillisecondsField(source="created_at")
    author = AuthorOut()

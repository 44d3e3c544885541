from rest_framework import serializers

from common.fields import EpochMillisecondsField

from .models import User


class AuthorOut(serializers.Serializer):
    # 피드/댓글/공개 페이지에서 공통으로 쓰는 비정규화 작성자 정보
    id = serializers.UUIDField()
    name = serializers.CharField()
    username = serializers.CharField(allow_null=True)
    imageUrl = serializers.CharField(source="image_url", allow_null=True)


class UserOut(serializers.ModelSerializer):
    imageUrl = serializers.CharField(source="image_url", allow_null=True, read_only=True)
    createdAt = EpochMillisecondsField(source="created_at", read_only=True)
    lastActiveAt = EpochMillisecondsField(source="last_active_at", read_only=True)

    class Meta:
        model = User
        fields = ("id", "name", "email", "username", "imageUrl", "createdAt", "lastActiveAt")
        read_only_fields = fields


class UsernameIn(serializers.Serializer):
    # 형식/길이/중복 검증은 서비스에서 고정된 문구로 수행
    username = serializers.CharField(max_length=255, allow_blank=True, trim_whitespace=False)

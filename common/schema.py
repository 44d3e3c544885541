from drf_spectacular.utils import inline_serializer
from rest_framework import serializers

# Common
ErrorOut = inline_serializer(
    name="ErrorOut",
    fields={"detail": serializers.CharField(help_text="Human readable error message.")},
)

SuccessOut = inline_serializer(
    name="SuccessOut",
    fields={"success": serializers.BooleanField()},
)

IdOut = inline_serializer(
    name="IdOut",
    fields={"id": serializers.UUIDField()},
)

# Posts / engagement
ToggleLikeOut = inline_serializer(
    name="ToggleLikeOut",
    fields={
        "liked": serializers.BooleanField(help_text="토글 이후 좋아요 상태"),
        "likeCount": serializers.IntegerField(help_text="토글 이후 좋아요 수(0 미만으로 내려가지 않음)"),
    },
)

LikedOut = inline_serializer(
    name="LikedOut",
    fields={"liked": serializers.BooleanField()},
)

# Relations
ToggleFollowOut = inline_serializer(
    name="ToggleFollowOut",
    fields={
        "following": serializers.BooleanField(help_text="토글 이후 팔로우 상태"),
        "followerCount": serializers.IntegerField(help_text="대상 사용자의 팔로워 수"),
    },
)

FollowingOut = inline_serializer(
    name="FollowingOut",
    fields={"following": serializers.BooleanField()},
)

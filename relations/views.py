from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import serializers, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.params import UUID_LOOKUP_REGEX
from common.schema import ErrorOut, FollowingOut, ToggleFollowOut
from users.services import require_current_user, resolve_current_user

from .services import RelationshipService


class UserRelationViewSet(viewsets.ViewSet):
    """
    /api/v1/users/{pk}/follow   (POST: 팔로우 토글, GET: 팔로우 여부)
    """

    lookup_field = "pk"  # 기본값. URL의 {pk}가 target user id
    lookup_value_regex = UUID_LOOKUP_REGEX
    serializer_class = serializers.Serializer

    @extend_schema(
        tags=["Relations"],
        summary="팔로우 토글",
        description="팔로우 중이면 언팔로우, 아니면 팔로우합니다.",
        operation_id="users_toggle_follow",
        parameters=[OpenApiParameter(name="pk", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="대상 사용자 ID (UUID)")],
        request=None,
        responses={
            200: OpenApiResponse(response=ToggleFollowOut),
            400: OpenApiResponse(response=ErrorOut, description="자기 자신 팔로우"),
            401: OpenApiResponse(response=ErrorOut),
            404: OpenApiResponse(response=ErrorOut, description="대상 사용자가 없음"),
        },
        examples=[OpenApiExample("예시", value=None, request_only=True, description="POST /api/v1/users/{id}/follow")],
    )
    @action(detail=True, methods=["post"], url_path="follow")
    def follow(self, request, pk=None):
        actor = require_current_user(request)
        result = RelationshipService.toggle_follow(actor, pk)
        return Response({"following": result.following, "followerCount": result.follower_count})

    @extend_schema(
        tags=["Relations"],
        summary="팔로우 여부",
        description="비로그인이면 false.",
        operation_id="users_is_following",
        parameters=[OpenApiParameter(name="pk", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="대상 사용자 ID (UUID)")],
        responses={200: OpenApiResponse(response=FollowingOut)},
    )
    @follow.mapping.get
    def is_following(self, request, pk=None):
        return Response({"following": RelationshipService.is_following(resolve_current_user(request), pk)})

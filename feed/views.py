from django.conf import settings
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import serializers, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.params import query_limit
from common.schema import ErrorOut
from users.services import resolve_current_user

from .serializers import FeedPageOut, SuggestedUserOut, TrendingPostOut
from .services import get_feed, get_suggested_users, get_trending_posts

LIMIT_PARAM = OpenApiParameter(
    name="limit",
    location=OpenApiParameter.QUERY,
    type=OpenApiTypes.INT,
    required=False,
    description="반환 개수(없거나 0이면 기본값, 최대 MAX_LIMIT)",
)


def _default(key: str) -> int:
    return int(getattr(settings, "FEED_LIMITS", {}).get(key, 10))


class FeedViewSet(viewsets.ViewSet):
    """
    /api/v1/feed/                   전체 최신 피드
    /api/v1/feed/trending/          최근 7일 인기 글
    /api/v1/feed/suggested-users/   팔로우 추천
    """

    serializer_class = serializers.Serializer

    @extend_schema(
        tags=["Feed"],
        summary="최신 피드 조회",
        description=(
            "발행된 게시물 전체를 최신순으로 반환합니다.\n"
            "- `hasMore`: 다음 게시물이 더 있는지 여부\n"
            "- 각 게시물에는 작성자 정보가 포함됩니다."
        ),
        operation_id="feed_list",
        parameters=[LIMIT_PARAM],
        responses={200: OpenApiResponse(response=FeedPageOut), 400: OpenApiResponse(response=ErrorOut)},
        examples=[OpenApiExample("기본 조회", value=None, request_only=True, description="GET /api/v1/feed/?limit=10")],
    )
    def list(self, request):
        page = get_feed(query_limit(request, _default("FEED_DEFAULT")))
        return Response(FeedPageOut(page).data)

    @extend_schema(
        tags=["Feed"],
        summary="인기 게시물",
        description="최근 7일 내 발행된 글을 `조회수 + 좋아요×3` 점수 내림차순으로 반환합니다.",
        operation_id="feed_trending",
        parameters=[LIMIT_PARAM],
        responses={200: OpenApiResponse(response=TrendingPostOut(many=True)), 400: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["GET"], url_path="trending")
    def trending(self, request):
        posts = get_trending_posts(query_limit(request, _default("TRENDING_DEFAULT")))
        return Response(TrendingPostOut(posts, many=True).data)

    @extend_schema(
        tags=["Feed"],
        summary="팔로우 추천 사용자",
        description=(
            "아직 팔로우하지 않은, 사용자명을 설정한 작성자를 추천합니다.\n"
            "- 최근 7일 내 글을 발행한 작성자가 먼저 오고, 그 안에서는 참여 점수 내림차순\n"
            "- 비로그인 호출도 허용됩니다."
        ),
        operation_id="feed_suggested_users",
        parameters=[LIMIT_PARAM],
        responses={200: OpenApiResponse(response=SuggestedUserOut(many=True)), 400: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["GET"], url_path="suggested-users")
    def suggested_users(self, request):
        suggestions = get_suggested_users(resolve_current_user(request), query_limit(request, _default("SUGGESTED_DEFAULT")))
        return Response(SuggestedUserOut(suggestions, many=True).data)

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import serializers, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.params import query_limit
from common.responses import nullable
from common.schema import ErrorOut
from users.services import require_current_user, resolve_current_user

from . import services
from .serializers import ActivityOut, AnalyticsOut, DailyViewsOut, PostWithCommentCountOut


def _limit_param(default: int) -> OpenApiParameter:
    return OpenApiParameter(
        name="limit",
        location=OpenApiParameter.QUERY,
        type=OpenApiTypes.INT,
        required=False,
        description=f"반환 개수(기본={default})",
    )


def _default(key: str, fallback: int) -> int:
    return int(getattr(settings, "ANALYTICS", {}).get(key, fallback))


class DashboardViewSet(viewsets.ViewSet):
    """
    작성자 대시보드. 모두 현재 로그인 사용자 기준.
    """

    serializer_class = serializers.Serializer

    @extend_schema(
        tags=["Dashboard"],
        summary="참여 요약",
        description=(
            "조회수/좋아요/댓글/팔로워 합계와 최근 30일 비중(%)을 반환합니다.\n"
            "- 비로그인 또는 사용자 레코드가 없으면 `null`\n"
            "- `commentsGrowth`, `followersGrowth` 는 활동이 있을 때 고정 값(15, 12)입니다."
        ),
        operation_id="dashboard_analytics",
        responses={200: OpenApiResponse(response=AnalyticsOut, description="요약 또는 null")},
    )
    @action(detail=False, methods=["GET"], url_path="analytics")
    def analytics(self, request):
        result = services.get_analytics(resolve_current_user(request))
        return nullable(AnalyticsOut(result).data if result else None)

    @extend_schema(
        tags=["Dashboard"],
        summary="최근 활동",
        description="내 글에 달린 좋아요/댓글과 새 팔로워를 최신순으로 합쳐 반환합니다. 비로그인이면 빈 배열.",
        operation_id="dashboard_activity",
        parameters=[_limit_param(10)],
        responses={200: OpenApiResponse(response=ActivityOut(many=True)), 400: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["GET"], url_path="activity")
    def activity(self, request):
        limit = query_limit(request, _default("ACTIVITY_DEFAULT", 10))
        items = services.get_recent_activity(resolve_current_user(request), limit)
        return Response(ActivityOut(items, many=True).data)

    @extend_schema(
        tags=["Dashboard"],
        summary="최근 게시물과 댓글 수",
        description="내 최근 게시물에 승인된 댓글 수를 붙여 반환합니다. 비로그인이면 빈 배열.",
        operation_id="dashboard_posts",
        parameters=[_limit_param(5)],
        responses={200: OpenApiResponse(response=PostWithCommentCountOut(many=True)), 400: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["GET"], url_path="posts")
    def posts(self, request):
        limit = query_limit(request, _default("POSTS_WITH_ANALYTICS_DEFAULT", 5))
        posts = services.get_posts_with_analytics(resolve_current_user(request), limit)
        return Response(PostWithCommentCountOut(posts, many=True).data)

    @extend_schema(
        tags=["Dashboard"],
        summary="일별 조회수(최근 30일)",
        description="오늘을 포함한 최근 30일(UTC)을 오래된 날짜부터 반환합니다. 기록이 없는 날은 0.",
        operation_id="dashboard_daily_views",
        responses={
            200: OpenApiResponse(response=DailyViewsOut(many=True)),
            401: OpenApiResponse(response=ErrorOut),
            404: OpenApiResponse(response=ErrorOut, description="사용자 레코드 없음"),
        },
    )
    @action(detail=False, methods=["GET"], url_path="daily-views")
    def daily_views(self, request):
        user = require_current_user(request)
        return Response(DailyViewsOut(services.get_daily_views(user), many=True).data)

from django.conf import settings
from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from common.params import UUID_LOOKUP_REGEX, query_limit
from common.responses import nullable
from common.schema import ErrorOut, IdOut, LikedOut, SuccessOut, ToggleLikeOut
from users.services import require_current_user, resolve_current_user

from .models import Post, PostStatus
from .serializers import PostCreateIn, PostOut, PostUpdateIn, PostWithAuthorOut, PublishedPageOut, ToggleLikeIn, UserPostOut
from . import services

User = get_user_model()

_POST_PK = OpenApiParameter(name="pk", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="포스트 ID (UUID)")


@extend_schema_view(
    create=extend_schema(
        tags=["Posts"],
        summary="포스트 작성(또는 기존 draft 갱신/발행)",
        description=(
            "작성자당 draft 는 하나만 유지됩니다.\n"
            "- 기존 draft 가 있으면 새로 만들지 않고 해당 draft 를 갱신합니다.\n"
            "- `status=published` 이면 draft 를 발행으로 전환하고 `publishedAt` 을 기록합니다.\n"
            "- `scheduledFor`(epoch ms)를 가진 draft 는 예약 시각이 지나면 자동 발행됩니다."
        ),
        operation_id="posts_create",
        request=PostCreateIn,
        responses={201: OpenApiResponse(response=IdOut), 400: OpenApiResponse(response=ErrorOut), 401: OpenApiResponse(response=ErrorOut), 404: OpenApiResponse(response=ErrorOut)},
        examples=[
            OpenApiExample("draft 저장", value={"title": "첫 글", "content": "<p>hello</p>", "status": "draft", "tags": ["intro"]}, request_only=True),
            OpenApiExample("예약 발행", value={"title": "예약 글", "content": "<p>soon</p>", "status": "draft", "scheduledFor": 1767225600000}, request_only=True),
        ],
    ),
    retrieve=extend_schema(
        tags=["Posts"],
        summary="포스트 단건 조회(없으면 null)",
        operation_id="posts_retrieve",
        parameters=[_POST_PK],
        responses={200: OpenApiResponse(response=PostOut)},
    ),
    list=extend_schema(
        tags=["Posts"],
        summary="내 포스트 목록",
        description="최신순. 비로그인이면 빈 배열을 반환합니다.",
        operation_id="posts_list",
        parameters=[OpenApiParameter(name="status", location=OpenApiParameter.QUERY, type=OpenApiTypes.STR, required=False, enum=PostStatus.values)],
        responses={200: OpenApiResponse(response=UserPostOut(many=True))},
    ),
    partial_update=extend_schema(
        tags=["Posts"],
        summary="포스트 수정(작성자만)",
        operation_id="posts_partial_update",
        parameters=[_POST_PK],
        request=PostUpdateIn,
        responses={200: OpenApiResponse(response=IdOut), 400: OpenApiResponse(response=ErrorOut), 401: OpenApiResponse(response=ErrorOut), 403: OpenApiResponse(response=ErrorOut), 404: OpenApiResponse(response=ErrorOut)},
    ),
    destroy=extend_schema(
        tags=["Posts"],
        summary="포스트 삭제(작성자만)",
        operation_id="posts_destroy",
        parameters=[_POST_PK],
        responses={200: OpenApiResponse(response=SuccessOut), 401: OpenApiResponse(response=ErrorOut), 403: OpenApiResponse(response=ErrorOut), 404: OpenApiResponse(response=ErrorOut)},
    ),
)
class PostViewSet(viewsets.GenericViewSet):
    queryset = Post.objects.all()
    serializer_class = PostOut
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_serializer_class(self):
        if self.action == "create":
            return PostCreateIn
        if self.action == "partial_update":
            return PostUpdateIn
        if self.action == "list":
            return UserPostOut
        return PostOut

    def create(self, request):
        """
        POST /api/v1/posts/
        { "title": "...", "content": "...", "status": "draft|published", "tags": [...], "scheduledFor": 1700000000000 }
        -> { "id": "..." }
        """
        user = require_current_user(request)
        ser = PostCreateIn(data=request.data)
        ser.is_valid(raise_exception=True)
        v = ser.validated_data
        post = services.create_post(
            author=user,
            title=v["title"],
            content=v.get("content") or "",
            status=v["status"],
            tags=v.get("tags"),
            category=v.get("category") or None,
            featured_image=v.get("featured_image"),
            scheduled_for=v.get("scheduled_for"),
        )
        return Response({"id": str(post.id)}, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        post = services.get_post(pk)
        return nullable(PostOut(post).data if post else None)

    def list(self, request):
        status_filter = request.query_params.get("status")
        if status_filter and status_filter not in PostStatus.values:
            raise DRFValidationError({"status": "Invalid status"})
        posts = services.list_user_posts(resolve_current_user(request), status_filter)
        return Response(UserPostOut(posts, many=True).data)

    def partial_update(self, request, pk=None):
        user = require_current_user(request)
        ser = PostUpdateIn(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        post = services.update_post(user=user, post_id=pk, changes=ser.validated_data)
        return Response({"id": str(post.id)})

    def destroy(self, request, pk=None):
        user = require_current_user(request)
        services.delete_post(user=user, post_id=pk)
        return Response({"success": True})

    @extend_schema(
        tags=["Posts"],
        summary="내 draft 조회(없으면 null)",
        operation_id="posts_draft",
        responses={200: OpenApiResponse(response=PostOut)},
    )
    @action(detail=False, methods=["get"], url_path="draft")
    def draft(self, request):
        post = services.get_user_draft(resolve_current_user(request))
        return nullable(PostOut(post).data if post else None)

    # ================= 참여 액션 =================
    @extend_schema(
        tags=["Posts/Engagements"],
        summary="좋아요 토글",
        description="이미 좋아요했다면 취소, 아니면 추가합니다. 비로그인 호출은 익명 좋아요로 기록됩니다.",
        operation_id="posts_toggle_like",
        parameters=[_POST_PK],
        request=ToggleLikeIn,
        responses={200: OpenApiResponse(response=ToggleLikeOut), 404: OpenApiResponse(response=ErrorOut, description="없거나 미발행 포스트")},
    )
    @action(detail=True, methods=["post"], url_path="like")
    def like(self, request, pk=None):
        ser = ToggleLikeIn(data=request.data)
        ser.is_valid(raise_exception=True)
        user_id = ser.validated_data.get("userId")
        if user_id:
            user = User.objects.filter(pk=user_id).first()
            if user is None:
                raise NotFound("User not found")
        else:
            user = resolve_current_user(request)
        result = services.toggle_like(post_id=pk, user=user)
        return Response({"liked": result.liked, "likeCount": result.like_count})

    @extend_schema(
        tags=["Posts/Engagements"],
        summary="내 좋아요 여부",
        operation_id="posts_has_liked",
        parameters=[_POST_PK],
        responses={200: OpenApiResponse(response=LikedOut)},
    )
    @like.mapping.get
    def has_liked(self, request, pk=None):
        return Response({"liked": services.has_user_liked(post_id=pk, user=resolve_current_user(request))})

    @extend_schema(
        tags=["Posts/Engagements"],
        summary="조회수 증가",
        description="발행된 포스트만 집계합니다. 오늘(UTC) 일별 통계도 함께 증가합니다.",
        operation_id="posts_view",
        parameters=[_POST_PK],
        request=None,
        responses={200: OpenApiResponse(response=SuccessOut)},
    )
    @action(detail=True, methods=["post"], url_path="view")
    def record_view(self, request, pk=None):
        return Response({"success": services.increment_view_count(pk)})


class PublicPostViewSet(viewsets.GenericViewSet):
    """
    /api/v1/public/{username}/posts                 (발행 글 목록, 커서 페이지네이션)
    /api/v1/public/{username}/posts/{post_id}       (발행 글 단건)
    """

    queryset = Post.objects.none()
    serializer_class = PostWithAuthorOut
    lookup_field = "username"
    lookup_value_regex = r"[A-Za-z0-9_-]+"

    @extend_schema(
        tags=["Public"],
        summary="사용자의 발행 글 목록",
        operation_id="public_posts_list",
        parameters=[
            OpenApiParameter(name="username", location=OpenApiParameter.PATH, type=OpenApiTypes.STR),
            OpenApiParameter(name="limit", location=OpenApiParameter.QUERY, type=OpenApiTypes.INT, required=False, description="기본=10"),
            OpenApiParameter(name="cursor", location=OpenApiParameter.QUERY, type=OpenApiTypes.UUID, required=False, description="이전 페이지의 nextCursor"),
        ],
        responses={200: OpenApiResponse(response=PublishedPageOut), 400: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=True, methods=["get"], url_path="posts")
    def posts(self, request, username=None):
        default = int(getattr(settings, "FEED_LIMITS", {}).get("PUBLIC_POSTS_DEFAULT", 10))
        page = services.list_published_by_username(username, limit=query_limit(request, default), cursor=request.query_params.get("cursor") or None)
        return Response(PublishedPageOut(page).data)

    @extend_schema(
        tags=["Public"],
        summary="사용자의 발행 글 단건(없으면 null)",
        operation_id="public_posts_retrieve",
        parameters=[
            OpenApiParameter(name="username", location=OpenApiParameter.PATH, type=OpenApiTypes.STR),
            OpenApiParameter(name="post_id", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID),
        ],
        responses={200: OpenApiResponse(response=PostWithAuthorOut)},
    )
    @action(detail=True, methods=["get"], url_path=rf"posts/(?P<post_id>{UUID_LOOKUP_REGEX})")
    def published_post(self, request, username=None, post_id=None):
        post = services.get_published_post(username, post_id)
        return nullable(PostWithAuthorOut(post).data if post else None)

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from common.params import UUID_LOOKUP_REGEX
from common.schema import ErrorOut, IdOut, SuccessOut
from users.services import require_current_user

from .models import Comment
from .serializers import CommentIn, CommentOut
from .services import add_comment, delete_comment, list_post_comments


@extend_schema_view(
    list=extend_schema(
        tags=["Comments"],
        summary="게시물의 댓글 목록",
        description="승인된 댓글을 오래된 순으로 반환합니다. 탈퇴한 사용자의 댓글은 제외됩니다.",
        operation_id="post_comments_list",
        parameters=[OpenApiParameter(name="post_id", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="대상 게시물 ID (UUID)")],
        responses={200: OpenApiResponse(response=CommentOut(many=True))},
    ),
    create=extend_schema(
        tags=["Comments"],
        summary="게시물에 댓글 작성",
        description="발행된 게시물에만 작성할 수 있으며, 1~1000자. 작성 즉시 승인됩니다.",
        operation_id="post_comments_create",
        parameters=[OpenApiParameter(name="post_id", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="대상 게시물 ID (UUID)")],
        request=CommentIn,
        responses={201: OpenApiResponse(response=IdOut, description="생성된 댓글 ID"), 400: ErrorOut, 401: ErrorOut, 404: ErrorOut},
        examples=[OpenApiExample("요청 예시", value={"content": "좋은 글이네요!"}, request_only=True)],
    ),
)
class PostCommentViewSet(viewsets.GenericViewSet):
    """
    /api/v1/posts/{post_id}/comments
    - GET: 해당 게시물의 댓글 목록
    - POST: 새 댓글 생성
    """

    queryset = Comment.objects.none()
    serializer_class = CommentOut

    def list(self, request, post_id=None):
        return Response(CommentOut(list_post_comments(post_id), many=True).data)

    def create(self, request, post_id=None):
        user = require_current_user(request, message="Must be logged in to comment")
        ser = CommentIn(data=request.data)
        ser.is_valid(raise_exception=True)
        comment = add_comment(user=user, post_id=post_id, content=ser.validated_data["content"])
        return Response({"id": str(comment.id)}, status=status.HTTP_201_CREATED)


@extend_schema_view(
    destroy=extend_schema(
        tags=["Comments"],
        summary="댓글 삭제",
        description="댓글 작성자 또는 게시물 작성자만 삭제할 수 있습니다.",
        operation_id="comments_destroy",
        parameters=[OpenApiParameter(name="pk", location=OpenApiParameter.PATH, type=OpenApiTypes.UUID, description="댓글 ID (UUID)")],
        responses={200: OpenApiResponse(response=SuccessOut), 401: ErrorOut, 403: ErrorOut, 404: ErrorOut},
    ),
)
class CommentViewSet(viewsets.GenericViewSet):
    """
    /api/v1/comments/{id}
    - DELETE: 댓글 작성자 또는 게시물 작성자
    """

    queryset = Comment.objects.none()
    serializer_class = CommentOut
    lookup_value_regex = UUID_LOOKUP_REGEX

    def destroy(self, request, pk=None):
        user = require_current_user(request)
        delete_comment(user=user, comment_id=pk)
        return Response({"success": True})

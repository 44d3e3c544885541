from __future__ import annotations

from typing import List

from django.db import transaction
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied, ValidationError

from posts.models import Post

from .models import Comment, CommentStatus

COMMENT_MAX_LENGTH = 1000


@transaction.atomic
def add_comment(*, user, post_id, content: str) -> Comment:
    if user is None:
        raise NotAuthenticated("Must be logged in to comment")

    post = Post.objects.filter(pk=post_id).first()
    if post is None or not post.is_published:
        raise NotFound("Post not found or not published")

    # 길이 상한은 trim 이전 원문 기준
    content = content or ""
    if not content.strip() or len(content) > COMMENT_MAX_LENGTH:
        raise ValidationError({"content": f"Comment must be between 1-{COMMENT_MAX_LENGTH} characters"})

    return Comment.objects.create(
        post=post,
        author=user,
        author_name=user.name,
        author_email=user.email,
        content=content.strip(),
        status=CommentStatus.APPROVED,
    )


def list_post_comments(post_id) -> List[Comment]:
    """승인된 댓글을 오래된 순으로. 작성자 레코드가 사라진 댓글은 제외."""
    return list(
        Comment.objects.filter(post_id=post_id, status=CommentStatus.APPROVED, author__isnull=False)
        .select_related("author")
        .order_by("created_at")
    )


@transaction.atomic
def delete_comment(*, user, comment_id) -> None:
    if user is None:
        raise NotAuthenticated("Not authenticated")

    comment = Comment.objects.select_related("post").filter(pk=comment_id).first()
    if comment is None:
        raise NotFound("Comment not found")

    # 댓글 작성자 또는 게시물 작성자만
    if comment.author_id != user.id and comment.post.author_id != user.id:
        raise PermissionDenied("Not authorized to delete this comment")

    comment.delete()

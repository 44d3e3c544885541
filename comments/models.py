import uuid

from django.conf import settings
from django.db import models


class CommentStatus(models.TextChoices):
    # 로그인 사용자만 작성 가능하므로 현재는 항상 approved
    APPROVED = "approved", "Approved"


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey("posts.Post", on_delete=models.CASCADE, related_name="comments")
    # 사용자 삭제 후에도 댓글 레코드는 남고, 조회 시 작성자 없는 댓글은 숨긴다
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="comments")
    author_name = models.CharField(max_length=255)
    author_email = models.CharField(max_length=255, blank=True, default="")
    content = models.TextField()
    status = models.CharField(max_length=16, choices=CommentStatus.choices, default=CommentStatus.APPROVED)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "comments"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["post", "status", "-created_at"], name="idx_comment_post_status"),
            models.Index(fields=["author", "created_at"], name="idx_comment_author_created"),
        ]

    def __str__(self):
        return f"Comment({self.id}) by {self.author_id} on post {self.post_id}"

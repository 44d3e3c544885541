from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError

from .models import Follow

User = get_user_model()


@dataclass(frozen=True)
class FollowResult:
    following: bool  # 토글 이후 상태
    follower_count: int


class RelationshipService:
    """
    팔로우 토글 규칙을 한 곳에서 강제.
    - 자기 자신 대상 금지
    - 있으면 끊고, 없으면 맺는다(좋아요 토글과 같은 확인→쓰기)
    """

    @staticmethod
    def _get_target(target_id):
        target = User.objects.filter(id=target_id).first()
        if target is None:
            raise NotFound("User not found")
        return target

    @staticmethod
    def _validate_not_self(actor, target):
        if actor.id == target.id:
            raise ValidationError({"detail": "Cannot follow yourself"})

    @staticmethod
    @transaction.atomic
    def toggle_follow(actor, target_id) -> FollowResult:
        if actor is None:
            raise NotAuthenticated("Not authenticated")
        target = RelationshipService._get_target(target_id)
        RelationshipService._validate_not_self(actor, target)

        deleted, _ = Follow.objects.filter(follower=actor, following=target).delete()
        following = False
        if deleted == 0:
            try:
                with transaction.atomic():
                    Follow.objects.create(follower=actor, following=target)
            except IntegrityError:
                # 동시 요청이 먼저 맺은 경우: 이미 팔로우 중인 상태로 수렴
                pass
            following = True

        return FollowResult(following=following, follower_count=Follow.objects.filter(following=target).count())

    @staticmethod
    def is_following(actor, target_id) -> bool:
        if actor is None:
            return False
        return Follow.objects.filter(follower=actor, following_id=target_id).exists()

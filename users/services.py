from __future__ import annotations

import logging
import re

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError

from .authentication import Identity
from .models import User

log = logging.getLogger(__name__)

USERNAME_MIN = 3
USERNAME_MAX = 20
USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_-]+$")


# ---- 현재 사용자 해석(모든 핸들러가 이 두 함수만 사용) ----
def resolve_current_user(request) -> User | None:
    """인증되지 않았거나 레코드가 없으면 None. 관대한(permissive) 조회용."""
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None


def require_current_user(request, message: str = "Not authenticated") -> User:
    """엄격한(strict) 핸들러용: 미인증은 401, 레코드 없음은 404."""
    user = resolve_current_user(request)
    if user is not None:
        return user
    if not isinstance(getattr(request, "auth", None), Identity):
        raise NotAuthenticated(message)
    raise NotFound("User not found")


def store_user(identity: Identity | None) -> User:
    """IdP 신원으로 사용자 레코드를 만들거나 이름을 갱신한다."""
    if identity is None:
        raise NotAuthenticated("Called storeUser without authentication present")

    with transaction.atomic():
        user = User.objects.select_for_update().filter(token_identifier=identity.token_identifier).first()
        if user is not None:
            if identity.name and user.name != identity.name:
                user.name = identity.name
                user.save(update_fields=["name"])
                log.info("Patched name for user %s", user.id)
            return user

        user = User.objects.create_user(
            token_identifier=identity.token_identifier,
            name=identity.name or "Anonymous",
            email=identity.email or "",
            image_url=identity.picture_url or None,
        )
    log.info("Stored new user %s", user.id)
    return user


def update_username(user: User | None, username: str) -> User:
    if user is None:
        raise NotAuthenticated("Not authenticated")

    # 형식 → 길이 → 중복 순서
    if not USERNAME_REGEX.match(username or ""):
        raise ValidationError({"username": "Username can only contain letters, numbers, underscores, and hyphens"})
    if not (USERNAME_MIN <= len(username) <= USERNAME_MAX):
        raise ValidationError({"username": f"Username must be between {USERNAME_MIN} and {USERNAME_MAX} characters"})

    if username != user.username and User.objects.filter(username=username).exists():
        raise ValidationError({"username": "Username is already taken"})

    user.username = username
    user.last_active_at = timezone.now()
    try:
        with transaction.atomic():
            user.save(update_fields=["username", "last_active_at"])
    except IntegrityError:
        # 사전 조회와 저장 사이에 다른 사용자가 선점한 경우
        raise ValidationError({"username": "Username is already taken"})
    return user

from dataclasses import dataclass
from typing import Optional

from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from .models import User


@dataclass(frozen=True)
class Identity:
    """외부 IdP 토큰에서 꺼낸 호출자 정보. 사용자 레코드 유무와 무관하게 존재한다."""

    token_identifier: str
    name: Optional[str] = None
    email: Optional[str] = None
    picture_url: Optional[str] = None

    @classmethod
    def from_claims(cls, claims) -> "Identity":
        subject = claims.get("sub")
        if not subject:
            raise InvalidToken("Token contained no recognizable user identification")
        issuer = claims.get("iss") or ""
        return cls(
            token_identifier=f"{issuer}|{subject}",
            name=claims.get("name"),
            email=claims.get("email"),
            picture_url=claims.get("picture"),
        )


class IdentityJWTAuthentication(JWTAuthentication):
    """
    서명/만료/issuer 검증은 simplejwt 에 맡기고, 사용자 조회만 token_identifier 기준으로 바꾼다.
    - request.user: 매칭되는 User, 없으면 AnonymousUser (최초 접속 → users/store 로 생성)
    - request.auth: Identity
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        identity = Identity.from_claims(validated_token)
        return self.get_user_for_identity(identity), identity

    def get_user_for_identity(self, identity: Identity):
        user = User.objects.filter(token_identifier=identity.token_identifier).first()
        if user is None or not user.is_active:
            return AnonymousUser()
        return user

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.schema import ErrorOut, IdOut

from .models import User
from .serializers import UserOut, UsernameIn
from .services import require_current_user, store_user, update_username


class UserViewSet(viewsets.GenericViewSet):
    """
    /api/v1/users/store          (POST: IdP 신원으로 사용자 생성/갱신)
    /api/v1/users/me             (GET: 현재 사용자)
    /api/v1/users/me/username    (PATCH: 사용자명 설정)
    """

    queryset = User.objects.all()
    serializer_class = UserOut

    def get_serializer_class(self):
        if self.action == "username":
            return UsernameIn
        return UserOut

    @extend_schema(
        tags=["Users"],
        summary="IdP 신원으로 사용자 저장",
        description="최초 접속 시 사용자 레코드를 만들고, 이후에는 IdP 의 이름이 바뀐 경우에만 갱신합니다.",
        operation_id="users_store",
        request=None,
        responses={200: OpenApiResponse(response=IdOut, description="사용자 ID"), 401: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["post"], url_path="store")
    def store(self, request):
        user = store_user(request.auth)
        return Response({"id": str(user.id)}, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Users"],
        summary="현재 사용자 조회",
        operation_id="users_me",
        responses={200: OpenApiResponse(response=UserOut), 401: OpenApiResponse(response=ErrorOut), 404: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):
        user = require_current_user(request)
        return Response(UserOut(user).data)

    @extend_schema(
        tags=["Users"],
        summary="사용자명 설정",
        description="영문/숫자/`_`/`-` 로 3~20자. 다른 사용자가 쓰는 이름은 사용할 수 없습니다.",
        operation_id="users_update_username",
        request=UsernameIn,
        responses={
            200: OpenApiResponse(response=IdOut),
            400: OpenApiResponse(response=ErrorOut, description="형식/길이/중복 위반"),
            401: OpenApiResponse(response=ErrorOut),
            404: OpenApiResponse(response=ErrorOut),
        },
        examples=[OpenApiExample("요청 예시", value={"username": "ink_writer"}, request_only=True)],
    )
    @action(detail=False, methods=["patch"], url_path="me/username")
    def username(self, request):
        user = require_current_user(request)
        ser = UsernameIn(data=request.data)
        ser.is_valid(raise_exception=True)
        user = update_username(user, ser.validated_data["username"])
        return Response({"id": str(user.id)}, status=status.HTTP_200_OK)

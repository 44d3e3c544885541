from django.urls import include, re_path
from rest_framework.routers import SimpleRouter

from common.params import UUID_LOOKUP_REGEX

from .views import CommentViewSet, PostCommentViewSet

router = SimpleRouter()
router.register(r"comments", CommentViewSet, basename="comment")
router.register(rf"posts/(?P<post_id>{UUID_LOOKUP_REGEX})/comments", PostCommentViewSet, basename="post-comments")

urlpatterns = [
    re_path(r"", include(router.urls)),
]

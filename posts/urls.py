from rest_framework.routers import DefaultRouter

from .views import PostViewSet, PublicPostViewSet

router = DefaultRouter()
router.register(r"posts", PostViewSet, basename="posts")
router.register(r"public", PublicPostViewSet, basename="public")

urlpatterns = router.urls

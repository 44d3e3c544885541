from rest_framework.routers import SimpleRouter

from .views import FeedViewSet

router = SimpleRouter()
router.register("feed", FeedViewSet, basename="feed")

urlpatterns = router.urls

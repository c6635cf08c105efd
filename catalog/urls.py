from rest_framework.routers import DefaultRouter

from .views import CategoryViewSet

router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register('categories', CategoryViewSet, basename='category')

urlpatterns = router.urls

from rest_framework.routers import DefaultRouter

from .views import ApplicationViewSet, JobViewSet

router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register('jobs', JobViewSet, basename='job')
router.register('applications', ApplicationViewSet, basename='application')

urlpatterns = router.urls

from django.urls import path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register('labour', views.LabourViewSet, basename='labour')

# Mounted under /api/auth/ next to accounts.urls
auth_urlpatterns = [
    path('labour/signup/', views.LabourSignupView.as_view(), name='labour-signup'),
    path('client/signup/', views.ClientSignupView.as_view(), name='client-signup'),
    path('me/', views.MeView.as_view(), name='me'),
]

urlpatterns = router.urls

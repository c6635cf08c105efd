from django.urls import path

from . import views

urlpatterns = [
    path('labour/request-otp/', views.RequestOTPView.as_view(), name='labour-request-otp'),
    path('login/', views.LoginView.as_view(), name='login'),
]

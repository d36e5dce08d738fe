from django.urls import path

from .views import FirstTimeLoginView, LoginView, MeView

urlpatterns = [
    path('login/', LoginView.as_view(), name='auth-login'),
    path('first-time-login/', FirstTimeLoginView.as_view(), name='auth-first-time-login'),
    path('me/', MeView.as_view(), name='auth-me'),
]

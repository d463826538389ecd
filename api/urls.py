from django.urls import include, path
from rest_framework.routers import DefaultRouter
from .views import ChatViewSet, health

router = DefaultRouter(trailing_slash=False)
router.register(r"chat", ChatViewSet, basename="chat")

urlpatterns = [
    path("health", health, name="health"),
    path("", include(router.urls)),
]

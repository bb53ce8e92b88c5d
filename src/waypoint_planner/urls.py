from django.urls import path

from waypoint_planner import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/waypoint-order", views.waypoint_order_view, name="waypoint-order"),
]

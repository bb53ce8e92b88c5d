from django.urls import include, path

urlpatterns = [
    path("", include("waypoint_planner.urls")),
]

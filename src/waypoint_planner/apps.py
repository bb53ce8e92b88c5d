from django.apps import AppConfig


class WaypointPlannerConfig(AppConfig):
    name = "waypoint_planner"
    verbose_name = "Waypoint planner"

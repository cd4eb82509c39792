# apps/dashboard_api/dependencies/coordinator.py
from fastapi import Request

from apps.dashboard_api.services.coordinator import ViewCoordinator


def get_coordinator(request: Request) -> ViewCoordinator:
    """The coordinator is built once in the app lifespan and lives on app.state."""
    return request.app.state.coordinator

from fastapi import Request
from services.core import RestaurantCore


def get_core(request: Request) -> RestaurantCore:
    """The core wired into the running app by create_app."""
    return request.app.state.core

"""Activity use cases."""

from .create_activity import (
    CreateActivityRequest,
    CreateActivityResponse,
    CreateActivityUseCase,
)
from .edit_activity import EditActivityRequest, EditActivityResponse, EditActivityUseCase
from .end_activity import EndActivityRequest, EndActivityResponse, EndActivityUseCase
from .get_activity import GetActivityRequest, GetActivityResponse, GetActivityUseCase
from .get_dashboard import (
    DashboardActivity,
    GetDashboardRequest,
    GetDashboardResponse,
    GetDashboardUseCase,
)

__all__ = [
    "CreateActivityRequest",
    "CreateActivityResponse",
    "CreateActivityUseCase",
    "DashboardActivity",
    "EditActivityRequest",
    "EditActivityResponse",
    "EditActivityUseCase",
    "EndActivityRequest",
    "EndActivityResponse",
    "EndActivityUseCase",
    "GetActivityRequest",
    "GetActivityResponse",
    "GetActivityUseCase",
    "GetDashboardRequest",
    "GetDashboardResponse",
    "GetDashboardUseCase",
]

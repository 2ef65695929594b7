"""AQI Tracker Data Models.

This module contains dataclasses for profile, dashboard and UI state.

Models:
    UserProfile: Long-term user information and exposure habits.
    DashboardData: One complete dashboard payload from the model.
    AppState: Everything the view controller owns.
    AppView: Enum of navigable screens.
"""
from models.profile import UserProfile, Sensitivity, CommuteMode
from models.dashboard import AQISnapshot, ForecastPoint, DashboardData
from models.session import AppView, AppState, ChatMessage, ChatRole, welcome_message

__all__ = [
    "UserProfile",
    "Sensitivity",
    "CommuteMode",
    "AQISnapshot",
    "ForecastPoint",
    "DashboardData",
    "AppView",
    "AppState",
    "ChatMessage",
    "ChatRole",
    "welcome_message",
]

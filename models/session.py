from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum
import time
import uuid

from models.dashboard import DashboardData
from models.profile import UserProfile


class AppView(Enum):
    LOGIN = "LOGIN"
    ONBOARDING = "ONBOARDING"
    DASHBOARD = "DASHBOARD"
    SIMULATION = "SIMULATION"
    PROFILE = "PROFILE"  # overlay only, never the current view


class ChatRole(Enum):
    USER = "user"
    MODEL = "model"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ChatMessage:
    role: ChatRole
    text: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = field(default_factory=_now_ms)
    is_simulating: Optional[bool] = None


def welcome_message(profile: UserProfile) -> ChatMessage:
    """Opening turn of every simulation session."""
    text = (
        f"Hello {profile.name}. I am your Personal AQI Tracker agent.\n\n"
        "I can simulate air quality scenarios based on climate trends or give "
        "personalized advice.\n"
        "Try asking: \"What if the temperature rises by 2°C next month?\" or "
        "\"Is it safe to bike to work tomorrow morning?\""
    )
    return ChatMessage(role=ChatRole.MODEL, text=text, id="welcome")


@dataclass
class AppState:
    """The single owner of all mutable UI state."""
    view: AppView = AppView.LOGIN
    profile: Optional[UserProfile] = None
    dashboard_data: Optional[DashboardData] = None
    messages: List[ChatMessage] = field(default_factory=list)  # append-only per session
    dashboard_loading: bool = False
    chat_loading: bool = False
    dashboard_fetch_armed: bool = False
    api_key_ready: bool = False
    show_profile: bool = False
    last_error: Optional[str] = None

    def add_user_message(self, text: str) -> ChatMessage:
        msg = ChatMessage(role=ChatRole.USER, text=text)
        self.messages.append(msg)
        return msg

    def add_model_message(self, text: str, is_simulating: Optional[bool] = None) -> ChatMessage:
        msg = ChatMessage(role=ChatRole.MODEL, text=text, is_simulating=is_simulating)
        self.messages.append(msg)
        return msg

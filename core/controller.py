"""View Controller - navigation state machine and fetch orchestration.

CENTRAL CONTROLLER for the Personal AQI Tracker.

States: LOGIN → ONBOARDING → DASHBOARD ⇄ SIMULATION, with PROFILE as an
overlay flag. All mutable UI state lives in one AppState owned by this class
and is changed only through the transition methods below.

Concurrency model (single asyncio event loop):
- At most one dashboard fetch in flight, guarded by ``dashboard_loading``
  which is set before the first await.
- The simulation chat has its own independent ``chat_loading`` guard.
- No cancellation and no automatic retries: a failed fetch leaves the
  dashboard empty until the user refreshes.
"""
import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from agents.dashboard_agent import DashboardAgent
from agents.simulation_agent import SimulationAgent
from config.llm import configure_api_key, has_api_key
from core.errors import AQITrackerError, NavigationError, ProfileError
from models.profile import UserProfile
from models.session import AppState, AppView, ChatMessage, welcome_message
from services.profile_store import ProfileStore, get_profile_store
from tools.aqi_levels import aqi_category

logger = logging.getLogger(__name__)

SIMULATION_ERROR_REPLY = "I encountered an error running that simulation. Please try again."

_TABS = (AppView.DASHBOARD, AppView.SIMULATION)

T = TypeVar("T")


async def track_progress(operation: Awaitable, snapshot: Callable[[], T]) -> AsyncIterator[T]:
    """Run a controller coroutine and yield ``snapshot()`` while it is in flight and once it settles.

    The in-flight snapshot sees everything the coroutine set before its first
    real suspension: the loading flags and the user's own chat turn. An
    operation that finishes without suspending yields a single snapshot.
    """
    task = asyncio.ensure_future(operation)
    await asyncio.sleep(0)
    if not task.done():
        yield snapshot()
    await task
    yield snapshot()


class AppController:
    """
    Owns the AppState and every transition on it.

    Attributes:
        state: The single application state record.
        store: Persistence for the user profile.
        dashboard_agent: Produces DashboardData from a profile.
        simulation_agent: Answers simulation chat queries.
    """

    def __init__(self, store: Optional[ProfileStore] = None,
                 dashboard_agent: Optional[DashboardAgent] = None,
                 simulation_agent: Optional[SimulationAgent] = None,
                 api_key_ready: Optional[bool] = None):
        self.store = store or get_profile_store()
        self.dashboard_agent = dashboard_agent or DashboardAgent()
        self.simulation_agent = simulation_agent or SimulationAgent()
        self.state = AppState(
            api_key_ready=has_api_key() if api_key_ready is None else api_key_ready
        )

    # === Navigation ===

    def start(self) -> AppView:
        """Initial routing on app open: a remembered user skips the login screen."""
        profile = self.store.load()
        if profile is not None:
            self.state.profile = profile
            self._enter_dashboard()
        else:
            self.state.view = AppView.LOGIN
        return self.state.view

    def login(self) -> AppView:
        if self.state.view is not AppView.LOGIN:
            raise NavigationError(f"Cannot log in from {self.state.view.value}")
        profile = self.store.load()
        if profile is not None:
            self.state.profile = profile
            self._enter_dashboard()
            logger.info(f"Welcome back, {profile.name}")
        else:
            self.state.view = AppView.ONBOARDING
            logger.info("No saved profile, starting onboarding")
        return self.state.view

    def complete_onboarding(self, profile: UserProfile) -> AppView:
        if self.state.view is not AppView.ONBOARDING:
            raise NavigationError(f"Cannot complete onboarding from {self.state.view.value}")
        if not profile.is_complete:
            raise ProfileError("Name and city are required")
        self.store.save(profile)
        self.state.profile = profile
        self.state.dashboard_data = None
        self._enter_dashboard()
        return self.state.view

    def select_view(self, view: AppView) -> AppView:
        """Switch between the Dashboard and Simulation tabs."""
        if view not in _TABS:
            raise NavigationError(f"{view.value} is not a tab")
        if self.state.profile is None or self.state.view not in _TABS:
            raise NavigationError("Tabs are only available after login")
        if view is AppView.DASHBOARD:
            self._enter_dashboard()
        else:
            self.state.view = AppView.SIMULATION
            if not self.state.messages:
                self.state.messages.append(welcome_message(self.state.profile))
        return self.state.view

    def logout(self) -> AppView:
        self.store.clear()
        self.state.profile = None
        self.state.dashboard_data = None
        self.state.dashboard_fetch_armed = False
        self.state.messages = []
        self.state.show_profile = False
        self.state.last_error = None
        self.state.view = AppView.LOGIN
        logger.info("Logged out")
        return self.state.view

    def _enter_dashboard(self):
        self.state.view = AppView.DASHBOARD
        if self.state.dashboard_data is None:
            self.state.dashboard_fetch_armed = True

    # === Profile overlay ===

    def open_profile(self):
        if self.state.profile is None:
            raise NavigationError("No profile to edit")
        self.state.show_profile = True

    def close_profile(self):
        self.state.show_profile = False

    def save_profile(self, profile: UserProfile):
        """Persist an edited profile. A new city invalidates the dashboard."""
        if self.state.profile is None:
            raise NavigationError("No profile to edit")
        if not profile.is_complete:
            raise ProfileError("Name and city are required")
        previous_city = self.state.profile.city
        self.store.save(profile)
        self.state.profile = profile
        self.state.show_profile = False
        if profile.city != previous_city:
            logger.info(f"City changed {previous_city} → {profile.city}, dashboard invalidated")
            self.state.dashboard_data = None
            self.state.dashboard_fetch_armed = True

    # === Credential ===

    def connect_api_key(self, api_key: str) -> bool:
        if not configure_api_key(api_key):
            return False
        self.state.api_key_ready = True
        if self.state.view is AppView.DASHBOARD and self.state.dashboard_data is None:
            self.state.dashboard_fetch_armed = True
        return True

    # === Dashboard ===

    @property
    def dashboard_fetch_due(self) -> bool:
        """Whether ensure_dashboard would start a fetch right now."""
        s = self.state
        return (
            s.dashboard_fetch_armed and not s.dashboard_loading
            and s.view is AppView.DASHBOARD and s.api_key_ready
            and s.profile is not None and s.dashboard_data is None
        )

    async def ensure_dashboard(self) -> bool:
        """Entry action: run the armed dashboard fetch, if any.

        Returns:
            True if a fetch ran and produced data.
        """
        s = self.state
        if not s.dashboard_fetch_armed or s.dashboard_loading:
            return False
        if s.view is not AppView.DASHBOARD or not s.api_key_ready:
            return False
        if s.profile is None or s.dashboard_data is not None:
            s.dashboard_fetch_armed = False
            return False
        return await self._fetch_dashboard()

    async def refresh(self) -> bool:
        """User-initiated refetch. A no-op while a fetch is in flight."""
        if self.state.dashboard_loading or self.state.profile is None:
            return False
        return await self._fetch_dashboard()

    async def _fetch_dashboard(self) -> bool:
        s = self.state
        profile = s.profile
        s.dashboard_loading = True
        s.dashboard_fetch_armed = False
        data = None
        try:
            data = await self.dashboard_agent.run(profile)
            s.last_error = None
        except AQITrackerError as e:
            logger.error(f"Failed to fetch dashboard: {e}")
            s.last_error = str(e)
        except Exception as e:
            logger.error(f"Unexpected dashboard failure: {e}", exc_info=True)
            s.last_error = str(e)
        finally:
            s.dashboard_loading = False

        if s.profile is None or s.profile.city != profile.city:
            # City changed or user logged out mid-flight; result is for the old city
            logger.info(f"Discarding stale dashboard for {profile.city}")
            s.dashboard_fetch_armed = s.profile is not None
            return False

        s.dashboard_data = data
        return data is not None

    def theme_level(self) -> str:
        """AQI band key driving the page background."""
        if self.state.view not in _TABS:
            return "neutral"
        data = self.state.dashboard_data
        if data is None:
            return "unknown"
        return aqi_category(data.current.aqi).key

    # === Simulation ===

    async def send_message(self, text: str) -> Optional[ChatMessage]:
        """Append a user turn and the model's reply to the transcript.

        Returns:
            The reply message, or None if the send was ignored.
        """
        s = self.state
        query = (text or "").strip()
        if not query or s.chat_loading or s.profile is None:
            return None

        transcript = s.messages
        history = [m for m in transcript if m.id != "welcome"]
        s.add_user_message(query)
        s.chat_loading = True
        try:
            text, simulating = await self.simulation_agent.reply(s.profile, query, history), True
        except Exception as e:
            logger.error(f"Simulation failed: {e}")
            text, simulating = SIMULATION_ERROR_REPLY, None
        finally:
            s.chat_loading = False

        if s.messages is not transcript:
            logger.info("Discarding reply for a closed simulation session")
            return None
        return s.add_model_message(text, is_simulating=simulating)

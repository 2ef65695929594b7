"""AQI Tracker Services.

Services:
    ProfileStore: Local persistence of the single user profile.
    OnboardingWizard: Three-step first-run profile form.
"""
from services.profile_store import ProfileStore, get_profile_store
from services.onboarding import OnboardingWizard

__all__ = ["ProfileStore", "get_profile_store", "OnboardingWizard"]

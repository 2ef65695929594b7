"""Exception taxonomy for the AQI Tracker.

Every failure the controller may see derives from AQITrackerError so callers
can distinguish expected failures from programming errors.
"""


class AQITrackerError(Exception):
    """Base class for all tracker errors."""


class MissingCredentialError(AQITrackerError):
    """No Gemini API key is configured."""


class GenerationError(AQITrackerError):
    """The generative backend failed or returned nothing usable."""


class DecodeError(AQITrackerError, ValueError):
    """Model output could not be parsed into the expected structure."""


class ProfileError(AQITrackerError, ValueError):
    """A user profile is missing required fields."""


class NavigationError(AQITrackerError):
    """A view transition that the state machine does not allow."""

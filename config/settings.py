"""Central Configuration for the Personal AQI Tracker."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# LLM Settings
GOOGLE_API_KEY = (
    os.getenv("GOOGLE_API_KEY")
    or os.getenv("GEMINI_API_KEY")
    or os.getenv("API_KEY")
)
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash")

# Local storage (stands in for browser local storage)
PROFILE_STORAGE_PATH = Path(
    os.getenv("PROFILE_STORAGE_PATH", str(BASE_DIR / ".aqi_tracker" / "storage.json"))
)
PROFILE_STORAGE_KEY = "aqi_user_profile"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# UI
APP_TITLE = "Personal AQI Tracker"

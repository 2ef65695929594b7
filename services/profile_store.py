"""Profile Store Module

Persists the single UserProfile record, the source of truth for
personalization.

Storage mirrors browser local storage: one JSON file holding a mapping of
keys to JSON-serialized strings. The profile lives under a fixed key; other
keys in the file are left untouched.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from config.settings import PROFILE_STORAGE_PATH, PROFILE_STORAGE_KEY
from models.profile import UserProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Local key-value backed store for the user profile.

    Features:
    - load() never raises: a missing or corrupt record loads as None
    - save() replaces the file atomically (temp file + os.replace)
    - clear() removes only the profile key
    """

    def __init__(self, path: Path = PROFILE_STORAGE_PATH, key: str = PROFILE_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    # === Core Operations ===

    def load(self) -> Optional[UserProfile]:
        """Return the stored profile, or None if absent or unreadable."""
        raw = self._read_storage().get(self.key)
        if raw is None:
            return None
        try:
            profile = UserProfile.from_dict(json.loads(raw))
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Ignoring corrupt profile record under '{self.key}': {e}")
            return None
        logger.debug(f"Loaded profile for {profile.name} ({profile.city})")
        return profile

    def save(self, profile: UserProfile):
        """Overwrite the stored profile."""
        storage = self._read_storage()
        storage[self.key] = json.dumps(profile.to_dict())
        self._write_storage(storage)
        logger.info(f"Saved profile for {profile.name} ({profile.city})")

    def clear(self):
        """Remove the stored profile if there is one."""
        storage = self._read_storage()
        if storage.pop(self.key, None) is not None:
            self._write_storage(storage)
            logger.info("Cleared stored profile")

    # === Persistence ===

    def _read_storage(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage {self.path} is not a key-value mapping")
            return {}
        return data

    def _write_storage(self, storage: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".tmp_storage_", dir=str(self.path.parent), text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(storage, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


# Global store instance
_profile_store = None

def get_profile_store() -> ProfileStore:
    """Get or create the global profile store."""
    global _profile_store
    if _profile_store is None:
        _profile_store = ProfileStore()
    return _profile_store

"""Tests for ProfileStore persistence."""
import json

import pytest

from models.profile import CommuteMode, Sensitivity, UserProfile
from services.profile_store import ProfileStore


def _write_record(store, record):
    store.path.write_text(json.dumps({"aqi_user_profile": json.dumps(record)}),
                          encoding="utf-8")


class TestProfileStore:

    def test_missing_file_loads_none(self, store):
        """No storage file means no saved profile."""
        assert store.load() is None

    def test_save_then_load(self, store, profile):
        """A saved profile loads back unchanged."""
        store.save(profile)
        assert store.load() == profile

    def test_new_instance_sees_saved_profile(self, store, profile):
        """Profiles survive a restart (a fresh store on the same file)."""
        store.save(profile)
        assert ProfileStore(store.path).load() == profile

    def test_stored_under_fixed_key_with_camel_case(self, store, profile):
        """The record lives under one key as a camelCase JSON string."""
        store.save(profile)
        raw = json.loads(store.path.read_text(encoding="utf-8"))
        record = json.loads(raw["aqi_user_profile"])
        assert record["commuteMode"] == "bike"
        assert record["healthConditions"] == ["Asthma", "Dust Allergy"]

    def test_save_overwrites(self, store, profile):
        """Saving replaces the previous record and leaves no temp files."""
        store.save(profile)
        updated = UserProfile(name="Asha", city="Mumbai",
                              sensitivity=Sensitivity.LOW, commute_mode=CommuteMode.CAR)
        store.save(updated)
        assert store.load() == updated
        assert not list(store.path.parent.glob(".tmp_storage_*"))

    def test_clear(self, store, profile):
        """Clearing removes the saved profile."""
        store.save(profile)
        store.clear()
        assert store.load() is None

    def test_clear_keeps_other_keys(self, store, profile):
        """Only the profile key is removed from shared storage."""
        store.path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        store.save(profile)
        store.clear()
        assert json.loads(store.path.read_text(encoding="utf-8")) == {"theme": "dark"}

    def test_clear_without_profile_is_noop(self, store):
        """Clearing empty storage does not create a file."""
        store.clear()
        assert not store.path.exists()

    def test_corrupt_file_loads_none(self, store):
        """An unreadable storage file is treated as empty."""
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load() is None

    def test_corrupt_record_loads_none(self, store):
        """A record that is not JSON is treated as absent."""
        store.path.write_text(json.dumps({"aqi_user_profile": "{broken"}), encoding="utf-8")
        assert store.load() is None

    def test_unknown_enum_value_loads_none(self, store):
        """An unknown sensitivity value is treated as absent."""
        _write_record(store, {"name": "A", "city": "B", "sensitivity": "extreme"})
        assert store.load() is None

    def test_missing_required_field_loads_none(self, store):
        """A record without a city is treated as absent."""
        _write_record(store, {"name": "A"})
        assert store.load() is None

    @pytest.mark.parametrize("record", [
        {"name": 7, "city": "Pune"},
        {"name": "Ravi", "city": None},
        {"name": "Ravi", "city": "Pune", "healthConditions": "Asthma"},
        {"name": "Ravi", "city": "Pune", "healthConditions": ["Asthma", 3]},
        ["Ravi", "Pune"],
    ])
    def test_wrong_field_types_load_none(self, store, record):
        """Records with wrongly typed fields are treated as absent."""
        _write_record(store, record)
        assert store.load() is None

    def test_non_mapping_storage_loads_none(self, store):
        """Storage that is not a JSON object is treated as empty."""
        store.path.write_text("[1, 2]", encoding="utf-8")
        assert store.load() is None

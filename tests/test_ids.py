"""
Tests for identifier extraction, normalization and collection helpers.

Records are plain dicts unless a test is about typed records; identifier
objects from the database are stood in for by ObjectIdLike.
"""

import pytest
from decimal import Decimal
from uuid import UUID

from vehicle_ledger.ids import (
    NULL_ID,
    create_id_map,
    find_by_id,
    find_car_by_id,
    get_car_name_by_id,
    get_object_id,
    get_user_id,
    has_same_id,
    normalize_id,
    normalize_ids,
    remove_duplicate_ids,
)
from vehicle_ledger.models import EntityRecord


class ObjectIdLike:
    """Opaque identifier object, like a database driver's ObjectId."""

    def __init__(self, hex_value: str):
        self._hex = hex_value

    def __str__(self) -> str:
        return self._hex


OID = "507f1f77bcf86cd799439011"


class TestGetObjectId:
    """Tests for get_object_id."""

    @pytest.mark.parametrize("value", [None, "abc", 42, [], [{"_id": "x"}], object()])
    def test_non_records_have_no_id(self, value):
        """Test that anything that is not a record yields ""."""
        assert get_object_id(value) == ""

    def test_db_id_wins_over_client_id(self):
        """Test precedence of `_id` over `id`."""
        assert get_object_id({"_id": "db", "id": "client"}) == "db"

    def test_client_id_used_without_db_id(self):
        assert get_object_id({"id": "client"}) == "client"

    def test_no_id_fields(self):
        assert get_object_id({"name": "Car"}) == ""
        assert get_object_id({}) == ""

    @pytest.mark.parametrize("value", [0, "", False, 0.0])
    def test_falsy_db_ids_collapse_to_empty(self, value):
        """Test that 0, "" and False are not identifiers."""
        assert get_object_id({"_id": value}) == ""

    def test_unusable_db_id_is_not_skipped(self):
        """Test that a present but unusable `_id` still shadows `id`."""
        assert get_object_id({"_id": "", "id": "client"}) == ""
        assert get_object_id({"_id": 0, "id": "client"}) == ""

    def test_null_db_id_falls_back_to_usable_client_id(self):
        assert get_object_id({"_id": None, "id": "client"}) == "client"
        assert get_object_id({"_id": None, "id": 7}) == "7"

    def test_null_db_and_client_ids(self):
        assert get_object_id({"_id": None, "id": None}) == ""

    def test_null_db_id_alone_is_literal_null(self):
        """Test the literal "null" for a present but null key."""
        assert get_object_id({"_id": None}) == NULL_ID
        assert get_object_id({"_id": None, "id": ""}) == "null"
        assert get_object_id({"id": None}) == "null"

    def test_boolean_ids(self):
        """Test that True is "true" and False is unusable, independently of prior calls."""
        assert get_object_id({"_id": True}) == "true"
        assert get_object_id({"id": True}) == "true"
        assert get_object_id({"_id": False}) == ""
        assert get_object_id({"id": True}) == "true"
        assert get_object_id({"_id": False}) == ""

    def test_numbers_are_stringified(self):
        assert get_object_id({"_id": 123}) == "123"
        assert get_object_id({"_id": 12.0}) == "12"
        assert get_object_id({"_id": 1.5}) == "1.5"
        assert get_object_id({"id": Decimal("42")}) == "42"

    def test_opaque_ids_use_str(self):
        """Test that database identifier objects are rendered through str()."""
        assert get_object_id({"_id": ObjectIdLike(OID)}) == OID
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert get_object_id({"id": uid}) == str(uid)

    def test_container_ids_are_unusable(self):
        assert get_object_id({"_id": {"nested": 1}}) == ""
        assert get_object_id({"id": ["a"]}) == ""

    def test_typed_record(self):
        """Test that EntityRecord behaves like the dict it came from."""
        record = EntityRecord.from_mapping({"id": "c1", "name": "Car"})
        assert get_object_id(record) == "c1"
        assert record.identifier == "c1"

        record = EntityRecord.from_mapping({"_id": None, "id": "c2"})
        assert get_object_id(record) == "c2"

        assert get_object_id(EntityRecord(name="no id")) == ""

    @pytest.mark.parametrize("record", [
        {"_id": object()},
        {"_id": float("nan")},
        {"id": Decimal("NaN")},
        {"_id": -1},
        {"_id": b"bytes"},
        {"_id": None, "id": False},
    ])
    def test_always_returns_a_string(self, record):
        """Test totality over odd inputs."""
        assert isinstance(get_object_id(record), str)


class TestGetUserId:
    """Tests for get_user_id."""

    def test_client_id_wins(self):
        assert get_user_id({"_id": "db", "id": "client"}) == "client"

    def test_falls_back_to_db_id(self):
        assert get_user_id({"_id": ObjectIdLike(OID)}) == OID
        assert get_user_id({"_id": "db", "id": ""}) == "db"

    def test_numeric_client_id(self):
        assert get_user_id({"id": 17, "_id": "db"}) == "17"

    def test_zero_client_id_falls_through(self):
        assert get_user_id({"id": 0, "_id": "db"}) == "db"

    def test_no_usable_id(self):
        assert get_user_id(None) == ""
        assert get_user_id({}) == ""
        assert get_user_id({"_id": False}) == ""
        assert get_user_id({"email": "a@b.co"}) == ""


class TestHasSameId:
    """Tests for has_same_id."""

    def test_matching_ids_across_conventions(self):
        assert has_same_id({"_id": "a"}, {"id": "a"})

    def test_different_ids(self):
        assert not has_same_id({"_id": "a"}, {"_id": "b"})

    def test_empty_ids_never_match(self):
        assert not has_same_id({}, {})
        assert not has_same_id({"_id": 0}, {"_id": ""})
        assert not has_same_id(None, None)


class TestNormalizeId:
    """Tests for normalize_id and normalize_ids."""

    def test_none_passes_through(self):
        assert normalize_id(None) is None

    def test_non_record_passes_through(self):
        assert normalize_id("abc") == "abc"

    def test_db_id_copied_to_client_id_as_string(self):
        oid = ObjectIdLike(OID)
        result = normalize_id({"_id": oid, "name": "Car"})
        assert result["id"] == OID
        assert result["_id"] is oid
        assert result["name"] == "Car"

    def test_client_id_copied_raw(self):
        result = normalize_id({"id": 5})
        assert result == {"id": 5, "_id": 5}

    def test_both_present_untouched(self):
        record = {"_id": "db", "id": "client"}
        assert normalize_id(record) == record

    def test_input_not_mutated(self):
        """Test that a copy is returned."""
        record = {"_id": "db"}
        result = normalize_id(record)
        assert record == {"_id": "db"}
        assert result is not record

    @pytest.mark.parametrize("record", [
        {"_id": "a"},
        {"id": "b"},
        {"id": 0},
        {"_id": 0},
        {"_id": 0, "id": 7},
        {"_id": "", "id": ""},
        {"_id": True},
        {"_id": None},
        {"_id": ObjectIdLike(OID)},
        {"name": "no ids"},
    ])
    def test_idempotent(self, record):
        """Test that normalizing twice equals normalizing once."""
        once = normalize_id(record)
        assert normalize_id(once) == once

    @pytest.mark.parametrize("record,expected", [
        ({"_id": "m1"}, "m1"),
        ({"id": "c2"}, "c2"),
        ({"_id": 12}, "12"),
        ({"_id": ObjectIdLike(OID)}, OID),
    ])
    def test_both_fields_resolve_to_same_id(self, record, expected):
        result = normalize_id(record)
        assert get_object_id(result) == expected
        assert get_object_id({"id": result["id"]}) == expected

    def test_normalize_ids(self):
        records = [{"_id": "a"}, None, {"id": "b"}]
        assert normalize_ids(records) == [
            {"_id": "a", "id": "a"},
            None,
            {"id": "b", "_id": "b"},
        ]

    def test_normalize_ids_non_list(self):
        assert normalize_ids(None) is None
        assert normalize_ids("abc") == "abc"
        record = {"_id": "a"}
        assert normalize_ids(record) is record


class TestRemoveDuplicateIds:
    """Tests for remove_duplicate_ids."""

    def test_first_occurrence_kept(self):
        records = [{"_id": "a", "v": 1}, {"_id": "b", "v": 2}, {"_id": "a", "v": 3}]
        result = remove_duplicate_ids(records)
        assert result == [{"_id": "a", "v": 1}, {"_id": "b", "v": 2}]

    def test_ids_compared_across_conventions(self):
        result = remove_duplicate_ids([{"_id": "a"}, {"id": "a"}])
        assert result == [{"_id": "a"}]

    def test_first_unidentified_record_survives(self):
        records = [{"v": 1}, {"_id": "a"}, {"v": 2}]
        assert remove_duplicate_ids(records) == [{"v": 1}, {"_id": "a"}]

    def test_drop_all_unidentified(self):
        records = [{"v": 1}, {"_id": "a"}, {"v": 2}]
        result = remove_duplicate_ids(records, keep_first_unidentified=False)
        assert result == [{"_id": "a"}]

    def test_dropped_records_are_audited(self, audit_logger, audit_storage):
        remove_duplicate_ids(
            [{"_id": "a"}, {"_id": "a"}],
            entity_type="vehicle",
            audit_logger=audit_logger,
        )
        [event] = audit_storage.get_recent_events()
        assert event.event_type.value == "duplicate_records_dropped"
        assert event.entity_type == "vehicle"
        assert event.details["dropped_ids"] == ["a"]

    def test_nothing_audited_without_duplicates(self, audit_logger, audit_storage):
        remove_duplicate_ids([{"_id": "a"}, {"_id": "b"}], audit_logger=audit_logger)
        assert len(audit_storage) == 0


class TestFindAndMap:
    """Tests for find_by_id and create_id_map."""

    def test_find_by_id(self):
        records = [{"_id": "a", "v": 1}, {"id": "b", "v": 2}, {"_id": "b", "v": 3}]
        assert find_by_id(records, "b") == {"id": "b", "v": 2}

    def test_find_by_id_missing(self):
        assert find_by_id([{"_id": "a"}], "z") is None
        assert find_by_id([], "a") is None
        assert find_by_id(None, "a") is None

    def test_create_id_map_last_wins(self):
        id_map = create_id_map([{"_id": "x", "v": 1}, {"_id": "x", "v": 2}])
        assert len(id_map) == 1
        assert id_map["x"]["v"] == 2

    def test_create_id_map_skips_unidentified(self):
        id_map = create_id_map([{"v": 1}, {"_id": 0}, {"id": "a"}])
        assert list(id_map) == ["a"]


class TestCarLookups:
    """Tests for find_car_by_id and get_car_name_by_id."""

    @pytest.fixture
    def cars(self):
        return [
            {"_id": ObjectIdLike(OID), "name": "Civic"},
            {"id": "c2", "name": "Corolla"},
            {"_id": "m3", "id": "c3", "name": ["not", "a", "name"]},
        ]

    def test_match_on_db_id(self, cars):
        assert find_car_by_id(OID, cars)["name"] == "Civic"

    def test_match_on_either_field(self, cars):
        assert find_car_by_id("c2", cars)["name"] == "Corolla"
        assert find_car_by_id("m3", cars) is cars[2]
        assert find_car_by_id("c3", cars) is cars[2]

    def test_not_found(self, cars):
        assert find_car_by_id("zzz", cars) is None
        assert find_car_by_id("", cars) is None
        assert find_car_by_id("c2", []) is None
        assert find_car_by_id("c2", None) is None

    def test_car_name(self, cars):
        assert get_car_name_by_id("c2", cars) == "Corolla"

    def test_car_name_missing(self, cars):
        assert get_car_name_by_id("zzz", cars) == ""
        assert get_car_name_by_id("m3", cars) == ""
        assert get_car_name_by_id("", cars) == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Tests for storage backends, serialization and slots.
"""

import json
import os

import pytest

from asset_desk.models import AssetType
from asset_desk.storage import (
    ASSETS_KEY,
    FileStore,
    MemoryStore,
    PersistenceError,
    StorageSlots,
)
from asset_desk.storage.serialization import asset_from_record, asset_to_record

from conftest import make_asset


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_get_missing_is_none(self):
        assert MemoryStore().get("nope") is None

    def test_set_get_remove(self):
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        store.remove("k")
        store.remove("k")
        assert store.get("k") is None
        assert store.keys() == []


class TestFileStore:
    """Tests for FileStore."""

    def test_writes_one_file_per_key(self, tmp_path):
        store = FileStore(tmp_path / "data")
        store.set("user_assets", "[]")

        assert (tmp_path / "data" / "user_assets.json").read_text(encoding="utf-8") == "[]"
        assert store.get("user_assets") == "[]"

    def test_survives_new_instance(self, tmp_path):
        FileStore(tmp_path).set("auth_user", '{"id": "1"}')
        assert FileStore(tmp_path).get("auth_user") == '{"id": "1"}'

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        store = FileStore(tmp_path)
        store.set("k", "first")
        store.set("k", "second")

        assert store.get("k") == "second"
        assert sorted(os.listdir(tmp_path)) == ["k.json"]

    def test_remove_missing_is_noop(self, tmp_path):
        store = FileStore(tmp_path)
        store.remove("nope")
        assert store.get("nope") is None

    def test_unwritable_directory_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(PersistenceError):
            FileStore(blocker / "sub")

    def test_write_failure_raises(self, tmp_path):
        store = FileStore(tmp_path)
        # A directory in the key's place makes os.replace fail
        (tmp_path / "k.json").mkdir()
        with pytest.raises(PersistenceError):
            store.set("k", "value")
        assert [p for p in os.listdir(tmp_path) if p.endswith(".tmp")] == []

    def test_undecodable_bytes_raise_persistence_error(self, tmp_path):
        (tmp_path / "user_assets.json").write_bytes(b"\xff\xfe[")
        with pytest.raises(PersistenceError):
            FileStore(tmp_path).get("user_assets")


class TestSerialization:
    """Tests for asset record conversion."""

    def test_record_keys(self):
        record = asset_to_record(make_asset("shop.com", AssetType.DOMAIN))
        assert set(record) == {
            "id", "name", "type", "status", "cost", "expirationDate",
            "tags", "createdAt", "updatedAt", "user_id",
        }

    def test_round_trip(self, sample_assets):
        for asset in sample_assets:
            assert asset_from_record(json.loads(json.dumps(asset_to_record(asset)))) == asset

    def test_no_expiration_is_empty_string(self, sample_assets):
        record = asset_to_record(sample_assets[3])
        assert record["expirationDate"] == ""
        assert asset_from_record(record).expiration_date is None

    def test_cost_is_lossless(self, sample_assets):
        record = asset_to_record(sample_assets[1])
        assert record["cost"] == "9.99"


class TestStorageSlots:
    """Tests for StorageSlots."""

    def test_round_trip_equality(self, slots, sample_assets):
        slots.set_assets(sample_assets)
        assert slots.get_assets() == sample_assets

    def test_empty_slot_is_empty_list(self, slots):
        assert slots.get_assets() == []

    @pytest.mark.parametrize("raw", ["{not json", '{"id": 1}', '[{"id": "x"}]', "   "])
    def test_corrupt_value_degrades_to_empty(self, memory_store, slots, raw):
        memory_store.set(ASSETS_KEY, raw)
        assert slots.get_assets() == []

    def test_corrupt_user_is_none(self, memory_store, slots):
        memory_store.set("auth_user", "null-ish")
        assert slots.get_user() is None

    def test_owner_filter(self, slots):
        mine = make_asset("mine", AssetType.BUSINESS_MANAGER, owner_id="a")
        theirs = make_asset("theirs", AssetType.BUSINESS_MANAGER, owner_id="b")
        slots.set_assets([mine, theirs])

        assert slots.get_owner_assets("a") == [mine]
        assert slots.get_owner_assets("c") == []

    def test_set_owner_assets_keeps_others(self, slots):
        mine = make_asset("mine", AssetType.BUSINESS_MANAGER, owner_id="a")
        theirs = make_asset("theirs", AssetType.BUSINESS_MANAGER, owner_id="b")
        slots.set_assets([mine, theirs])

        replacement = make_asset("new", AssetType.OTHER, owner_id="a")
        slots.set_owner_assets("a", [replacement])

        assert slots.get_assets() == [theirs, replacement]

    def test_clear(self, memory_store, slots, sample_assets):
        slots.set_assets(sample_assets)
        memory_store.set("auth_user", "{}")
        slots.clear()
        assert memory_store.keys() == []

    def test_read_failure_degrades(self, sample_assets):
        class Unreadable(MemoryStore):
            def get(self, key):
                raise PersistenceError("disk gone")

        assert StorageSlots(Unreadable()).get_assets() == []

    def test_file_backed_slots(self, tmp_path, sample_assets):
        StorageSlots(FileStore(tmp_path)).set_assets(sample_assets)
        assert StorageSlots(FileStore(tmp_path)).get_assets() == sample_assets

    def test_undecodable_file_degrades(self, tmp_path):
        (tmp_path / "user_assets.json").write_bytes(b"\xff\xfe[")
        assert StorageSlots(FileStore(tmp_path)).get_assets() == []


class TestMixedAssetSlot:
    """Single bad records are skipped on read and preserved on write."""

    @pytest.fixture
    def stored(self, memory_store):
        kept = make_asset("a-asset", AssetType.DOMAIN, owner_id="a")
        legacy = asset_to_record(make_asset("legacy page", AssetType.FACEBOOK_PAGE, owner_id="b"))
        legacy["type"] = "pagina_do_instagram"
        memory_store.set(ASSETS_KEY, json.dumps([asset_to_record(kept), legacy, "junk"]))
        return kept, legacy

    def test_bad_records_are_skipped(self, slots, stored):
        kept, _ = stored
        assert slots.get_assets() == [kept]

    def test_other_owner_write_keeps_every_record(self, memory_store, slots, stored):
        kept, legacy = stored
        added = make_asset("c-asset", AssetType.HOSTING, owner_id="c")

        slots.set_owner_assets("c", [added])

        raw = json.loads(memory_store.get(ASSETS_KEY))
        assert raw[1:3] == [legacy, "junk"]
        assert slots.get_assets() == [kept, added]

    def test_owner_write_replaces_only_decoded_records(self, memory_store, slots, stored):
        _, legacy = stored

        slots.set_owner_assets("a", [])

        assert json.loads(memory_store.get(ASSETS_KEY)) == [legacy, "junk"]

    def test_malformed_cost_is_skipped(self, memory_store, slots):
        record = asset_to_record(make_asset("odd", AssetType.OTHER, owner_id="a"))
        record["cost"] = "twelve"
        memory_store.set(ASSETS_KEY, json.dumps([record]))
        assert slots.get_assets() == []


class TestUnreadableAssetSlot:
    """A merge never overwrites a slot it could not read."""

    @pytest.mark.parametrize("raw", ["{not json", '{"id": 1}', '"text"'])
    def test_merge_is_refused(self, memory_store, slots, raw):
        memory_store.set(ASSETS_KEY, raw)

        with pytest.raises(PersistenceError):
            slots.set_owner_assets("c", [make_asset("c-asset", AssetType.OTHER, owner_id="c")])

        assert memory_store.get(ASSETS_KEY) == raw

    def test_merge_into_undecodable_file_is_refused(self, tmp_path):
        path = tmp_path / "user_assets.json"
        path.write_bytes(b"\xff\xfe[")
        slots = StorageSlots(FileStore(tmp_path))

        with pytest.raises(PersistenceError):
            slots.set_owner_assets("c", [])

        assert path.read_bytes() == b"\xff\xfe["

    def test_whole_replace_is_still_allowed(self, memory_store, slots, sample_assets):
        memory_store.set(ASSETS_KEY, "{not json")
        slots.set_assets(sample_assets)
        assert slots.get_assets() == sample_assets

import gc

import pytest

from app.domains.pets.exception import (
    PetValidationError,
    UnknownRouteError,
    UnsupportedRouteError,
)
from app.domains.pets.service.pet_provider import as_integer
from tests.conftest import PETS_URI


def count_rows(provider):
    with provider.query(PETS_URI) as rows:
        return rows.get_count()


# ------------------------
# insert
# ------------------------
def test_insert_valid_pet_round_trips(provider, rex, changes):
    new_uri = provider.insert(PETS_URI, rex)

    assert new_uri.startswith(PETS_URI + "/")
    pet_id = int(new_uri.rsplit("/", 1)[1])
    assert pet_id >= 1
    assert count_rows(provider) == 1

    with provider.query(new_uri) as rows:
        row = rows.first()
    assert row == {"_id": pet_id, "name": "Rex", "breed": "Lab", "gender": 1, "weight": 10}
    assert changes == [PETS_URI]


@pytest.mark.parametrize("values", [
    {"breed": "Lab", "gender": 1},
    {"name": None, "gender": 1},
    {"name": "", "gender": 1},
    {"name": "   ", "gender": 1},
])
def test_insert_requires_name(provider, values, changes):
    with pytest.raises(PetValidationError) as exc:
        provider.insert(PETS_URI, values)

    assert exc.value.code == "PET_400_1"
    assert count_rows(provider) == 0
    assert changes == []


@pytest.mark.parametrize("gender", [None, -1, 3, 99, "male", True])
def test_insert_requires_valid_gender(provider, gender):
    with pytest.raises(PetValidationError) as exc:
        provider.insert(PETS_URI, {"name": "Rex", "gender": gender})

    assert exc.value.code == "PET_400_2"
    assert count_rows(provider) == 0


def test_insert_requires_gender_key(provider):
    with pytest.raises(PetValidationError):
        provider.insert(PETS_URI, {"name": "Rex"})


@pytest.mark.parametrize("weight", [-1, -100, "heavy"])
def test_insert_rejects_invalid_weight(provider, weight):
    with pytest.raises(PetValidationError) as exc:
        provider.insert(PETS_URI, {"name": "Rex", "gender": 1, "weight": weight})

    assert exc.value.code == "PET_400_3"
    assert count_rows(provider) == 0


def test_insert_accepts_absent_weight_and_breed(provider):
    new_uri = provider.insert(PETS_URI, {"name": "Rex", "gender": 0})

    with provider.query(new_uri) as rows:
        row = rows.first()
    assert row["weight"] == 0
    assert row["breed"] is None


def test_insert_normalizes_numeric_strings(provider):
    new_uri = provider.insert(PETS_URI, {"name": "Rex", "gender": "2", "weight": "5"})

    with provider.query(new_uri) as rows:
        row = rows.first()
    assert row["gender"] == 2
    assert row["weight"] == 5


def test_insert_converts_non_string_name(provider):
    new_uri = provider.insert(PETS_URI, {"name": 123, "gender": 1})

    with provider.query(new_uri) as rows:
        assert rows.first()["name"] == "123"


def test_update_converts_non_string_name(provider, rex):
    new_uri = provider.insert(PETS_URI, rex)

    assert provider.update(new_uri, {"name": 7.5}) == 1

    with provider.query(new_uri) as rows:
        assert rows.first()["name"] == "7.5"


def test_insert_rejects_caller_supplied_id(provider):
    with pytest.raises(PetValidationError) as exc:
        provider.insert(PETS_URI, {"_id": 5, "name": "Rex", "gender": 1})
    assert exc.value.code == "PET_400_4"


def test_insert_on_item_route_is_unsupported(provider, rex):
    with pytest.raises(UnsupportedRouteError):
        provider.insert(f"{PETS_URI}/1", rex)


def test_insert_store_failure_is_soft(provider, store, rex, changes, monkeypatch):
    monkeypatch.setattr(store, "insert", lambda values: -1)

    assert provider.insert(PETS_URI, rex) is None
    assert changes == []


def test_insert_unknown_column_is_soft_failure(provider):
    assert provider.insert(PETS_URI, {"name": "Rex", "gender": 1, "color": "brown"}) is None
    assert count_rows(provider) == 0


# ------------------------
# query
# ------------------------
def test_collection_query_returns_all_rows_in_store_order(provider):
    for name in ("Rex", "Luna", "Bolt"):
        provider.insert(PETS_URI, {"name": name, "gender": 0})

    with provider.query(PETS_URI) as rows:
        assert [row["name"] for row in rows] == ["Rex", "Luna", "Bolt"]


def test_item_query_ignores_caller_selection(provider, rex):
    new_uri = provider.insert(PETS_URI, rex)

    with provider.query(new_uri, selection="name=?", selection_args=["Nobody"]) as rows:
        assert rows.get_count() == 1
        assert rows.first()["name"] == "Rex"


def test_collection_query_applies_selection_and_order(provider):
    provider.insert(PETS_URI, {"name": "Rex", "gender": 1, "weight": 10})
    provider.insert(PETS_URI, {"name": "Luna", "gender": 2, "weight": 4})
    provider.insert(PETS_URI, {"name": "Bolt", "gender": 1, "weight": 12})

    with provider.query(PETS_URI, ["name"], "gender=?", [1], "name") as rows:
        assert [row["name"] for row in rows] == ["Bolt", "Rex"]


def test_query_unknown_route(provider):
    with pytest.raises(UnsupportedRouteError, match="Cannot query unknown URI"):
        provider.query("content://com.example.android.pets/owners")


def test_query_result_goes_stale_on_change(provider, rex):
    new_uri = provider.insert(PETS_URI, rex)
    seen = []

    rows = provider.query(PETS_URI)
    rows.add_change_listener(seen.append)
    assert rows.notification_uri == PETS_URI
    assert rows.is_stale is False

    provider.update(new_uri, {"weight": 20})

    assert rows.is_stale is True
    assert seen == [new_uri]
    rows.close()


def test_closed_query_result_stops_observing(provider, notifier, rex):
    rows = provider.query(PETS_URI)
    rows.close()

    provider.insert(PETS_URI, rex)

    assert rows.is_stale is False
    assert notifier.observer_count() == 0


def test_unclosed_query_results_release_observers(provider, notifier, rex):
    provider.insert(PETS_URI, rex)

    for _ in range(100):
        provider.query(PETS_URI)
    gc.collect()

    assert notifier.observer_count() == 0


def test_kept_query_result_still_observes_after_gc(provider, notifier, rex):
    rows = provider.query(PETS_URI)
    gc.collect()

    provider.insert(PETS_URI, rex)

    assert notifier.observer_count() == 1
    assert rows.is_stale is True
    rows.close()
    assert notifier.observer_count() == 0


# ------------------------
# update
# ------------------------
def test_item_update_changes_only_that_column(provider, rex, changes):
    first = provider.insert(PETS_URI, rex)
    second = provider.insert(PETS_URI, {"name": "Luna", "breed": "Pug", "gender": 2, "weight": 4})
    changes.clear()

    assert provider.update(first, {"weight": 20}) == 1

    with provider.query(first) as rows:
        assert rows.first() == {"_id": 1, "name": "Rex", "breed": "Lab", "gender": 1, "weight": 20}
    with provider.query(second) as rows:
        assert rows.first()["weight"] == 4
    assert changes == [first]


def test_empty_update_returns_zero(provider, store, rex, changes, monkeypatch):
    new_uri = provider.insert(PETS_URI, rex)
    changes.clear()

    def fail(*args, **kwargs):
        raise AssertionError("store must not be touched")

    monkeypatch.setattr(store, "update", fail)

    assert provider.update(new_uri, {}) == 0
    assert changes == []


def test_update_validates_only_present_keys(provider, rex):
    new_uri = provider.insert(PETS_URI, rex)

    assert provider.update(new_uri, {"breed": None}) == 1

    with pytest.raises(PetValidationError):
        provider.update(new_uri, {"name": None})
    with pytest.raises(PetValidationError):
        provider.update(new_uri, {"gender": 7})
    with pytest.raises(PetValidationError):
        provider.update(new_uri, {"weight": -3})

    with provider.query(new_uri) as rows:
        assert rows.first() == {"_id": 1, "name": "Rex", "breed": None, "gender": 1, "weight": 10}


def test_item_update_ignores_caller_selection(provider, rex):
    first = provider.insert(PETS_URI, rex)
    provider.insert(PETS_URI, {"name": "Luna", "gender": 2})

    assert provider.update(first, {"breed": "Mutt"}, "gender=?", [2]) == 1

    with provider.query(PETS_URI, ["breed"], "name=?", ["Luna"]) as rows:
        assert rows.first()["breed"] is None


def test_collection_update_applies_selection(provider, changes):
    provider.insert(PETS_URI, {"name": "Rex", "gender": 1})
    provider.insert(PETS_URI, {"name": "Bolt", "gender": 1})
    provider.insert(PETS_URI, {"name": "Luna", "gender": 2})
    changes.clear()

    assert provider.update(PETS_URI, {"weight": 9}, "gender=?", [1]) == 2
    assert changes == [PETS_URI]


def test_update_with_no_matching_rows_does_not_notify(provider, changes):
    assert provider.update(f"{PETS_URI}/99", {"weight": 1}) == 0
    assert changes == []


def test_update_unknown_route(provider):
    with pytest.raises(UnsupportedRouteError, match="Update is not supported"):
        provider.update("content://com.example.android.pets/pets/x", {"weight": 1})


# ------------------------
# delete
# ------------------------
def test_delete_missing_item_returns_zero(provider, rex, changes):
    provider.insert(PETS_URI, rex)
    changes.clear()

    assert provider.delete(f"{PETS_URI}/99") == 0
    assert count_rows(provider) == 1
    assert changes == []


def test_delete_item_removes_only_that_row(provider, rex, changes):
    first = provider.insert(PETS_URI, rex)
    provider.insert(PETS_URI, {"name": "Luna", "gender": 2})
    changes.clear()

    assert provider.delete(first, "gender=?", [2]) == 1

    with provider.query(PETS_URI) as rows:
        assert [row["name"] for row in rows] == ["Luna"]
    assert changes == [first]


def test_delete_collection_with_selection(provider, changes):
    provider.insert(PETS_URI, {"name": "Rex", "gender": 1})
    provider.insert(PETS_URI, {"name": "Luna", "gender": 2})
    changes.clear()

    assert provider.delete(PETS_URI, "gender=?", [2]) == 1
    assert provider.delete(PETS_URI) == 1
    assert count_rows(provider) == 0
    assert changes == [PETS_URI, PETS_URI]


def test_out_of_range_item_id_is_unsupported(provider, rex, changes):
    provider.insert(PETS_URI, rex)
    changes.clear()
    huge = f"{PETS_URI}/99999999999999999999"

    with pytest.raises(UnsupportedRouteError):
        provider.delete(huge)
    with pytest.raises(UnsupportedRouteError):
        provider.query(huge)
    with pytest.raises(UnsupportedRouteError):
        provider.update(huge, {"weight": 1})

    assert count_rows(provider) == 1
    assert changes == []


def test_delete_unknown_route(provider):
    with pytest.raises(UnsupportedRouteError, match="Deletion is not supported"):
        provider.delete("content://com.example.android.pets/")


# ------------------------
# type
# ------------------------
def test_get_type(provider):
    assert provider.get_type(PETS_URI) == "vnd.android.cursor.dir/com.example.android.pets/pets"
    assert provider.get_type(f"{PETS_URI}/3") == "vnd.android.cursor.item/com.example.android.pets/pets"


def test_get_type_unknown_route(provider):
    with pytest.raises(UnknownRouteError):
        provider.get_type("content://com.example.android.pets/owners")


@pytest.mark.parametrize("value, expected", [
    (1, 1), ("2", 2), (" 3 ", 3), (4.0, 4), (4.5, None), (True, None), (None, None), ([1], None),
])
def test_as_integer(value, expected):
    assert as_integer(value) == expected

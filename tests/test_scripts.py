from scripts.add_sample_pets import add_sample_pets
from scripts.delete_all_pets import delete_all_pets
from tests.conftest import PETS_URI


def test_add_sample_pets(provider):
    uris = add_sample_pets(provider, 2)

    assert uris == [f"{PETS_URI}/1", f"{PETS_URI}/2"]
    with provider.query(PETS_URI) as rows:
        assert rows.first() == {"_id": 1, "name": "Toto", "breed": "Terrier", "gender": 1, "weight": 7}


def test_delete_all_pets(provider):
    add_sample_pets(provider, 3)

    assert delete_all_pets(provider, confirm=True) == 3
    assert delete_all_pets(provider, confirm=True) == 0


def test_delete_all_pets_cancelled(provider, monkeypatch):
    add_sample_pets(provider, 1)
    monkeypatch.setattr("builtins.input", lambda: "no")

    assert delete_all_pets(provider) == -1
    with provider.query(PETS_URI) as rows:
        assert rows.get_count() == 1

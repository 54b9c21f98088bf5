import pytest
from fastapi.testclient import TestClient

from itemoptions.database import get_db
from itemoptions.main import app
from itemoptions.models import ItemOption


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_property(client, **overrides) -> int:
    body = {"name": "Beach Condo", "city": "Miami", "region_code": "fl"}
    body.update(overrides)
    r = client.post("/properties", json=body)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_and_read_property(client) -> None:
    prop_id = create_property(client)

    r = client.get(f"/properties/{prop_id}")

    assert r.status_code == 200
    assert r.json()["region_code"] == "FL"
    assert client.get("/properties/9999").status_code == 404


def test_unset_options_show_defaults(client) -> None:
    prop_id = create_property(client)

    r = client.get(f"/properties/{prop_id}/options")

    assert r.status_code == 200
    assert r.json() == {
        "property_id": prop_id,
        "values": {
            "amenities": [],
            "pet_policy": "not_allowed",
            "max_guests": 2,
            "quiet_hours": None,
            "self_check_in": False,
        },
    }


def test_update_options_reconciles_and_reports_changes(client, session_factory) -> None:
    prop_id = create_property(client)

    r = client.put(
        f"/properties/{prop_id}/options",
        json={"values": {"amenities": ["wifi", "pool"], "pet_policy": "allowed", "max_guests": 2}},
    )

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["changes"] == {"added": 3, "removed": 0, "updated": 0}
    assert body["values"]["amenities"] == ["wifi", "pool"]
    assert body["values"]["pet_policy"] == "allowed"

    r = client.put(f"/properties/{prop_id}/options", json={"values": {"amenities": ["pool", "gym"]}})
    assert r.json()["changes"] == {"added": 1, "removed": 1, "updated": 0}
    assert r.json()["values"]["amenities"] == ["pool", "gym"]

    db = session_factory()
    try:
        assert db.query(ItemOption).filter(ItemOption.property_id == prop_id).count() == 3
    finally:
        db.close()


def test_delete_option_falls_back_to_default(client) -> None:
    prop_id = create_property(client)
    client.put(f"/properties/{prop_id}/options", json={"values": {"max_guests": 8, "amenities": ["wifi"]}})

    r = client.delete(f"/properties/{prop_id}/options/max_guests")
    assert r.status_code == 200
    assert r.json()["changes"]["removed"] == 1
    assert r.json()["values"]["max_guests"] == 2

    r = client.delete(f"/properties/{prop_id}/options/amenities")
    assert r.json()["values"]["amenities"] == []


def test_undefined_option_is_404(client) -> None:
    prop_id = create_property(client)

    r = client.put(f"/properties/{prop_id}/options", json={"values": {"color": "red"}})
    assert r.status_code == 404
    assert "color" in r.json()["detail"]

    assert client.delete(f"/properties/{prop_id}/options/color").status_code == 404


def test_failed_update_writes_nothing(client) -> None:
    prop_id = create_property(client)

    r = client.put(f"/properties/{prop_id}/options", json={"values": {"max_guests": 5, "color": "red"}})
    assert r.status_code == 404

    assert client.get(f"/properties/{prop_id}/options").json()["values"]["max_guests"] == 2


def test_multi_value_option_requires_list(client) -> None:
    prop_id = create_property(client)

    r = client.put(f"/properties/{prop_id}/options", json={"values": {"amenities": "wifi"}})

    assert r.status_code == 422


def test_ineligible_property_is_409(client) -> None:
    shared = create_property(client, owner_occupied=False)
    occupied = create_property(client, owner_occupied=True)

    r = client.put(f"/properties/{shared}/options", json={"values": {"resident_contact": "Ana"}})
    assert r.status_code == 409

    r = client.put(f"/properties/{occupied}/options", json={"values": {"resident_contact": "Ana"}})
    assert r.status_code == 200
    assert r.json()["values"]["resident_contact"] == "Ana"


def test_settings_form_round_trip(client) -> None:
    prop_id = create_property(client)

    r = client.put(
        f"/properties/{prop_id}/settings",
        json={"amenities": ["wifi"], "house": {"pets": "cats_only", "guests": 3}},
    )

    assert r.status_code == 200, r.text
    assert r.json() == {
        "amenities": ["wifi"],
        "house": {"pets": "cats_only", "guests": 3, "quiet_hours": None},
        "self_check_in": False,
    }
    assert client.get(f"/properties/{prop_id}/settings").json() == r.json()


def test_corrupt_storage_is_500(client, session_factory) -> None:
    prop_id = create_property(client)
    db = session_factory()
    try:
        db.add_all([
            ItemOption(property_id=prop_id, key="quiet_hours", value="a"),
            ItemOption(property_id=prop_id, key="quiet_hours", value="b"),
        ])
        db.commit()
    finally:
        db.close()

    r = client.get(f"/properties/{prop_id}/options")

    assert r.status_code == 500


def test_overlong_region_code_is_rejected(client) -> None:
    r = client.post("/properties", json={"city": "Miami", "region_code": "X" * 21})

    assert r.status_code == 422
    assert client.post("/properties", json={"city": "Miami", "region_code": "X" * 20}).status_code == 201

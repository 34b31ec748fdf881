"""Calculation Routes — verifies stateless calculations over HTTP.

Invariants:
    - Omitted settings fall back to the configured menu (8/6 slices, 800, 80%)
    - Engine errors come back as 400 envelopes with their domain code
    - Pydantic errors come back as 400 VALIDATION_ERROR with field details
"""

from tests.factories import participant_json


async def test_calculate_with_default_menu(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 3), participant_json("Bob", 5)],
    })
    assert res.status_code == 200
    data = res.json()
    assert data["scheme_id"] == "equal-price"
    assert data["currency"] == "RUB"
    assert data["plan"]["pizza_count"] == 1
    assert data["plan"]["total_cost"] == 800
    assert data["user_slices_distribution"] == {"participant-1": 3, "participant-2": 5}
    assert data["user_costs"] == {"participant-1": 300, "participant-2": 500}
    assert len(data["user_slice_refs"]["participant-2"]) == 5


async def test_calculate_keeps_client_ids(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 4, id="ann")],
    })
    assert res.status_code == 200
    assert set(res.json()["user_costs"]) == {"ann"}


async def test_proportional_scheme_for_small_only_group(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [
            participant_json("Ann", 3, 6, slice_preference="small_only"),
            participant_json("Bob", 3, 6, slice_preference="small_only"),
        ],
        "settings": {
            "scheme_id": "proportional-price",
            "large": {"slices_per_pizza": 8, "base_price": 100},
            "small_price_percent": 70,
        },
    })
    assert res.status_code == 200
    data = res.json()
    assert data["plan"]["large_count"] == 0
    assert data["plan"]["small_count"] == 1
    assert data["user_costs"] == {"participant-1": 35, "participant-2": 35}


async def test_explicit_small_price_overrides_percent(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 6, slice_preference="small_only")],
        "settings": {"small": {"slices_per_pizza": 6, "base_price": 500}},
    })
    assert res.status_code == 200
    assert res.json()["plan"]["units"][0]["price"] == 500


async def test_free_pizza_reported_in_plan(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json(n, 8) for n in ("Ann", "Bob", "Cy")],
        "settings": {"small": {"slices_per_pizza": 5, "base_price": 500}},
    })
    plan = res.json()["plan"]
    assert plan["free_pizza_count"] == 1
    assert plan["free_pizza_value"] == 800
    assert plan["total_cost"] == 1600


async def test_variants_endpoint(client):
    res = await client.post("/api/v1/calculations/variants", json={
        "participants": [participant_json("Ann", 5), participant_json("Bob", 4)],
    })
    assert res.status_code == 200
    variants = res.json()["variants"]
    assert [v["name"] for v in variants] == ["large", "reduced", "small"]
    assert [v["visible"] for v in variants] == [True, True, True]
    assert variants[1]["missing_slices"] == 1


# ─── Errors ─────────────────────────────────────────────────────

async def test_unknown_scheme_returns_400(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 3)],
        "settings": {"scheme_id": "pay-what-you-want"},
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "UNKNOWN_SCHEME"
    assert error["context"]["scheme_id"] == "pay-what-you-want"


async def test_min_above_max_returns_invalid_participant(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 5, 3)],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PARTICIPANT"


async def test_out_of_range_slices_returns_validation_error(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 0, 3)],
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(
        d["field"] == "body.participants.0.min_slices" for d in error["details"]
    )


async def test_empty_participants_rejected(client):
    res = await client.post("/api/v1/calculations", json={"participants": []})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_blank_name_rejected(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("   ", 2)],
    })
    assert res.status_code == 400


async def test_lowercase_currency_rejected(client):
    res = await client.post("/api/v1/calculations", json={
        "participants": [participant_json("Ann", 2)],
        "settings": {"currency": "rub"},
    })
    assert res.status_code == 400

"""Integration tests for the /v1/numerology router."""
import logging
from datetime import date

from numeromap.interpretation_data import BASE_INTERPRETATIONS, CENTURY_GIFT, FALLBACK_NUANCE

HEADERS = {"X-User-Id": "user-501"}
VALID_PAYLOAD = {
    "full_name": "Ana Núñez",
    "birth_date": "1990-05-12",
    "current_year": 2026,
}


def test_map_returns_numbers(client):
    resp = client.post("/v1/numerology/map", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    data = resp.json()
    numbers = data["numbers"]
    assert numbers["essence"] == 3
    assert numbers["life_path"] == 9
    assert numbers["personal_year"] == 9
    assert numbers["divine_gift"] == 9
    # A=1 N=5 A=1 + N=5 U=3 Ñ=5 E=5 Z=8 = 33, a master number
    assert numbers["name_vibration"] == 33
    assert data["current_year"] == 2026
    assert data["synthesis"]


def test_map_anonymous_is_not_stored(client):
    resp = client.post("/v1/numerology/map", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    assert resp.json()["calculation_id"] is None


def test_map_defaults_current_year(client):
    payload = {"full_name": "Ana Núñez", "birth_date": "1990-05-12"}
    resp = client.post("/v1/numerology/map", json=payload)
    assert resp.status_code == 200
    assert resp.json()["current_year"] == date.today().year


def test_map_signed_in_appends_history(client):
    resp = client.post("/v1/numerology/map", headers=HEADERS, json=VALID_PAYLOAD)
    assert resp.status_code == 200
    calculation_id = resp.json()["calculation_id"]
    assert calculation_id is not None

    history = client.get("/v1/numerology/history", headers=HEADERS)
    assert history.status_code == 200
    items = history.json()["items"]
    assert len(items) == 1
    assert items[0]["id"] == calculation_id
    assert items[0]["numbers"]["life_path"] == 9
    assert items[0]["birth_date"] == "1990-05-12"


def test_history_newest_first(client):
    client.post("/v1/numerology/map", headers=HEADERS, json=VALID_PAYLOAD)
    client.post(
        "/v1/numerology/map",
        headers=HEADERS,
        json={"full_name": "John Smith", "birth_date": "1985-03-15", "current_year": 2026},
    )
    items = client.get("/v1/numerology/history", headers=HEADERS).json()["items"]
    assert [item["full_name"] for item in items] == ["John Smith", "Ana Núñez"]


def test_history_is_per_user(client):
    client.post("/v1/numerology/map", headers=HEADERS, json=VALID_PAYLOAD)
    other = client.get("/v1/numerology/history", headers={"X-User-Id": "someone-else"})
    assert other.status_code == 200
    assert other.json()["items"] == []


def test_history_requires_auth(client):
    resp = client.get("/v1/numerology/history")
    assert resp.status_code == 401


def test_map_invalid_name_no_letters(client):
    resp = client.post(
        "/v1/numerology/map",
        json={"full_name": "123 456", "birth_date": "1990-05-12"},
    )
    assert resp.status_code == 422


def test_map_name_without_mappable_letters(client):
    resp = client.post(
        "/v1/numerology/map",
        json={"full_name": "ßß ßß", "birth_date": "1990-05-12"},
    )
    assert resp.status_code == 422


def test_map_name_too_short(client):
    resp = client.post(
        "/v1/numerology/map",
        json={"full_name": "Ñ", "birth_date": "1990-05-12"},
    )
    assert resp.status_code == 422


def test_map_invalid_date(client):
    for birth_date in ("1799-12-31", "2101-01-01", "1990-02-30", "1990-13-01"):
        resp = client.post(
            "/v1/numerology/map",
            json={"full_name": "Ana Núñez", "birth_date": birth_date},
        )
        assert resp.status_code == 422, birth_date


def test_map_invalid_current_year(client):
    resp = client.post(
        "/v1/numerology/map",
        json={"full_name": "Ana Núñez", "birth_date": "1990-05-12", "current_year": 0},
    )
    assert resp.status_code == 422


def test_pillar_detail(client):
    resp = client.post("/v1/numerology/pillars/life_path", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    data = resp.json()
    assert data["pillar"] == "life_path"
    assert data["number"] == 9
    assert data["calculation_steps"] == "12 → 3 + 5 + 1990 → 19 → 10 → 1 = 9"
    assert data["interpretation"]["subtitle"] == BASE_INTERPRETATIONS[9].subtitle
    assert data["interpretation"]["title"] == "Life Mission"


def test_pillar_detail_accepts_camel_case(client):
    resp = client.post("/v1/numerology/pillars/personalYear", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    data = resp.json()
    assert data["pillar"] == "personal_year"
    assert data["calculation_steps"] == "12 → 3 + 5 + 2026 → 10 → 1 = 9"


def test_pillar_detail_unknown_pillar(client):
    resp = client.post("/v1/numerology/pillars/soul_urge", json=VALID_PAYLOAD)
    assert resp.status_code == 404


def test_interpretation_lookup(client):
    resp = client.get("/v1/numerology/interpretations/essence/11")
    assert resp.status_code == 200
    data = resp.json()
    assert data["subtitle"] == "The Spiritual Master"
    assert len(data["challenges"]) == 3


def test_interpretation_lookup_out_of_table(client):
    resp = client.get("/v1/numerology/interpretations/nameVibration/42")
    assert resp.status_code == 200
    data = resp.json()
    assert data["number"] == 42
    assert data["subtitle"] == BASE_INTERPRETATIONS[1].subtitle
    assert data["essence"] == FALLBACK_NUANCE


def test_pillar_detail_century_divine_gift(client, caplog):
    payload = {"full_name": "Ana Lopez", "birth_date": "2000-03-15", "current_year": 2026}
    with caplog.at_level(logging.WARNING, logger="numeromap.interpretations"):
        resp = client.post("/v1/numerology/pillars/divine_gift", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["number"] == 0
    assert data["calculation_steps"] == "2000 → 0"
    assert data["interpretation"]["subtitle"] == CENTURY_GIFT.subtitle
    assert data["interpretation"]["title"] == "Divine Gift"
    assert "outside table" not in caplog.text


def test_map_century_divine_gift(client):
    payload = {"full_name": "Ana Lopez", "birth_date": "2000-03-15", "current_year": 2026}
    resp = client.post("/v1/numerology/map", json=payload)
    assert resp.status_code == 200
    assert resp.json()["numbers"]["divine_gift"] == 0


def test_interpretation_lookup_century_gift(client):
    resp = client.get("/v1/numerology/interpretations/divineGift/0")
    assert resp.status_code == 200
    assert resp.json()["subtitle"] == CENTURY_GIFT.subtitle

"""PDF report generation and signed download links."""
import logging
import re
from datetime import date, datetime, timedelta, timezone

from numeromap.numerology_engine import generate_full_map
from numeromap.reporting import _safe_text, build_numerology_report_pdf
from numeromap.security import create_signed_token

HEADERS = {"X-User-Id": "user-777"}
VALID_PAYLOAD = {
    "full_name": "Ana Núñez",
    "birth_date": "1990-05-12",
    "current_year": 2026,
}


def _page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?![a-zA-Z])", pdf))


def test_report_builder_has_cover_pillars_and_synthesis():
    numbers = generate_full_map("Ana Núñez", date(1990, 5, 12), 2026)
    pdf = build_numerology_report_pdf(
        full_name="Ana Núñez",
        birth_date=date(1990, 5, 12),
        numbers=numbers,
        current_year=2026,
    )
    assert pdf.startswith(b"%PDF")
    assert _page_count(pdf) == 7


def test_report_builder_century_divine_gift(caplog):
    numbers = generate_full_map("Ana Lopez", date(2000, 3, 15), 2026)
    assert numbers.divine_gift == 0
    with caplog.at_level(logging.WARNING, logger="numeromap.interpretations"):
        pdf = build_numerology_report_pdf(
            full_name="Ana Lopez",
            birth_date=date(2000, 3, 15),
            numbers=numbers,
            current_year=2026,
        )
    assert pdf.startswith(b"%PDF")
    assert _page_count(pdf) == 7
    assert "outside table" not in caplog.text


def test_pdf_endpoint_century_birth_year(client):
    payload = {"full_name": "Ana Lopez", "birth_date": "2000-03-15", "current_year": 2026}
    resp = client.post("/v1/reports/numerology.pdf", json=payload)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")
    assert _page_count(resp.content) == 7


def test_safe_text_transliterates_arrows():
    assert _safe_text("12 → 3\n") == "12 -> 3"
    assert _safe_text(None) == ""
    assert _safe_text("Núñez") == "Núñez"


def test_pdf_endpoint(client):
    resp = client.post("/v1/reports/numerology.pdf", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="numerology-ana-n-ez-1990-05-12.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_pdf_endpoint_validates_payload(client):
    resp = client.post(
        "/v1/reports/numerology.pdf",
        json={"full_name": "123", "birth_date": "1990-05-12"},
    )
    assert resp.status_code == 422


def test_report_link_requires_auth(client):
    resp = client.post("/v1/reports/numerology-link", json=VALID_PAYLOAD)
    assert resp.status_code == 401


def test_report_link_downloads_pdf(client):
    resp = client.post("/v1/reports/numerology-link", headers=HEADERS, json=VALID_PAYLOAD)
    assert resp.status_code == 200
    data = resp.json()
    assert "/v1/reports/public/numerology.pdf?token=" in data["url"]

    download = client.get(data["url"])
    assert download.status_code == 200
    assert download.content.startswith(b"%PDF")


def test_public_report_rejects_tampered_token(client):
    link = client.post("/v1/reports/numerology-link", headers=HEADERS, json=VALID_PAYLOAD).json()
    token = link["url"].split("token=", 1)[1]
    body, signature = token.split(".", 1)
    forged = f"{body[:-2]}xx.{signature}"
    resp = client.get("/v1/reports/public/numerology.pdf", params={"token": forged})
    assert resp.status_code == 401


def test_public_report_rejects_expired_token(client):
    expired = datetime.now(timezone.utc) - timedelta(minutes=1)
    token = create_signed_token(
        {
            "type": "numerology_pdf",
            "uid": 1,
            "full_name": "Ana Núñez",
            "birth_date": "1990-05-12",
            "current_year": 2026,
            "exp": int(expired.timestamp()),
        }
    )
    resp = client.get("/v1/reports/public/numerology.pdf", params={"token": token})
    assert resp.status_code == 401


def test_public_report_rejects_wrong_token_type(client):
    token = create_signed_token({"type": "something_else", "full_name": "Ana Núñez"})
    resp = client.get("/v1/reports/public/numerology.pdf", params={"token": token})
    assert resp.status_code == 401

"""
Proposal PDF.

Tests:
1. GET /api/quotes/{id}/pdf returns a PDF attachment named after the quote number
2. Unknown quote is a 404
3. Internal figures (cost base, markup, profit, margin) are never handed to the renderer
4. Renderer copes with an empty quote and non-latin-1 text
"""

from scsd import models
from scsd.pdf_generator import _fmt, _safe, generate_quote_pdf
from scsd.routers.pdf import _quote_to_pdf_data


def _sample_quote(client, sample_client, labourer, bitumen):
    labour = client.post("/api/quotes/lines/labour", json={
        "labour_id": labourer["id"], "quantity": 6, "required_for": "Seal", "is_night": True,
    }).json()
    material = client.post("/api/quotes/lines/material", json={
        "material_id": bitumen["id"], "sqm": 50, "depth": 1.5, "sell_price": 2,
    }).json()
    resp = client.post("/api/quotes/", json={
        "client_id": sample_client["id"],
        "title": "Two coat seal — rear yard",
        "summary": "Prime, seal and roll",
        "labour_lines": [labour],
        "material_lines": [material],
        "markup": 15,
        "two_coat_seal": True,
    })
    assert resp.status_code == 200
    return resp.json()


def test_download_pdf(client, sample_client, labourer, bitumen):
    quote = _sample_quote(client, sample_client, labourer, bitumen)
    resp = client.get(f"/api/quotes/{quote['id']}/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="Quote-QU-0399.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_pdf_missing_quote(client):
    assert client.get("/api/quotes/404/pdf").status_code == 404


def test_pdf_data_excludes_internal_figures(client, sample_client, labourer, bitumen, db):
    quote = _sample_quote(client, sample_client, labourer, bitumen)
    stored = db.query(models.Quote).filter(models.Quote.id == quote["id"]).first()
    data = _quote_to_pdf_data(stored)

    for key in ("cost_base", "markup", "markup_amount", "profit", "margin"):
        assert key not in data
    for line in data["labour_lines"]:
        assert "charge_rate" not in line and "total" not in line
    assert data["client_name"] == "Dana Whitfield"
    assert data["particulars"] == ["Two coat seal"]
    assert data["labour_lines"][0]["name"] == "Crew hand"
    assert data["material_lines"][0]["material_type"] == "Bitumen"
    assert data["total"] == stored.total


def test_render_empty_quote():
    pdf = generate_quote_pdf({"quote_number": "QU-0001"}, {"name": "Test Co"})
    assert pdf.startswith(b"%PDF")


def test_helpers():
    assert _fmt(2719.2) == "$2,719.20"
    assert _fmt("n/a") == "$0.00"
    assert _safe("50 m²—seal") == "50 m2 - seal"
    assert _safe(None) == ""

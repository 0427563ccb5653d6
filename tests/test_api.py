"""HTTP API: analyze, resources, results, error responses."""
from relieflink.api.triage import get_pipeline
from relieflink.core.pipeline import TriagePipeline
from relieflink.main import app

from tests.conftest import StubExtractor, make_extraction


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_sorted_by_urgency(client, stub_extractor):
    stub_extractor.canned["Fire at Egmore, child trapped"] = make_extraction("Fire", "Egmore", level="high")
    stub_extractor.canned["Need food packets in Saidapet"] = make_extraction("Food", "Saidapet", level="low", quantity="20")

    resp = client.post(
        "/api/analyze",
        json={"messages": ["Need food packets in Saidapet", "", "Fire at Egmore, child trapped"]},
    )

    assert resp.status_code == 200
    results = resp.json()["results"]
    assert [r["urgency_score"] for r in results] == [80, 20]
    fire = results[0]
    assert fire["matched_resource"]["name"] == "Fire & Rescue Mylapore"
    assert fire["matched_resource_id"] == "8"
    assert set(fire["coordinates"]) == {"lat", "lng"}
    assert results[1]["quantity"] == "20"


def test_analyze_text_splits_lines(client):
    resp = client.post("/api/analyze/text", json={"text": "road blocked\n\nchild lost\n"})
    assert resp.status_code == 200
    assert [r["original_content"] for r in resp.json()["results"]] == ["child lost", "road blocked"]


def test_invalid_input_is_400(client):
    for body in ({"messages": "not a list"}, {"messages": [1, 2]}, {}):
        resp = client.post("/api/analyze", json=body)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid input format"


def test_resources_listing(client):
    resources = client.get("/api/resources").json()
    assert len(resources) == 10
    assert {r["type"] for r in resources} == {"Ambulance", "Shelter", "Food", "Fire", "Police"}
    assert sum(1 for r in resources if r["status"] == "Busy") == 2


def test_results_log(client):
    assert client.get("/api/results").json() == []
    client.post("/api/analyze", json={"messages": ["first"]})
    client.post("/api/analyze", json={"messages": ["second"]})
    assert [r["original_content"] for r in client.get("/api/results").json()] == ["first", "second"]


def test_pipeline_failure_is_500(client, resolver, storage):
    class Broken(StubExtractor):
        def extract(self, message):
            raise RuntimeError("unexpected")

    app.dependency_overrides[get_pipeline] = lambda: TriagePipeline(Broken(), resolver, storage)

    resp = client.post("/api/analyze", json={"messages": ["anything"]})

    assert resp.status_code == 500
    assert resp.json()["detail"]["error"] == "analysis_failed"


def test_app_loads_from_uvicorn_import_string():
    from uvicorn.importer import import_from_string

    assert import_from_string("relieflink.main:app") is app

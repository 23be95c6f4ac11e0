import pytest
from fastapi.testclient import TestClient

from mutalyzer_ld.api import create_app, wrapper_from_settings
from mutalyzer_ld.config import Settings
from tests.conftest import FakeWrapper


@pytest.fixture
def client(fake_wrapper) -> TestClient:
    return TestClient(create_app(wrapper=fake_wrapper))


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["getTranscriptsAndInfo"]["parameters"] == [
        "genomicReference",
        "geneName",
    ]


def test_json_by_default(client):
    response = client.get("/info")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["version"] == "2.0.35"


def test_turtle(client):
    response = client.get(
        "/runMutalyzer",
        params={"variant": "NM_003002.2:c.274G>T"},
        headers={"Accept": "text/turtle, application/json;q=0.5"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/turtle")
    assert response.text.startswith("@prefix rdf:")


def test_graph(client, fake_wrapper):
    response = client.get(
        "/getTranscriptsAndInfo",
        params={"genomicReference": "NC_000011.9", "geneName": "SDHD"},
        headers={"Accept": "text/turtle"},
    )
    assert response.status_code == 200
    assert "rsa:TranscriptReferenceSequence" in response.text
    assert fake_wrapper.calls[-1] == (
        "getTranscriptsAndInfo",
        {"genomicReference": "NC_000011.9", "geneName": "SDHD"},
    )


def test_missing_parameter(client, fake_wrapper):
    response = client.get("/runMutalyzer")
    assert response.status_code == 422
    assert fake_wrapper.calls == []


def test_not_acceptable(client):
    response = client.get("/info", headers={"Accept": "application/xml"})
    assert response.status_code == 406
    assert response.json()["code"] == "NotAcceptableError"


def test_domain_error(raw_run_mutalyzer_error):
    wrapper = FakeWrapper(responses={"runMutalyzer": raw_run_mutalyzer_error})
    client = TestClient(create_app(Settings(console_logging=False), wrapper=wrapper))
    response = client.get("/runMutalyzer", params={"variant": "NM_999999.9:c.1A>G"})
    assert response.status_code == 400
    assert response.json() == {
        "status": 400,
        "code": "EREF",
        "message": "EREF: Reference NM_999999.9 could not be retrieved.",
    }


def test_malformed_result():
    wrapper = FakeWrapper(responses={"info": {"a": {}, "b": {}}})
    client = TestClient(create_app(wrapper=wrapper))
    response = client.get("/info")
    assert response.status_code == 502
    assert response.json()["code"] == "MalformedResultError"


def test_wrapper_from_settings():
    wrapper = wrapper_from_settings(Settings(service_url="http://localhost/services", timeout=5))
    assert wrapper.service_url == "http://localhost/services"
    assert wrapper.timeout == 5

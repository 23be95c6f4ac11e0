import json

import pytest

from mutalyzer_ld.errors import DomainError, NotAcceptableError, TemplateNotFoundError
from mutalyzer_ld.formatters import TemplateRenderer
from mutalyzer_ld.negotiation import JSON, TURTLE
from mutalyzer_ld.pipeline import OPERATIONS, OperationPipeline


@pytest.fixture
def pipeline(fake_wrapper) -> OperationPipeline:
    return OperationPipeline(wrapper=fake_wrapper)


def test_operation_table():
    assert list(OPERATIONS) == ["runMutalyzer", "info", "getTranscriptsAndInfo"]
    assert OPERATIONS["getTranscriptsAndInfo"].media_types == [JSON, TURTLE]


def test_pass_through(pipeline, fake_wrapper):
    media_type, body = pipeline.execute("info", {"unexpected": "x"}, [JSON])
    assert media_type == JSON
    assert json.loads(body)["versionParts"] == ["2", "0", "35"]
    assert fake_wrapper.calls == [("info", {})]


def test_template(pipeline, fake_wrapper):
    query = {"variant": "NM_003002.2:c.274G>T", "other": "dropped"}
    media_type, body = pipeline.execute("runMutalyzer", query, [TURTLE, JSON])
    assert media_type == TURTLE
    assert r'rdfs:label "NM_003002\\.2:c\\.274G>T"' in body
    assert fake_wrapper.calls == [("runMutalyzer", {"variant": "NM_003002.2:c.274G>T"})]


def test_graph(pipeline, fake_wrapper):
    query = {"genomicReference": "NC_000011.9", "geneName": None}
    media_type, body = pipeline.execute("getTranscriptsAndInfo", query, ["text/*"])
    assert media_type == TURTLE
    assert "<http://www.ncbi.nlm.nih.gov/protein/NP_001263432.1>" in body
    assert fake_wrapper.calls == [("getTranscriptsAndInfo", {"genomicReference": "NC_000011.9"})]


def test_default_representation_is_json(pipeline):
    media_type, body = pipeline.execute("getTranscriptsAndInfo", {"genomicReference": "X"}, ["*/*"])
    assert media_type == JSON
    assert len(json.loads(body)["TranscriptInfo"]) == 2


def test_run_with_raw_result(pipeline, raw_run_mutalyzer_error):
    with pytest.raises(DomainError):
        pipeline.run("runMutalyzer", {}, [JSON], raw_run_mutalyzer_error)


def test_not_acceptable(pipeline):
    with pytest.raises(NotAcceptableError):
        pipeline.execute("info", {}, ["application/xml"])


def test_unknown_operation(pipeline):
    with pytest.raises(ValueError):
        pipeline.execute("checkSyntax", {}, [JSON])


def test_missing_template_fails_at_construction(fake_wrapper):
    renderer = TemplateRenderer(templates={})
    with pytest.raises(TemplateNotFoundError):
        OperationPipeline(wrapper=fake_wrapper, renderer=renderer)

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

import pytest
from click.testing import CliRunner

from mutalyzer_ld.wrappers import BaseWrapper
from mutalyzer_ld.wrappers.mutalyzer_wrapper import SERVICE_NAMESPACE, parse_envelope
from tests import INPUT_DIR


def load_raw_result(operation: str, file_name: str = None) -> Dict[str, Any]:
    """Raw result of an operation, as parsed from a canned SOAP response."""
    text = (INPUT_DIR / (file_name or f"{operation}.xml")).read_text()
    return parse_envelope(text, SERVICE_NAMESPACE)[f"{operation}Response"]


@dataclass
class FakeWrapper(BaseWrapper):
    """Answers from canned responses and records the calls made."""

    name = "fake"

    responses: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    calls: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def invoke(self, operation: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append((operation, dict(params)))
        return self.responses[operation]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def raw_run_mutalyzer() -> Dict[str, Any]:
    return load_raw_result("runMutalyzer")


@pytest.fixture
def raw_run_mutalyzer_error() -> Dict[str, Any]:
    return load_raw_result("runMutalyzer", "runMutalyzer_error.xml")


@pytest.fixture
def raw_info() -> Dict[str, Any]:
    return load_raw_result("info")


@pytest.fixture
def raw_transcripts() -> Dict[str, Any]:
    return load_raw_result("getTranscriptsAndInfo")


@pytest.fixture
def fake_wrapper(raw_run_mutalyzer, raw_info, raw_transcripts) -> FakeWrapper:
    return FakeWrapper(
        responses={
            "runMutalyzer": raw_run_mutalyzer,
            "info": raw_info,
            "getTranscriptsAndInfo": raw_transcripts,
        }
    )

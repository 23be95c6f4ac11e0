"""Wrapper over the Mutalyzer SOAP service."""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple
from xml.parsers.expat import ExpatError

import requests
import requests_cache
import xmltodict

from mutalyzer_ld.errors import RemoteCallError
from mutalyzer_ld.wrappers.base_wrapper import RAW_RESULT, BaseWrapper

logger = logging.getLogger(__name__)

SERVICE_URL = "https://mutalyzer.nl/services"
SERVICE_NAMESPACE = "http://mutalyzer.nl/2.0/services"
SOAP_ENV_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"

ARRAY_ITEM_TAGS = (
    "string",
    "SoapMessage",
    "TranscriptInfo",
    "ExonInfo",
    "RawVariant",
    "LegendRecord",
)
"""Element names of array items; always parsed as lists, even with a single item."""


def build_envelope(operation: str, params: Mapping[str, Any], namespace: str) -> str:
    """
    SOAP 1.1 request envelope for an operation.

    :param operation:
    :param params:
    :param namespace: service target namespace
    :return:
    """
    body = {f"mut:{k}": v for k, v in params.items() if v is not None} or None
    doc = {
        "soap:Envelope": {
            "@xmlns:soap": SOAP_ENV_NAMESPACE,
            "@xmlns:mut": namespace,
            "soap:Body": {f"mut:{operation}": body},
        }
    }
    return xmltodict.unparse(doc)


def parse_envelope(text: str, namespace: str) -> Dict[str, Any]:
    """
    Parse a SOAP response envelope into its body.

    Namespaces and attributes are dropped; nil elements become None.

    :param text:
    :param namespace:
    :return: contents of the Body element
    """
    try:
        doc = xmltodict.parse(
            text,
            process_namespaces=True,
            namespaces={SOAP_ENV_NAMESPACE: None, namespace: None},
            xml_attribs=False,
            force_list=ARRAY_ITEM_TAGS,
        )
    except ExpatError as e:
        raise RemoteCallError(f"Response is not XML: {e}") from e
    body = (doc.get("Envelope") or {}).get("Body")
    if body is None:
        raise RemoteCallError("Response has no SOAP body")
    return body


@dataclass
class MutalyzerWrapper(BaseWrapper):
    """
    A wrapper over the Mutalyzer SOAP web service.

    Results are returned as found in the response body, e.g.
    ``{"runMutalyzerResult": {...}}``, with array fields still wrapped
    by their item element (``{"string": [...]}``).
    """

    name: ClassVar[str] = "mutalyzer"

    service_url: str = SERVICE_URL

    namespace: str = SERVICE_NAMESPACE

    timeout: float = 60.0

    session: requests.Session = field(default_factory=lambda: requests.Session())

    _uses_cache: bool = False

    def set_cache(self, name: str) -> None:
        self.session = requests_cache.CachedSession(name, allowable_methods=("GET", "POST"))
        self._uses_cache = True

    def invoke(self, operation: str, params: Mapping[str, Any]) -> RAW_RESULT:
        envelope = build_envelope(operation, params, self.namespace)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{operation}"',
        }
        logger.debug(f"POST {self.service_url} [cached: {self._uses_cache}]")
        try:
            response = self.session.post(
                self.service_url,
                data=envelope.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling {operation}: {e}")
            raise RemoteCallError(f"Failed to call {operation}: {e}") from e
        if not response.ok and "xml" not in response.headers.get("Content-Type", ""):
            raise RemoteCallError(
                f"Failed to call {operation}: {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
            )
        body = parse_envelope(response.text, self.namespace)
        fault = body.get("Fault")
        if fault is not None:
            code, text = self._fault_details(fault)
            raise RemoteCallError(
                f"{operation} failed with {code}: {text}", status_code=response.status_code
            )
        result = body.get(f"{operation}Response")
        if result is None:
            raise RemoteCallError(f"No {operation}Response in {list(body.keys())}")
        return result

    @staticmethod
    def _fault_details(fault: Optional[Mapping[str, Any]]) -> Tuple[str, str]:
        fault = fault or {}
        return str(fault.get("faultcode", "")), str(fault.get("faultstring", ""))

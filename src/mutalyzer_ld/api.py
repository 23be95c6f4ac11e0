"""
HTTP API.

One GET route per operation. The representation is negotiated from the
``Accept`` header; errors from the pipeline are turned into JSON bodies
with a status code per error class.
"""
import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from mutalyzer_ld import __version__
from mutalyzer_ld.config import Settings
from mutalyzer_ld.errors import (
    DomainError,
    MalformedResultError,
    MutalyzerLDError,
    NotAcceptableError,
    RemoteCallError,
)
from mutalyzer_ld.negotiation import parse_accept
from mutalyzer_ld.pipeline import OperationPipeline
from mutalyzer_ld.wrappers import BaseWrapper, MutalyzerWrapper

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[MutalyzerLDError], int] = {
    DomainError: 400,
    NotAcceptableError: 406,
    MalformedResultError: 502,
    RemoteCallError: 502,
}


def error_status(exc: MutalyzerLDError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def error_body(exc: MutalyzerLDError) -> dict:
    code = exc.code if isinstance(exc, DomainError) else type(exc).__name__
    return {"status": error_status(exc), "code": code, "message": str(exc)}


def wrapper_from_settings(settings: Settings) -> MutalyzerWrapper:
    wrapper = MutalyzerWrapper(
        service_url=settings.service_url,
        namespace=settings.service_namespace,
        timeout=settings.timeout,
    )
    if settings.cache_name:
        wrapper.set_cache(settings.cache_name)
    return wrapper


def create_app(
    settings: Optional[Settings] = None,
    wrapper: Optional[BaseWrapper] = None,
    pipeline: Optional[OperationPipeline] = None,
) -> FastAPI:
    """
    Build the application.

    Templates are compiled here, so a broken template stops startup.

    :param settings:
    :param wrapper: remote service wrapper; built from settings if not given
    :param pipeline: a preconfigured pipeline, overriding wrapper
    :return:
    """
    settings = settings or Settings()
    if pipeline is None:
        pipeline = OperationPipeline(wrapper=wrapper or wrapper_from_settings(settings))
    app = FastAPI(title="mutalyzer-ld", version=__version__)
    app.state.pipeline = pipeline
    app.state.settings = settings

    @app.exception_handler(MutalyzerLDError)
    def handle_error(request: Request, exc: MutalyzerLDError) -> JSONResponse:
        body = error_body(exc)
        if settings.console_logging:
            logger.error(f"{request.url.path}: {body['status']} {body['code']}: {body['message']}")
        return JSONResponse(status_code=body["status"], content=body)

    def respond(request: Request, operation: str, query: dict) -> Response:
        accepted = parse_accept(request.headers.get("accept"))
        media_type, body = pipeline.execute(operation, query, accepted)
        return Response(content=body, media_type=media_type)

    @app.get("/")
    def read_root():
        return {
            name: {"parameters": list(op.params), "produces": op.media_types}
            for name, op in pipeline.operations.items()
        }

    @app.get("/runMutalyzer")
    def run_mutalyzer(
        request: Request,
        variant: str = Query(..., description="Variant description, e.g. NM_003002.2:c.274G>T"),
    ) -> Response:
        return respond(request, "runMutalyzer", {"variant": variant})

    @app.get("/info")
    def info(request: Request) -> Response:
        return respond(request, "info", {})

    @app.get("/getTranscriptsAndInfo")
    def get_transcripts_and_info(
        request: Request,
        genomicReference: str = Query(..., description="Genomic reference, e.g. NC_000011.9"),
        geneName: Optional[str] = Query(None, description="Restrict to transcripts of this gene"),
    ) -> Response:
        query = {"genomicReference": genomicReference, "geneName": geneName}
        return respond(request, "getTranscriptsAndInfo", query)

    return app

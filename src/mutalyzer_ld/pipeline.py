"""Per-call orchestration.

remote call -> :mod:`.results` -> :mod:`.negotiation` -> :mod:`.formatters` -> response body
"""
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from mutalyzer_ld.errors import TemplateNotFoundError
from mutalyzer_ld.formatters.graph_builder import GraphBuilder
from mutalyzer_ld.formatters.template_renderer import TemplateRenderer
from mutalyzer_ld.negotiation import ContentSelector, Representation, RepresentationKind
from mutalyzer_ld.results.normalizer import ResultNormalizer
from mutalyzer_ld.wrappers.base_wrapper import RAW_RESULT, BaseWrapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    """An API operation backed by one remote call."""

    name: str
    params: Tuple[str, ...] = ()
    """Query parameters passed on to the remote call."""

    required: Tuple[str, ...] = ()
    representations: Tuple[Representation, ...] = (Representation.pass_through(),)
    description: str = ""

    def pick_params(self, query: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep only the parameters this operation expects."""
        return {k: query[k] for k in self.params if query.get(k) is not None}

    @property
    def media_types(self) -> List[str]:
        return [r.media_type for r in self.representations]


OPERATIONS: Mapping[str, Operation] = MappingProxyType(
    {
        op.name: op
        for op in [
            Operation(
                "runMutalyzer",
                params=("variant",),
                required=("variant",),
                representations=(
                    Representation.pass_through(),
                    Representation.template("runMutalyzer"),
                ),
                description="Run the name checker on a variant description.",
            ),
            Operation(
                "info",
                representations=(Representation.pass_through(), Representation.template("info")),
                description="Information about the Mutalyzer installation.",
            ),
            Operation(
                "getTranscriptsAndInfo",
                params=("genomicReference", "geneName"),
                required=("genomicReference",),
                representations=(
                    Representation.pass_through(),
                    Representation.graph("getTranscriptsAndInfo"),
                ),
                description="Transcripts annotated on a genomic reference, optionally for one gene.",
            ),
        ]
    }
)

GRAPH_BUILDERS: Mapping[str, GraphBuilder] = MappingProxyType(
    {"getTranscriptsAndInfo": GraphBuilder()}
)


@dataclass
class OperationPipeline:
    """
    Runs API operations: remote call, normalization, negotiation, rendering.

    The renderer's template cache is built once and shared by all calls;
    everything else is local to a call.
    """

    wrapper: Optional[BaseWrapper] = None
    normalizer: ResultNormalizer = field(default_factory=ResultNormalizer)
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer)
    graph_builders: Mapping[str, GraphBuilder] = field(default_factory=lambda: GRAPH_BUILDERS)
    operations: Mapping[str, Operation] = field(default_factory=lambda: OPERATIONS)
    selector: ContentSelector = field(init=False)

    def __post_init__(self):
        self.selector = ContentSelector(
            MappingProxyType({name: op.representations for name, op in self.operations.items()})
        )
        for op in self.operations.values():
            for representation in op.representations:
                if representation.kind == RepresentationKind.TEMPLATE:
                    if representation.name not in self.renderer.templates:
                        raise TemplateNotFoundError(representation.name)
                elif representation.kind == RepresentationKind.GRAPH:
                    if representation.name not in self.graph_builders:
                        raise ValueError(f"No graph builder for {representation.name}")

    def operation(self, name: str) -> Operation:
        try:
            return self.operations[name]
        except KeyError:
            raise ValueError(f"Unknown operation {name}, available: {list(self.operations)}")

    def execute(
        self, operation: str, query: Mapping[str, Any], accepted: Sequence[str]
    ) -> Tuple[str, str]:
        """
        Call the remote service and produce the negotiated representation.

        :param operation: operation name
        :param query: request parameters; unexpected ones are dropped
        :param accepted: media types in the caller's order of preference
        :return: media type and body
        """
        if self.wrapper is None:
            raise ValueError("No remote service wrapper configured")
        op = self.operation(operation)
        params = op.pick_params(query)
        raw_result = self.wrapper.call(op.name, params)
        return self.run(op.name, params, accepted, raw_result)

    def run(
        self,
        operation: str,
        params: Mapping[str, Any],
        accepted: Sequence[str],
        raw_result: RAW_RESULT,
    ) -> Tuple[str, str]:
        """
        Produce a representation of an already obtained remote result.

        :param operation:
        :param params: request parameters
        :param accepted: media types in the caller's order of preference
        :param raw_result: singleton-wrapped remote result
        :return: media type and body
        """
        op = self.operation(operation)
        result = self.normalizer.normalize(raw_result)
        representation = self.selector.select(op.name, accepted)
        logger.info(f"{op.name}: responding with {representation.media_type}")
        return representation.media_type, self.render(representation, params, result)

    def render(
        self, representation: Representation, params: Mapping[str, Any], result: Mapping[str, Any]
    ) -> str:
        if representation.kind == RepresentationKind.TEMPLATE:
            return self.renderer.render(representation.name, result, params)
        if representation.kind == RepresentationKind.GRAPH:
            return self.graph_builders[representation.name].build_graph(params, result)
        return json.dumps(result)

"""Streaming Turtle serialization of an ordered triple sequence.

rdflib's own Turtle serializer works on a graph, which is a set: it
deduplicates and reorders statements. Here the emitted order is kept and
duplicates are written as they come. Consecutive triples sharing a
subject are grouped with ``;``, and consecutive triples sharing subject
and predicate with ``,``.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, NamedTuple, Optional, Union

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import NamespaceManager

NAMESPACES: Mapping[str, str] = MappingProxyType(
    {
        "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
        "rsa": "http://rdf.biosemantics.org/ontologies/rsa#",
        "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
        "dcterms": "http://purl.org/dc/terms/",
        "so": "http://purl.obolibrary.org/obo/",
        "edam": "http://edamontology.org/",
    }
)

RDF = Namespace(NAMESPACES["rdf"])
RSA = Namespace(NAMESPACES["rsa"])
RDFS = Namespace(NAMESPACES["rdfs"])
DCTERMS = Namespace(NAMESPACES["dcterms"])
SO = Namespace(NAMESPACES["so"])
EDAM = Namespace(NAMESPACES["edam"])


class Triple(NamedTuple):
    subject: URIRef
    predicate: URIRef
    object: Union[URIRef, Literal]


def namespace_manager(prefixes: Mapping[str, str] = NAMESPACES) -> NamespaceManager:
    graph = Graph(bind_namespaces="none")
    nsm = NamespaceManager(graph, bind_namespaces="none")
    for prefix, iri in prefixes.items():
        nsm.bind(prefix, Namespace(iri), override=True, replace=True)
    return nsm


@dataclass
class TurtleWriter:
    """
    Writes triples in the order they are added.

    Example:

        >>> writer = TurtleWriter()
        >>> s = URIRef("http://www.ncbi.nlm.nih.gov/nuccore/NC_000011.9")
        >>> writer.add(Triple(s, RDF.type, RSA.GenomicReferenceSequence))
        >>> writer.add(Triple(s, RDF.label, Literal("NC_000011.9")))
        >>> print(writer.end(), end="")  # doctest: +ELLIPSIS
        @prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>.
        ...
        <http://www.ncbi.nlm.nih.gov/nuccore/NC_000011.9> rdf:type rsa:GenomicReferenceSequence;
            rdf:label "NC_000011.9".
    """

    prefixes: Mapping[str, str] = field(default_factory=lambda: NAMESPACES)
    _chunks: List[str] = field(default_factory=list, init=False)
    _subject: Optional[URIRef] = field(default=None, init=False)
    _predicate: Optional[URIRef] = field(default=None, init=False)
    _nsm: Optional[NamespaceManager] = field(default=None, init=False)

    def __post_init__(self):
        self._nsm = namespace_manager(self.prefixes)
        for prefix, iri in self.prefixes.items():
            self._chunks.append(f"@prefix {prefix}: <{iri}>.\n")
        if self.prefixes:
            self._chunks.append("\n")

    def _encode(self, term: Union[URIRef, Literal]) -> str:
        if isinstance(term, Literal):
            return term.n3()
        return term.n3(self._nsm)

    def add(self, triple: Triple) -> None:
        subject, predicate, obj = triple
        if self._subject == subject:
            if self._predicate == predicate:
                self._chunks.append(f", {self._encode(obj)}")
            else:
                self._chunks.append(f";\n    {self._encode(predicate)} {self._encode(obj)}")
        else:
            if self._subject is not None:
                self._chunks.append(".\n")
            self._chunks.append(
                f"{self._encode(subject)} {self._encode(predicate)} {self._encode(obj)}"
            )
        self._subject = subject
        self._predicate = predicate

    def add_all(self, triples: Iterable[Triple]) -> None:
        for triple in triples:
            self.add(triple)

    def end(self) -> str:
        """Terminate the last statement and return the document."""
        if self._subject is not None:
            self._chunks.append(".\n")
            self._subject = None
            self._predicate = None
        return "".join(self._chunks)


def serialize(triples: Iterable[Triple], prefixes: Mapping[str, str] = NAMESPACES) -> str:
    writer = TurtleWriter(prefixes=prefixes)
    writer.add_all(triples)
    return writer.end()

import pytest
from rdflib import Literal, URIRef

from mutalyzer_ld.formatters.turtle_writer import (
    DCTERMS,
    NAMESPACES,
    RDF,
    RDFS,
    RSA,
    Triple,
    TurtleWriter,
    serialize,
)

PREFIXES = (
    "@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>.\n"
    "@prefix rsa: <http://rdf.biosemantics.org/ontologies/rsa#>.\n"
    "@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#>.\n"
    "@prefix dcterms: <http://purl.org/dc/terms/>.\n"
    "@prefix so: <http://purl.obolibrary.org/obo/>.\n"
    "@prefix edam: <http://edamontology.org/>.\n"
    "\n"
)

A = URIRef("http://example.org/a")
B = URIRef("http://example.org/b")


def test_namespace_table():
    assert list(NAMESPACES) == ["rdf", "rsa", "rdfs", "dcterms", "so", "edam"]


def test_no_triples():
    assert serialize([]) == PREFIXES


def test_grouping():
    text = serialize(
        [
            Triple(A, RDF.type, RSA.Region),
            Triple(A, RDFS.seeAlso, B),
            Triple(A, RDFS.seeAlso, URIRef("http://example.org/c")),
            Triple(B, DCTERMS.identifiers, Literal("b.1")),
        ]
    )
    assert text == PREFIXES + (
        "<http://example.org/a> rdf:type rsa:Region;\n"
        "    rdfs:seeAlso <http://example.org/b>, <http://example.org/c>.\n"
        '<http://example.org/b> dcterms:identifiers "b.1".\n'
    )


def test_duplicates_are_kept():
    triple = Triple(A, RDF.type, RSA.Region)
    writer = TurtleWriter()
    writer.add_all([triple, triple])
    assert writer.end().endswith("<http://example.org/a> rdf:type rsa:Region, rsa:Region.\n")


def test_literal_escaping():
    text = serialize([Triple(A, RDF.label, Literal('say "hi"'))])
    assert text.endswith('<http://example.org/a> rdf:label "say \\"hi\\"".\n')


def test_writer_state_is_not_an_argument():
    with pytest.raises(TypeError):
        TurtleWriter(_chunks=["<a> <b> <c>.\n"])
    writer = TurtleWriter(prefixes={})
    assert writer.end() == ""

"""Graph-built Turtle for ``getTranscriptsAndInfo``.

The result of ``getTranscriptsAndInfo`` lists the transcripts annotated
on one genomic reference. Their fields are scanned in document order by a
:class:`TranscriptAccumulator`; each transcript then yields a fixed set of
triples linking transcript, protein, accession and annotated region.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel
from rdflib import Literal, URIRef

from mutalyzer_ld.formatters.format_utils import iter_fields, merge_params
from mutalyzer_ld.formatters.turtle_writer import (
    DCTERMS,
    EDAM,
    RDF,
    RDFS,
    RSA,
    SO,
    Triple,
    TurtleWriter,
)

logger = logging.getLogger(__name__)

NUCCORE_PREFIX = "http://www.ncbi.nlm.nih.gov/nuccore/"
PROTEIN_PREFIX = "http://www.ncbi.nlm.nih.gov/protein/"
IDENTIFIERS_REFSEQ_PREFIX = "http://identifiers.org/refseq/"
UNIPROT_REFSEQ_PREFIX = "http://purl.uniprot.org/refseq/"
ANNOTATION_PREFIX = "https://mutalyzer.nl/nuccore/"

GENOMIC_REFERENCE_KEY = "genomicReference"
TRANSCRIPT_START_KEY = "gTransStart"
TRANSCRIPT_END_KEY = "gTransEnd"
IDENTIFIER_KEY = "id"

RNA_MARKER = "NM"
PROTEIN_MARKER = "NP"


class TranscriptEntry(BaseModel):
    """A transcript and the protein it encodes, as collected from a result."""

    index: int
    transcript_id: Optional[str] = None
    """RNA accession, e.g. NM_003002.3"""

    protein_id: Optional[str] = None
    """Protein accession, e.g. NP_002993.1"""

    start: Optional[str] = None
    """Transcript start on the genomic reference."""

    end: Optional[str] = None
    """Transcript end on the genomic reference."""

    @property
    def accession(self) -> str:
        """RNA accession without its version."""
        return self.transcript_id.split(".", 1)[0]


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


@dataclass
class TranscriptAccumulator:
    """
    Collects transcripts from an ordered sequence of ``(key, value)`` pairs.

    ``index`` counts transcripts: each start coordinate opens a new entry,
    and fields seen afterwards belong to it until the next start coordinate.
    An identifier that is neither an RNA nor a protein accession rolls the
    count back by one, so the next start coordinate reuses that index.
    """

    genomic_reference: Optional[str] = None
    index: int = 0
    entries: Dict[int, TranscriptEntry] = field(default_factory=dict)

    @property
    def current(self) -> Optional[TranscriptEntry]:
        return self.entries.get(self.index)

    def observe(self, key: Union[str, int], value: Any) -> None:
        """
        Advance the scan by one field.

        :param key: field name; list positions are ignored
        :param value:
        """
        if key == GENOMIC_REFERENCE_KEY:
            self._on_genomic_reference(value)
        elif key == TRANSCRIPT_START_KEY:
            self._on_start(value)
        elif key == TRANSCRIPT_END_KEY:
            self._on_end(value)
        elif key == IDENTIFIER_KEY:
            self._on_identifier(value)

    def observe_all(self, pairs: Iterable[Tuple[Union[str, int], Any]]) -> "TranscriptAccumulator":
        for key, value in pairs:
            self.observe(key, value)
        return self

    def _on_genomic_reference(self, value: Any) -> None:
        text = _as_text(value)
        if text is None:
            logger.debug(f"Skipping genomic reference {value!r}")
            return
        self.genomic_reference = text

    def _on_start(self, value: Any) -> None:
        self.index += 1
        self.entries[self.index] = TranscriptEntry(index=self.index, start=_as_text(value))

    def _on_end(self, value: Any) -> None:
        entry = self.current
        if entry is None:
            logger.debug(f"Skipping end coordinate {value!r} outside a transcript")
            return
        entry.end = _as_text(value)

    def _on_identifier(self, value: Any) -> None:
        if not isinstance(value, str):
            logger.debug(f"Skipping non-text identifier {value!r}")
            return
        if RNA_MARKER in value:
            self._record(value, "transcript_id")
        elif PROTEIN_MARKER in value:
            self._record(value, "protein_id")
        else:
            self.index -= 1

    def _record(self, value: str, attribute: str) -> None:
        entry = self.current
        if entry is None:
            logger.debug(f"Skipping identifier {value} outside a transcript")
            return
        setattr(entry, attribute, value)

    def transcripts(self) -> List[TranscriptEntry]:
        """Entries 1 up to the final count, in order."""
        return [self.entries[i] for i in range(1, self.index + 1) if i in self.entries]


def genomic_reference_triples(reference: str) -> Iterator[Triple]:
    g_trans = URIRef(NUCCORE_PREFIX + reference)
    yield Triple(g_trans, RDF.type, RSA.GenomicReferenceSequence)
    yield Triple(g_trans, RDF.label, Literal(reference))
    yield Triple(g_trans, DCTERMS.identifiers, Literal(reference))


def transcript_triples(reference: str, entry: TranscriptEntry) -> Iterator[Triple]:
    """
    Triples for one transcript, its protein, its unversioned accession and its region.

    :param reference: genomic reference accession
    :param entry:
    :return:
    """
    trans_val = entry.transcript_id
    accession_val = entry.accession
    g_trans = URIRef(NUCCORE_PREFIX + reference)
    transcript = URIRef(NUCCORE_PREFIX + trans_val)
    accession = URIRef(NUCCORE_PREFIX + accession_val)
    annotation = URIRef(f"{ANNOTATION_PREFIX}{trans_val}/annotation/1")
    region = URIRef(f"{ANNOTATION_PREFIX}{trans_val}/annotation/1/region/1")

    yield Triple(transcript, RSA.isSubSequenceOf, g_trans)
    yield Triple(transcript, RDF.type, RSA.TranscriptReferenceSequence)
    yield Triple(transcript, RDF.label, Literal(trans_val))
    yield Triple(transcript, DCTERMS.identifiers, Literal(trans_val))
    yield Triple(transcript, RSA.hasAnnotation, annotation)
    yield Triple(transcript, RDFS.seeAlso, URIRef(IDENTIFIERS_REFSEQ_PREFIX + trans_val))
    yield Triple(transcript, RDFS.seeAlso, accession)

    if entry.protein_id is not None:
        protein_val = entry.protein_id
        protein = URIRef(PROTEIN_PREFIX + protein_val)
        # RefSeq protein products are associated with their transcript
        yield Triple(protein, SO.so_associated_with, transcript)
        yield Triple(protein, RDF.type, RSA.ProteinReferenceSequence)
        yield Triple(protein, RDF.label, Literal(protein_val))
        yield Triple(protein, DCTERMS.identifiers, Literal(protein_val))
        yield Triple(protein, RDFS.seeAlso, URIRef(UNIPROT_REFSEQ_PREFIX + protein_val))

    # edam:data_1093 is "Sequence accession"
    yield Triple(accession, RDF.type, EDAM.data_1093)
    yield Triple(accession, RDF.label, Literal(accession_val))
    yield Triple(accession, DCTERMS.identifiers, Literal(accession_val))
    yield Triple(accession, RDFS.seeAlso, URIRef(IDENTIFIERS_REFSEQ_PREFIX + accession_val))

    yield Triple(annotation, RDF.type, RSA.SequenceAnnotation)
    yield Triple(annotation, RSA.mapsTo, region)
    yield Triple(region, RDF.type, RSA.Region)
    yield Triple(region, RSA.start, Literal(entry.start or ""))
    yield Triple(region, RSA.end, Literal(entry.end or ""))


@dataclass
class GraphBuilder:
    """
    Builds the Turtle representation of a ``getTranscriptsAndInfo`` result.

    Stateless between calls: every call scans with a fresh accumulator.
    """

    def accumulate(
        self, params: Mapping[str, Any], result: Mapping[str, Any]
    ) -> TranscriptAccumulator:
        return TranscriptAccumulator().observe_all(iter_fields(merge_params(params, result)))

    def triples(self, params: Mapping[str, Any], result: Mapping[str, Any]) -> List[Triple]:
        """
        All triples, in emission order; duplicates are kept.

        :param params: request parameters
        :param result: normalized result
        :return:
        """
        acc = self.accumulate(params, result)
        if acc.index <= 0:
            logger.info("No transcripts found; emitting an empty graph")
            return []
        if acc.genomic_reference is None:
            logger.warning("Transcripts found without a genomic reference; emitting an empty graph")
            return []
        entries = []
        for entry in acc.transcripts():
            if entry.transcript_id is None:
                logger.warning(f"Skipping transcript {entry.index}: no RNA accession")
            else:
                entries.append(entry)
        if not entries:
            return []
        triples = list(genomic_reference_triples(acc.genomic_reference))
        for entry in entries:
            triples.extend(transcript_triples(acc.genomic_reference, entry))
        return triples

    def build_graph(self, params: Mapping[str, Any], result: Mapping[str, Any]) -> str:
        """
        Serialize the graph as Turtle; an empty graph yields an empty string.

        :param params:
        :param result:
        :return:
        """
        triples = self.triples(params, result)
        if not triples:
            return ""
        writer = TurtleWriter()
        writer.add_all(triples)
        return writer.end()


def build_graph(params: Mapping[str, Any], result: Mapping[str, Any]) -> str:
    return GraphBuilder().build_graph(params, result)

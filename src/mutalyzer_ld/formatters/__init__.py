"""
Formats normalized results as Turtle.

Two strategies are available:

- :class:`TemplateRenderer` renders precompiled Jinja2 templates
- :class:`GraphBuilder` constructs an ordered list of triples, serialized by :class:`TurtleWriter`
"""

from .graph_builder import GraphBuilder, TranscriptAccumulator, TranscriptEntry, build_graph
from .template_renderer import TEMPLATE_REGISTRY, TemplateRenderer, compile_templates
from .turtle_writer import NAMESPACES, Triple, TurtleWriter

__all__ = [
    "GraphBuilder",
    "TranscriptAccumulator",
    "TranscriptEntry",
    "build_graph",
    "TemplateRenderer",
    "TEMPLATE_REGISTRY",
    "compile_templates",
    "TurtleWriter",
    "Triple",
    "NAMESPACES",
]

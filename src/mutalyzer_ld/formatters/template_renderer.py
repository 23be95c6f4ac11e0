"""Template-rendered Turtle representations."""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound
from rdflib import Literal

from mutalyzer_ld.conf import TEMPLATES_DIR
from mutalyzer_ld.errors import TemplateNotFoundError
from mutalyzer_ld.formatters.format_utils import escape_leaves, merge_params

logger = logging.getLogger(__name__)

TEMPLATE_REGISTRY: Mapping[str, str] = MappingProxyType(
    {
        "runMutalyzer": "runMutalyzer.ttl.j2",
        "info": "info.ttl.j2",
    }
)
"""Template name to template file, relative to the templates directory."""


def turtle_literal(value: Any) -> str:
    """
    Quote a value as a Turtle string literal, escaping quotes, backslashes and newlines.

    Registered as the ``literal`` filter: ``{{ summary | literal }}``.

    :param value: rendered as text; None renders as an empty literal
    :return:
    """
    return Literal("" if value is None else str(value)).n3()


def compile_templates(
    registry: Mapping[str, str] = TEMPLATE_REGISTRY,
    templates_dir: Union[str, Path] = TEMPLATES_DIR,
) -> Mapping[str, Template]:
    """
    Load and compile every registered template.

    Called once at startup; syntax errors propagate as raised by jinja2.

    :param registry: template name to file name
    :param templates_dir:
    :return: read-only mapping from template name to compiled template
    :raises TemplateNotFoundError: if a registered file does not exist
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["literal"] = turtle_literal
    compiled = {}
    for name, path in registry.items():
        try:
            compiled[name] = env.get_template(path)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(name) from e
        logger.debug(f"Compiled template {name} from {path}")
    return MappingProxyType(compiled)


@dataclass
class TemplateRenderer:
    """
    Renders normalized results through precompiled templates.

    The template cache is built once and shared read-only between requests.
    """

    templates: Mapping[str, Template] = field(default_factory=compile_templates)

    def render(
        self,
        template_name: str,
        result: Mapping[str, Any],
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Render a normalized result merged over the request parameters.

        Every string leaf has its dots escaped before rendering.

        :param template_name:
        :param result: normalized result
        :param params: request parameters
        :return: rendered text
        """
        template = self.templates.get(template_name)
        if template is None:
            raise TemplateNotFoundError(template_name)
        context = escape_leaves(merge_params(params or {}, result))
        return template.render(**context)

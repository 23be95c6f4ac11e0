"""Command line interface for mutalyzer-ld."""
import logging
import sys

import click
import yaml
from click_default_group import DefaultGroup

from mutalyzer_ld import __version__
from mutalyzer_ld.api import create_app, wrapper_from_settings
from mutalyzer_ld.config import load_config
from mutalyzer_ld.errors import MutalyzerLDError
from mutalyzer_ld.negotiation import JSON, TURTLE
from mutalyzer_ld.pipeline import OPERATIONS, OperationPipeline

__all__ = [
    "main",
]

FORMATS = {"json": JSON, "turtle": TURTLE, "ttl": TURTLE}

config_option = click.option("-C", "--config", help="Path to a YAML configuration file.")


@click.group(
    cls=DefaultGroup,
    default="serve",
    default_if_no_args=True,
)
@click.option("-v", "--verbose", count=True)
@click.option("-q", "--quiet", is_flag=True)
@click.version_option(__version__)
def main(verbose: int, quiet: bool):
    """CLI for mutalyzer-ld.

    :param verbose: Verbosity while running.
    :param quiet: Boolean to be quiet or verbose.
    """
    logging.basicConfig()
    logger = logging.root
    if verbose >= 2:
        logger.setLevel(level=logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(level=logging.INFO)
    else:
        logger.setLevel(level=logging.WARNING)
    if quiet:
        logger.setLevel(level=logging.ERROR)
    logger.info(f"Logger {logger.name} set to level {logger.level}")


@main.command()
@config_option
@click.option("--host", help="Interface to bind to; overrides the configuration.")
@click.option("--port", type=click.INT, help="Port to listen on; overrides the configuration.")
def serve(config, host, port):
    """Run the HTTP server.

    Example:

        mutalyzer-ld serve -C config.yaml --port 8080

    """
    import uvicorn

    settings = load_config(config)
    app = create_app(settings)
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


@main.command()
@config_option
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    help="Operation parameter as key=value; may be repeated.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    default="json",
    show_default=True,
    help="Output format: json, turtle, or a media type.",
)
@click.argument("operation")
def call(config, params, output_format, operation):
    """Call a single operation and print the result.

    Example:

        mutalyzer-ld call runMutalyzer -p variant=NM_003002.2:c.274G>T -f turtle

    """
    query = {}
    for param in params:
        if "=" not in param:
            raise click.BadParameter(f"Expected key=value, got {param}", param_hint="--param")
        key, value = param.split("=", 1)
        query[key] = value
    if operation not in OPERATIONS:
        raise click.BadParameter(
            f"Unknown operation {operation}; choose from {', '.join(OPERATIONS)}",
            param_hint="OPERATION",
        )
    missing = [p for p in OPERATIONS[operation].required if p not in query]
    if missing:
        raise click.UsageError(f"Missing parameter(s) for {operation}: {', '.join(missing)}")
    settings = load_config(config)
    pipeline = OperationPipeline(wrapper=wrapper_from_settings(settings))
    media_type = FORMATS.get(output_format, output_format)
    try:
        _, body = pipeline.execute(operation, query, [media_type])
    except MutalyzerLDError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(body)


@main.command()
def operations():
    """List the available operations."""
    summary = {
        name: {
            "description": op.description,
            "parameters": list(op.params),
            "produces": op.media_types,
        }
        for name, op in OPERATIONS.items()
    }
    print(yaml.dump(summary, sort_keys=False))


if __name__ == "__main__":
    main()

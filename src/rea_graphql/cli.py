#!/usr/bin/env python3
"""
Main CLI entry point for the REA GraphQL gateway.
"""

import os
import sys
from pathlib import Path

import click
import uvicorn
from graphql import print_schema

from rea_graphql import __version__
from rea_graphql.capabilities import ALL_CAPABILITIES, parse_capabilities
from rea_graphql.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="rea-graphql")
def cli() -> None:
    """REA GraphQL CLI - serve and inspect the ValueFlows API."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=4001,
    type=int,
    help="Port to bind to (default: 4001)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML deployment configuration file",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, config_path: Path | None, log_level: str) -> None:
    """Start the GraphQL API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info("Starting REA GraphQL server", host=host, port=port, reload=reload, log_level=log_level)

    # The app reads its configuration from the environment when imported
    if config_path is not None:
        os.environ["REA_DEPLOYMENT_CONFIG_PATH"] = str(config_path)
    if log_level == "debug":
        os.environ["REA_DEBUG"] = "true"
        os.environ["REA_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("REA_DEBUG", "false")
        os.environ.setdefault("REA_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "rea_graphql.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
@click.option(
    "--modules",
    default=",".join(sorted(capability.value for capability in ALL_CAPABILITIES)),
    help="Comma-separated capability modules (default: all)",
)
def schema(modules: str) -> None:
    """Print the GraphQL schema served for a set of modules."""
    from rea_graphql.deployment import DeploymentConfig
    from rea_graphql.graphql.schema import build_schema
    from rea_graphql.rpc import RemoteCallBinder

    try:
        capabilities = parse_capabilities(modules.split(","))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--modules") from e

    config = DeploymentConfig(capabilities=capabilities, conductor_uri="")
    click.echo(print_schema(build_schema(capabilities, RemoteCallBinder(config, None))))


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML deployment configuration file",
)
def check(config_path: Path | None) -> None:
    """Build and validate the schema for the configured deployment."""
    from rea_graphql.deployment import load_deployment_config
    from rea_graphql.graphql.schema import build_schema, validate_schema
    from rea_graphql.rpc import RemoteCallBinder

    configure_logging()

    try:
        deployment = load_deployment_config(config_path)
        schema = build_schema(deployment.capabilities, RemoteCallBinder(deployment, None))
        validate_schema(schema)
    except Exception as e:
        logger.error("Schema check failed", error=str(e))
        click.echo(f"✗ Schema check failed: {e}", err=True)
        sys.exit(1)

    modules = ", ".join(sorted(capability.value for capability in deployment.capabilities))
    click.echo(f"✓ Schema valid for modules: {modules}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()

"""reader-api command line.

Commands:
    serve  run the HTTP API under uvicorn
    read   read and summarize one URL (or text) and print JSON
    clean  print the normalized form of pasted URL text
"""

import asyncio
import dataclasses
import logging
import os
import sys
from typing import Optional

import click

from reader_api.config import _PACKAGE_VERSION, ReaderConfig, set_config
from reader_api.config.loader import CONFIG_FILE_ENV_VAR, LOG_LEVEL_ENV_VAR
from reader_api.cli.output import emit_error, emit_success
from reader_api.core.context import request_context
from reader_api.core.errors import ReaderError, error_to_status
from reader_api.core.reader import ReaderPipeline
from reader_api.core.url_cleaner import normalize

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML config file (default: $READER_CONFIG_FILE or ./reader.toml).",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.version_option(version=_PACKAGE_VERSION, prog_name="reader-api")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str]) -> None:
    """Fetch web pages through a reader service and summarize them."""
    config = ReaderConfig.from_env(config_file=config_file)
    if log_level:
        config = dataclasses.replace(config, log_level=log_level.upper())
    config.setup_logging()
    set_config(config)
    ctx.obj = config


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from config).")
@click.option("--port", type=int, default=None, help="Bind port (default from config).")
@click.option("--reload", is_flag=True, help="Reload on code changes (development).")
@click.pass_context
def serve_cmd(ctx: click.Context, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP API."""
    import uvicorn

    config: ReaderConfig = ctx.obj
    host = host or config.host
    port = port or config.port
    logger.info("Starting reader-api %s on %s:%d (%r)", config.server_version, host, port, config)

    if reload:
        # The reload worker rebuilds its config from the environment
        config_file = ctx.find_root().params.get("config_file")
        if config_file:
            os.environ[CONFIG_FILE_ENV_VAR] = os.path.abspath(config_file)
        os.environ[LOG_LEVEL_ENV_VAR] = config.log_level
        uvicorn.run(
            "reader_api.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=config.log_level.lower(),
        )
        return

    from reader_api.api.app import create_app

    uvicorn.run(create_app(config), host=host, port=port, log_level=config.log_level.lower())


@cli.command("read")
@click.argument("target")
@click.option("--text", "as_text", is_flag=True, help="Treat TARGET as text to summarize, not a URL.")
@click.pass_obj
def read_cmd(config: ReaderConfig, target: str, as_text: bool) -> None:
    """Read TARGET and print its summary and content as JSON."""
    pipeline = ReaderPipeline(config)

    with request_context():
        try:
            if as_text:
                result = asyncio.run(pipeline.process(text=target))
            else:
                result = asyncio.run(pipeline.process(url=target))
        except ReaderError as e:
            _, body = error_to_status(e)
            emit_error(
                body["error"],
                code=e.error_code,
                details={"provider_error": body["details"]} if "details" in body else None,
            )

        emit_success(result.to_dict())


@cli.command("clean")
@click.argument("raw", required=False)
def clean_cmd(raw: Optional[str]) -> None:
    """Print the normalized URL(s) found in RAW (or stdin)."""
    if raw is None:
        raw = sys.stdin.read()
    cleaned = normalize(raw)
    if not cleaned:
        click.echo("No URL found in input", err=True)
        sys.exit(1)
    click.echo(cleaned)


if __name__ == "__main__":
    cli()

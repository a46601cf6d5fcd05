#!/usr/bin/env python
"""CLI entry point for the neurogame generation pipeline."""

import asyncio
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from neurogame.bootstrap import build_services
from neurogame.config import BACKEND_PORT, configure_logging, get_models_config_path
from neurogame.errors import ProviderError, RegistryError, RequestValidationError
from neurogame.model_config import load_models_config
from neurogame.pipeline.executor import StageProgress
from neurogame.pipeline.registry import STAGES, apply_overrides

load_dotenv()


def _echo_progress(progress: StageProgress) -> None:
    click.echo(f"  ✅ {progress.stage_id} ({progress.index}/{progress.total})", err=True)


def _build_services():
    """Build services for one command; an invalid models config is a user error."""
    try:
        return build_services(observer=None)
    except RegistryError as e:
        raise click.ClickException(f"Invalid models config: {e}")


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
def cli(log_level: Optional[str]):
    """Neurogame - turn a game idea into a playable HTML file through nine LLM stages."""
    configure_logging(log_level)


@cli.command()
@click.argument("task")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the HTML to this file instead of stdout",
)
def generate(task: str, output: Optional[Path]):
    """Run the full pipeline (perception -> ... -> action) for TASK."""

    async def run():
        services = _build_services()
        try:
            if services.generation is None:
                raise click.ClickException("Generation pipeline unavailable - check provider API keys")

            click.echo(f"Running {len(services.generation.describe_stages())}-stage pipeline...", err=True)
            click.echo("=" * 60, err=True)
            try:
                return await services.generation.generate(task, observer=_echo_progress)
            except RequestValidationError as e:
                raise click.UsageError(str(e))
        finally:
            await services.aclose()

    result = asyncio.run(run())

    if not result.succeeded:
        raise click.ClickException(f"Pipeline failed at {result.failed_stage}: {result.error}")

    if output:
        output.write_text(result.html)
        click.echo(f"\n✅ Game written to {output}", err=True)
    else:
        click.echo(result.html)


@cli.command()
@click.argument("task")
def name(task: str):
    """Suggest a name for the game described by TASK."""

    async def run():
        services = _build_services()
        try:
            if services.naming is None:
                raise click.ClickException("Naming service unavailable - check provider API keys")
            try:
                return await services.naming.name(task)
            except RequestValidationError as e:
                raise click.UsageError(str(e))
            except ProviderError as e:
                raise click.ClickException(f"Naming failed: {e}")
        finally:
            await services.aclose()

    click.echo(asyncio.run(run()))


@cli.command()
def stages():
    """Show the stage table with the configured models."""
    try:
        table = apply_overrides(STAGES, load_models_config().stages)
    except RegistryError as e:
        raise click.ClickException(f"Invalid models config: {e}")
    for index, stage in enumerate(table, start=1):
        requires = ", ".join(("task",) + stage.requires)
        model = f"{stage.provider.value}/{stage.model}"
        if stage.max_output_tokens:
            model += f" (max {stage.max_output_tokens} tokens)"
        click.echo(f"{index}. {stage.id:<12} {model}")
        click.echo(f"   requires: {requires}")


@cli.command()
def status():
    """Show system status and configuration."""
    click.echo("Neurogame Status")
    click.echo("=" * 40)
    click.echo(f"Working Directory: {Path.cwd()}")
    click.echo(f"Models config: {get_models_config_path()}")

    models_config = load_models_config()
    for provider_id, settings in models_config.providers.items():
        if os.getenv(settings.api_key_env):
            click.echo(f"✓ {provider_id} API key configured (${settings.api_key_env})")
        else:
            click.echo(f"✗ {provider_id} API key missing (${settings.api_key_env})")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=BACKEND_PORT, type=int, help="Bind port")
def serve(host: str, port: int):
    """Start the HTTP API."""
    import uvicorn

    uvicorn.run("neurogame.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()

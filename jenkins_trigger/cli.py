"""CLI entry point: command definitions using Click.

Commands:
    init          Generate a template config file
    trigger       Start a Jenkins job through the trigger endpoint
"""

import json
import sys

import click

from jenkins_trigger import __version__


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_config(ctx: click.Context):
    """Load config or exit with a readable message."""
    from jenkins_trigger.config import ConfigError, load

    try:
        return load(ctx.obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)


def _verbose(ctx: click.Context, message: str) -> None:
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] {message}", err=True)


def _emit_json(data: dict, ctx: click.Context) -> None:
    indent = 2 if ctx.obj["pretty"] else None
    click.echo(json.dumps(data, indent=indent, ensure_ascii=False))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="trigger-config.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the outcome as JSON.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="jenkins-trigger")
@click.pass_context
def cli(ctx: click.Context, config_path: str, as_json: bool, pretty: bool, verbose: bool) -> None:
    """Trigger Jenkins jobs through the reporting service."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["as_json"] = as_json
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="trigger-config.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template trigger-config.yaml file."""
    from jenkins_trigger.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your service URL, Jenkins credentials and job aliases.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# trigger
# ---------------------------------------------------------------------------

@cli.command("trigger")
@click.argument("job")
@click.option("--user", default=None,
              help="Jenkins user (overrides config, defaults to 'sonar').")
@click.pass_context
def trigger_command(ctx: click.Context, job: str, user: str | None) -> None:
    """Trigger the Jenkins job JOB (a configured alias or a job name)."""
    from jenkins_trigger.client import TriggerClient
    from jenkins_trigger.config import ConfigError
    from jenkins_trigger.models import format_technical_details, format_user_message

    config = _load_config(ctx)
    try:
        request = config.build_request(job, user=user)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    client = TriggerClient(config.client_config())
    _verbose(ctx, f"Triggering '{request.jenkins_job}' via {client.config.trigger_url}")

    outcome = client.trigger(request)

    if ctx.obj["as_json"]:
        _emit_json(outcome.to_dict(), ctx)
    elif outcome.success:
        click.echo(outcome.message)

    if not outcome.success:
        if not ctx.obj["as_json"]:
            click.echo(format_user_message(outcome), err=True)
        _verbose(ctx, format_technical_details(outcome))
        sys.exit(1)

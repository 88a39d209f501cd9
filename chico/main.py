"""
create-chico-app: CLI entrypoint.

Usage:
    create-chico-app --help
    create-chico-app my-app
    create-chico-app my-app --use-pnpm --branch master
    python -m chico my-app --yes
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from chico import __version__
from chico.adapters import default_registry
from chico.core.errors import ChicoError, UnavailableManagerError
from chico.core.observability.logging_config import level_from_flags, setup_logging


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="create-chico-app")
@click.argument("project_name", required=False)
@click.option("--use-npm", is_flag=True, help="Use npm as the package manager.")
@click.option("--use-yarn", is_flag=True, help="Use yarn as the package manager.")
@click.option("--use-pnpm", is_flag=True, help="Use pnpm as the package manager.")
@click.option("--use-bun", is_flag=True, help="Use bun as the package manager.")
@click.option("--branch", "-b", default=None, help="Template branch (default: blank).")
@click.option("--template", "-t", default=None, help="Template repository as owner/repo.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't prompt; accept defaults.")
@click.option("--skip-install", is_flag=True, help="Don't install dependencies.")
@click.option("--dev", "start_dev", is_flag=True, help="Start the dev server after installing.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a settings file (default: ~/.create-chico-app.yml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    project_name: str | None,
    use_npm: bool,
    use_yarn: bool,
    use_pnpm: bool,
    use_bun: bool,
    branch: str | None,
    template: str | None,
    assume_yes: bool,
    skip_install: bool,
    start_dev: bool,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Create a new Next.js project from the Chico template."""
    from chico.core.config.loader import load_settings
    from chico.core.services.resolver import manager_from_flags
    from chico.core.use_cases.create import CreateRequest, run_create
    from chico.ui.cli.prompts import ClickPromptProvider

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("CHICO_LOG_FILE"),
        log_file_level=os.environ.get("CHICO_LOG_FILE_LEVEL"),
    )

    if not quiet:
        click.secho("🚀 Welcome to Create Chico App!", fg="blue", bold=True)

    request = CreateRequest(
        project_name=project_name,
        explicit_manager=manager_from_flags(use_npm, use_yarn, use_pnpm, use_bun),
        branch=branch,
        template=template,
        interactive=not assume_yes,
        install=False if skip_install else (True if assume_yes else None),
        start_dev=start_dev,
    )

    def progress(message: str) -> None:
        if not quiet:
            click.secho(f"⏳ {message}", fg="cyan")

    try:
        settings = load_settings(config_path)
        result = run_create(
            request,
            prompts=ClickPromptProvider(),
            registry=default_registry(),
            settings=settings,
            parent_dir=Path.cwd(),
            progress=progress,
        )
    except UnavailableManagerError as e:
        click.secho(f"⚠️  {e.manager} is not installed. To install it:", fg="yellow")
        click.echo(f"  {e.remedy}")
        sys.exit(1)
    except ChicoError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho("✅ Project created successfully! 🎉", fg="green")

    if result.dev_started:
        return

    steps = result.next_steps
    if result.install_error:
        click.secho(f"❌ Dependency installation failed: {result.install_error}", fg="red")
        click.echo("\n" + click.style("Finish the setup by hand:", fg="cyan"))
    elif result.dev_error:
        click.secho(f"❌ Development server failed: {result.dev_error}", fg="red")
        click.echo("\n" + click.style("Try it again by hand:", fg="cyan"))
        steps = [steps[0], steps[2]]
    else:
        if result.installed:
            steps = [steps[0], steps[2]]
        click.echo("\n" + click.style("To get started:", fg="cyan"))
    for line in steps:
        click.echo(f"  {line}")

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    cli()

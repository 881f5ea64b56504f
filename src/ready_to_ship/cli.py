"""ready-to-ship CLI - command registration and entry point."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import ScanConfig
from .console import console, print_error, print_header, print_info, print_success, print_warning
from .fixer import FIXABLE_MODULES, apply_fixes, generate_fixes
from .models import FixStatus, MODULE_ORDER
from .report import generate_report, run_validation

MODULE_HELP = {
    "env": "Validate .env against .env.example and check secret strength.",
    "auth": "Check that sensitive routes carry auth middleware and JWT expiry is sane.",
    "api": "Check for a health endpoint and basic REST consistency.",
    "project": "Check README, .env.example, folder layout, error handling and package.json.",
    "security": "Check CORS, security headers, rate limiting, eval() and dynamic RegExp.",
    "dependencies": "Check package.json, lock file, frameworks and outdated packages.",
    "database": "Check database connection handling, pooling and migrations.",
}

path_option = click.option(
    "--path",
    "-p",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root to validate",
)


@click.group()
@click.version_option(version=__version__, prog_name="ready-to-ship")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Check whether a Node.js backend is ready for production."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _module_command(name: str) -> click.Command:
    @path_option
    def command(path):
        config = ScanConfig(project_path=path)
        report = run_validation(config, modules=[name], echo=True)
        sys.exit(0 if report.overall_passed else 1)

    command.__doc__ = MODULE_HELP[name]
    return click.command(name)(command)


for _name in MODULE_ORDER:
    cli.add_command(_module_command(_name))


@cli.command("report")
@path_option
@click.option("--json", "json_export", is_flag=True, help="Save ready-to-ship-report.json in the project")
@click.option("--verbose", "-v", is_flag=True, help="List every issue and warning by module")
@click.option("--skip", default="", help="Comma-separated modules to skip (e.g. database,dependencies)")
def report_command(path, json_export, verbose, skip):
    """Run every validator and print the combined verdict."""
    config = ScanConfig(project_path=path, skip=skip)
    report = generate_report(config, json_export=json_export, verbose=verbose)
    sys.exit(0 if report.overall_passed else 1)


@cli.command("fix")
@path_option
@click.option("--apply", "apply_changes", is_flag=True, help="Write files instead of previewing")
def fix_command(path, apply_changes):
    """Generate fixes for common findings (dry-run unless --apply)."""
    config = ScanConfig(project_path=path)
    report = run_validation(config, modules=FIXABLE_MODULES)
    actions = generate_fixes(report.findings())

    print_header("AUTO-FIX")
    if not actions:
        print_success("No auto-fixable issues found!")
        return

    response = apply_fixes(actions, config.root, dry_run=not apply_changes)
    for result in response.results:
        action = result.action
        if result.status == FixStatus.CREATED:
            print_success(f"Created {action.file}")
        elif result.status == FixStatus.SKIPPED:
            print_warning(f"{action.file} already exists, skipping")
        elif result.status == FixStatus.WOULD_CREATE:
            print_info(f"[DRY RUN] Would create {action.file}")
        else:
            console.print(f"  - {action.description}", markup=False)

    print_info(response.summary)
    if response.dry_run:
        print_info("Run with --apply to write files.")


def main():
    try:
        cli()
    except KeyboardInterrupt:
        print_error("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()

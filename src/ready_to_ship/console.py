"""Central console output for ready-to-ship.

One themed rich Console for every command. Findings are rendered to text
here and nowhere else.

Usage:
    from ready_to_ship.console import console, print_result

    print_result(result)
    console.print("[success]All checks passed[/success]")
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from .models import AggregateReport, Finding, IssueKind, Severity, ValidatorResult

SHIP_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "path": "bold cyan",
    "dim": "dim white",
})

console = Console(
    theme=SHIP_THEME,
    force_terminal=sys.stdout.isatty(),
)


def print_header(title: str) -> None:
    console.rule(f"[bold]{title}[/bold]")


def print_success(msg: str) -> None:
    console.print(f"[success]OK:[/success] {escape(msg)}")


def print_error(msg: str) -> None:
    console.print(f"[error]ERROR:[/error] {escape(msg)}")


def print_warning(msg: str) -> None:
    console.print(f"[warning]WARNING:[/warning] {escape(msg)}")


def print_info(msg: str) -> None:
    console.print(f"[info]INFO:[/info] {escape(msg)}")


def print_findings(findings: list[Finding]) -> None:
    for finding in findings:
        if finding.severity == Severity.ISSUE:
            print_error(finding.message)
        else:
            print_warning(finding.message)


def print_verdict(passed: bool, message: str) -> None:
    style = "success" if passed else "error"
    console.print(f"\n[{style}]{escape(message)}[/{style}]")


def print_result(result: ValidatorResult) -> None:
    """Print one module's section: notes, findings, vulnerable routes, verdict."""
    name = result.module.upper()
    console.print(f"\n[info]{name} VALIDATION[/info]\n")

    if result.skipped:
        print_verdict(True, f"{name}: SKIPPED (No database detected)")
        return

    for note in result.notes:
        print_success(note)
    print_findings(result.issues)
    print_findings(result.warnings)

    if result.vulnerable_routes:
        console.print("\n[bold]Vulnerable Routes:[/bold]")
        for route in result.vulnerable_routes:
            print_error(f"{route.method} {route.path} ({route.file}:{route.line})")

    if any(f.kind == IssueKind.NO_ROUTE_FILES for f in result.issues):
        print_verdict(False, f"{name}: NOT READY (No routes found)")
    elif result.passed:
        print_verdict(True, f"{name}: READY" + (" (with warnings)" if result.warnings else ""))
    else:
        print_verdict(False, f"{name}: NOT READY")


def print_summary(report: AggregateReport, verbose: bool = False) -> None:
    """Per-module PASS/FAIL table, totals and the final verdict."""
    print_header("SUMMARY")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Module")
    table.add_column("Status")
    table.add_column("Issues", justify="right")
    table.add_column("Warnings", justify="right")
    for name, result in report.results.items():
        if result.skipped:
            status = "[dim]SKIP[/dim]"
        elif result.passed:
            status = "[success]PASS[/success]"
        else:
            status = "[error]FAIL[/error]"
        table.add_row(name.upper(), status, str(len(result.issues)), str(len(result.warnings)))
    console.print(table)

    console.print(f"Total Issues: {report.total_issues}")
    console.print(f"Total Warnings: {report.total_warnings}")

    if verbose:
        console.print("\n[bold]Detailed Issues:[/bold]")
        for name, result in report.results.items():
            if not result.issues and not result.warnings:
                continue
            console.print(f"\n[bold]{name.upper()}:[/bold]")
            print_findings(result.issues)
            print_findings(result.warnings)

    if report.overall_passed:
        print_verdict(True, "FINAL VERDICT: READY TO SHIP")
        print_success("Your backend project looks ready for deployment!")
    else:
        print_verdict(False, "FINAL VERDICT: NOT READY")
        print_error("Please fix the issues above before deploying.")

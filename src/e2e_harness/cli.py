"""CLI entry point for e2e-harness."""

import argparse
import sys
from pathlib import Path

import pytest
from playwright.sync_api import sync_playwright
from rich.console import Console
from rich.table import Table

from e2e_harness.core.browser import NavigationError, open_session
from e2e_harness.core.config import ConfigurationError, HarnessSettings, describe_settings, load_settings
from e2e_harness.core.logging import enable_file_logging, set_log_level
from e2e_harness.core.waits import TimeoutFailure, Waiter
from e2e_harness.pages.home import HomePage

console = Console()

SUITES = {
    "api": "api",
    "web": "web",
    "all": "api or web",
}


def _load(args: argparse.Namespace) -> HarnessSettings:
    settings = load_settings(env=args.env, config_dir=args.config_dir)
    if getattr(args, "headed", False):
        browser = settings.browser.model_copy(update={"headless": False})
        settings = settings.model_copy(update={"browser": browser})
    return settings


def cmd_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    settings = _load(args)
    table = Table(title=f"e2e-harness configuration ({settings.environment})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for label, value in describe_settings(settings):
        table.add_row(label, value)
    console.print(table)
    console.print("[green]Configuration is valid.[/green]")
    return 0


def cmd_smoke(args: argparse.Namespace) -> int:
    """Open the storefront and wait until the home page is ready."""
    settings = _load(args)
    console.print(f"[yellow]Opening[/yellow] {settings.base_url} with {settings.browser.name}...")

    with sync_playwright() as p:
        with open_session(p, settings) as session:
            home = HomePage(session, Waiter(session, settings.timeouts))
            try:
                home.open(settings.base_url)
            except (TimeoutFailure, NavigationError) as e:
                console.print(f"[red]Storefront not ready:[/red] {e}")
                return 1
            products = home.product_names()

    console.print(f"[green]Storefront ready[/green] - {len(products)} products listed")
    for name in products[:5]:
        console.print(f"  [dim]-[/dim] {name}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run the feature suites through pytest."""
    pytest_args = [
        str(args.tests_dir),
        "--run-e2e",
        "-m",
        SUITES[args.suite],
    ]
    if args.env:
        pytest_args += ["--env", args.env]
    if args.config_dir:
        pytest_args += ["--config-dir", str(args.config_dir)]
    if args.headed:
        pytest_args.append("--headed")
    extra = args.pytest_args
    if extra[:1] == ["--"]:
        extra = extra[1:]
    pytest_args += extra

    console.print(f"[bold cyan]Running {args.suite} scenarios[/bold cyan]: pytest {' '.join(pytest_args)}")
    return int(pytest.main(pytest_args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="e2e-harness",
        description="E2E Harness - behavior-driven checks for Demoblaze and JSONPlaceholder",
    )
    parser.add_argument("--env", default=None, help="Environment name (default: $E2E_ENV or dev)")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding <env>.yaml (default: $E2E_CONFIG_DIR or ./config)",
    )
    parser.add_argument("--log-level", default="info", help="Console log level (default: info)")
    parser.add_argument("--log-file", default=None, help="Also write debug logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Show and validate the configuration")

    smoke = subparsers.add_parser("smoke", help="Check that the storefront home page becomes ready")
    smoke.add_argument("--headed", action="store_true", help="Show the browser window")

    run = subparsers.add_parser("run", help="Run feature suites with pytest")
    run.add_argument("--suite", choices=sorted(SUITES), default="all", help="Which scenarios to run (default: all)")
    run.add_argument("--tests-dir", type=Path, default=Path("tests/e2e"), help="Where the scenario tests live")
    run.add_argument("--headed", action="store_true", help="Show the browser window")
    run.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest arguments, after --")

    return parser


COMMANDS = {
    "config": cmd_config,
    "smoke": cmd_smoke,
    "run": cmd_run,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    set_log_level(args.log_level)
    if args.log_file:
        enable_file_logging(args.log_file)

    try:
        return COMMANDS[args.command](args)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())

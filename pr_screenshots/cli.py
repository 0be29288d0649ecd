"""pr-screenshots CLI — upload test screenshots and report them on a pull request."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import load_github_context, load_storage_target
from .errors import ScreenshotReviewError
from .github import post_comment
from .models import RunContext
from .paths import DEFAULT_PATH_TEMPLATE
from .reporting.comment import build_comment_markdown
from .reporting.results import load_results, results_to_json, save_results
from .storage.factory import STORAGE_KINDS
from .upload import upload_screenshots

console = Console()


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=console, show_path=False, markup=False))
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]✗ {escape(message)}[/red]")
    sys.exit(1)


@click.group()
@click.option("--verbose/--quiet", default=False, show_default=True, help="Enable debug logging.")
def cli(verbose: bool):
    """📸 pr-screenshots — Upload Playwright screenshots and generate PR comments"""
    _configure_logging(verbose)


@cli.command("upload")
@click.option("--directory", "-d", required=True, help="Directory containing screenshots.")
@click.option(
    "--storage",
    "-s",
    "storage_kind",
    required=True,
    type=click.Choice(STORAGE_KINDS, case_sensitive=False),
    help="Storage backend.",
)
@click.option("--pr", "-p", "pr_number", default=None, help="PR number (defaults to $PR_NUMBER).")
@click.option("--run-id", "-r", default=None, help="CI run ID (defaults to $RUN_ID).")
@click.option(
    "--path-template",
    "-t",
    default=DEFAULT_PATH_TEMPLATE,
    show_default=True,
    help="Remote path template. Variables: {pr}, {runId}, {filename}",
)
@click.option("--output", "-o", default=None, help="Output JSON file for screenshot URLs.")
def upload_command(
    directory: str,
    storage_kind: str,
    pr_number: str | None,
    run_id: str | None,
    path_template: str,
    output: str | None,
):
    """Upload screenshots to storage."""
    load_dotenv()
    try:
        target = load_storage_target(storage_kind)
    except ValueError as err:
        _fail(str(err))

    run = RunContext(
        pr_number=pr_number or os.getenv("PR_NUMBER"),
        run_id=run_id or os.getenv("RUN_ID"),
    )
    try:
        screenshots = upload_screenshots(directory, target, path_template=path_template, run=run)
    except ScreenshotReviewError as err:
        _fail(err.message)

    console.print(f"[green]✓ Successfully uploaded {len(screenshots)} screenshots[/green]")

    output_path = save_results(screenshots, output or os.getenv("OUTPUT_FILE") or "screenshot-urls.json")
    console.print(f"[green]✓ Saved URLs to {output_path}[/green]")

    github_output = os.getenv("GITHUB_OUTPUT")
    if github_output:
        compact = results_to_json(screenshots, indent=None)
        with open(github_output, "a", encoding="utf-8") as handle:
            handle.write(f"urls={compact}\n")


@cli.command("generate-comment")
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Input JSON file with screenshot URLs.",
)
@click.option("--pr", "-p", "pr_number", default=None, help="PR number (defaults to $PR_NUMBER).")
@click.option("--run-id", "-r", default=None, help="CI run ID (defaults to $RUN_ID).")
@click.option("--repo-url", default=None, help="Repository URL (defaults to $GITHUB_SERVER_URL/$GITHUB_REPOSITORY).")
@click.option("--output", "-o", default="pr-comment.md", show_default=True, help="Output markdown file.")
def generate_comment_command(
    input_path: str,
    pr_number: str | None,
    run_id: str | None,
    repo_url: str | None,
    output: str,
):
    """Generate PR comment markdown from screenshot URLs."""
    load_dotenv()
    try:
        screenshots = load_results(input_path)
    except (ValueError, KeyError) as err:
        _fail(f"Invalid screenshot results in {input_path}: {err}")

    github = load_github_context()
    body = build_comment_markdown(
        screenshots,
        pr_number=pr_number or os.getenv("PR_NUMBER"),
        owner=github.owner,
        repo=github.repo,
        run_id=run_id or os.getenv("RUN_ID"),
        repository_url=repo_url or github.repository_url,
    )

    Path(output).write_text(body, encoding="utf-8")
    console.print(f"[green]✓ Generated comment saved to {output}[/green]")
    console.print()
    console.print("[bold cyan]── Comment Preview ──[/bold cyan]")
    console.print(body, markup=False, highlight=False)


@cli.command("post-comment")
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Markdown file produced by generate-comment.",
)
@click.option("--pr", "-p", "pr_number", default=None, help="PR number (defaults to $PR_NUMBER).")
@click.option("--token", default=None, help="GitHub token (defaults to $GITHUB_TOKEN).")
def post_comment_command(input_path: str, pr_number: str | None, token: str | None):
    """Post or update the screenshot comment on the pull request."""
    load_dotenv()
    github = load_github_context()
    body = Path(input_path).read_text(encoding="utf-8")
    try:
        comment_url = post_comment(
            body,
            token=token or github.token or "",
            owner=github.owner,
            repo=github.repo,
            pr_number=pr_number or os.getenv("PR_NUMBER") or "",
        )
    except ScreenshotReviewError as err:
        _fail(err.message)

    console.print(f"[green]✓ Posted comment {comment_url}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

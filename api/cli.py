"""Command-line interface for the code review service."""

import asyncio
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from agents.reviewer_agent import ReviewerAgent
from config.settings import settings
from tools.error_handling import ConfigurationError, MissingInputError, UpstreamFailureError
from tools.llm_client import GeminiReviewClient
from tools.observability import setup_observability

console = Console()


def create_reviewer(model: Optional[str] = None, log_level: str = "WARNING") -> ReviewerAgent:
    """Create and return a ReviewerAgent configured from settings."""
    observability = setup_observability(
        service_name=settings.service_name,
        log_level=log_level,
        enable_console_export=False
    )
    llm_client = GeminiReviewClient(
        api_key=settings.google_gemini_key,
        model=model or settings.gemini_model,
        observability=observability
    )
    return ReviewerAgent(llm_client=llm_client, observability=observability)


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """
    Code Review Service CLI.

    Reviews source code with a hosted language model and renders the
    review as markdown.

    \b
    Examples:
        # Review a file
        code-review review app.js

        # Review code from stdin and print the raw markdown
        cat app.js | code-review review - --raw

        # Run the HTTP API
        code-review serve --port 3000
    """
    pass


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--model",
    default=None,
    help="Model to use (defaults to GEMINI_MODEL)"
)
@click.option(
    "--raw",
    is_flag=True,
    help="Print the review text without markdown rendering"
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Emit structured logs"
)
def review(source, model: Optional[str], raw: bool, verbose: bool) -> None:
    """
    Review a source file.

    SOURCE is a path, or '-' to read from stdin. The file content is sent
    to the model exactly as read.
    """
    try:
        code = source.read()
    except UnicodeDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] {source.name} is not valid UTF-8 text ({e.reason})")
        sys.exit(2)

    reviewer = create_reviewer(model=model, log_level="INFO" if verbose else "WARNING")

    try:
        if raw:
            text = asyncio.run(reviewer.review_code(code))
        else:
            with console.status("Reviewing...", spinner="dots"):
                text = asyncio.run(reviewer.review_code(code))
    except MissingInputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(2)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)
    except UpstreamFailureError as e:
        console.print(f"[bold red]Review failed:[/bold red] {e}")
        sys.exit(1)

    if raw:
        click.echo(text)
    else:
        console.print(Panel(Markdown(text), title=f"Review: {source.name}", border_style="green"))


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", default=None, type=int, help="Port (defaults to API_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload
    )


if __name__ == "__main__":
    main()

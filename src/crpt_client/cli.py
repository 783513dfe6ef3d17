# src/crpt_client/cli.py
"""crpt-client Command Line Interface.

Entry point for the crpt-client CLI tool.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from crpt_client import __version__
from crpt_client.clients import DocumentSubmitter, HTTPTransport
from crpt_client.contracts import (
    CrptClientError,
    Document,
    SerializationError,
    SubmissionResult,
)
from crpt_client.core.config import ClientSettings, load_settings
from crpt_client.core.logging import configure_logging
from crpt_client.core.rate_limit import build_limiter

app = typer.Typer(
    name="crpt-client",
    help="Rate-limited document submission to the CRPT registry.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"crpt-client version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """crpt-client: rate-limited document submission."""
    pass


def _load_settings_or_exit(settings: str | None) -> ClientSettings:
    if settings is None:
        return ClientSettings()
    try:
        return load_settings(Path(settings))
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _load_document_or_exit(document: str) -> Document:
    path = Path(document)
    if not path.exists():
        typer.echo(f"Error: Document file not found: {document}", err=True)
        raise typer.Exit(1)
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Document is not valid JSON: {e}", err=True)
        raise typer.Exit(1) from None
    if not isinstance(data, dict):
        typer.echo("Error: Document must be a JSON object", err=True)
        raise typer.Exit(1)
    try:
        return Document.from_mapping(data)
    except SerializationError as e:
        typer.echo(f"Document errors: {e}", err=True)
        for error in e.errors:
            typer.echo(f"  - {error['loc']}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


@app.command()
def submit(
    document: str = typer.Option(
        ...,
        "--document",
        "-d",
        help="Path to document JSON file.",
    ),
    signature: str = typer.Option(
        ...,
        "--signature",
        help="Signature header value.",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file (defaults apply when omitted).",
    ),
    count: int = typer.Option(
        1,
        "--count",
        "-n",
        min=1,
        help="Number of times to submit the document.",
    ),
    workers: int = typer.Option(
        1,
        "--workers",
        "-w",
        min=1,
        help="Number of threads submitting concurrently.",
    ),
) -> None:
    """Submit a document to the registry under the configured rate limit.

    With --count and --workers the same document is submitted from
    several threads at once; the rate limit is shared between them.
    """
    config = _load_settings_or_exit(settings)
    configure_logging(config.logging.level, config.logging.json_output)
    doc = _load_document_or_exit(document)

    limiter = build_limiter(config.rate_limit)
    failures = 0

    with HTTPTransport(timeout=config.transport.timeout_seconds) as transport:
        submitter = DocumentSubmitter(
            transport, limiter, url=config.transport.create_documents_url
        )

        def _submit_one(index: int) -> tuple[int, SubmissionResult | CrptClientError]:
            try:
                return index, submitter.submit(doc, signature)
            except CrptClientError as e:
                return index, e

        with ThreadPoolExecutor(max_workers=workers) as pool:
            for index, outcome in pool.map(_submit_one, range(1, count + 1)):
                if isinstance(outcome, SubmissionResult):
                    typer.echo(f"[{index}] {outcome.status_code} {outcome.body}")
                    if not outcome.ok:
                        failures += 1
                else:
                    typer.echo(f"[{index}] error: {outcome}", err=True)
                    failures += 1

    limiter.close()
    if failures:
        typer.echo(f"{failures} of {count} submission(s) failed", err=True)
        raise typer.Exit(1)


@app.command()
def validate(
    document: str = typer.Option(
        ...,
        "--document",
        "-d",
        help="Path to document JSON file.",
    ),
) -> None:
    """Validate a document file without sending it."""
    doc = _load_document_or_exit(document)
    typer.echo(f"Document valid: {Path(document).name}")
    typer.echo(f"  Type: {doc.doc_type or '-'}")
    typer.echo(f"  Products: {len(doc.products or [])}")


if __name__ == "__main__":
    app()

"""Command line interface for PlagScan."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from plagscan.checker import PlagiarismChecker
from plagscan.config import AppConfig
from plagscan.errors import PlagScanError
from plagscan.ingestion.loader import load_document
from plagscan.keywords import extract_keywords, extract_keywords_with_fallback
from plagscan.models import Candidate, ScoreResult
from plagscan.web.app import app as web_app


console = Console()
app = typer.Typer(help="PlagScan - Rabin-Karp plagiarism checking")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _read_text(path: Path) -> str:
    try:
        return load_document(path).text
    except PlagScanError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _print_results(results: List[ScoreResult]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Title")
    table.add_column("Source")
    for result in results:
        table.add_row(f"{result.score:.4f}", result.title or "", result.url or result.candidate_id)
    console.print(table)


@app.command()
def compare(
    reference: Path = typer.Argument(..., help="Reference document.", exists=True, dir_okay=False),
    candidates: List[Path] = typer.Argument(
        ..., help="Documents to score against the reference.", exists=True, dir_okay=False
    ),
    ngram: int = typer.Option(AppConfig().ngram_length, "--ngram", "-k", help="k-gram length"),
    base: int = typer.Option(AppConfig().base, help="Hash base"),
    modulus: int = typer.Option(AppConfig().modulus, help="Hash modulus"),
    mode: str = typer.Option(AppConfig().mode, help="Fingerprint mode: fast or verified"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print how much of each candidate is covered by the reference."""
    _setup_logging(verbose)
    config = AppConfig(ngram_length=ngram, base=base, modulus=modulus, mode=mode)
    try:
        checker = PlagiarismChecker(config)
    except PlagScanError as exc:
        raise typer.BadParameter(str(exc)) from exc

    reference_text = _read_text(reference)
    items = [
        Candidate(identifier=str(path), title=path.name, text=_read_text(path))
        for path in candidates
    ]
    try:
        results = checker.rank_against_reference(reference_text, items)
    except PlagScanError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _print_results(results)


@app.command()
def keywords(
    document: Path = typer.Argument(..., help="Document to extract keywords from.", exists=True),
    ngram: int = typer.Option(2, "--ngram", "-n", help="Words per phrase"),
    top_k: int = typer.Option(AppConfig().keyword_top_k, help="Number of phrases"),
    max_length: int = typer.Option(AppConfig().keyword_max_length, help="Maximum query length"),
    min_token_length: int = typer.Option(
        AppConfig().keyword_min_token_length, help="Shortest word kept in a phrase"
    ),
    fallback: bool = typer.Option(True, help="Retry with single words and raw text"),
) -> None:
    """Print the search query derived from a document."""
    text = _read_text(document)
    extractor = extract_keywords_with_fallback if fallback else extract_keywords
    try:
        query = extractor(
            text, n=ngram, top_k=top_k, max_length=max_length, min_token_length=min_token_length
        )
    except PlagScanError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not query:
        console.print("[yellow]No keywords found.[/yellow]")
        return
    console.print(query)


@app.command()
def check(
    document: Path = typer.Argument(..., help="Document to check.", exists=True, dir_okay=False),
    keywords: Optional[str] = typer.Option(None, help="Search query; extracted when omitted"),
    language: str = typer.Option(AppConfig().language, help="Wikipedia language code"),
    limit: int = typer.Option(AppConfig().result_limit, help="Number of results to display"),
    url: Optional[List[str]] = typer.Option(None, "--url", help="Compare against these pages instead"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Check a document against Wikipedia articles or given web pages."""
    _setup_logging(verbose)
    try:
        config = AppConfig.from_env()
        config.language = language
        config.result_limit = limit
        checker = PlagiarismChecker(config)
    except PlagScanError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc

    text = _read_text(document)
    if not text.strip():
        console.print("[yellow]No text extracted from document.[/yellow]")
        raise typer.Exit(code=1)

    try:
        report = checker.check_urls(text, url) if url else checker.check(text, keywords)
    except PlagScanError as exc:
        console.print(f"[red]Check failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if report.keywords:
        console.print(f"Keywords: [bold]{report.keywords}[/bold]")
    if not report.results:
        console.print("[yellow]No matching sources found.[/yellow]")
        return
    _print_results(report.results)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )

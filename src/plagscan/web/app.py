"""FastAPI application backing the PlagScan web UI."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, List

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from plagscan import __version__
from plagscan.checker import CheckReport, PlagiarismChecker
from plagscan.config import AppConfig
from plagscan.errors import ExtractionError, PlagScanError, SourceError
from plagscan.ingestion.loader import SUPPORTED_SUFFIXES, extract_text, is_supported
from plagscan.sources.wikipedia import WikipediaClient
from plagscan.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="PlagScan Web", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class CustomTextPayload(BaseModel):
    text: str
    keywords: str | None = None


class UrlCheckPayload(BaseModel):
    text: str
    urls: List[str]


def _get_config() -> AppConfig:
    try:
        return AppConfig.from_env()
    except PlagScanError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise HTTPException(status_code=500, detail=f"Invalid configuration: {exc}") from exc


def _get_checker() -> PlagiarismChecker:
    config = _get_config()
    try:
        return PlagiarismChecker(config)
    except PlagScanError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise HTTPException(status_code=500, detail=f"Invalid configuration: {exc}") from exc


async def _run_or_fail(func: Callable[..., CheckReport], *args: Any) -> dict[str, Any]:
    try:
        report = await asyncio.to_thread(func, *args)
    except SourceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:  # pragma: no cover - defensive
        LOGGER.exception("Plagiarism check failed: %s", exc)
        raise HTTPException(status_code=500, detail=f"An error occurred: {exc}") from exc
    return report.to_dict()


def _extract_upload(filename: str, content: bytes) -> str:
    suffix = Path(filename).suffix.lower()
    handle, tmp_name = tempfile.mkstemp(suffix=suffix)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(handle, "wb") as stream:
            stream.write(content)
        return extract_text(tmp_path)
    finally:
        tmp_path.unlink(missing_ok=True)


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/search_wikipedia")
async def search_wikipedia(query: str | None = None, language: str | None = None) -> dict[str, Any]:
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Please provide a search query")

    config = _get_config()
    client = WikipediaClient(
        language or config.language,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )
    try:
        hits = await asyncio.to_thread(client.search, query.strip(), config.search_limit)
    except SourceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"results": [hit.to_dict() for hit in hits]}


@app.post("/check_plagiarism")
async def check_plagiarism(
    file: UploadFile | None = File(None),
    keywords: str | None = Form(None),
) -> dict[str, Any]:
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not is_supported(file.filename):
        raise HTTPException(
            status_code=400,
            detail=f"Only {', '.join(SUPPORTED_SUFFIXES)} files are allowed",
        )

    content = await file.read()
    try:
        text = await asyncio.to_thread(_extract_upload, file.filename, content)
    except ExtractionError as exc:
        LOGGER.error("Unable to extract %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not text.strip():
        raise HTTPException(status_code=422, detail="No text could be extracted from the file")

    return await _run_or_fail(_get_checker().check, text, keywords)


@app.post("/check_custom_text")
async def check_custom_text(payload: CustomTextPayload) -> dict[str, Any]:
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Text to check is required")
    return await _run_or_fail(_get_checker().check, payload.text, payload.keywords)


@app.post("/check_urls")
async def check_urls(payload: UrlCheckPayload) -> dict[str, Any]:
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Text to check is required")
    urls = [url.strip() for url in payload.urls if url.strip()]
    if not urls:
        raise HTTPException(status_code=400, detail="No URL provided")

    return await _run_or_fail(_get_checker().check_urls, payload.text, urls)

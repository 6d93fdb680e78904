"""
api.py — FastAPI REST API for youtube-transcript-fetcher.

Endpoints:
    GET /transcript/{video_id}  — Fetch a transcript (text, JSON or markdown).
    GET /health                 — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn youtube_transcript_fetcher.api:app

The global exception handler catches any TranscriptError and converts it to
the appropriate HTTP response using the status code stored on the exception.
Network failures talking to YouTube become 502 responses.
"""

from __future__ import annotations

import logging

import requests
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from youtube_transcript_fetcher.errors import TranscriptError
from youtube_transcript_fetcher.extractor import extract
from youtube_transcript_fetcher.models import TranscriptRequestConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="YouTube Transcript Fetcher API",
    description="Fetch YouTube video transcripts as plain text, structured JSON "
                "or a timestamped markdown document.",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Global error handlers
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError (or subclass) into an HTTP error response.

    The http_status on the exception drives the response code, so endpoint
    code never needs to think about HTTP semantics.
    """
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.message},
    )


@app.exception_handler(requests.RequestException)
async def upstream_error_handler(request: Request, exc: requests.RequestException) -> JSONResponse:
    """Network failures reaching YouTube are an upstream problem: 502."""
    logger.warning("Upstream request failed: %s", exc)
    return JSONResponse(
        status_code=502,
        content={"error": f"Failed to reach YouTube: {exc}"},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# response_model=None is required because we return different Response subclasses
# (PlainTextResponse or JSONResponse) depending on the format param.
# Declared as a sync endpoint so FastAPI runs the blocking fetch in its
# threadpool instead of the event loop.
@app.get("/transcript/{video_id}", response_model=None)
def get_transcript(
    video_id: str,
    format: str = Query(
        default="text",
        description="Output format: 'text' for plain transcript, 'json' for structured data with timestamps, 'doc' for readable markdown document.",
        pattern="^(text|json|doc)$",
    ),
    lang: str = Query(
        default="",
        description="Language code of the track to fetch (exact match). Empty selects the first track listed.",
    ),
) -> PlainTextResponse | JSONResponse:
    """
    Fetch the transcript for a single YouTube video.

    **video_id** is the 11-character YouTube video identifier
    (e.g. `dQw4w9WgXcQ`).

    The response format depends on the `format` query parameter:
    - `text` (default): plain text, one line per caption segment.
    - `json`: a JSON object with `video_id`, `language_code`,
      `segment_count` and a `segments` array.
    - `doc`: markdown paragraphs with `[MM:SS]` timestamps.
    """
    config = TranscriptRequestConfig(language=lang.strip() or None)
    result = extract(video_id, config, fmt=format)

    if isinstance(result, dict):
        return JSONResponse(content=result)
    return PlainTextResponse(content=result)


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """
    Minimal health-check endpoint.

    Returns HTTP 200 with {"status": "ok"}.
    """
    return {"status": "ok"}

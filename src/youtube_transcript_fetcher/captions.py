"""
captions.py — Pure parsing stages of the pipeline (no network access).

    1. Locate and decode the captions block of a watch page → extract_captions()
    2. Choose a caption track by language                   → select_track()
    3. Turn a timed-text payload into segments              → parse_transcript()

The watch page is scraped with a boundary-marker heuristic: the captions
JSON sits between the '"captions":' key and the following ',"videoDetails'
key of YouTube's embedded player response.  That heuristic is fragile by
nature, so it lives in one helper, extract_json_block(), and nowhere else.
"""

from __future__ import annotations

import json
import logging

from youtube_transcript_fetcher.constants import (
    CAPTIONS_MARKER,
    PLAYABILITY_MARKER,
    RECAPTCHA_MARKER,
    TRANSCRIPT_XML_PATTERN,
    VIDEO_DETAILS_MARKER,
)
from youtube_transcript_fetcher.errors import (
    LanguageNotFoundError,
    NoTranscriptError,
    RateLimitError,
    TranscriptDisabledError,
    TranscriptError,
    VideoUnavailableError,
)
from youtube_transcript_fetcher.models import (
    CaptionsDocument,
    CaptionTrack,
    TranscriptSegment,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Marker-delimited JSON
# ---------------------------------------------------------------------------

def extract_json_block(text: str, start_marker: str, end_marker: str) -> str | None:
    """
    Return the text between the first start_marker and the next end_marker.

    The section after start_marker ends at the next occurrence of
    start_marker, if any; within it, everything before end_marker is kept
    (the whole section when end_marker doesn't occur).  Newlines are removed
    so JSON split across lines still decodes.

    Args:
        text:         The text to search (usually a watch page).
        start_marker: Literal text immediately preceding the block.
        end_marker:   Literal text immediately following the block.

    Returns:
        The block with newlines stripped, or None if start_marker is absent.
    """
    parts = text.split(start_marker)
    if len(parts) < 2:
        return None
    return parts[1].split(end_marker)[0].replace("\n", "")


def _decode_captions(raw: str) -> CaptionsDocument | None:
    """
    Decode the captions JSON into a CaptionsDocument.

    Returns None when the JSON is malformed or has an unexpected shape.
    A well-formed block with no captionTracks decodes to an empty document.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None
    renderer = data.get("playerCaptionsTracklistRenderer") or {}
    if not isinstance(renderer, dict):
        return None
    entries = renderer.get("captionTracks") or []
    if not isinstance(entries, list):
        return None

    tracks: list[CaptionTrack] = []
    for entry in entries:
        if not isinstance(entry, dict):
            return None
        base_url = entry.get("baseUrl")
        language_code = entry.get("languageCode")
        if not isinstance(base_url, str) or not isinstance(language_code, str):
            return None
        tracks.append(CaptionTrack(base_url=base_url, language_code=language_code))

    return CaptionsDocument(tracks=tuple(tracks))


# ---------------------------------------------------------------------------
# Stage 1: captions block
# ---------------------------------------------------------------------------

def _classify_page_without_captions(page: str, video_id: str) -> TranscriptError:
    """
    Decide why a watch page has no captions block.

    The checks run in a fixed order: a CAPTCHA page carries no reliable
    structure, so it wins over everything else.
    """
    if RECAPTCHA_MARKER in page:
        return RateLimitError()
    if PLAYABILITY_MARKER not in page:
        return VideoUnavailableError(video_id)
    return TranscriptDisabledError(video_id)


def extract_captions(page: str, video_id: str) -> CaptionsDocument:
    """
    Locate and decode the captions metadata embedded in a watch page.

    Args:
        page:     Raw watch page text.
        video_id: The video ID (used in error messages).

    Returns:
        A CaptionsDocument with at least one track.

    Raises:
        RateLimitError:          The page is a CAPTCHA challenge.
        VideoUnavailableError:   The page has no playability status.
        TranscriptDisabledError: The captions block is absent or malformed.
        NoTranscriptError:       The captions block lists no tracks.
    """
    raw = extract_json_block(page, CAPTIONS_MARKER, VIDEO_DETAILS_MARKER)
    if raw is None:
        raise _classify_page_without_captions(page, video_id)

    document = _decode_captions(raw)
    if document is None:
        # Indistinguishable from a video whose owner disabled captions.
        logger.debug("Captions block for %s could not be decoded", video_id)
        raise TranscriptDisabledError(video_id)

    if not document.tracks:
        raise NoTranscriptError(video_id)

    logger.debug("Found %d caption track(s) for %s: %s",
                 len(document.tracks), video_id, document.language_codes)
    return document


# ---------------------------------------------------------------------------
# Stage 2: track selection
# ---------------------------------------------------------------------------

def select_track(
    document: CaptionsDocument,
    video_id: str,
    language: str | None = None,
) -> tuple[str, str]:
    """
    Choose which caption track to download.

    With a language, the first track whose code equals it exactly (case
    included) wins; "en" does not match "en-US".  Without one, the first
    track on the page wins.

    Args:
        document: The decoded captions block.
        video_id: The video ID (used in error messages).
        language: Optional requested language code.

    Returns:
        (track base URL, effective language code of that track).

    Raises:
        LanguageNotFoundError: No track has the requested language.
        NoTranscriptError:     The document has no tracks at all.
    """
    if language:
        track = next(
            (t for t in document.tracks if t.language_code == language),
            None,
        )
        if track is None and document.tracks:
            raise LanguageNotFoundError(language, document.language_codes, video_id)
    else:
        track = document.tracks[0] if document.tracks else None

    if track is None:
        raise NoTranscriptError(video_id)

    logger.debug("Selected %r track for %s", track.language_code, video_id)
    return track.base_url, track.language_code


# ---------------------------------------------------------------------------
# Stage 3: timed-text parsing
# ---------------------------------------------------------------------------

def _to_seconds(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def parse_transcript(
    payload: str,
    video_id: str,
    language: str | None,
    default_language: str,
) -> list[TranscriptSegment]:
    """
    Parse a timed-text payload into transcript segments.

    Each <text start="..." dur="...">...</text> element becomes one segment,
    in document order (no re-sorting by time).  Text is kept verbatim, so
    entities such as &amp;#39; are NOT decoded.  Unparseable start or dur
    values become 0.0.

    Args:
        payload:          Raw timed-text XML.
        video_id:         The video ID (used in error messages).
        language:         The requested language, if any.
        default_language: The selected track's language, used when no
                          language was requested.

    Returns:
        The segments, in the order they appear in the payload.

    Raises:
        NoTranscriptError: The payload contains no timed-text elements.
    """
    segment_language = language or default_language
    segments = [
        TranscriptSegment(
            text=match.group(3),
            offset=_to_seconds(match.group(1)),
            duration=_to_seconds(match.group(2)),
            language_code=segment_language,
        )
        for match in TRANSCRIPT_XML_PATTERN.finditer(payload)
    ]

    if not segments:
        raise NoTranscriptError(video_id)

    return segments

"""
extractor.py — Pipeline entry points and output formatting.

This is the heart of youtube-transcript-fetcher.  It chains the stages in
transport.py and captions.py into a high-level interface for:

    1. Parsing YouTube URLs / IDs   → parse_video_id()
    2. Fetching transcript segments → fetch_transcript()
    3. Formatting output            → format_text(), format_json(), format_doc()
    4. One-call convenience         → extract()

Only single-video extraction is supported (no playlists, no crawling).
Each call performs at most two HTTP requests and no retries: the first
failure is raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from youtube_transcript_fetcher.captions import (
    extract_captions,
    parse_transcript,
    select_track,
)
from youtube_transcript_fetcher.constants import VIDEO_ID_PATTERN
from youtube_transcript_fetcher.errors import IdentifierExtractionError
from youtube_transcript_fetcher.models import TranscriptRequestConfig, TranscriptSegment
from youtube_transcript_fetcher.transport import fetch_transcript_payload, fetch_video_page

logger = logging.getLogger(__name__)

# YouTube video IDs are always exactly this long.
_VIDEO_ID_LENGTH = 11


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL string, or pass through a raw ID.

    Any 11-character input is taken to be an ID already and returned as-is,
    without checking its characters.  Anything else is searched for a
    youtube.com or youtu.be URL shape (watch?v=, &v=, /v/, /e/, /embed/,
    nested /<section>/<name>/ID paths, youtu.be/).

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        IdentifierExtractionError: If the string doesn't match any known format.
    """
    if len(url_or_id) == _VIDEO_ID_LENGTH:
        return url_or_id

    match = VIDEO_ID_PATTERN.search(url_or_id)
    if match:
        return match.group(1)

    raise IdentifierExtractionError(url_or_id)


# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

def fetch_transcript(
    url_or_id: str,
    config: TranscriptRequestConfig | None = None,
) -> list[TranscriptSegment]:
    """
    Fetch the transcript of a single YouTube video.

    Resolves the ID, downloads the watch page, picks a caption track (the
    requested language, or the first track listed), downloads its timed
    text and parses it.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        config:    Optional request options: language, proxy, custom HTTP
                   client, timeout.

    Returns:
        The transcript segments in document order.  Each segment is tagged
        with the requested language, or the selected track's language when
        none was requested.

    Raises:
        IdentifierExtractionError: No video ID found in url_or_id.
        RateLimitError:            YouTube served a CAPTCHA page.
        VideoUnavailableError:     The video is removed, private or unknown.
        TranscriptDisabledError:   The video has no (usable) captions block.
        NoTranscriptError:         No tracks, failed track fetch, or an
                                   empty payload.
        LanguageNotFoundError:     No track in the requested language.
        requests.RequestException: Network failure, unchanged.
    """
    config = config or TranscriptRequestConfig()

    video_id = parse_video_id(url_or_id)
    logger.debug("Fetching transcript for %s (language=%r)", video_id, config.language)

    page = fetch_video_page(video_id, config)
    document = extract_captions(page, video_id)
    track_url, track_language = select_track(document, video_id, config.language)

    payload = fetch_transcript_payload(track_url, video_id, config)
    segments = parse_transcript(payload, video_id, config.language, track_language)

    logger.debug("Parsed %d segment(s) for %s", len(segments), video_id)
    return segments


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(segments: Iterable[TranscriptSegment]) -> str:
    """
    Convert transcript segments into plain text, one line per segment.

    Args:
        segments: Transcript segments.

    Returns:
        A single string with one transcript line per text line.
    """
    return "\n".join(segment.text for segment in segments)


def format_json(segments: list[TranscriptSegment], video_id: str) -> dict:
    """
    Build a structured JSON-serialisable dict from transcript segments.

    Args:
        segments: Transcript segments.
        video_id: The video ID (included in the output for traceability).

    Returns:
        A dict with keys: video_id, language_code, segment_count, segments.
        Each segment has: text, offset, duration, language_code.
        language_code is None for an empty segment list.
    """
    return {
        "video_id": video_id,
        "language_code": segments[0].language_code if segments else None,
        "segment_count": len(segments),
        "segments": [segment.to_dict() for segment in segments],
    }


# Paragraph boundary interval for the "doc" format.  A new paragraph starts
# once a segment begins this many seconds after the current paragraph.
_DOC_PARAGRAPH_INTERVAL_SECS = 30


def _seconds_to_mmss(seconds: float) -> str:
    """
    Convert a float timestamp (in seconds) to a MM:SS string.

    Values above 59:59 wrap naturally (e.g. 3661.0 → "61:01").
    """
    total = int(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def format_doc(segments: Iterable[TranscriptSegment]) -> str:
    """
    Convert transcript segments into a readable markdown document.

    Segments are joined with spaces into flowing paragraphs, with a new
    paragraph starting every ~30 seconds.  Each paragraph is prefixed with
    a bold **[MM:SS]** timestamp marking the start of that time window.
    Paragraphs are separated by blank lines.

    Args:
        segments: Transcript segments.

    Returns:
        A markdown string with timestamped paragraphs.  Returns an empty
        string if there are no segments.
    """
    paragraphs: list[str] = []
    current_texts: list[str] = []
    paragraph_start: float | None = None

    for segment in segments:
        if paragraph_start is None:
            paragraph_start = segment.offset
            current_texts.append(segment.text)
        elif segment.offset - paragraph_start >= _DOC_PARAGRAPH_INTERVAL_SECS:
            timestamp = _seconds_to_mmss(paragraph_start)
            paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")
            paragraph_start = segment.offset
            current_texts = [segment.text]
        else:
            current_texts.append(segment.text)

    # Flush the last paragraph.
    if current_texts and paragraph_start is not None:
        timestamp = _seconds_to_mmss(paragraph_start)
        paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")

    return "\n\n".join(paragraphs)


# ---------------------------------------------------------------------------
# High-level convenience function
# ---------------------------------------------------------------------------

_FORMATS = ("text", "json", "doc")


def extract(
    url_or_id: str,
    config: TranscriptRequestConfig | None = None,
    fmt: str = "text",
) -> str | dict:
    """
    One-call interface: parse URL → fetch transcript → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        config:    Optional request options (see fetch_transcript()).
        fmt:       Output format: "text" for plain text, "json" for a dict
                   with timestamps, "doc" for a markdown document with
                   timestamped paragraphs.

    Returns:
        A plain-text string (fmt="text"), a dict (fmt="json"), or a markdown
        string (fmt="doc").

    Raises:
        ValueError:      If fmt is not "text", "json", or "doc".
        TranscriptError: (or subclass) on any extraction failure.
    """
    if fmt not in _FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected 'text', 'json', or 'doc'")

    video_id = parse_video_id(url_or_id)
    segments = fetch_transcript(video_id, config)

    if fmt == "json":
        return format_json(segments, video_id)

    if fmt == "doc":
        return format_doc(segments)

    return format_text(segments)

"""
youtube_transcript_fetcher — Fetch and parse YouTube video transcripts.

Public API:
    fetch_transcript()         Fetch transcript segments for a video URL or ID.
    extract()                  One-call interface (URL → formatted output).
    parse_video_id()           Extract the 11-character ID from a URL.
    TranscriptRequestConfig    Per-call options: language, proxy, HTTP client.
    ProxyConfig / ProxyAuth    Proxy settings.
    TranscriptSegment          One timed line of a transcript.
    HttpClient                 Protocol a custom HTTP client must satisfy.
    format_error_message()     Box renderer used for every error message.

Exception hierarchy (all importable from this package):
    TranscriptError                  Base exception for all transcript errors.
    ├── IdentifierExtractionError    No video ID in the input string.
    ├── RateLimitError               YouTube served a CAPTCHA page.
    ├── VideoUnavailableError        Video removed, private or unknown.
    ├── TranscriptDisabledError      No usable captions block on the page.
    ├── NoTranscriptError            Captions enabled but no transcript obtained.
    └── LanguageNotFoundError        No track in the requested language.

Network failures are raised as requests exceptions, unchanged.

Usage:
    from youtube_transcript_fetcher import (
        ProxyConfig, TranscriptRequestConfig, fetch_transcript,
    )
    segments = fetch_transcript("https://www.youtube.com/watch?v=dQw4w9WgXcQ")

    # A specific language, through a proxy:
    segments = fetch_transcript(
        "dQw4w9WgXcQ",
        TranscriptRequestConfig(
            language="fr",
            proxy=ProxyConfig("http://proxy.example.com:8080"),
        ),
    )
"""

from youtube_transcript_fetcher.errors import (
    IdentifierExtractionError,
    LanguageNotFoundError,
    NoTranscriptError,
    RateLimitError,
    TranscriptDisabledError,
    TranscriptError,
    VideoUnavailableError,
)
from youtube_transcript_fetcher.extractor import (
    extract,
    fetch_transcript,
    parse_video_id,
)
from youtube_transcript_fetcher.formatting import format_error_message
from youtube_transcript_fetcher.models import (
    ProxyAuth,
    ProxyConfig,
    TranscriptRequestConfig,
    TranscriptSegment,
)
from youtube_transcript_fetcher.transport import HttpClient

__all__ = [
    "fetch_transcript",
    "extract",
    "parse_video_id",
    "format_error_message",
    "TranscriptRequestConfig",
    "ProxyConfig",
    "ProxyAuth",
    "TranscriptSegment",
    "HttpClient",
    "TranscriptError",
    "IdentifierExtractionError",
    "RateLimitError",
    "VideoUnavailableError",
    "TranscriptDisabledError",
    "NoTranscriptError",
    "LanguageNotFoundError",
]

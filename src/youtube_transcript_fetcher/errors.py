"""
errors.py — Custom exception hierarchy for youtube-transcript-fetcher.

The set of errors is closed: every failure the pipeline classifies is one of
the subclasses below.  Each subclass carries only the fields relevant to its
own case (video ID, language, available languages).  The human-readable text
is rendered once, by the shared format_error_message() box renderer, and is
the only thing the base class exposes.

Every exception also carries an `http_status` attribute so the FastAPI error
handler can translate library-level errors directly into the correct HTTP
response code without a separate mapping table.

Transport failures (DNS, connection refused, timeouts) are NOT part of this
hierarchy: they surface as the HTTP library's own exceptions, unchanged.

Hierarchy:
    TranscriptError (base, 500)
    ├── IdentifierExtractionError (400)
    ├── RateLimitError (429)
    ├── VideoUnavailableError (404)
    ├── TranscriptDisabledError (404)
    ├── NoTranscriptError (404)
    └── LanguageNotFoundError (400)
"""

from __future__ import annotations

from youtube_transcript_fetcher.formatting import format_error_message


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for all transcript-related errors.

    Attributes:
        message:     The boxed, multi-line description of what went wrong.
        http_status: Suggested HTTP status code for the API layer.
    """

    def __init__(self, detail: str, http_status: int = 500) -> None:
        message = format_error_message(detail)
        super().__init__(message)
        self.message = message
        self.http_status = http_status


# ---------------------------------------------------------------------------
# Specific error cases
# ---------------------------------------------------------------------------

class IdentifierExtractionError(TranscriptError):
    """
    Raised when no video ID can be found in the caller's input.

    The input was neither an 11-character ID nor any recognised YouTube URL.
    Maps to HTTP 400.
    """

    def __init__(self, value: str) -> None:
        super().__init__(
            "🔎  Invalid Video Reference\n"
            "\n"
            "Could not extract YouTube video ID from the provided string:\n"
            f"  {value!r}",
            http_status=400,
        )
        self.value = value


class RateLimitError(TranscriptError):
    """
    Raised when YouTube answers the watch page with a CAPTCHA challenge.

    Maps to HTTP 429.
    """

    def __init__(self) -> None:
        super().__init__(
            "⚠️  Rate Limit Exceeded\n"
            "\n"
            "YouTube is receiving too many requests from this IP.\n"
            "Please try again later or use a different IP address.",
            http_status=429,
        )


class VideoUnavailableError(TranscriptError):
    """
    Raised when the watch page has no playability status at all.

    Possible causes: the video was removed, is private, or never existed.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            "🚫  Video Unavailable\n"
            "\n"
            f'The video "{video_id}" is no longer available.\n'
            "It may have been removed or set to private.",
            http_status=404,
        )
        self.video_id = video_id


class TranscriptDisabledError(TranscriptError):
    """
    Raised when the video is playable but exposes no usable captions block.

    Also raised when the captions block is present but can't be decoded;
    the page gives no way to tell a malformed block from a missing one.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            "❌  Transcripts Disabled\n"
            "\n"
            f'Transcripts are disabled for video "{video_id}".\n'
            "The video owner has not enabled transcripts for this content.",
            http_status=404,
        )
        self.video_id = video_id


class NoTranscriptError(TranscriptError):
    """
    Raised when captions are enabled but no transcript could be obtained.

    Covers an empty track list, a track URL answering with an error status,
    and a payload containing no timed-text entries.  Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            "📝  No Transcripts Available\n"
            "\n"
            f'No transcripts were found for video "{video_id}".\n'
            "This video may not have any transcripts generated yet.",
            http_status=404,
        )
        self.video_id = video_id


class LanguageNotFoundError(TranscriptError):
    """
    Raised when the video has transcripts, but none in the requested language.

    Matching is an exact comparison of language codes, so "en" does not
    match an "en-US" track.  `available_languages` lists every track's code
    in page order.  Maps to HTTP 400.
    """

    def __init__(
        self,
        language: str,
        available_languages: list[str],
        video_id: str,
    ) -> None:
        listing = "\n".join(f"  • {code}" for code in available_languages)
        super().__init__(
            "🌐  Language Not Available\n"
            "\n"
            f'Transcripts in "{language}" are not available for video "{video_id}".\n'
            "\n"
            "Available languages:\n"
            f"{listing}",
            http_status=400,
        )
        self.language = language
        self.available_languages = list(available_languages)
        self.video_id = video_id

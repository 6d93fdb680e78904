"""
models.py — Plain data structures passed between pipeline stages.

All of them are frozen dataclasses: they are built once per call and never
mutated afterwards, which makes concurrent calls trivially independent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from youtube_transcript_fetcher.constants import DEFAULT_TIMEOUT_SECS

if TYPE_CHECKING:
    from youtube_transcript_fetcher.transport import HttpClient


# ---------------------------------------------------------------------------
# Caption metadata scraped from the watch page
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CaptionTrack:
    """
    One transcript track advertised by the watch page.

    Attributes:
        base_url:      URL of the timed-text payload for this track.
        language_code: Language of the track as YouTube reports it
                       (e.g. "en", "en-US", "fr").  Not normalised.
    """
    base_url: str
    language_code: str


@dataclass(frozen=True)
class CaptionsDocument:
    """
    The decoded captions block of a watch page.

    Attributes:
        tracks: Available tracks, in the order the page lists them.
    """
    tracks: tuple[CaptionTrack, ...]

    @property
    def language_codes(self) -> list[str]:
        """Language codes of every track, in page order (duplicates kept)."""
        return [track.language_code for track in self.tracks]


# ---------------------------------------------------------------------------
# Per-request configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProxyAuth:
    """Basic credentials for the proxy server."""
    username: str
    password: str


@dataclass(frozen=True)
class ProxyConfig:
    """
    Route all requests through an HTTP(S) proxy.

    Attributes:
        host: Proxy URL including scheme, e.g. "http://proxy.example.com:8080".
        auth: Optional credentials, embedded in the proxy URL as user-info.
    """
    host: str
    auth: ProxyAuth | None = None


@dataclass(frozen=True)
class TranscriptRequestConfig:
    """
    Options for a single fetch_transcript() call.

    Attributes:
        language:    Language code to select (exact match).  Also sent as
                     Accept-Language and used to tag the returned segments.
                     None or "" means "first available track".
        proxy:       Optional proxy settings.  Ignored when http_client is set.
        http_client: Optional pre-built client implementing HttpClient.
                     Takes precedence over proxy; no timeout is imposed on it.
        timeout:     Per-request timeout in seconds for library-built clients.
    """
    language: str | None = None
    proxy: ProxyConfig | None = None
    http_client: HttpClient | None = None
    timeout: float = DEFAULT_TIMEOUT_SECS


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscriptSegment:
    """
    One timed line of a transcript.

    Attributes:
        text:          Caption text exactly as it appears in the payload
                       (HTML entities are NOT decoded).
        offset:        Start time in seconds.
        duration:      Length in seconds.
        language_code: Requested language, or the selected track's language.
    """
    text: str
    offset: float
    duration: float
    language_code: str

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "offset": self.offset,
            "duration": self.duration,
            "language_code": self.language_code,
        }

"""
test_captions.py — Unit tests for the pure parsing stages.

Covers:
    - extract_json_block() boundary-marker isolation
    - extract_captions() page classification and decoding
    - select_track() language selection
    - parse_transcript() timed-text parsing
"""

from __future__ import annotations

import json

import pytest

from youtube_transcript_fetcher.captions import (
    extract_captions,
    extract_json_block,
    parse_transcript,
    select_track,
)
from youtube_transcript_fetcher.errors import (
    LanguageNotFoundError,
    NoTranscriptError,
    RateLimitError,
    TranscriptDisabledError,
    VideoUnavailableError,
)
from youtube_transcript_fetcher.models import CaptionsDocument, CaptionTrack

VIDEO_ID = "dQw4w9WgXcQ"


def _captions_page(tracks: list[dict], prefix: str = "", suffix: str = "") -> str:
    """Build a watch-page fragment embedding a captions block with these tracks."""
    captions = {"playerCaptionsTracklistRenderer": {"captionTracks": tracks}}
    return (
        f'{prefix}"playabilityStatus":{{"status":"OK"}},'
        f'"captions":{json.dumps(captions)},"videoDetails":{{"videoId":"{VIDEO_ID}"}}{suffix}'
    )


_TWO_TRACKS = CaptionsDocument(tracks=(
    CaptionTrack(base_url="https://example.com/urlA", language_code="en"),
    CaptionTrack(base_url="https://example.com/urlB", language_code="fr"),
))


# ---------------------------------------------------------------------------
# extract_json_block — marker-delimited text
# ---------------------------------------------------------------------------

class TestExtractJsonBlock:
    """Tests for the boundary-marker helper."""

    def test_text_between_markers(self) -> None:
        """Returns exactly the text between the start and end markers."""
        assert extract_json_block('a"captions":{"x":1},"videoDetails":{}', '"captions":', ',"videoDetails') == '{"x":1}'

    def test_missing_start_marker(self) -> None:
        """None signals that the start marker does not occur."""
        assert extract_json_block("no markers here", '"captions":', ',"videoDetails') is None

    def test_missing_end_marker_keeps_rest(self) -> None:
        """Without an end marker the whole remainder is returned."""
        assert extract_json_block('"captions":{"x":1}', '"captions":', ',"videoDetails') == '{"x":1}'

    def test_strips_newlines(self) -> None:
        """Every embedded newline is removed, not just the first."""
        text = '"captions":{\n"x":\n1\n},"videoDetails'
        assert extract_json_block(text, '"captions":', ',"videoDetails') == '{"x":1}'

    def test_stops_at_second_start_marker(self) -> None:
        """Only the section up to the next start marker is considered."""
        text = '"captions":{"a":1}"captions":{"b":2},"videoDetails'
        assert extract_json_block(text, '"captions":', ',"videoDetails') == '{"a":1}'


# ---------------------------------------------------------------------------
# extract_captions — page classification and decoding
# ---------------------------------------------------------------------------

class TestExtractCaptions:
    """Tests for locating and decoding the captions block."""

    def test_decodes_tracks_in_order(self) -> None:
        """Tracks come back in page order with their URLs and codes."""
        page = _captions_page([
            {"baseUrl": "https://example.com/urlA", "languageCode": "en", "name": {"simpleText": "English"}},
            {"baseUrl": "https://example.com/urlB", "languageCode": "fr"},
        ])
        document = extract_captions(page, VIDEO_ID)
        assert document == _TWO_TRACKS

    def test_multiline_block(self) -> None:
        """A captions block split over lines still decodes."""
        page = '"captions":{"playerCaptionsTracklistRenderer":\n{"captionTracks":[\n{"baseUrl":"u","languageCode":"en"}]}},"videoDetails":{}'
        assert extract_captions(page, VIDEO_ID).language_codes == ["en"]

    def test_captcha_page_is_rate_limited(self) -> None:
        """A CAPTCHA marker means RateLimitError."""
        with pytest.raises(RateLimitError):
            extract_captions('<div class="g-recaptcha"></div>', VIDEO_ID)

    def test_captcha_wins_over_playability(self) -> None:
        """Rate limiting is reported even when a playability marker is present."""
        page = '<div class="g-recaptcha"></div>"playabilityStatus":{"status":"OK"}'
        with pytest.raises(RateLimitError):
            extract_captions(page, VIDEO_ID)

    def test_no_playability_is_unavailable(self) -> None:
        """No captions and no playability status means the video is gone."""
        with pytest.raises(VideoUnavailableError) as exc_info:
            extract_captions("Video unavailable", VIDEO_ID)
        assert exc_info.value.video_id == VIDEO_ID

    def test_playable_without_captions_is_disabled(self) -> None:
        """A playable page without a captions block has transcripts disabled."""
        with pytest.raises(TranscriptDisabledError) as exc_info:
            extract_captions('"playabilityStatus":{"status":"OK"}', VIDEO_ID)
        assert exc_info.value.video_id == VIDEO_ID

    def test_malformed_json_is_disabled(self) -> None:
        """A captions block that isn't valid JSON is reported as disabled."""
        page = '"playabilityStatus":{},"captions":{"playerCaptionsTracklistRenderer":{,"videoDetails":{}'
        with pytest.raises(TranscriptDisabledError):
            extract_captions(page, VIDEO_ID)

    def test_track_without_base_url_is_disabled(self) -> None:
        """Track entries missing required fields count as malformed."""
        page = _captions_page([{"languageCode": "en"}])
        with pytest.raises(TranscriptDisabledError):
            extract_captions(page, VIDEO_ID)

    def test_non_object_block_is_disabled(self) -> None:
        """A block that decodes to something other than an object is malformed."""
        with pytest.raises(TranscriptDisabledError):
            extract_captions('"captions":[1, 2],"videoDetails":{}', VIDEO_ID)

    def test_empty_track_list(self) -> None:
        """A decodable block with no tracks means NoTranscriptError."""
        with pytest.raises(NoTranscriptError):
            extract_captions(_captions_page([]), VIDEO_ID)

    def test_missing_caption_tracks_key(self) -> None:
        """A renderer without captionTracks also means NoTranscriptError."""
        page = '"captions":{"playerCaptionsTracklistRenderer":{"audioTracks":[]}},"videoDetails":{}'
        with pytest.raises(NoTranscriptError):
            extract_captions(page, VIDEO_ID)


# ---------------------------------------------------------------------------
# select_track — language selection
# ---------------------------------------------------------------------------

class TestSelectTrack:
    """Tests for choosing a caption track."""

    def test_no_language_picks_first(self) -> None:
        """Without a language, the first track is used."""
        assert select_track(_TWO_TRACKS, VIDEO_ID) == ("https://example.com/urlA", "en")

    def test_empty_language_picks_first(self) -> None:
        """An empty string is treated the same as no language."""
        assert select_track(_TWO_TRACKS, VIDEO_ID, "") == ("https://example.com/urlA", "en")

    def test_requested_language(self) -> None:
        """The track matching the requested language is selected."""
        assert select_track(_TWO_TRACKS, VIDEO_ID, "fr") == ("https://example.com/urlB", "fr")

    def test_first_match_wins(self) -> None:
        """Duplicate language codes resolve to the earliest track."""
        document = CaptionsDocument(tracks=(
            CaptionTrack("https://example.com/1", "de"),
            CaptionTrack("https://example.com/2", "de"),
        ))
        assert select_track(document, VIDEO_ID, "de") == ("https://example.com/1", "de")

    def test_unknown_language_lists_available(self) -> None:
        """LanguageNotFoundError carries the request and every available code in order."""
        with pytest.raises(LanguageNotFoundError) as exc_info:
            select_track(_TWO_TRACKS, VIDEO_ID, "es")

        exc = exc_info.value
        assert exc.language == "es"
        assert exc.video_id == VIDEO_ID
        assert exc.available_languages == ["en", "fr"]

    def test_match_is_case_sensitive(self) -> None:
        """'EN' does not match an 'en' track."""
        with pytest.raises(LanguageNotFoundError):
            select_track(_TWO_TRACKS, VIDEO_ID, "EN")

    def test_no_prefix_fallback(self) -> None:
        """'en' does not match an 'en-US' track."""
        document = CaptionsDocument(tracks=(CaptionTrack("https://example.com/us", "en-US"),))
        with pytest.raises(LanguageNotFoundError):
            select_track(document, VIDEO_ID, "en")

    def test_empty_document(self) -> None:
        """No tracks at all means NoTranscriptError, with or without a language."""
        empty = CaptionsDocument(tracks=())
        with pytest.raises(NoTranscriptError):
            select_track(empty, VIDEO_ID)
        with pytest.raises(NoTranscriptError):
            select_track(empty, VIDEO_ID, "en")


# ---------------------------------------------------------------------------
# parse_transcript — timed-text payload
# ---------------------------------------------------------------------------

class TestParseTranscript:
    """Tests for turning timed-text XML into segments."""

    def test_two_segments(self) -> None:
        """Each <text> element becomes a segment tagged with the default language."""
        payload = '<text start="0.5" dur="2.0">Hello</text><text start="2.5" dur="1.0">World</text>'
        segments = parse_transcript(payload, VIDEO_ID, None, "en")

        assert [s.to_dict() for s in segments] == [
            {"text": "Hello", "offset": 0.5, "duration": 2.0, "language_code": "en"},
            {"text": "World", "offset": 2.5, "duration": 1.0, "language_code": "en"},
        ]

    def test_requested_language_tags_segments(self) -> None:
        """The requested language takes precedence over the default."""
        segments = parse_transcript('<text start="0" dur="1">Bonjour</text>', VIDEO_ID, "fr", "en")
        assert segments[0].language_code == "fr"

    def test_full_document(self) -> None:
        """Surrounding XML and whitespace are ignored."""
        payload = """<?xml version="1.0" encoding="utf-8" ?>
            <transcript>
                <text start="0" dur="2.5">First caption</text>
                <text start="2.5" dur="3.0">Second caption</text>
            </transcript>"""
        segments = parse_transcript(payload, VIDEO_ID, None, "en")
        assert [s.text for s in segments] == ["First caption", "Second caption"]
        assert segments[0].offset == 0.0
        assert segments[1].duration == 3.0

    def test_text_is_verbatim(self) -> None:
        """HTML entities are NOT decoded."""
        segments = parse_transcript('<text start="1" dur="1">it&amp;#39;s &quot;ok&quot;</text>', VIDEO_ID, None, "en")
        assert segments[0].text == "it&amp;#39;s &quot;ok&quot;"

    def test_malformed_numbers_become_zero(self) -> None:
        """Unparseable start or dur values yield 0.0 instead of failing."""
        segments = parse_transcript('<text start="abc" dur="">Hi</text>', VIDEO_ID, None, "en")
        assert segments[0].offset == 0.0
        assert segments[0].duration == 0.0

    def test_document_order_kept(self) -> None:
        """Segments are not re-sorted by offset."""
        payload = '<text start="9" dur="1">later</text><text start="1" dur="1">earlier</text>'
        segments = parse_transcript(payload, VIDEO_ID, None, "en")
        assert [s.text for s in segments] == ["later", "earlier"]

    def test_empty_text_element(self) -> None:
        """An element with no text still yields a segment."""
        segments = parse_transcript('<text start="1" dur="1"></text>', VIDEO_ID, None, "en")
        assert segments[0].text == ""

    def test_no_matches_raises(self) -> None:
        """A payload without timed-text elements means NoTranscriptError."""
        with pytest.raises(NoTranscriptError) as exc_info:
            parse_transcript("<transcript></transcript>", VIDEO_ID, None, "en")
        assert exc_info.value.video_id == VIDEO_ID

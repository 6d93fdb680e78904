"""
constants.py — Fixed URLs, headers, page markers and regexes.

Everything YouTube-specific that the pipeline depends on lives here, so a
change in YouTube's page layout is a one-file edit.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# URLs and HTTP
# ---------------------------------------------------------------------------

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Browser-like User-Agent sent on every request.  YouTube serves a reduced
# page (without the captions block) to obvious non-browser clients.
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/85.0.4183.83 Safari/537.36,gzip(gfe)"
)

# Seconds before a library-built client gives up on a request.
DEFAULT_TIMEOUT_SECS = 30.0

# ---------------------------------------------------------------------------
# Watch-page markers
# ---------------------------------------------------------------------------

CAPTIONS_MARKER = '"captions":'
VIDEO_DETAILS_MARKER = ',"videoDetails'
RECAPTCHA_MARKER = 'class="g-recaptcha"'
PLAYABILITY_MARKER = '"playabilityStatus":'

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# Matches every URL shape YouTube has used for a single video:
#   youtube.com/<section>/<anything>/ID, youtube.com/v/ID, /e/ID, /embed/ID,
#   youtube.com/...?v=ID or &v=ID, and youtu.be/ID.
# The ID itself is the 11 characters up to a quote, &, ?, / or whitespace.
VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([^\"&?/\s]{11})",
    re.IGNORECASE,
)

# One timed-text element: start offset, duration and raw text.
TRANSCRIPT_XML_PATTERN = re.compile(
    r'<text start="([^"]*)" dur="([^"]*)">([^<]*)</text>'
)

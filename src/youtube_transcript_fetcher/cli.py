"""
cli.py — Command-line interface for youtube-transcript-fetcher.

Provides the `yt-transcript` command group (registered as a console script
in pyproject.toml).  Subcommands:

    get       Fetch a transcript from YouTube and print or save it.

Usage examples:
    yt-transcript get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-transcript get dQw4w9WgXcQ --lang fr --format json
    yt-transcript get dQw4w9WgXcQ --proxy http://proxy.example.com:8080 \\
        --proxy-user alice --proxy-password secret

Proxy settings can also come from the environment (YT_TRANSCRIPT_PROXY,
YT_TRANSCRIPT_PROXY_USER, YT_TRANSCRIPT_PROXY_PASSWORD).
"""

from __future__ import annotations

import json
import logging
import sys

import click
import requests

from youtube_transcript_fetcher.constants import DEFAULT_TIMEOUT_SECS
from youtube_transcript_fetcher.errors import TranscriptError
from youtube_transcript_fetcher.extractor import extract
from youtube_transcript_fetcher.models import (
    ProxyAuth,
    ProxyConfig,
    TranscriptRequestConfig,
)

# Exit codes: 1 for a classified transcript error, 2 for a network failure.
_EXIT_TRANSCRIPT_ERROR = 1
_EXIT_NETWORK_ERROR = 2


def _build_config(
    lang: str | None,
    proxy: str | None,
    proxy_user: str | None,
    proxy_password: str | None,
    timeout: float,
) -> TranscriptRequestConfig:
    """
    Turn CLI options into a TranscriptRequestConfig.

    Credentials are only used when both a proxy and a username are given;
    a missing password is sent as an empty string.
    """
    proxy_config: ProxyConfig | None = None
    if proxy:
        auth = ProxyAuth(proxy_user, proxy_password or "") if proxy_user else None
        proxy_config = ProxyConfig(host=proxy, auth=auth)

    return TranscriptRequestConfig(
        language=lang or None,
        proxy=proxy_config,
        timeout=timeout,
    )


# ---------------------------------------------------------------------------
# CLI group — the top-level `yt-transcript` command
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log each pipeline step to stderr.",
)
def main(verbose: bool) -> None:
    """
    YouTube Transcript Fetcher — download and parse video transcripts.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Subcommand: get — fetch a transcript from YouTube
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--format", "-f",
    "fmt",                           # avoid shadowing the builtin "format"
    type=click.Choice(["text", "json", "doc"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: plain text, JSON with timestamps, or readable markdown document.",
)
@click.option(
    "--lang", "-l",
    default=None,
    help="Language code of the track to fetch (exact match, e.g. 'en' or 'pt-BR'). "
         "Defaults to the first track listed.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write output to a file instead of stdout.",
)
@click.option(
    "--proxy",
    envvar="YT_TRANSCRIPT_PROXY",
    default=None,
    help="Proxy URL, e.g. http://proxy.example.com:8080.",
)
@click.option(
    "--proxy-user",
    envvar="YT_TRANSCRIPT_PROXY_USER",
    default=None,
    help="Proxy username.",
)
@click.option(
    "--proxy-password",
    envvar="YT_TRANSCRIPT_PROXY_PASSWORD",
    default=None,
    help="Proxy password.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT_SECS,
    show_default=True,
    help="Per-request timeout in seconds.",
)
def get(
    video: str,
    fmt: str,
    lang: str | None,
    output: str | None,
    proxy: str | None,
    proxy_user: str | None,
    proxy_password: str | None,
    timeout: float,
) -> None:
    """
    Fetch a YouTube video transcript.

    VIDEO can be a full YouTube URL or an 11-character video ID.
    """
    config = _build_config(lang, proxy, proxy_user, proxy_password, timeout)

    try:
        result = extract(video, config, fmt=fmt.lower())
    except TranscriptError as exc:
        # The message is already boxed and human-readable; no traceback.
        click.echo(exc.message, err=True)
        sys.exit(_EXIT_TRANSCRIPT_ERROR)
    except requests.RequestException as exc:
        click.echo(f"Error: network request failed: {exc}", err=True)
        sys.exit(_EXIT_NETWORK_ERROR)

    # Serialise dict output to a JSON string for display / file writing.
    if isinstance(result, dict):
        text = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        text = result

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Transcript written to {output}", err=True)
    else:
        click.echo(text)

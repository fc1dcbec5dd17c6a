# =============================================================================
# listening_to/cli/fetch.py — Resolve the current track from the command line
# =============================================================================
#
# Runs the same pipeline a build host would (Last.fm -> streaming links ->
# cover thumbnail) once and prints the result.  Useful for checking
# credentials and provider order, and for build steps that just want a
# JSON file on disk.
#
# Typical usage:
#   python -m listening_to                        # Human-readable text
#   python -m listening_to --json                 # JSON to stdout
#   python -m listening_to -o data/track.json     # JSON to a file
#   python -m listening_to --providers openwhyd,musicbrainz,odesli
#
# Logs go to stderr so stdout stays clean for the result.
# =============================================================================

"""Standalone CLI for resolving the current Last.fm track.

Usage::

    python -m listening_to [--config PATH] [--json] [--output FILE]
                           [--providers NAME,NAME,...]

Exit codes: 0 on success, 2 on configuration errors.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from listening_to.config.loader import load_config, settings_from_config
from listening_to.config.settings import Settings
from listening_to.models.options import PluginOptions
from listening_to.models.track import ResolvedTrack
from listening_to.plugin import ListeningToPlugin
from listening_to.utils.errors import ConfigurationError
from listening_to.utils.logging import configure_logging


def _format_text_output(track: ResolvedTrack) -> str:
    """Format a resolved track as a short human-readable report."""
    if not (track.title or track.artist):
        return "No recent track found."

    lines = [
        f"Title:   {track.title}",
        f"Artist:  {track.artist}",
        f"Album:   {track.album or '-'}",
        f"Cover:   {'yes' if track.album_cover else 'no'}",
    ]
    if track.services:
        lines.append("Links:")
        width = max(len(p.value) for p in track.services)
        for platform, url in sorted(track.services.items(), key=lambda kv: kv[0].value):
            lines.append(f"  {platform.value.ljust(width)}  {url}")
    else:
        lines.append("Links:   none found")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listening-to",
        description="Resolve the most recent Last.fm track into streaming links.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file (default: %(default)s)",
    )
    parser.add_argument(
        "--providers",
        help="Comma-separated provider order, e.g. musicbrainz,openwhyd,odesli",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("-o", "--output", help="Write JSON to this file instead of stdout")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def _build_config(args: argparse.Namespace) -> dict:
    config = load_config(args.config)
    if args.providers:
        names = [name.strip() for name in args.providers.split(",") if name.strip()]
        config.setdefault("streaming", {})["providers"] = names
    return config


async def _run(args: argparse.Namespace, options: PluginOptions, settings: Settings) -> int:
    async with ListeningToPlugin(options, settings=settings) as plugin:
        track = await plugin.get_music_track()

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(
            json.dumps(track.to_json_dict(), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        print(f"Wrote {out}", file=sys.stderr)
    elif args.json:
        print(json.dumps(track.to_json_dict(), ensure_ascii=False, indent=2))
    else:
        print(_format_text_output(track))
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    try:
        config = _build_config(args)
        settings = settings_from_config(config)
        options = PluginOptions.from_config(config)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)

    quiet = args.quiet or args.json or bool(args.output)
    configure_logging(
        log_level="WARNING" if quiet else settings.log_level,
        json_output=settings.app_env == "production",
    )

    try:
        code = asyncio.run(_run(args, options, settings))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()

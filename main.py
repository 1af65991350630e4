#!/usr/bin/env python3
# main.py
"""
Command-line entry point for scouting a Marvel Rivals lobby.

Usage:
    python main.py --image loading_screen.png
    python main.py --names "Alice" "Bob"
    python main.py --image loading_screen.png --json
"""

import argparse
import asyncio
import json
import logging
import sys

from rivals_scout import config
from rivals_scout.ocr import OCRError
from rivals_scout.pipeline import ScoutPipeline


def _safe_print(message: str) -> None:
    """Print with a fallback for terminals that cannot encode the text."""
    try:
        print(message)
    except UnicodeEncodeError:
        print(message.encode("ascii", "replace").decode("ascii"))


def _print_report(response: dict) -> None:
    _safe_print("\n" + "=" * 60)
    _safe_print("RIVALS SCOUT")
    _safe_print("=" * 60)

    for result in response.get("trackerResults", []):
        name = result["playerName"]
        if result["status"] != "success":
            _safe_print(f"\n[ERROR] {name}: {result['message']}")
            continue

        _safe_print(f"\n[OK] {name}")
        for role in result["roles"]:
            _safe_print(
                f"  Role  {role['roleName']:<16} play {role['playRatePercent']:>5.1f}%  "
                f"win {role['winRate']:>5.1f}%  KDA {role['kda']:.2f}"
            )
        for hero in result["heroes"]:
            _safe_print(
                f"  Hero  {hero['heroName']:<16} win {hero['winRate']:>5.1f}%  "
                f"{hero['wins']}W {hero['losses']}L  KDA {hero['kda']:.2f}"
            )

    _safe_print("\nBan recommendations:")
    _safe_print(response.get("banSummary") or "  (none)")
    _safe_print("")


def main() -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description='Scout tracker.gg stats for every player on a loading screen',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--image', metavar='PATH', help='Loading-screen screenshot to OCR')
    source.add_argument('--names', nargs='+', metavar='NAME', help='Player names to look up directly')
    parser.add_argument('--headed', action='store_true', help='Show the browser windows')
    parser.add_argument('--json', action='store_true', help='Print the raw JSON response')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )
    pipeline = ScoutPipeline(headless=False if args.headed else None)
    try:
        if args.image:
            with open(args.image, 'rb') as f:
                image_bytes = f.read()
            response = asyncio.run(pipeline.process_image(image_bytes))
        else:
            response = asyncio.run(pipeline.process_handles(args.names))
    except (OCRError, OSError) as e:
        _safe_print(f"[ERROR] {e}")
        return 1

    if args.json:
        print(json.dumps(response, indent=2))
    else:
        if response.get("extractedText"):
            _safe_print(f"Detected text:\n{response['extractedText']}")
        _print_report(response)
    return 0


if __name__ == '__main__':
    sys.exit(main())

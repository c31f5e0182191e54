from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

from bard.config import BardConfig
from bard.errors import ConfigError, SongGenerationError, ValidationError
from bard.logging_utils import get_logger, setup_logging
from bard.service import BardService
from bard.types import SongRequest

log = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for song generation."""
    parser = argparse.ArgumentParser(description="Generate lyrics, vocals, music and a final mix from a topic")
    parser.add_argument("--topic", type=str, required=True, help="What the song is about")
    parser.add_argument("--style", type=str, default=None, help="Musical style (e.g., rock, jazz)")
    parser.add_argument("--mood", type=str, default=None, help="Mood (e.g., energetic, melancholic)")
    parser.add_argument("--output_dir", type=str, default=None,
                        help="Output directory (default: BARD_OUTPUT_DIR or music-examples)")
    parser.add_argument("--env", type=str, default=".env", help=".env file to load before reading settings")
    parser.add_argument("--log_level", type=str, default=None, help="Log level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Examples:
      python3 song_generator.py --topic "chasing dreams" --style rock --mood energetic
      python3 song_generator.py --topic "the sea" --output_dir songs --log_level DEBUG
    """
    args = parse_args(argv)
    load_dotenv(args.env)
    setup_logging(args.log_level)

    try:
        config = BardConfig.from_env()
        if args.output_dir:
            config = replace(config, output_dir=args.output_dir)
        request = SongRequest(topic=args.topic, style=args.style, mood=args.mood)
    except (ConfigError, ValidationError) as e:
        log.error("invalid settings", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        response = BardService.from_config(config).generate_song(request)
    except SongGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(response)
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Make ``python greek_journey/__main__.py`` resolve the package imports."""
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m greek_journey
    from .app import run
    from .game_core import GameMode
except ImportError:
    # Works when executed as a script (IDE "Run Python File", absolute path, etc.)
    _ensure_repo_root_on_path()
    from greek_journey.app import run
    from greek_journey.game_core import GameMode


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="greek-journey", description="Two-player Greek drill board game.")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=None,
        help="skip the mode menu and start a game in this mode",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for decks and board layout")
    parser.add_argument("--max-frames", type=int, default=None, help=argparse.SUPPRESS)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for running the game from the command line."""
    args = _parse_args(argv)
    mode = None if args.mode is None else GameMode(args.mode)
    return run(max_frames=args.max_frames, mode=mode, seed=args.seed)


if __name__ == "__main__":
    raise SystemExit(main())

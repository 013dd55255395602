"""Smoke tests for the pygame UI.

These tests verify that the application's main loop can initialise and
execute a handful of frames without crashing when the SDL dummy video
driver is used.  They do not attempt to check rendering correctness.
"""

from __future__ import annotations

import os

# Use the dummy drivers before importing pygame or the application
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def test_app_runs_headless() -> None:
    """Ensure the application can start and run a few frames headlessly."""
    # Import inside the test so that environment variables take effect
    from greek_journey.app import run

    exit_code = run(max_frames=3)
    assert exit_code == 0


def test_main_entry_point_runs_headless() -> None:
    from greek_journey.__main__ import main

    assert main(["--mode", "code_assembly", "--seed", "5", "--max-frames", "3"]) == 0

"""
Pytest configuration and fixtures for Dino Duel tests.

This module sets up pygame mocking so the renderer can be tested
without a display, and provides deterministic game fixtures driven by
a manual clock.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


class MockPygameError(RuntimeError):
    """Stands in for pygame.error."""


def create_mock_pygame():
    """Create a mock of the parts of pygame the renderer touches."""
    mock_pygame = MagicMock()

    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None
    mock_pygame.error = MockPygameError

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 800
    mock_surface.get_height.return_value = 450
    mock_pygame.display.set_mode.return_value = mock_surface

    # Fonts
    mock_font = MagicMock()
    mock_text = MagicMock()
    mock_text.get_width.return_value = 100
    mock_font.render.return_value = mock_text
    mock_pygame.font.Font.return_value = mock_font

    # Drawing
    mock_pygame.draw.rect.return_value = None
    mock_pygame.draw.ellipse.return_value = None

    # Images
    mock_pygame.image.load.side_effect = FileNotFoundError("no sprite")
    mock_pygame.transform.scale.return_value = MagicMock()

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.KEYUP = 769
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_RETURN = 13
    mock_pygame.K_SPACE = 32
    mock_pygame.K_UP = 273
    mock_pygame.K_DOWN = 274
    mock_pygame.K_w = 119
    mock_pygame.K_s = 115
    mock_pygame.K_q = 113
    mock_pygame.K_r = 114
    for i in range(1, 6):
        setattr(mock_pygame, f"K_{i}", 48 + i)

    # Rect
    mock_pygame.Rect = MagicMock(side_effect=lambda *args: MagicMock(
        x=args[0] if args else 0,
        y=args[1] if len(args) > 1 else 0,
        width=args[2] if len(args) > 2 else 0,
        height=args[3] if len(args) > 3 else 0,
        centerx=(args[0] + args[2] // 2) if len(args) > 2 else 0,
        bottom=(args[1] + args[3]) if len(args) > 3 else 0,
    ))

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any imports.

    Runs automatically for all tests so the renderer module binds the mock.
    """
    mock_pygame = create_mock_pygame()

    original_pygame = sys.modules.get('pygame')
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


@pytest.fixture
def manual_clock():
    """Clock that only moves when the test advances it."""
    from dino_duel.game.clock import ManualClock

    return ManualClock(start=1_000_000.0)


@pytest.fixture
def config():
    """Default configuration with the level briefing disabled."""
    from dino_duel.game.config import DinoDuelConfig

    return DinoDuelConfig(briefing_delay_ms=0)


@pytest.fixture
def game(config, manual_clock):
    """A quiet, seeded game with every level unlocked, sitting at the menu."""
    from dino_duel.game.game import DinoDuelGame
    from dino_duel.game.progress import ProgressStore

    progress = ProgressStore()
    progress.unlock(5)
    return DinoDuelGame(config=config, progress=progress, clock=manual_clock, seed=1234, verbose=False)


@pytest.fixture
def tick(game, manual_clock, config):
    """Advance the clock by one frame and step the game."""
    def _tick(count: int = 1):
        state = None
        for _ in range(count):
            manual_clock.advance(config.tick_ms)
            state = game.step()
        return state

    return _tick


@pytest.fixture
def progress_file(tmp_path):
    """Path for a throwaway progress save."""
    return tmp_path / "saves" / "progress.json"

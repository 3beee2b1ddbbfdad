"""
Tests for infrastructure components (config loading, interfaces).

These tests verify that core infrastructure works correctly.
"""

import pytest


class TestConfigLoading:
    """Tests for YAML configuration loading."""

    def test_load_config(self, mock_pygame_module):
        """Test that the shipped config loads."""
        from dino_duel.utils.config_loader import load_config

        config = load_config()

        assert config is not None
        assert config.game.width == 800
        assert config.game.briefing_delay_ms == 6000
        assert config.progress.save_path == "saves/progress.json"

    def test_missing_file_uses_defaults(self, mock_pygame_module, tmp_path, capsys):
        """Test a missing config file falls back to defaults."""
        from dino_duel.utils.config_loader import load_config

        config = load_config(str(tmp_path / "nope.yaml"))

        assert config.game.player_speed == 3.5
        assert config.game.fps == 60
        assert not hasattr(config.display, "fps")
        assert "[Config]" in capsys.readouterr().out

    def test_partial_file_and_unknown_keys(self, mock_pygame_module, tmp_path):
        """Test missing keys take defaults and unknown keys are ignored."""
        from dino_duel.utils.config_loader import load_config

        path = tmp_path / "custom.yaml"
        path.write_text(
            "game:\n"
            "  enemy_fire_interval: 90\n"
            "  not_a_setting: 5\n"
            "  rewards:\n"
            "    round_win: 25.0\n"
            "display:\n"
            "  scale: 2.0\n"
            "bogus_section:\n"
            "  x: 1\n"
        )

        config = load_config(str(path))

        assert config.game.enemy_fire_interval == 90
        assert config.game.enemy_speed == 2.5
        assert config.game.reward_round_win == 25.0
        assert config.game.reward_defeat == -10.0
        assert config.display.scale == 2.0
        assert not hasattr(config.game, "not_a_setting")

    def test_overrides_merge_over_file(self, mock_pygame_module, tmp_path):
        """Test nested overrides win over file values without dropping siblings."""
        from dino_duel.utils.config_loader import load_config

        path = tmp_path / "custom.yaml"
        path.write_text("game:\n  fps: 30\n  player_speed: 5.0\n")

        config = load_config(str(path), overrides={"game": {"fps": 120}, "logging": {"verbose": False}})

        assert config.game.fps == 120
        assert config.game.player_speed == 5.0
        assert config.logging.verbose is False

    def test_save_and_reload(self, mock_pygame_module, tmp_path):
        """Test a saved config loads back equal."""
        from dino_duel.utils.config_loader import load_config, save_config

        config = load_config(str(tmp_path / "missing.yaml"))
        config.game.enemy_beam_speed = 11.0
        config.game.reward_player_hit = -3.0
        config.progress.save_path = "elsewhere.json"

        path = tmp_path / "saved.yaml"
        save_config(config, str(path))
        reloaded = load_config(str(path))

        assert reloaded == config

    def test_game_config_dict_nests_rewards(self, mock_pygame_module):
        """Test rewards are written as a nested section."""
        from dino_duel.game.config import DinoDuelConfig

        data = DinoDuelConfig().to_dict()

        assert data["rewards"]["step_penalty"] == -0.001
        assert "reward_defeat" not in data
        assert DinoDuelConfig.from_dict(data) == DinoDuelConfig()

    def test_tick_ms(self, mock_pygame_module):
        """Test tick duration follows the frame rate."""
        from dino_duel.game.config import DinoDuelConfig

        assert DinoDuelConfig(fps=50).tick_ms == pytest.approx(20.0)


class TestGameMetadata:
    """Tests for GameMetadata."""

    def test_metadata_fields(self, mock_pygame_module):
        """Test GameMetadata has the expected fields."""
        from dino_duel.core.game_interface import GameMetadata

        metadata = GameMetadata(
            name="Test Game",
            id="test",
            description="A test game",
        )

        assert metadata.name == "Test Game"
        assert metadata.id == "test"
        assert metadata.version == "1.0.0"
        assert metadata.supports_human is True
        assert metadata.commands == []


class TestCommands:
    """Tests for held-command tracking."""

    def test_press_is_fresh_once(self, mock_pygame_module):
        """Test auto-repeat presses are not fresh."""
        from dino_duel.game.commands import Command, CommandSet

        commands = CommandSet()

        assert commands.press(Command.FIRE) is True
        assert commands.press(Command.FIRE) is False
        assert commands.release(Command.FIRE) is True
        assert commands.release(Command.FIRE) is False

    def test_vertical_intent(self, mock_pygame_module):
        """Test up wins when both directions are held."""
        from dino_duel.game.commands import Command, CommandSet

        commands = CommandSet()
        assert commands.vertical == 0
        commands.press(Command.MOVE_DOWN)
        assert commands.vertical == 1
        commands.press(Command.MOVE_UP)
        assert commands.vertical == -1

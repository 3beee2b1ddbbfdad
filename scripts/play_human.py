#!/usr/bin/env python3
"""
Human Play Mode - Play Dino Duel yourself.

Controls:
    Up/Down or W/S: Move the hero
    Space: Fire (release between shots)
    ESC: Pause / resume
    Enter: Skip briefing or transition
    Q: Quit to menu (from the menu: exit)
    1-5: Start an unlocked level (menu)
    R: Reset progress (menu)
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pygame
from dino_duel.game import Command, DinoDuelGame, Phase, ProgressStore
from dino_duel.game.renderer import DinoDuelRenderer
from dino_duel.utils.config_loader import load_config

KEY_COMMANDS = {
    pygame.K_UP: Command.MOVE_UP,
    pygame.K_w: Command.MOVE_UP,
    pygame.K_DOWN: Command.MOVE_DOWN,
    pygame.K_s: Command.MOVE_DOWN,
    pygame.K_SPACE: Command.FIRE,
    pygame.K_ESCAPE: Command.PAUSE_TOGGLE,
    pygame.K_RETURN: Command.SKIP,
    pygame.K_q: Command.QUIT,
}

LEVEL_KEYS = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_4: 4,
    pygame.K_5: 5,
}


def handle_menu_key(game: DinoDuelGame, key: int) -> bool:
    """Menu keys. Returns False when the player asks to exit."""
    if key == pygame.K_q:
        return False
    if key == pygame.K_r:
        game.reset_progress()
    elif key in LEVEL_KEYS:
        level = LEVEL_KEYS[key]
        if game.campaign.level_unlocked(level):
            game.start_level(level)
        else:
            print(f"Level {level} is locked")
    return True


def main():
    """Main entry point for human play mode."""
    parser = argparse.ArgumentParser(description="Play Dino Duel")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    config = load_config(args.config)

    game = DinoDuelGame(
        config=config.game,
        progress=ProgressStore(config.progress.save_path),
        seed=args.seed,
        verbose=config.logging.verbose,
        history_size=config.logging.history,
    )

    pygame.init()
    width = int(config.game.width * config.display.scale)
    height = int(config.game.height * config.display.scale)
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(config.display.title)

    renderer = DinoDuelRenderer(config.game.width, config.game.height, asset_dir=config.display.asset_dir)
    renderer.set_render_area(0, 0, width, height)

    print("\n" + "=" * 50)
    print("Dino Duel - Human Mode")
    print("=" * 50)
    print("Controls:")
    print("  Up/Down or W/S: Move")
    print("  Space: Fire")
    print("  ESC: Pause   Enter: Skip   Q: Quit to menu")
    print("  Menu: 1-5 select level, R reset progress, Q exit")
    print("=" * 50 + "\n")

    running = True
    clock = pygame.time.Clock()

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if game.phase == Phase.IDLE:
                    running = handle_menu_key(game, event.key)
                elif event.key in KEY_COMMANDS:
                    game.handle_command(KEY_COMMANDS[event.key], True)

            elif event.type == pygame.KEYUP:
                if event.key in KEY_COMMANDS:
                    game.handle_command(KEY_COMMANDS[event.key], False)

        state = game.step()

        screen.fill((0, 0, 0))
        renderer.render(state, screen)
        pygame.display.flip()
        clock.tick(config.game.fps)

    pygame.quit()
    print(f"\nHighest unlocked level: {game.campaign.unlocked_levels}")


if __name__ == "__main__":
    main()

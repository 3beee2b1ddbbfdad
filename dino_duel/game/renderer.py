"""
Dino Duel Renderer - Pygame-based visualization implementing RendererInterface.

Sprites are optional: anything that fails to load or draw falls back to a
colored placeholder rectangle. The renderer only reads game state.
"""

import pygame
from pathlib import Path
from typing import Dict, Any, Tuple, Optional

from ..core.renderer_interface import RendererInterface


# Colors
SKY = (24, 28, 48)
FLOOR = (70, 62, 56)
WHITE = (255, 255, 255)
YELLOW = (241, 196, 15)
RED = (231, 76, 60)
GREEN = (46, 204, 113)
PURPLE = (155, 89, 182)
DARK = (0, 0, 0)

# Placeholder colors per sprite
PLACEHOLDER_COLORS = {
    "hero": (52, 152, 219),
    "dino": RED,
    "beam": YELLOW,
    "enemy_beam": PURPLE,
    "background": SKY,
}

SPRITE_FILES = {
    "hero": "hero.png",
    "dino": "dino.png",
    "beam": "beam.png",
    "background": "background.png",
}

FLOOR_Y = 355


class DinoDuelRenderer(RendererInterface):
    """
    Renders Dino Duel using Pygame, implementing RendererInterface.

    Draws the arena, both combatants, beams, the HUD (hearts, beams left,
    timer, round label, dino HP bar) and the pause/result overlays.
    """

    def __init__(self, width: int = 800, height: int = 450, asset_dir: Optional[str] = None):
        """
        Initialize the renderer.

        Args:
            width: Play field width in pixels
            height: Play field height in pixels
            asset_dir: Optional directory holding sprite images
        """
        self._base_width = width
        self._base_height = height
        self._scale = 1.0
        self._offset_x = 0
        self._offset_y = 0
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self.sprites: Dict[str, Optional[pygame.Surface]] = {}
        if asset_dir is not None:
            self.load_sprites(asset_dir)

    def load_sprites(self, asset_dir: str) -> None:
        """Load whatever sprites exist; missing or broken files stay None."""
        for name, filename in SPRITE_FILES.items():
            path = Path(asset_dir) / filename
            try:
                self.sprites[name] = pygame.image.load(str(path))
            except (pygame.error, FileNotFoundError) as e:
                print(f"[Renderer] Using placeholder for {name}: {e}")
                self.sprites[name] = None

    def get_preferred_size(self) -> Tuple[int, int]:
        """Get the preferred render size."""
        return (self._base_width, self._base_height)

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """Set the area where this renderer should draw."""
        self._offset_x = x
        self._offset_y = y
        self._scale = min(width / self._base_width, height / self._base_height)

    def _rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(
            int(self._offset_x + x * self._scale),
            int(self._offset_y + y * self._scale),
            max(1, int(w * self._scale)),
            max(1, int(h * self._scale)),
        )

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.Font(None, max(12, int(24 * self._scale)))
            self._big_font = pygame.font.Font(None, max(24, int(64 * self._scale)))
        return self._font, self._big_font

    def _draw_sprite(self, surface: pygame.Surface, name: str, rect: pygame.Rect, placeholder: str) -> None:
        """Blit a sprite scaled to rect, or fill a placeholder if that fails."""
        sprite = self.sprites.get(name)
        if sprite is not None:
            try:
                surface.blit(pygame.transform.scale(sprite, (rect.width, rect.height)), rect)
                return
            except pygame.error as e:
                print(f"[Renderer] Draw failed for {name}: {e}")
                self.sprites[name] = None
        pygame.draw.rect(surface, PLACEHOLDER_COLORS[placeholder], rect)

    def render(self, game_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the game state to a surface.

        Args:
            game_state: Dictionary from DinoDuelGame.get_state()
            surface: Pygame surface to draw on
        """
        field = self._rect(0, 0, self._base_width, self._base_height)
        background = self.sprites.get("background")
        if background is not None:
            self._draw_sprite(surface, "background", field, "background")
        else:
            pygame.draw.rect(surface, SKY, field)
            floor = self._rect(0, FLOOR_Y, self._base_width, self._base_height - FLOOR_Y)
            pygame.draw.rect(surface, FLOOR, floor)

        if game_state.get("phase") == "IDLE":
            self._draw_menu(surface, game_state)
            return

        # Entities are stale until the briefing ends and round 1 is built
        if game_state.get("phase") == "BRIEFING":
            self._draw_banner(surface, f"LEVEL {game_state['level']}", "Press ENTER to skip", YELLOW)
            return

        player = game_state["player"]
        enemy = game_state["enemy"]
        self._draw_sprite(surface, "hero", self._rect(player["x"], player["y"], player["width"], player["height"]), "hero")
        if player.get("shooting"):
            flash = self._rect(player["x"] + player["width"] - 10, player["y"] + 18, 20, 20)
            pygame.draw.ellipse(surface, YELLOW, flash)
        self._draw_sprite(surface, "dino", self._rect(enemy["x"], enemy["y"], enemy["width"], enemy["height"]), "dino")

        for proj in game_state.get("projectiles", []):
            rect = self._rect(proj["x"], proj["y"], proj["width"], proj["height"])
            if proj["is_player"]:
                self._draw_sprite(surface, "beam", rect, "beam")
            else:
                pygame.draw.rect(surface, PLACEHOLDER_COLORS["enemy_beam"], rect)

        self._draw_hud(surface, game_state)

        if game_state.get("paused"):
            self._draw_banner(surface, "PAUSED", "Press ESC to resume", WHITE)
        elif game_state.get("outcome"):
            outcome = game_state["outcome"]
            color = {
                "VICTORY": GREEN,
                "LEVEL_COMPLETE": GREEN,
                "ROUND_COMPLETE": YELLOW,
            }.get(outcome["result"], RED)
            self._draw_banner(surface, outcome["title"], outcome["subtitle"], color)

    def _draw_hud(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        font, _ = self._fonts()
        player = state["player"]
        enemy = state["enemy"]

        hearts = "".join("O" if i < player["hp"] else "-" for i in range(player["max_hp"]))
        timer_color = RED if state.get("low_time") else YELLOW
        lines = [
            (f"HERO {hearts}", WHITE, (10, 10)),
            (f"BEAMS {state['beams_remaining']}", WHITE, (10, 34)),
            (state["round_label"], YELLOW, (self._base_width / 2 - 90, 10)),
            (f"{state['seconds_remaining']}s", timer_color, (self._base_width / 2 - 12, 34)),
            (f"DINO {enemy['hp']}/{enemy['max_hp']}", WHITE, (self._base_width - 210, 10)),
        ]
        for text, color, (x, y) in lines:
            rect = self._rect(x, y, 1, 1)
            surface.blit(font.render(text, True, color), (rect.x, rect.y))

        bar_back = self._rect(self._base_width - 210, 36, 200, 12)
        pygame.draw.rect(surface, DARK, bar_back)
        pct = state.get("enemy_hp_pct", 0.0) / 100.0
        if pct > 0:
            bar = self._rect(self._base_width - 210, 36, 200 * pct, 12)
            pygame.draw.rect(surface, RED, bar)

    def _draw_banner(self, surface: pygame.Surface, title: str, subtitle: str, color) -> None:
        font, big_font = self._fonts()
        band = self._rect(0, self._base_height / 2 - 60, self._base_width, 120)
        pygame.draw.rect(surface, DARK, band)
        title_img = big_font.render(title, True, color)
        surface.blit(title_img, (band.centerx - title_img.get_width() // 2, band.y + 15))
        if subtitle:
            sub_img = font.render(subtitle, True, WHITE)
            surface.blit(sub_img, (band.centerx - sub_img.get_width() // 2, band.y + 80))

    def _draw_menu(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        font, big_font = self._fonts()
        field = self._rect(0, 0, self._base_width, self._base_height)
        title_img = big_font.render("DINO DUEL", True, YELLOW)
        surface.blit(title_img, (field.centerx - title_img.get_width() // 2, field.y + 60))
        for level in range(1, state["max_levels"] + 1):
            locked = level > state["unlocked_levels"]
            label = f"{level}: LEVEL {level}" + ("  (locked)" if locked else "")
            img = font.render(label, True, (120, 120, 120) if locked else WHITE)
            surface.blit(img, (field.centerx - 80, field.y + 160 + level * 30))
        hint = font.render("1-5 select level   R reset progress   Q quit", True, WHITE)
        surface.blit(hint, (field.centerx - hint.get_width() // 2, field.bottom - 40))

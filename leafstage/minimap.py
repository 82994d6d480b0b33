"""A mini-map of the level, collision checks and a saved game position."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import pygame

MINIMAP_SCALE = 0.1
MINIMAP_POSITION = (100, 55)
ICON_OFFSET = (20, 70)
LEVEL_IMAGES = {1: "minimap_level1.png", 2: "minimap_level2.png"}
PLAYER_ICON_FILE = "red.jpg"
DEFAULT_SAVE_FILE = "save.txt"

SCREEN_SIZE = (1920, 1080)
CAMERA = (0, 0, 800, 600)
PLAYER_START = (100, 100, 32, 32)
PLATFORM = (300, 300, 100, 20)
PLAYER_STEP = 8
MINIMAP_PERCENT = 10
FRAME_DELAY_MS = 16


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass
class MiniMap:
    """A reduced picture of the level with an icon marking the player."""

    image: pygame.Surface
    player_image: pygame.Surface
    level: int
    position: pygame.Rect
    player_icon: pygame.Rect
    scale: float = MINIMAP_SCALE

    def update(self, player_pos: pygame.Rect) -> None:
        """Place the icon by scaling the player's position."""
        self.player_icon.x = int(player_pos.x * self.scale)
        self.player_icon.y = int(player_pos.y * self.scale)

    def update_with_camera(self, player_pos: pygame.Rect, camera: pygame.Rect, scale_percent: int) -> None:
        """Place the icon from the player's world position, scaled by a percentage."""
        self.player_icon.x = _trunc_div((player_pos.x + camera.x) * scale_percent, 100)
        self.player_icon.y = _trunc_div((player_pos.y + camera.y) * scale_percent, 100)

    def render(self, screen: pygame.Surface) -> None:
        screen.blit(self.image, self.position)

    def draw_player(self, screen: pygame.Surface, player_pos: pygame.Rect) -> pygame.Rect:
        """Draw the icon over the map for ``player_pos`` and return where it went."""
        x = self.position.x + int(player_pos.x * self.scale + ICON_OFFSET[0])
        y = self.position.y + int(player_pos.y * self.scale + ICON_OFFSET[1])
        return screen.blit(self.player_image, (x, y))

    def draw(self, screen: pygame.Surface) -> None:
        """Draw the map and the icon at its stored coordinates."""
        screen.blit(self.image, self.position)
        screen.blit(self.player_image, self.player_icon.topleft)


def _load(path: Path) -> pygame.Surface:
    if not path.is_file():
        raise FileNotFoundError(f"Erreur de chargement de l'image: {path}")
    return pygame.image.load(str(path))


def load_minimap(level: int, root=".") -> MiniMap:
    """Load the mini-map of ``level`` (1 or 2) and the player icon from ``root``."""
    try:
        name = LEVEL_IMAGES[level]
    except KeyError:
        raise ValueError(f"Niveau inconnu: {level}") from None
    base = Path(root)
    image = _load(base / name)
    player_image = _load(base / PLAYER_ICON_FILE)
    position = pygame.Rect(*MINIMAP_POSITION, *image.get_size())
    icon = pygame.Rect(0, 0, *player_image.get_size())
    return MiniMap(image, player_image, level, position, icon)


def pixel_collision(surface: Optional[pygame.Surface], rect: Optional[pygame.Rect]) -> bool:
    """True when the pixel under the rectangle's corner is pure red."""
    if surface is None or rect is None:
        return False
    width, height = surface.get_size()
    if not (0 <= rect.x < width and 0 <= rect.y < height):
        return False
    color = surface.get_at((rect.x, rect.y))
    return (color.r, color.g, color.b) == (255, 0, 0)


def boxes_collide(a: pygame.Rect, b: pygame.Rect) -> bool:
    """Bounding-box overlap test."""
    return a.x < b.x + b.width and a.x + a.width > b.x and a.y < b.y + b.height and a.y + a.height > b.y


def clamp_to_screen(rect: pygame.Rect, width: int, height: int) -> pygame.Rect:
    """Return a copy of ``rect`` moved inside a ``width`` x ``height`` screen."""
    result = rect.copy()
    if result.x < 0:
        result.x = 0
    if result.x > width - result.width:
        result.x = width - result.width
    if result.y < 0:
        result.y = 0
    if result.y > height - result.height:
        result.y = height - result.height
    return result


@dataclass
class SaveState:
    """Player and camera positions with score and lives."""

    x_player: int = 0
    y_player: int = 0
    cam_x: int = 0
    cam_y: int = 0
    score: int = 0
    lives: int = 0


def save_game(state: SaveState, path=DEFAULT_SAVE_FILE) -> None:
    values = (getattr(state, f.name) for f in fields(SaveState))
    Path(path).write_text(" ".join(str(v) for v in values) + "\n", encoding="utf-8")


def load_game(path=DEFAULT_SAVE_FILE) -> SaveState:
    """Read a saved game; raises FileNotFoundError or ValueError."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Aucune sauvegarde trouvée: {path}")
    words = path.read_text(encoding="utf-8").split()
    count = len(fields(SaveState))
    if len(words) < count:
        raise ValueError(f"save file {path} holds {len(words)} values, expected {count}")
    return SaveState(*(int(word) for word in words[:count]))


_MOVES = {
    pygame.K_LEFT: (-PLAYER_STEP, 0),
    pygame.K_RIGHT: (PLAYER_STEP, 0),
    pygame.K_UP: (0, -PLAYER_STEP),
    pygame.K_DOWN: (0, PLAYER_STEP),
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mini-map and collision demo.")
    parser.add_argument("--assets", default=".", help="directory holding the images")
    args = parser.parse_args(argv)
    assets = Path(args.assets)

    pygame.init()
    try:
        screen = pygame.display.set_mode(SCREEN_SIZE)
        camera = pygame.Rect(*CAMERA)
        try:
            background = _load(assets / "background.png")
            background_collision = _load(assets / "background_collision.png")
            minimap = load_minimap(1, assets)
        except (FileNotFoundError, ValueError) as exc:
            print(f"Erreur de chargement des backgrounds: {exc}", file=sys.stderr)
            return 1

        player = pygame.Rect(*PLAYER_START)
        platform = pygame.Rect(*PLATFORM)
        collision_seen = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in _MOVES:
                        dx, dy = _MOVES[event.key]
                        player.move_ip(dx, dy)
            player = clamp_to_screen(player, *SCREEN_SIZE)

            if pixel_collision(minimap.image, player) and not collision_seen:
                print("Collision spéciale détectée !")
                collision_seen = True
            if boxes_collide(player, platform):
                print("Collision plateforme !")

            screen.blit(background_collision if collision_seen else background, (0, 0))
            minimap.update_with_camera(player, camera, MINIMAP_PERCENT)
            minimap.render(screen)
            minimap.draw_player(screen, player)
            pygame.display.flip()
            pygame.time.delay(FRAME_DELAY_MS)
    finally:
        pygame.quit()
    return 0
"""A side-scrolling player: sprites, keyboard control, physics and animation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from pathlib import Path
from typing import Optional, Sequence

import pygame

SCREEN_WIDTH = 1800
SCREEN_HEIGHT = 875
PLAYER_WALK_SPEED = 4
PLAYER_RUN_SPEED = 8
JUMP_POWER = 15
GRAVITY = 1
GROUND_Y = SCREEN_HEIGHT - 150
WALK_FRAMES = 3
RUN_FRAMES = 3
DOWN_FRAMES = 2
ATTACK_FRAMES = 2
ANIMATION_DELAY = 100
TEXT_COLOR = (255, 255, 255, 255)

_SPRITE_DIR = Path("player") / "images"


class Direction(IntEnum):
    RIGHT = 0
    LEFT = 1


class Action(Enum):
    IDLE = auto()
    WALK = auto()
    RUN = auto()
    CROUCH = auto()
    JUMP = auto()
    DOWN = auto()
    ATTACK = auto()


_FOLDERS = {Direction.RIGHT: "droite", Direction.LEFT: "gauche"}

Sprite = Optional[pygame.Surface]


def load_image(path) -> pygame.Surface:
    """Load an image, converted for fast blitting when a display is open."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Failed to load image {path}")
    image = pygame.image.load(str(path))
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def _optional_image(path: Path) -> Sprite:
    try:
        return load_image(path)
    except FileNotFoundError:
        return None


@dataclass
class PlayerSprites:
    """Images for every action, keyed by facing direction; missing ones are None."""

    idle: dict[Direction, Sprite]
    walk: dict[Direction, Sequence[Sprite]]
    run: dict[Direction, Sequence[Sprite]]
    crouch: dict[Direction, Sprite]
    down: dict[Direction, Sequence[Sprite]]
    attack: dict[Direction, Sequence[Sprite]]
    jump: dict[Direction, Sprite]


def load_sprites(root=".") -> PlayerSprites:
    """Load the player's images from ``root``; both idle images are required."""
    base = Path(root) / _SPRITE_DIR
    sprites = PlayerSprites({}, {}, {}, {}, {}, {}, {})
    for direction, folder in _FOLDERS.items():
        def img(name: str) -> Sprite:
            return _optional_image(base / folder / name)

        sprites.idle[direction] = img("immobile.png")
        sprites.walk[direction] = tuple(img(f"marcher{n}.png") for n in (1, 6, 4))
        sprites.run[direction] = tuple(img(f"course{n}.png") for n in range(1, RUN_FRAMES + 1))
        sprites.crouch[direction] = img("accroupi.png")
        sprites.down[direction] = tuple(img(f"sol{n}.png") for n in range(1, DOWN_FRAMES + 1))
        sprites.attack[direction] = tuple(img(f"attaque{n}.png") for n in range(1, ATTACK_FRAMES + 1))
        sprites.jump[direction] = img("jump.png")
    if sprites.idle[Direction.RIGHT] is None or sprites.idle[Direction.LEFT] is None:
        raise FileNotFoundError(f"Essential player images (idle) missing under {base}")
    return sprites


@dataclass
class Player:
    """A player standing on the ground line, moved by the keyboard."""

    sprites: PlayerSprites
    rect: pygame.Rect
    vel_x: int = 0
    vel_y: int = 0
    direction: Direction = Direction.RIGHT
    action: Action = Action.IDLE
    previous_action: Action = Action.IDLE
    frame: int = 0
    last_frame_time: int = 0
    is_jumping: bool = False
    on_ground: bool = True
    attacking: bool = False
    _unused: None = field(default=None, repr=False, compare=False)

    def handle_input(self, keys) -> None:
        """Set velocity, direction and action from the held keys."""
        self.vel_x = 0
        left, right = keys[pygame.K_LEFT], keys[pygame.K_RIGHT]
        if left:
            self.vel_x = -PLAYER_WALK_SPEED
            self.direction = Direction.LEFT
            self.action = Action.WALK
        if right:
            self.vel_x = PLAYER_WALK_SPEED
            self.direction = Direction.RIGHT
            self.action = Action.WALK
        if keys[pygame.K_LSHIFT] and (left or right):
            self.vel_x *= 2
            self.action = Action.RUN
        if keys[pygame.K_DOWN]:
            self.action = Action.CROUCH
        if keys[pygame.K_SPACE] and self.on_ground:
            self.vel_y = -JUMP_POWER
            self.is_jumping = True
            self.on_ground = False
            self.action = Action.JUMP
        if keys[pygame.K_a]:
            self.action = Action.ATTACK
            self.attacking = True
        held = (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_DOWN, pygame.K_SPACE, pygame.K_a)
        if not any(keys[k] for k in held) and self.on_ground:
            self.action = Action.IDLE

    def update(self, now: int) -> None:
        """Apply movement, gravity and ground collision; advance the animation."""
        self.rect.x += self.vel_x
        self.rect.y += self.vel_y
        if not self.on_ground:
            self.vel_y += GRAVITY
        floor = GROUND_Y - self.rect.height
        if self.rect.y >= floor:
            self.rect.y = floor
            self.vel_y = 0
            self.on_ground = True
            self.is_jumping = False
        if now - self.last_frame_time > ANIMATION_DELAY:
            self.frame = (self.frame + 1) % WALK_FRAMES
            self.last_frame_time = now
        if self.attacking and now - self.last_frame_time > ANIMATION_DELAY * ATTACK_FRAMES:
            self.attacking = False
            self.action = self.previous_action

    def current_sprite(self) -> Sprite:
        """The image for the current action, direction and frame."""
        s, d, f = self.sprites, self.direction, self.frame
        if self.action is Action.IDLE:
            return s.idle[d]
        if self.action is Action.WALK:
            return s.walk[d][f]
        if self.action is Action.RUN:
            return s.run[d][f]
        if self.action is Action.CROUCH:
            return s.crouch[d]
        if self.action is Action.JUMP:
            return s.jump[d]
        if self.action is Action.DOWN:
            return s.down[d][f % DOWN_FRAMES]
        return s.attack[d][f % ATTACK_FRAMES]

    def render(self, screen: pygame.Surface) -> None:
        sprite = self.current_sprite()
        if sprite is not None:
            screen.blit(sprite, self.rect)


def create_player(x: int, root=".") -> Player:
    """Load the sprites and stand a player on the ground at ``x``."""
    sprites = load_sprites(root)
    width, height = sprites.idle[Direction.RIGHT].get_size()
    rect = pygame.Rect(x, GROUND_Y - height, width, height)
    return Player(sprites, rect, last_frame_time=pygame.time.get_ticks())


def render_text(screen: pygame.Surface, text: str, font, x: int, y: int) -> pygame.Rect:
    """Draw white anti-aliased text at (x, y) and return the area covered."""
    surface = font.render(text, True, TEXT_COLOR)
    return screen.blit(surface, (x, y))
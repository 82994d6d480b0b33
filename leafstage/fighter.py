"""A keyboard-driven fighter for the two-player arena: attack, crouch, jump, walk and run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

import pygame

from leafstage.player import Action, Direction, PlayerSprites, load_image
from leafstage.scoreboard import ScoreInfo

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
GROUND_Y = SCREEN_HEIGHT - 150
GRAVITY = 1
JUMP_POWER = 15
WALK_SPEED = 4
RUN_SPEED = 8
WALK_FRAMES = 3
RUN_FRAMES = 3
DOWN_FRAMES = 2
ATTACK_FRAMES = 2
JUMP_FRAMES = 1
ANIMATION_DELAY = 100

_FOLDERS = {Direction.RIGHT: "droite", Direction.LEFT: "gauche"}
_VARIANTS = {
    1: ("images", ("marcher1.png", "marcher6.png", "marcher4.png")),
    2: ("images2", ("marche1.png", "marche2.png", "marche3.png")),
}

Sprite = Optional[pygame.Surface]


@dataclass(frozen=True)
class Controls:
    """The keys one fighter answers to; each action may have several keys."""

    attack: tuple[int, ...]
    crouch: tuple[int, ...]
    jump: tuple[int, ...]
    left: tuple[int, ...]
    right: tuple[int, ...]
    run: tuple[int, ...]


ARROW_CONTROLS = Controls(
    attack=(pygame.K_LCTRL, pygame.K_RCTRL),
    crouch=(pygame.K_DOWN,),
    jump=(pygame.K_UP,),
    left=(pygame.K_LEFT,),
    right=(pygame.K_RIGHT,),
    run=(pygame.K_LSHIFT, pygame.K_RSHIFT),
)

WASD_CONTROLS = Controls(
    attack=(pygame.K_f,),
    crouch=(pygame.K_s,),
    jump=(pygame.K_w,),
    left=(pygame.K_a,),
    right=(pygame.K_d,),
    run=(pygame.K_p,),
)

_DEFAULT_CONTROLS = {1: ARROW_CONTROLS, 2: WASD_CONTROLS}

# (frame count, loops) per action once its delay has passed; attack is handled apart.
_ANIMATION = {
    Action.WALK: (WALK_FRAMES, True),
    Action.RUN: (RUN_FRAMES, True),
    Action.DOWN: (DOWN_FRAMES, True),
    Action.JUMP: (JUMP_FRAMES, False),
    Action.IDLE: (1, False),
    Action.CROUCH: (1, False),
}


def _pressed(keys, codes: Sequence[int]) -> bool:
    return any(keys[code] for code in codes)


def _optional_image(path: Path) -> Sprite:
    try:
        return load_image(path)
    except FileNotFoundError:
        return None


def load_fighter_sprites(root=".", variant: int = 1) -> PlayerSprites:
    """Load the sprite set of character ``variant`` (1 or 2); both idle images are required."""
    try:
        folder_name, walk_names = _VARIANTS[variant]
    except KeyError:
        raise ValueError(f"unknown fighter variant: {variant}") from None
    base = Path(root) / folder_name
    sprites = PlayerSprites({}, {}, {}, {}, {}, {}, {})
    for direction, folder in _FOLDERS.items():
        def img(name: str) -> Sprite:
            return _optional_image(base / folder / name)

        sprites.idle[direction] = img("immobile.png")
        sprites.walk[direction] = tuple(img(name) for name in walk_names)
        sprites.run[direction] = tuple(img(f"course{n}.png") for n in range(1, RUN_FRAMES + 1))
        sprites.crouch[direction] = img("accroupi.png")
        sprites.down[direction] = tuple(img(f"sol{n}.png") for n in range(1, DOWN_FRAMES + 1))
        sprites.attack[direction] = tuple(img(f"attaque{n}.png") for n in range(1, ATTACK_FRAMES + 1))
        sprites.jump[direction] = img("jump.png")
    if sprites.idle[Direction.RIGHT] is None or sprites.idle[Direction.LEFT] is None:
        raise FileNotFoundError(f"Essential player images (idle) failed to load under {base}")
    return sprites


@dataclass
class Fighter:
    """A fighter standing on the arena floor, driven by its own set of keys."""

    sprites: PlayerSprites
    rect: pygame.Rect
    controls: Controls = ARROW_CONTROLS
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
    clock: Callable[[], int] = field(default=pygame.time.get_ticks, repr=False, compare=False)

    def handle_input(self, keys, score: Optional[ScoreInfo] = None) -> None:
        """Choose the action for the held keys; every action taken earns a point."""
        self.vel_x = 0
        if self.attacking:
            return

        def earn() -> None:
            if score is not None:
                score.increase()

        c = self.controls
        intended = Action.IDLE
        running = _pressed(keys, c.run)
        grounded = not self.is_jumping and self.on_ground

        if _pressed(keys, c.attack):
            if grounded:
                intended = Action.ATTACK
                self.attacking = True
                self.frame = 0
                self.last_frame_time = self.clock()
                earn()
        elif _pressed(keys, c.crouch):
            if grounded:
                intended = Action.CROUCH
                earn()
        elif _pressed(keys, c.jump):
            if grounded:
                self.is_jumping = True
                self.vel_y = -JUMP_POWER
                intended = Action.JUMP
                earn()
        elif _pressed(keys, c.left) or _pressed(keys, c.right):
            speed = RUN_SPEED if running else WALK_SPEED
            if _pressed(keys, c.left):
                self.vel_x = -speed
                self.direction = Direction.LEFT
            else:
                self.vel_x = speed
                self.direction = Direction.RIGHT
            intended = Action.RUN if running else Action.WALK
            earn()

        self.action = intended

    def _animate(self, now: int) -> None:
        delta = now - self.last_frame_time
        if self.attacking:
            if delta > ANIMATION_DELAY:
                self.frame += 1
                self.last_frame_time = now
                if self.frame >= ATTACK_FRAMES:
                    self.attacking = False
                    self.action = Action.IDLE
                    self.frame = 0
            self.vel_x = 0
        elif delta > ANIMATION_DELAY:
            max_frames, loops = _ANIMATION.get(self.action, (0, True))
            if max_frames > 0:
                self.frame += 1
                if self.frame >= max_frames:
                    self.frame = 0 if loops else max_frames - 1
                self.last_frame_time = now
            else:
                self.frame = 0

    def update(self, now: int, keys=None) -> None:
        """Advance animation and physics; ``keys`` are the keys held at landing time."""
        self._animate(now)

        if not self.on_ground:
            self.vel_y += GRAVITY
        self.rect.x += self.vel_x
        self.rect.y += self.vel_y

        if self.rect.x < 0:
            self.rect.x = 0
        elif self.rect.x + self.rect.width > SCREEN_WIDTH:
            self.rect.x = SCREEN_WIDTH - self.rect.width

        if self.rect.y + self.rect.height >= GROUND_Y:
            self.rect.y = GROUND_Y - self.rect.height
            self.vel_y = 0
            if self.is_jumping:
                self.is_jumping = False
                arrows_held = keys is not None and (keys[pygame.K_LEFT] or keys[pygame.K_RIGHT])
                if not arrows_held and not self.attacking:
                    self.action = Action.IDLE
            self.on_ground = True
        else:
            self.on_ground = False

        if self.rect.y < 0:
            self.rect.y = 0
            self.vel_y = 0

    def current_sprite(self) -> Sprite:
        """The image for the current action, direction and frame."""
        s, d = self.sprites, self.direction

        def pick(frames: Sequence[Sprite]) -> Sprite:
            return frames[self.frame % len(frames)] if frames else None

        if self.action is Action.WALK:
            return pick(s.walk[d])
        if self.action is Action.RUN:
            return pick(s.run[d])
        if self.action is Action.CROUCH:
            return s.crouch[d]
        if self.action is Action.JUMP:
            return s.jump[d]
        if self.action is Action.DOWN:
            return pick(s.down[d])
        if self.action is Action.ATTACK:
            return pick(s.attack[d])
        return s.idle[d]

    def render(self, screen: pygame.Surface) -> None:
        sprite = self.current_sprite()
        if sprite is not None:
            screen.blit(sprite, self.rect.topleft)


def create_fighter(x: int, root=".", variant: int = 1, controls: Optional[Controls] = None) -> Fighter:
    """Load the sprites of ``variant`` and stand a fighter on the floor at ``x``."""
    sprites = load_fighter_sprites(root, variant)
    width, height = sprites.idle[Direction.RIGHT].get_size()
    rect = pygame.Rect(x, GROUND_Y - height, width, height)
    return Fighter(
        sprites,
        rect,
        controls or _DEFAULT_CONTROLS[variant],
        last_frame_time=pygame.time.get_ticks(),
    )
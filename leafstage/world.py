"""Scrolling backgrounds, falling leaves, twinkling stars and collectable coins."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Sequence

import pygame

FIELD_WIDTH = 1800
SCROLL_STEP = 10
DEFAULT_CAMERA = (640, 800)
SWAY_AMPLITUDE = 20
SWAY_FREQUENCY = 0.01
COIN_POSITIONS = (
    (600, 240),
    (2250, 655),
    (2450, 655),
    (3000, 240),
    (2800, 240),
    (3100, 720),
    (3850, 380),
    (4400, 775),
    (4900, 540),
    (5450, 620),
    (5680, 620),
    (6200, 275),
    (7310, 440),
    (8100, 390),
)


@dataclass
class Background:
    """A large image seen through a movable camera rectangle."""

    image: pygame.Surface
    screen_pos: tuple[int, int] = (0, 0)
    camera: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, *DEFAULT_CAMERA))

    def _scroll(self, keys, up: int, down: int, left: int, right: int) -> None:
        if keys[up]:
            self.camera.y -= SCROLL_STEP
        if keys[down]:
            self.camera.y += SCROLL_STEP
        if keys[left]:
            self.camera.x -= SCROLL_STEP
        if keys[right]:
            self.camera.x += SCROLL_STEP
        self.clamp()

    def scroll_arrows(self, keys) -> None:
        """Move the camera with the arrow keys."""
        self._scroll(keys, pygame.K_UP, pygame.K_DOWN, pygame.K_LEFT, pygame.K_RIGHT)

    def scroll_wasd(self, keys) -> None:
        """Move the camera with the W, A, S and D keys."""
        self._scroll(keys, pygame.K_w, pygame.K_s, pygame.K_a, pygame.K_d)

    def clamp(self) -> None:
        """Keep the camera inside the image."""
        if self.camera.x < 0:
            self.camera.x = 0
        if self.camera.y < 0:
            self.camera.y = 0
        max_x = self.image.get_width() - self.camera.width
        max_y = self.image.get_height() - self.camera.height
        if self.camera.x > max_x:
            self.camera.x = max_x
        if self.camera.y > max_y:
            self.camera.y = max_y

    def draw(self, screen: pygame.Surface) -> None:
        screen.blit(self.image, self.screen_pos, area=self.camera)


def load_background(path, screen_x: int = 0, camera_size: tuple[int, int] = DEFAULT_CAMERA) -> Background:
    """Load an image and place it at ``screen_x`` with a camera at the origin."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Erreur de chargement image: {path}")
    image = pygame.image.load(str(path))
    return Background(image, (screen_x, 0), pygame.Rect(0, 0, *camera_size))


@dataclass
class Leaf:
    """A leaf falling down the screen, optionally swaying from side to side."""

    image: pygame.Surface
    x: int
    y: int
    speed: int
    sway: bool = False
    origin_x: int = field(init=False)

    def __post_init__(self) -> None:
        self.origin_x = self.x

    def fall(self, screen_height: int, images: Sequence[pygame.Surface], rng=None) -> None:
        """Advance one frame; a leaf below the screen restarts above it."""
        rng = rng or random
        self.y += self.speed
        if self.y > screen_height:
            self.y = -self.image.get_height()
            self.origin_x = rng.randrange(FIELD_WIDTH - self.image.get_width())
            self.image = rng.choice(images)
        if self.sway:
            self.x = int(self.origin_x + math.sin(self.y * SWAY_FREQUENCY) * SWAY_AMPLITUDE)
        else:
            self.x = self.origin_x

    def draw(self, screen: pygame.Surface) -> None:
        screen.blit(self.image, (self.x, self.y))


def spawn_leaves(
    count: int,
    images: Sequence[pygame.Surface],
    x_min: int,
    x_max: int,
    y_min: int,
    speeds: Sequence[int],
    rng=None,
    sway: bool = False,
) -> list[Leaf]:
    """Create leaves with x in [x_min, x_max) and y between 0 and y_min (exclusive)."""
    rng = rng or random
    sign = -1 if y_min < 0 else 1
    leaves = []
    for _ in range(count):
        x = rng.randrange(x_min, x_max)
        y = sign * rng.randrange(abs(y_min))
        speed = rng.choice(speeds)
        image = rng.choice(images)
        leaves.append(Leaf(image, x, y, speed, sway))
    return leaves


@dataclass
class Star:
    """A star whose brightness follows a sine wave."""

    x: int
    y: int
    phase: float
    speed: float
    brightness: int = 0

    def twinkle(self, time: float) -> None:
        self.brightness = int((math.sin(time * self.speed + self.phase) + 1.0) * 127.5)


def make_stars(count: int, width: int, height: int, rng=None) -> list[Star]:
    """Scatter stars over the upper half of a ``width`` x ``height`` area."""
    rng = rng or random
    stars = []
    for _ in range(count):
        x = rng.randrange(width)
        y = rng.randrange(height // 2)
        phase = rng.randrange(1000) / 1000.0 * 2 * math.pi
        speed = (rng.randrange(3) + 1) / 100.0
        stars.append(Star(x, y, phase, speed))
    return stars


def draw_stars(stars: Iterable[Star], screen: pygame.Surface, image: pygame.Surface, camera: pygame.Rect) -> None:
    for star in stars:
        image.set_alpha(star.brightness)
        screen.blit(image, (star.x - camera.x, star.y - camera.y))


@dataclass
class Coin:
    image: pygame.Surface
    rect: pygame.Rect


def coin_layout(image: pygame.Surface) -> list[Coin]:
    """Place the stage's coins, all sharing ``image``."""
    width, height = image.get_size()
    return [Coin(image, pygame.Rect(x, y, width, height)) for x, y in COIN_POSITIONS]


def visible_coins(
    coins: Iterable[Coin], camera: pygame.Rect, offset_x: int, screen_height: int
) -> Iterator[tuple[Coin, pygame.Rect]]:
    """Yield each coin in view together with its rectangle on screen."""
    for coin in coins:
        xs = coin.rect.x - camera.x + offset_x
        ys = coin.rect.y - camera.y
        if (
            xs + coin.rect.width >= offset_x
            and xs <= offset_x + camera.width
            and ys + coin.rect.height >= 0
            and ys <= screen_height
        ):
            yield coin, pygame.Rect(xs, ys, coin.rect.width, coin.rect.height)


def draw_coins(coins: Iterable[Coin], screen: pygame.Surface, camera: pygame.Rect, offset_x: int) -> None:
    for coin, dest in visible_coins(coins, camera, offset_x, screen.get_height()):
        screen.blit(coin.image, dest)
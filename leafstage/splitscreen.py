"""Solo and split-screen views of a leaf-strewn stage."""

from __future__ import annotations

import argparse
import random
from enum import Enum, auto
from pathlib import Path
from typing import Sequence

import pygame

from leafstage.world import Background, Leaf, load_background, spawn_leaves

SCREEN_SIZE = (1800, 875)
LEAF_COUNT = 100
FALL_HEIGHT = 875
LEAF_MARGIN = 50
LEAF_START_SPAN = 200
LEAF_SPEEDS = range(1, 4)
CAMERA_START_Y = 150
FRAME_DELAY_MS = 16
TEXT_COLOR = (255, 255, 255)
TIME_POS = (10, 10)
GUIDE_POS = (500, 350)

MENU_GUIDE = "Choisissez votre mode : 1 - Solo, 2 - Multi"
SOLO_GUIDE = "Appuyez sur 2 pour passer en mode multi"
MULTI_GUIDE = "Appuyez sur R pour revenir en mode solo"


class Mode(Enum):
    MENU = auto()
    SOLO = auto()
    MULTI = auto()
    QUIT = auto()


class SplitScreenGame:
    """A stage shown whole in solo mode or as two halves in multi mode."""

    def __init__(
        self,
        background_image: pygame.Surface,
        leaf_images: Sequence[pygame.Surface],
        size: tuple[int, int] = SCREEN_SIZE,
        rng=None,
        start: int = 0,
    ) -> None:
        self.width, self.height = size
        self.half = self.width // 2
        self.background_image = background_image
        self.leaf_images = tuple(leaf_images)
        self.rng = rng or random.Random()
        self.start = start
        self.mode = Mode.MENU
        self._solo_ready = False
        self._multi_ready = False
        self.left_leaves = self._spawn(0, self.half - LEAF_MARGIN)
        self.right_leaves = self._spawn(self.half, self.width - LEAF_MARGIN)
        self.left = Background(
            background_image, (0, 0), pygame.Rect(0, CAMERA_START_Y, self.half, self.height)
        )
        self.right = Background(
            background_image, (self.half, 0), pygame.Rect(0, 0, self.half, self.height)
        )

    def _spawn(self, x_min: int, x_max: int) -> list[Leaf]:
        return spawn_leaves(
            LEAF_COUNT, self.leaf_images, x_min, x_max, LEAF_START_SPAN, LEAF_SPEEDS, self.rng
        )

    def _split_backgrounds(self) -> None:
        self.left = Background(
            self.background_image, (0, 0), pygame.Rect(0, CAMERA_START_Y, self.half, self.height)
        )
        self.right = Background(
            self.background_image, (self.half, 0), pygame.Rect(0, CAMERA_START_Y, self.half, self.height)
        )

    def handle_key(self, key: int) -> Mode:
        """React to a key press and return the resulting mode."""
        if self.mode is Mode.MENU:
            if key == pygame.K_1:
                self.mode = Mode.SOLO
                self._solo_ready = False
            elif key == pygame.K_2:
                self.mode = Mode.MULTI
                self._multi_ready = False
        elif self.mode is Mode.SOLO and key == pygame.K_2:
            self.mode = Mode.MULTI
            self._multi_ready = False
        elif self.mode is Mode.MULTI and key == pygame.K_r:
            self.mode = Mode.SOLO
            self._solo_ready = False
        return self.mode

    def _fall(self, leaves: list[Leaf]) -> None:
        for leaf in leaves:
            leaf.fall(FALL_HEIGHT, self.leaf_images, self.rng)

    def step(self, keys) -> None:
        """Advance one frame given the currently held keys."""
        if self.mode is Mode.SOLO:
            if not self._solo_ready:
                self.left.camera = pygame.Rect(0, CAMERA_START_Y, self.width, self.height)
                self.left_leaves = self._spawn(0, self.width - LEAF_MARGIN)
                self._solo_ready = True
            self.left.scroll_arrows(keys)
            self._fall(self.left_leaves)
        elif self.mode is Mode.MULTI:
            if not self._multi_ready:
                self._split_backgrounds()
                self._multi_ready = True
            self.left.scroll_arrows(keys)
            self.right.scroll_wasd(keys)
            self._fall(self.left_leaves)
            self._fall(self.right_leaves)

    def _text(self, screen: pygame.Surface, font, text: str, pos: tuple[int, int]) -> None:
        screen.blit(font.render(text, False, TEXT_COLOR), pos)

    def _time_text(self, now: int) -> str:
        return f"Temps : {max(0, now - self.start) // 1000} s"

    def render(self, screen: pygame.Surface, font, now: int) -> None:
        """Draw the current mode; ``now`` is in milliseconds."""
        if self.mode is Mode.MENU:
            self._text(screen, font, MENU_GUIDE, GUIDE_POS)
        elif self.mode is Mode.SOLO:
            self.left.draw(screen)
            for leaf in self.left_leaves:
                leaf.draw(screen)
            self._text(screen, font, self._time_text(now), TIME_POS)
            self._text(screen, font, SOLO_GUIDE, GUIDE_POS)
        elif self.mode is Mode.MULTI:
            self.left.draw(screen)
            for leaf in self.left_leaves:
                if leaf.x < self.half:
                    leaf.draw(screen)
            self.right.draw(screen)
            for leaf in self.right_leaves:
                if leaf.x >= self.half:
                    leaf.draw(screen)
            self._text(screen, font, self._time_text(now), TIME_POS)
            self._text(screen, font, MULTI_GUIDE, GUIDE_POS)


def _open_font(path: Path, size: int):
    if path.is_file():
        return pygame.font.Font(str(path), size)
    return pygame.font.Font(None, size)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Solo or split-screen leaf stage.")
    parser.add_argument("--assets", default=".", help="directory holding the images and font")
    args = parser.parse_args(argv)
    assets = Path(args.assets)

    pygame.init()
    try:
        pygame.key.set_repeat(10, 10)
        screen = pygame.display.set_mode(SCREEN_SIZE)
        pygame.display.set_caption("Partage d'écran - SDL")
        font = _open_font(assets / "DejaVuSans.ttf", 24)

        leaf_paths = [assets / "feuille1.png", assets / "feuille2.png"]
        if not all(path.is_file() for path in leaf_paths):
            print("Erreur de chargement des images de feuilles")
            return 1
        leaf_images = [pygame.image.load(str(path)) for path in leaf_paths]

        try:
            background = load_background(assets / "stage finale.png", 0)
        except FileNotFoundError as exc:
            print(exc)
            return 1

        game = SplitScreenGame(background.image, leaf_images, screen.get_size(), start=pygame.time.get_ticks())
        while game.mode is not Mode.QUIT:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.mode = Mode.QUIT
                elif event.type == pygame.KEYDOWN:
                    game.handle_key(event.key)
            if game.mode is Mode.QUIT:
                break
            game.step(pygame.key.get_pressed())
            game.render(screen, font, pygame.time.get_ticks())
            pygame.display.flip()
            pygame.time.delay(FRAME_DELAY_MS)
    finally:
        pygame.quit()
    return 0
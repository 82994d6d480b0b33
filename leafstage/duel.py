"""The two-player arena: two fighters, a shared score and a bonus counter."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pygame

from leafstage.fighter import SCREEN_HEIGHT, SCREEN_WIDTH, Fighter, create_fighter
from leafstage.player import load_image
from leafstage.scoreboard import (
    DEFAULT_SCORES_FILE,
    Heart,
    ScoreInfo,
    ask_player_name,
    draw_hearts,
    make_hearts,
    render_score,
    save_score,
    save_score as _save,
)

BONUS_STEP = 10
BONUS_COLOR = (255, 255, 255)
BONUS_MARGIN = 20
BONUS_TOP = 10
FONT_SIZE = 24
FRAME_MS = 16
CAPTION = "SDL 1.2 Player Animation"

PLAYER_ONE_BONUS_KEYS = (pygame.K_RIGHT, pygame.K_LEFT, pygame.K_UP, pygame.K_DOWN)
PLAYER_TWO_BONUS_KEYS = (pygame.K_d, pygame.K_q, pygame.K_z, pygame.K_s)


@dataclass
class DuelGame:
    """Two fighters sharing one score, plus a bonus counted from keys held."""

    player_one: Fighter
    player_two: Fighter
    score: ScoreInfo
    background: Optional[pygame.Surface] = None
    hearts: list[Heart] = field(default_factory=list)
    bonus: int = 0

    def step(self, keys, now: int) -> int:
        """Read the held keys, move both fighters and return the bonus total."""
        self.player_one.handle_input(keys, self.score)
        if any(keys[k] for k in PLAYER_ONE_BONUS_KEYS):
            self.bonus += BONUS_STEP
        self.player_two.handle_input(keys, self.score)
        if any(keys[k] for k in PLAYER_TWO_BONUS_KEYS):
            self.bonus += BONUS_STEP
        self.player_one.update(now, keys)
        self.player_two.update(now, keys)
        return self.bonus

    def render(self, screen: pygame.Surface, font) -> pygame.Rect:
        """Draw the arena; returns where the bonus counter went."""
        if self.background is not None:
            screen.blit(self.background, (0, 0))
        render_score(screen, font, self.score)
        draw_hearts(screen, self.hearts)
        self.player_one.render(screen)
        self.player_two.render(screen)
        text = font.render(f"Score: {self.bonus}", False, BONUS_COLOR)
        x = SCREEN_WIDTH - text.get_width() - BONUS_MARGIN
        return screen.blit(text, (x, BONUS_TOP))

    def finish(self, path=DEFAULT_SCORES_FILE) -> None:
        """Append the shared score to the scores file."""
        _save(self.score, path)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Two-player arena.")
    parser.add_argument("--assets", default=".", help="directory holding fonts and images")
    parser.add_argument("--scores", default=DEFAULT_SCORES_FILE, help="file the score is appended to")
    args = parser.parse_args(argv)
    assets = Path(args.assets)

    pygame.init()
    try:
        font_path = assets / "police.ttf"
        if not font_path.is_file():
            print(f"Erreur de chargement de la police: {font_path}", file=sys.stderr)
            return 1
        font = pygame.font.Font(str(font_path), FONT_SIZE)

        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.DOUBLEBUF)
        pygame.display.set_caption(CAPTION)

        try:
            background = load_image(assets / "images" / "background.png")
        except FileNotFoundError:
            print("Failed to load background!", file=sys.stderr)
            return 1

        try:
            score = ScoreInfo(ask_player_name())
        except EOFError as exc:
            print(exc, file=sys.stderr)
            return 1

        heart_path = assets / "coeur.png"
        hearts: list[Heart] = []
        if heart_path.is_file():
            hearts = make_hearts(pygame.image.load(str(heart_path)))
        else:
            print(f"Unable to load image {heart_path}")

        try:
            one = create_fighter(100, assets, 1)
            two = create_fighter(300, assets, 2)
        except (FileNotFoundError, ValueError) as exc:
            print(f"Erreur de création des joueurs: {exc}", file=sys.stderr)
            return 1

        game = DuelGame(one, two, score, background, hearts)
        running = True
        while running:
            start = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    game.finish(args.scores)
            keys = pygame.key.get_pressed()
            game.step(keys, pygame.time.get_ticks())
            game.render(screen, font)
            pygame.display.flip()
            elapsed = pygame.time.get_ticks() - start
            if elapsed < FRAME_MS:
                pygame.time.delay(FRAME_MS - elapsed)
    finally:
        pygame.quit()
    return 0
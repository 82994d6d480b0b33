"""Player scores kept on disk and the lives shown as hearts."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

import pygame

SCORE_COLOR = (0, 0, 0)
SCORE_MARGIN = 10
SCORE_TOP = 10
NAME_PROMPT = "Entrez votre nom: "
HEART_POSITIONS = ((15, 10), (55, 10), (95, 10))
DEFAULT_SCORES_FILE = "scores.txt"


@dataclass
class ScoreInfo:
    """A player's name, score and playing time."""

    player_name: str
    score: int = 0
    time: int = 0

    def increase(self) -> None:
        """Add one point."""
        self.score += 1

    def line(self) -> str:
        """The record as written to the scores file, without newline."""
        return f"{self.player_name} {self.score} {self.time}"


def ask_player_name(stream: TextIO | None = None) -> str:
    """Prompt for a name and return the first word typed."""
    stream = stream or sys.stdin
    print(NAME_PROMPT, end="", flush=True)
    for line in stream:
        words = line.split()
        if words:
            return words[0]
    raise EOFError("no player name given")


def save_score(score: ScoreInfo, path=DEFAULT_SCORES_FILE) -> None:
    """Append the score record to ``path``."""
    with Path(path).open("a", encoding="utf-8") as handle:
        handle.write(score.line() + "\n")


def render_score(screen: pygame.Surface, font, score: ScoreInfo) -> pygame.Rect:
    """Draw the score in the top right corner and return the area covered."""
    surface = font.render(f"Score:{score.score}", False, SCORE_COLOR)
    x = screen.get_width() - surface.get_width() - SCORE_MARGIN
    return screen.blit(surface, (x, SCORE_TOP))


@dataclass
class Heart:
    """One life shown on screen."""

    image: pygame.Surface
    position: tuple[int, int]


def make_hearts(image: pygame.Surface) -> list[Heart]:
    """Place the three hearts of the status bar, all sharing ``image``."""
    return [Heart(image, position) for position in HEART_POSITIONS]


def draw_hearts(screen: pygame.Surface, hearts: Iterable[Heart]) -> None:
    for heart in hearts:
        screen.blit(heart.image, heart.position)
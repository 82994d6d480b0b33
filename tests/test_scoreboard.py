import io

import pygame
import pytest

from leafstage.scoreboard import (
    Heart,
    ScoreInfo,
    ask_player_name,
    draw_hearts,
    make_hearts,
    render_score,
    save_score,
)


class FakeFont:
    def __init__(self, size=(40, 20)):
        self.size = size
        self.calls = []

    def render(self, text, antialias, color):
        self.calls.append((text, antialias, color))
        return pygame.Surface(self.size)


def test_increase_adds_one_each_time():
    score = ScoreInfo("Alice")
    for _ in range(3):
        score.increase()
    assert score.score == 3
    assert score.time == 0


def test_ask_player_name_takes_first_word(capsys):
    name = ask_player_name(io.StringIO("Alice Bob\n"))
    assert name == "Alice"
    assert capsys.readouterr().out == "Entrez votre nom: "


def test_ask_player_name_skips_blank_lines():
    assert ask_player_name(io.StringIO("\n   \nCarol\n")) == "Carol"


def test_ask_player_name_without_input_raises():
    with pytest.raises(EOFError):
        ask_player_name(io.StringIO(""))


def test_save_score_appends_records(tmp_path):
    path = tmp_path / "scores.txt"
    first = ScoreInfo("Alice", 2, 0)
    second = ScoreInfo("Bob", 7, 4)
    save_score(first, path)
    save_score(second, path)
    assert path.read_text(encoding="utf-8").splitlines() == [first.line(), second.line()]
    assert first.line() == "Alice 2 0"


def test_render_score_top_right():
    screen = pygame.Surface((200, 100))
    font = FakeFont()
    score = ScoreInfo("Alice", 5)
    rect = render_score(screen, font, score)
    assert font.calls == [("Score:5", False, (0, 0, 0))]
    assert rect.x == screen.get_width() - font.size[0] - 10
    assert rect.y == 10


def test_make_hearts_positions_share_image():
    image = pygame.Surface((8, 8))
    hearts = make_hearts(image)
    assert [h.position for h in hearts] == [(15, 10), (55, 10), (95, 10)]
    assert all(h.image is image for h in hearts)


def test_draw_hearts_paints_screen():
    image = pygame.Surface((4, 4))
    image.fill((200, 0, 0))
    screen = pygame.Surface((120, 30))
    screen.fill((0, 0, 0))
    draw_hearts(screen, [Heart(image, (15, 10))])
    assert screen.get_at((15, 10)).r == 200
    assert screen.get_at((14, 10)).r == 0
"""The main menu and its sub-screens: buttons that light up under the mouse."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Optional

import pygame

MUSIC_FILE = "SB.mp3"
FONT_FILE = "arial.ttf"
FONT_SIZE = 38
TEXT_COLOR = (0, 0, 0)
NAME_POSITION = (490, 305)
VOLUME_START = 50
VOLUME_STEP = 10
VOLUME_MIN = 0
VOLUME_MAX = 100
MIXER_MAX_VOLUME = 128
NAME_MAX_LENGTH = 20
CURSOR_BLINK_MS = 500
CURSOR = "|"


class MainChoice(IntEnum):
    """The main-menu button under the mouse."""

    NONE = 0
    PLAY = 1
    OPTIONS = 2
    BEST_SCORES = 3
    HISTORY = 4
    QUIT = 5


def is_hovered(rect: pygame.Rect, mouse: tuple[int, int]) -> bool:
    """True when ``mouse`` lies strictly inside ``rect``."""
    x, y = mouse
    return rect.x < x < rect.x + rect.width and rect.y < y < rect.y + rect.height


@dataclass
class Button:
    """A button with a normal and a highlighted image."""

    normal: pygame.Surface
    highlighted: pygame.Surface
    rect: pygame.Rect

    def hovered(self, mouse: tuple[int, int]) -> bool:
        return is_hovered(self.rect, mouse)

    def draw(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        """Draw the highlighted image when the mouse is over the button."""
        image = self.highlighted if self.hovered(mouse) else self.normal
        screen.blit(image, self.rect.topleft)


def _draw_background(screen: pygame.Surface, image: Optional[pygame.Surface]) -> None:
    if image is not None:
        screen.blit(image, (0, 0))


@dataclass
class Menu:
    """Every screen of the menu, with the settings the options screen changes."""

    background: Optional[pygame.Surface]
    play: Button
    options: Button
    best_scores: Button
    history: Button
    quit: Button

    options_background: Optional[pygame.Surface]
    volume_up: Button
    volume_down: Button
    windowed: Button
    fullscreen_button: Button
    back: Button

    save_backgrounds: tuple[Optional[pygame.Surface], Optional[pygame.Surface]]
    yes: Button
    no: Button
    load: Button
    new_game: Button

    player_backgrounds: tuple[Optional[pygame.Surface], Optional[pygame.Surface]]
    solo: Button
    multi: Button
    player_one: Button
    player_two: Button
    validate: Button
    player_back: Button

    score_backgrounds: tuple[Optional[pygame.Surface], Optional[pygame.Surface]]
    score_validate: Button
    score_quit: Button
    score_back: Button

    font: Optional[pygame.font.Font] = None
    text_color: tuple[int, int, int] = TEXT_COLOR
    name_position: tuple[int, int] = NAME_POSITION
    selection: MainChoice = MainChoice.NONE
    volume: int = VOLUME_START
    fullscreen: bool = False
    save_prompt: int = 0
    player_mode: int = 0
    _fallback_font: Optional[pygame.font.Font] = field(default=None, repr=False, compare=False)

    def update_selection(self, mouse: tuple[int, int]) -> MainChoice:
        """Record which main-menu button the mouse is over and return it."""
        for choice, button in (
            (MainChoice.PLAY, self.play),
            (MainChoice.OPTIONS, self.options),
            (MainChoice.BEST_SCORES, self.best_scores),
            (MainChoice.HISTORY, self.history),
            (MainChoice.QUIT, self.quit),
        ):
            if button.hovered(mouse):
                self.selection = choice
                break
        else:
            self.selection = MainChoice.NONE
        return self.selection

    def _apply_volume(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(self.volume / MIXER_MAX_VOLUME)

    def raise_volume(self) -> int:
        """Turn the music up one step, at most to the maximum."""
        self.volume = min(self.volume + VOLUME_STEP, VOLUME_MAX)
        self._apply_volume()
        return self.volume

    def lower_volume(self) -> int:
        """Turn the music down one step, not below silence."""
        self.volume = max(self.volume - VOLUME_STEP, VOLUME_MIN)
        self._apply_volume()
        return self.volume

    def draw_main(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.background)
        for button in (self.play, self.options, self.best_scores, self.history, self.quit):
            button.draw(screen, mouse)

    def draw_options(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.options_background)
        for button in (self.volume_up, self.volume_down, self.windowed, self.fullscreen_button, self.back):
            button.draw(screen, mouse)

    def draw_save(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        """The 'save the game?' screen; the background and 'yes' only while prompting."""
        if self.save_prompt == 0:
            _draw_background(screen, self.save_backgrounds[0])
            self.yes.draw(screen, mouse)
        self.no.draw(screen, mouse)

    def draw_loading(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.save_backgrounds[1])
        self.load.draw(screen, mouse)
        self.new_game.draw(screen, mouse)

    def draw_players(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.player_backgrounds[0])
        self.solo.draw(screen, mouse)
        self.multi.draw(screen, mouse)

    def draw_choose_player(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.player_backgrounds[1])
        for button in (self.player_one, self.player_two, self.validate, self.player_back):
            button.draw(screen, mouse)

    def draw_score_list(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        _draw_background(screen, self.score_backgrounds[1])
        self.score_quit.draw(screen, mouse)
        self.score_back.draw(screen, mouse)

    def _text_font(self) -> pygame.font.Font:
        if self.font is not None:
            return self.font
        if self._fallback_font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fallback_font = pygame.font.Font(None, FONT_SIZE)
        return self._fallback_font

    def draw_name_entry(
        self, screen: pygame.Surface, mouse: tuple[int, int], entry: "NameEntry", now: int
    ) -> None:
        """Draw the name-entry screen with the typed text and blinking cursor."""
        _draw_background(screen, self.score_backgrounds[0])
        text = self._text_font().render(entry.display_text(now), False, self.text_color)
        screen.blit(text, self.name_position)
        self.score_validate.draw(screen, mouse)


def _image(path: Path) -> pygame.Surface:
    if not path.is_file():
        raise FileNotFoundError(f"Erreur chargement image : {path}")
    return pygame.image.load(str(path))


def _optional_image(path: Path) -> Optional[pygame.Surface]:
    try:
        return _image(path)
    except FileNotFoundError:
        return None


def _button(base: Path, normal: str, highlighted: str, position: tuple[int, int]) -> Button:
    first = _image(base / normal)
    second = _image(base / highlighted)
    return Button(first, second, pygame.Rect(*position, *first.get_size()))


def load_menu(root=".") -> Menu:
    """Load every menu image from ``root``; a missing button image raises FileNotFoundError."""
    base = Path(root)
    option = base / "option"
    save = base / "Sauv&charg"
    players = base / "M_joueur"
    scores = base / "meilleur_score"

    font_path = base / FONT_FILE
    font = None
    if font_path.is_file():
        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.Font(str(font_path), FONT_SIZE)

    menu = Menu(
        background=_optional_image(base / "menu" / "Bg_principale.png"),
        play=_button(base, "jouer1.png", "jouer2.png", (330, 175)),
        options=_button(base, "option1.png", "option2.png", (330, 285)),
        best_scores=_button(base, "meilleurs1.png", "meilleurs2.png", (330, 393)),
        history=_button(base, "historique1.png", "historique2.png", (330, 500)),
        quit=_button(base, "quitter1.png", "quitter2.png", (775, 500)),
        options_background=_optional_image(option / "bg4.png"),
        volume_up=_button(option, "augmenter1.png", "augmenter2.png", (360, 240)),
        volume_down=_button(option, "diminuer1.png", "diminuer2.png", (680, 240)),
        windowed=_button(option, "normal1.png", "normal2.png", (360, 460)),
        fullscreen_button=_button(option, "plein1.png", "plein2.png", (700, 460)),
        back=_button(option, "retour1.png", "retour2.png", (540, 570)),
        save_backgrounds=(_optional_image(save / "bg3.png"), _optional_image(save / "bg6.png")),
        yes=_button(save, "oui1.png", "oui2.png", (360, 460)),
        no=_button(save, "non1.png", "non2.png", (700, 460)),
        load=_button(save, "charger1.png", "charger2.png", (500, 200)),
        new_game=_button(save, "nouvelle1.png", "nouvelle2.png", (500, 460)),
        player_backgrounds=(_optional_image(players / "bg7.png"), _optional_image(players / "bg5.png")),
        solo=_button(players, "mono1.png", "mono2.png", (500, 200)),
        multi=_button(players, "multi1.png", "multi2.png", (500, 460)),
        player_one=_button(players, "haclia1.png", "haclia2.png", (700, 160)),
        player_two=_button(players, "haclios1.png", "haclios2.png", (350, 160)),
        validate=_button(players, "valider1.png", "valider2.png", (380, 500)),
        player_back=_button(players, "retour1.png", "retour2.png", (700, 500)),
        score_backgrounds=(_optional_image(scores / "bgg1.png"), _optional_image(scores / "bgg2.png")),
        score_validate=_button(scores, "v1.png", "v2.png", (520, 400)),
        score_quit=_button(scores, "quitter1.png", "quitter2.png", (400, 540)),
        score_back=_button(scores, "retour1.png", "retour2.png", (700, 540)),
        font=font,
    )

    music = base / MUSIC_FILE
    if pygame.mixer.get_init() and music.is_file():
        pygame.mixer.music.load(str(music))
        pygame.mixer.music.play(-1)
    menu._apply_volume()
    return menu


@dataclass
class NameEntry:
    """A line of typed text with a blinking cursor, finished by Return."""

    text: str = ""
    max_length: int = NAME_MAX_LENGTH
    cursor_visible: bool = True
    last_toggle: int = 0
    done: bool = False

    def handle_key(self, key: int, char: str = "") -> bool:
        """Apply a key press; ``char`` is the typed character. Returns whether entry is done."""
        if key == pygame.K_RETURN:
            self.done = True
        elif key == pygame.K_BACKSPACE and self.text:
            self.text = self.text[:-1]
        elif char and len(self.text) < self.max_length:
            c = char[0]
            if 32 <= ord(c) <= 126:
                self.text += c
        return self.done

    def display_text(self, now: int) -> str:
        """The text to show at ``now`` milliseconds, with the cursor when it is on."""
        if now - self.last_toggle > CURSOR_BLINK_MS:
            self.cursor_visible = not self.cursor_visible
            self.last_toggle = now
        return self.text + CURSOR if self.cursor_visible else self.text
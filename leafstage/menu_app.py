"""The menu program: navigates between the menu screens and starts the stage."""

from __future__ import annotations

import argparse
import subprocess
import sys
from enum import IntEnum
from pathlib import Path
from typing import Callable, Optional, Sequence

import pygame

from leafstage.menu import MainChoice, Menu, NameEntry, load_menu

SCREEN_SIZE = (1280, 768)
CAPTION = "Jeu"
DEFAULT_STAGE_DIR = Path("..") / "stage .1"
DEFAULT_STAGE_COMMAND = ("./prog",)
FRAME_DELAY_MS = 10


class Screen(IntEnum):
    MAIN = 0
    PLAYERS = 1
    OPTIONS = 2
    SAVE = 3
    LOADING = 4
    CHOOSE_PLAYER = 5
    NAME_ENTRY = 6
    SCORE_LIST = 7


class MenuApp:
    """Which menu screen is shown and what a left click on it does."""

    def __init__(
        self,
        menu: Menu,
        stage_dir=DEFAULT_STAGE_DIR,
        stage_command: Sequence[str] = DEFAULT_STAGE_COMMAND,
        on_display_mode: Optional[Callable[[bool], None]] = None,
        clock: Callable[[], int] = pygame.time.get_ticks,
    ) -> None:
        self.menu = menu
        self.stage_dir = Path(stage_dir)
        self.stage_command = tuple(stage_command)
        self.on_display_mode = on_display_mode
        self.clock = clock
        self.screen = Screen.MAIN
        self.quit = False
        self.name_entry = NameEntry()

    def _set_fullscreen(self, fullscreen: bool) -> None:
        if self.on_display_mode is not None:
            self.on_display_mode(fullscreen)
        self.menu.fullscreen = fullscreen

    def click(self, mouse: tuple[int, int]) -> Screen:
        """Apply a left click at ``mouse`` and return the screen now shown."""
        m = self.menu
        screen = self.screen
        if screen is Screen.MAIN:
            choice = m.update_selection(mouse)
            if choice is MainChoice.QUIT:
                self.quit = True
            elif choice is MainChoice.PLAY:
                self.screen = Screen.SAVE
            elif choice is MainChoice.BEST_SCORES:
                self.screen = Screen.SCORE_LIST
            elif choice is MainChoice.OPTIONS:
                self.screen = Screen.OPTIONS
        elif screen is Screen.PLAYERS:
            if m.solo.hovered(mouse) or m.multi.hovered(mouse):
                self.screen = Screen.CHOOSE_PLAYER
        elif screen is Screen.OPTIONS:
            if m.back.hovered(mouse):
                self.screen = Screen.MAIN
            if m.volume_up.hovered(mouse):
                m.raise_volume()
            if m.volume_down.hovered(mouse):
                m.lower_volume()
            if m.fullscreen_button.hovered(mouse) and not m.fullscreen:
                self._set_fullscreen(True)
            if m.windowed.hovered(mouse) and m.fullscreen:
                self._set_fullscreen(False)
        elif screen is Screen.SAVE:
            if m.no.hovered(mouse):
                self.screen = Screen.MAIN
            if m.yes.hovered(mouse):
                self.screen = Screen.LOADING
        elif screen is Screen.LOADING:
            if m.new_game.hovered(mouse):
                self.screen = Screen.PLAYERS
        elif screen is Screen.CHOOSE_PLAYER:
            if m.player_back.hovered(mouse):
                self.screen = Screen.MAIN
            if m.validate.hovered(mouse):
                self.launch_stage()
                self.quit = True
        elif screen is Screen.NAME_ENTRY:
            if m.score_validate.hovered(mouse):
                self.screen = Screen.SCORE_LIST
        elif screen is Screen.SCORE_LIST:
            if m.score_back.hovered(mouse):
                self.screen = Screen.MAIN
            if m.score_quit.hovered(mouse):
                self.quit = True
        return self.screen

    def draw(self, screen: pygame.Surface, mouse: tuple[int, int]) -> None:
        m = self.menu
        if self.screen is Screen.MAIN:
            m.draw_main(screen, mouse)
        elif self.screen is Screen.PLAYERS:
            m.draw_players(screen, mouse)
        elif self.screen is Screen.OPTIONS:
            m.draw_options(screen, mouse)
        elif self.screen is Screen.SAVE:
            m.draw_save(screen, mouse)
        elif self.screen is Screen.LOADING:
            m.draw_loading(screen, mouse)
        elif self.screen is Screen.CHOOSE_PLAYER:
            m.draw_choose_player(screen, mouse)
        elif self.screen is Screen.NAME_ENTRY:
            m.draw_name_entry(screen, mouse, self.name_entry, self.clock())
        elif self.screen is Screen.SCORE_LIST:
            m.draw_score_list(screen, mouse)

    def launch_stage(self) -> Optional[int]:
        """Run the stage program in its directory; returns its exit code, or None if it could not start."""
        try:
            completed = subprocess.run(list(self.stage_command), cwd=self.stage_dir, check=False)
        except OSError as exc:
            print(f"cannot start the stage: {exc}", file=sys.stderr)
            return None
        return completed.returncode


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Game menu.")
    parser.add_argument("--assets", default=".", help="directory holding the menu images")
    parser.add_argument("--stage-dir", default=str(DEFAULT_STAGE_DIR), help="directory of the stage program")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        try:
            pygame.mixer.init(44100, -16, 2, 4096)
        except pygame.error:
            pass
        pygame.display.set_mode(SCREEN_SIZE)
        pygame.display.set_caption(CAPTION)
        try:
            menu = load_menu(args.assets)
        except FileNotFoundError as exc:
            print(exc, file=sys.stderr)
            return 1

        def set_mode(fullscreen: bool) -> None:
            pygame.display.set_mode(SCREEN_SIZE, pygame.FULLSCREEN if fullscreen else 0)

        app = MenuApp(menu, args.stage_dir, on_display_mode=set_mode)
        while not app.quit:
            screen = pygame.display.get_surface()
            mouse = pygame.mouse.get_pos()
            app.draw(screen, mouse)
            pygame.display.flip()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    app.quit = True
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    app.click(event.pos)
                elif event.type == pygame.KEYDOWN and app.screen is Screen.NAME_ENTRY:
                    if app.name_entry.handle_key(event.key, event.unicode):
                        app.screen = Screen.SCORE_LIST
                if app.quit:
                    break
            pygame.time.delay(FRAME_DELAY_MS)
    finally:
        pygame.quit()
    return 0
import sys
import random
import pygame

import leaderboard
from config import (WINDOW_WIDTH, WINDOW_HEIGHT, BLACK, FPS, FRAME_MS, PAUSE_KEYS, get_control_key)
from game_over import GameOverScreen
from high_scores_screen import HighScoresScreen
from level_select import LevelSelectPrompt
from name_prompt import NamePrompt
from onscreen_controls import OnscreenControls
from options_menu import OptionsMenu, load_settings
from pause_menu import PauseMenu
from renderer import Renderer
from scheduler import CancelToken, FrameScheduler
from simulation import Simulation
from start_menu import StartMenu

# Screens the app can be on
START, PLAYING, PAUSED, NAME_ENTRY, GAME_OVER, SETTINGS, HIGH_SCORES = (
    'start', 'playing', 'paused', 'name_entry', 'game_over', 'settings', 'high_scores')


class BrickWallApp:
    """Screen state machine; ``step`` is driven once per frame by the scheduler."""

    def __init__(self, screen, rng=None):
        self.screen = screen
        self.rng = rng or random.Random()
        self.token = CancelToken()
        self.settings = load_settings()

        self.renderer = Renderer()
        self.start_menu = StartMenu()
        self.pause_menu = PauseMenu()
        self.options_menu = OptionsMenu(self.settings)
        self.high_scores = HighScoresScreen()
        self.name_prompt = None
        self.game_over = None

        self.state = START
        self.simulation = None
        self.level_select = None
        self.onscreen = None
        self._pending_outcome = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _set_state(self, state):
        print(f"[DEBUG] screen: {self.state} -> {state}")
        self.state = state

    def new_game(self):
        self._pending_outcome = None
        self.simulation = Simulation(rng=self.rng, on_round_over=self._on_round_over)
        self.level_select = LevelSelectPrompt(self.simulation)
        self.onscreen = OnscreenControls(self.simulation)
        self.onscreen.enabled = self.settings.get('show_onscreen_controls', False)
        self.start_menu.close()
        self._set_state(PLAYING)

    def to_start(self):
        self.simulation = None
        self.start_menu.open()
        self._set_state(START)

    def _on_round_over(self, outcome):
        self._pending_outcome = outcome

    def _finish_round(self):
        outcome, self._pending_outcome = self._pending_outcome, None
        if leaderboard.is_high_score(outcome.score):
            self.name_prompt = NamePrompt(outcome.score)
            self._set_state(NAME_ENTRY)
        else:
            self._show_game_over(outcome)

    def _show_game_over(self, outcome):
        self.game_over = GameOverScreen(outcome, self.rng)
        self._set_state(GAME_OVER)

    # ------------------------------------------------------------------
    # Per-state input
    # ------------------------------------------------------------------
    def _handle_play_events(self, events):
        sim = self.simulation
        for e in events:
            if self.level_select.handle_event(e):
                continue
            if self.onscreen.handle_event(e):
                continue
            if e.type == pygame.KEYDOWN:
                if e.key in PAUSE_KEYS:
                    sim.toggle_pause()
                    self.pause_menu.open()
                    self._set_state(PAUSED)
                    return
                if e.key == get_control_key('left'):
                    sim.set_direction('left')
                elif e.key == get_control_key('right'):
                    sim.set_direction('right')
                elif e.key == get_control_key('launch'):
                    sim.launch()
            elif e.type == pygame.KEYUP:
                for direction in ('left', 'right'):
                    if e.key == get_control_key(direction):
                        sim.release_direction(direction)
                # Fall back to the other key if it is still held
                pressed = pygame.key.get_pressed()
                for direction in ('left', 'right'):
                    if sim.intents.direction is None and pressed[get_control_key(direction)]:
                        sim.set_direction(direction)

    def _update(self, events, dt_ms=FRAME_MS):
        if self.state == START:
            choice = self.start_menu.update(events)
            if choice == "Play":
                self.new_game()
            elif choice == "High Scores":
                self.high_scores.open()
                self._set_state(HIGH_SCORES)
            elif choice == "Settings":
                self.options_menu.open()
                self._set_state(SETTINGS)
            elif choice == "Quit":
                self.token.cancel()

        elif self.state == SETTINGS:
            self.options_menu.update(events)
            if not self.options_menu.active:
                self.to_start()

        elif self.state == HIGH_SCORES:
            if self.high_scores.update(events):
                self.to_start()

        elif self.state == PLAYING:
            self._handle_play_events(events)
            if self.state == PLAYING:
                self.simulation.tick(dt_ms)
                if self._pending_outcome is not None:
                    self._finish_round()

        elif self.state == PAUSED:
            choice = self.pause_menu.update(events)
            if choice == "Resume":
                self.pause_menu.close()
                self.simulation.resume()
                self._set_state(PLAYING)
            elif choice == "Exit to Menu":
                self.pause_menu.close()
                self.to_start()

        elif self.state == NAME_ENTRY:
            for e in events:
                self.name_prompt.handle_event(e)
            if self.name_prompt.done:
                leaderboard.add_score_async({"name": self.name_prompt.result,
                                             "score": self.name_prompt.score,
                                             "date": leaderboard.now_ms()})
                self._show_game_over(self.simulation.board.outcome)
            elif self.name_prompt.canceled:
                self._show_game_over(self.simulation.board.outcome)

        elif self.state == GAME_OVER:
            choice = self.game_over.update(events)
            if choice == "Play Again":
                self.new_game()
            elif choice == "Main Menu":
                self.to_start()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _draw(self):
        self.screen.fill(BLACK)
        if self.state == START:
            self.start_menu.draw(self.screen)
        elif self.state == SETTINGS:
            self.options_menu.draw(self.screen)
        elif self.state == HIGH_SCORES:
            self.high_scores.draw(self.screen)
        else:
            self.renderer.draw(self.screen, self.simulation.snapshot())
            self.onscreen.draw(self.screen)
            self.level_select.draw(self.screen)
            if self.state == PAUSED:
                self.pause_menu.draw(self.screen)
            elif self.state == NAME_ENTRY:
                self.name_prompt.draw(self.screen)
            elif self.state == GAME_OVER:
                self.game_over.draw(self.screen)
        pygame.display.flip()

    def step(self, dt_ms):
        events = pygame.event.get()
        if any(e.type == pygame.QUIT for e in events):
            return False
        self._update(events, dt_ms)
        if self.token.cancelled:
            return False
        self._draw()
        return True

    def run(self):
        FrameScheduler(FPS).run(self.step, self.token)


def main():
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("Brick Wall")
    BrickWallApp(screen).run()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()

"""Draws a ``simulation.Snapshot`` onto a pygame surface.

The renderer never touches the live board; everything it needs arrives in the
snapshot so drawing can't disturb the simulation.
"""

import pygame

from board import RoundStatus
from config import (BOARD_WIDTH, BOARD_HEIGHT, BALL_RADIUS, WINDOW_WIDTH, WHITE, BLACK, YELLOW,
                    CYAN, PURPLE, BG, PANEL, GREY, get_control_key, get_key_name)
from utils import pixel_font, render_outline, lighter, darker

CRACK_COLOR = (20, 20, 20)
CRACK_WIDTH = 2
HUD_TOP = BOARD_HEIGHT
HUD_HEIGHT = 40


class Renderer:
    def __init__(self):
        self.hud_font = pixel_font(14)
        self.small_font = pixel_font(10)
        self.item_font = pixel_font(14)
        self.msg_font = pixel_font(32)

    # ------------------------------------------------------------------
    def draw(self, surface, snap):
        surface.fill(BG, pygame.Rect(0, 0, BOARD_WIDTH, BOARD_HEIGHT))
        for brick in snap.bricks:
            if brick.active:
                self._draw_brick(surface, brick)
        for item in snap.powerups:
            if item.active:
                self._draw_item(surface, item)
        self._draw_paddle(surface, snap)
        for ball in snap.balls:
            pos = (int(ball.x), int(ball.y))
            pygame.draw.circle(surface, WHITE, pos, BALL_RADIUS)
            pygame.draw.circle(surface, GREY, pos, BALL_RADIUS, 1)
        self._draw_hud(surface, snap)
        self._draw_overlay_text(surface, snap)

    # ------------------------------------------------------------------
    def _draw_brick(self, surface, brick):
        rect = pygame.Rect(int(brick.x), int(brick.y), int(brick.width), int(brick.height))
        pygame.draw.rect(surface, brick.color, rect)
        # bevel: light top/left, dark bottom/right
        pygame.draw.line(surface, lighter(brick.color), rect.topleft, (rect.right - 1, rect.top), 2)
        pygame.draw.line(surface, lighter(brick.color), rect.topleft, (rect.left, rect.bottom - 1), 2)
        pygame.draw.line(surface, darker(brick.color), (rect.left, rect.bottom - 1),
                         (rect.right - 1, rect.bottom - 1), 2)
        pygame.draw.line(surface, darker(brick.color), (rect.right - 1, rect.top),
                         (rect.right - 1, rect.bottom - 1), 2)
        if brick.cracked:
            points = [
                (rect.left + rect.width * 0.2, rect.top + 2),
                (rect.left + rect.width * 0.4, rect.centery),
                (rect.left + rect.width * 0.55, rect.top + rect.height * 0.35),
                (rect.left + rect.width * 0.8, rect.bottom - 2),
            ]
            pygame.draw.lines(surface, CRACK_COLOR, False, points, CRACK_WIDTH)

    def _draw_item(self, surface, item):
        rect = pygame.Rect(int(item.left), int(item.y), item.width, item.height)
        pygame.draw.rect(surface, item.type.color, rect, border_radius=6)
        pygame.draw.rect(surface, BLACK, rect, 2, border_radius=6)
        letter = render_outline(item.type.value, self.item_font, WHITE)
        surface.blit(letter, letter.get_rect(center=rect.center))

    def _draw_paddle(self, surface, snap):
        x, y, w, h = snap.paddle
        rect = pygame.Rect(int(x), int(y), int(w), int(h))
        fire = snap.fire_effect
        color = PURPLE if fire else CYAN
        pygame.draw.rect(surface, color, rect, border_radius=4)
        pygame.draw.rect(surface, darker(color, 80), rect, 2, border_radius=4)
        if fire:
            # gun nubs at both ends
            for nub_x in (rect.left + 6, rect.right - 12):
                pygame.draw.rect(surface, YELLOW, (nub_x, rect.top - 6, 6, 6))

    def _draw_hud(self, surface, snap):
        hud = pygame.Rect(0, HUD_TOP, WINDOW_WIDTH, HUD_HEIGHT)
        pygame.draw.rect(surface, PANEL, hud)
        pygame.draw.line(surface, GREY, hud.topleft, hud.topright, 2)

        left = render_outline(f"SCORE {snap.score}", self.hud_font, WHITE)
        surface.blit(left, left.get_rect(midleft=(12, hud.centery)))
        mid = render_outline(f"LEVEL {snap.level}", self.hud_font, YELLOW)
        surface.blit(mid, mid.get_rect(center=hud.center))
        right = render_outline(f"LIVES {snap.lives}", self.hud_font, WHITE)
        surface.blit(right, right.get_rect(midright=(hud.right - 12, hud.centery)))

        # Active effect timers, stacked in the top-right corner of the board
        y = 8
        for effect in snap.effects:
            secs = effect.remaining_ms / 1000
            text = f"{effect.type.description} {secs:.1f}s"
            if effect.shots_remaining is not None:
                text += f" ({effect.shots_remaining})"
            surf = render_outline(text, self.small_font, effect.type.color)
            surface.blit(surf, surf.get_rect(topright=(BOARD_WIDTH - 8, y)))
            y += surf.get_height() + 4

    def _draw_overlay_text(self, surface, snap):
        if snap.message:
            msg = render_outline(snap.message, self.msg_font, YELLOW, BLACK, 2)
            surface.blit(msg, msg.get_rect(center=(BOARD_WIDTH // 2, BOARD_HEIGHT // 2)))

        launch_key = get_key_name(get_control_key('launch'))
        if snap.status == RoundStatus.PRE_LAUNCH and not snap.message:
            prompt = render_outline(f"Press {launch_key} to start", self.hud_font, WHITE)
            surface.blit(prompt, prompt.get_rect(center=(BOARD_WIDTH // 2, BOARD_HEIGHT // 2 + 60)))

        fire = snap.fire_effect
        if fire and snap.status == RoundStatus.ACTIVE and fire.shots_remaining:
            hint = render_outline(f"{launch_key} to fire ({fire.shots_remaining})", self.small_font, PURPLE)
            surface.blit(hint, hint.get_rect(midbottom=(BOARD_WIDTH // 2, BOARD_HEIGHT - 4)))

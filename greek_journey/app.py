"""Pygame UI shell for the Greek Journey board game.

Game rules, decks and board geometry live in greek_journey/* (core modules);
this module only renders ``GameController.snapshot()`` and forwards keys.
"""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .board_layout import BOARD_EXTENT, BoardLayout, DecorationKind, pawn_offsets, path_points
from .clock import RealClock
from .game_core import GameMode, Phase, PlayerState
from .session import BoardSnapshot, GameConfig, GameController, build_game_controller, config_from_env

logger = logging.getLogger(__name__)

WINDOW_SIZE = (960, 720)
TARGET_FPS = 60
LOG_LEVEL_ENV = "GREEK_JOURNEY_LOG_LEVEL"

PLAYER_RGB: dict[str, tuple[int, int, int]] = {
    "indigo": (99, 102, 241),
    "rose": (244, 63, 94),
}

DECORATION_RGB: dict[DecorationKind, tuple[int, int, int]] = {
    DecorationKind.TREE: (136, 170, 119),
    DecorationKind.MOUNTAIN: (170, 187, 170),
    DecorationKind.CLOUD: (250, 250, 255),
    DecorationKind.TENT: (217, 136, 80),
    DecorationKind.FLOWER: (236, 122, 170),
}

GRADE_KEYS: dict[int, int] = {
    pygame.K_0: 0,
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_KP0: 0,
    pygame.K_KP1: 1,
    pygame.K_KP2: 2,
    pygame.K_KP3: 3,
}

GRADE_HINT = "0: верно +2  |  1 ошибка +1  |  2 ошибки 0  |  3+ ошибки -1"


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


@dataclass(frozen=True, slots=True)
class MenuItem:
    label: str
    action: Callable[[], None]
    detail: str = ""


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # Never pop the last/root screen; root handles its own quit/back behavior.
        if len(self._screens) > 1:
            self._screens.pop()

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
            _toggle_fullscreen()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


class MenuScreen:
    def __init__(self, app: App, title: str, items: list[MenuItem], *, is_root: bool = False) -> None:
        self._app = app
        self._title = title
        self._items = items
        self._selected = 0
        self._is_root = is_root
        self._title_font = pygame.font.Font(None, 42)
        self._item_font = pygame.font.Font(None, 32)
        self._hint_font = pygame.font.Font(None, 22)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_UP, pygame.K_w):
            self._move(-1)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self._move(1)
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self._activate()
        elif event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            self._back()

    def _move(self, delta: int) -> None:
        if not self._items:
            return
        self._selected = (self._selected + delta) % len(self._items)

    def _activate(self) -> None:
        if not self._items:
            return
        self._items[self._selected].action()

    def _back(self) -> None:
        if self._is_root:
            self._app.quit()
        else:
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill((241, 245, 249))

        frame = pygame.Rect(max(20, w // 8), max(20, h // 8), w - 2 * max(20, w // 8), h - 2 * max(20, h // 8))
        pygame.draw.rect(surface, (255, 255, 255), frame, border_radius=24)
        pygame.draw.rect(surface, (203, 213, 225), frame, 2, border_radius=24)

        title = self._title_font.render(self._title, True, (51, 65, 85))
        surface.blit(title, title.get_rect(midtop=(frame.centerx, frame.y + 24)))

        y = frame.y + 90
        row_h = 72
        for idx, item in enumerate(self._items):
            row = pygame.Rect(frame.x + 24, y, frame.w - 48, row_h - 10)
            selected = idx == self._selected
            bg = PLAYER_RGB["indigo"] if selected else (226, 232, 240)
            fg = (255, 255, 255) if selected else (30, 41, 59)
            pygame.draw.rect(surface, bg, row, border_radius=16)
            label = self._item_font.render(item.label, True, fg)
            surface.blit(label, (row.x + 16, row.y + 8))
            if item.detail:
                detail = self._hint_font.render(item.detail, True, fg)
                surface.blit(detail, (row.x + 16, row.y + 8 + label.get_height() + 2))
            y += row_h

        footer = "Enter: выбрать  |  Esc: выход  |  F11: весь экран"
        foot = self._hint_font.render(footer, True, (100, 116, 139))
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 12)))


class BoardScreen:
    """Board + control panel for a running game."""

    def __init__(self, app: App, *, controller: GameController) -> None:
        self._app = app
        self._controller = controller
        self._layout: BoardLayout | None = None

        self._small_font = pygame.font.Font(None, 24)
        self._tiny_font = pygame.font.Font(None, 18)
        self._mid_font = pygame.font.Font(None, 40)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        c = self._controller

        if event.key == pygame.K_ESCAPE:
            c.reset()
            self._app.pop()
            return
        if event.key == pygame.K_r:
            c.restart()
            return

        phase = c.phase
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            if phase is Phase.TASK_REVEAL:
                c.request_task()
            elif phase is Phase.ANSWER_CHECK:
                c.reveal()
            elif phase is Phase.WIN:
                c.reset()
                self._app.pop()
            return

        errors = GRADE_KEYS.get(event.key)
        if errors is not None and phase is Phase.MOVEMENT:
            c.grade(errors)

    def render(self, surface: pygame.Surface) -> None:
        self._controller.update()
        snap = self._controller.snapshot()
        if self._layout is None or self._layout.seed != snap.layout_seed:
            self._layout = self._controller.layout()

        w, h = surface.get_size()
        surface.fill((241, 245, 249))

        panel_h = max(180, h // 3)
        board_side = max(120, min(w - 40, h - panel_h - 40))
        board = pygame.Rect((w - board_side) // 2, 16, board_side, board_side)
        self._draw_board(surface, board, snap)

        panel = pygame.Rect(20, board.bottom + 12, w - 40, h - board.bottom - 24)
        self._draw_panel(surface, panel, snap)

        if snap.winner is not None:
            self._draw_winner(surface, snap.winner)

    def _to_screen(self, rect: pygame.Rect, x: float, y: float) -> tuple[int, int]:
        return int(rect.x + x / BOARD_EXTENT * rect.w), int(rect.y + y / BOARD_EXTENT * rect.h)

    def _draw_board(self, surface: pygame.Surface, rect: pygame.Rect, snap: BoardSnapshot) -> None:
        assert self._layout is not None
        layout = self._layout
        unit = rect.w / BOARD_EXTENT

        pygame.draw.rect(surface, (238, 245, 230), rect, border_radius=24)
        pygame.draw.rect(surface, (180, 150, 110), rect, 3, border_radius=24)

        for d in layout.decorations:
            cx, cy = self._to_screen(rect, d.x, d.y)
            size = max(3, int(4.0 * d.scale * unit))
            color = DECORATION_RGB[d.kind]
            if d.kind is DecorationKind.TREE:
                pygame.draw.polygon(surface, color, [(cx, cy - size), (cx - size, cy + size), (cx + size, cy + size)])
            elif d.kind is DecorationKind.MOUNTAIN:
                pygame.draw.polygon(
                    surface, color, [(cx, cy - size), (cx - 2 * size, cy + size), (cx + 2 * size, cy + size)]
                )
            elif d.kind is DecorationKind.CLOUD:
                pygame.draw.ellipse(surface, color, pygame.Rect(cx - 2 * size, cy - size // 2, 4 * size, size))
            elif d.kind is DecorationKind.TENT:
                pygame.draw.polygon(surface, color, [(cx, cy - size), (cx - size, cy + size), (cx + size, cy + size)], 2)
            else:
                pygame.draw.circle(surface, color, (cx, cy), max(2, size // 2))

        points = [self._to_screen(rect, x, y) for x, y in path_points(layout)]
        if len(points) >= 2:
            pygame.draw.lines(surface, (212, 203, 163), False, points, max(4, int(4 * unit)))
            pygame.draw.lines(surface, (166, 152, 117), False, points, max(1, int(unit)))

        for node in layout.nodes:
            cx, cy = self._to_screen(rect, node.x, node.y)
            fill, stroke, radius = (255, 255, 255), (166, 152, 117), 3.0
            if node.is_start:
                fill, stroke, radius = (187, 247, 208), (34, 197, 94), 4.0
            if node.is_finish:
                fill, stroke, radius = (254, 240, 138), (234, 179, 8), 5.0
            r = max(4, int(radius * unit))
            pygame.draw.circle(surface, fill, (cx, cy), r)
            pygame.draw.circle(surface, stroke, (cx, cy), r, 2)
            if not node.is_finish:
                label = self._tiny_font.render(str(node.index), True, (156, 163, 175))
                surface.blit(label, label.get_rect(midtop=(cx, cy + r + 1)))

        offsets = pawn_offsets((snap.players[0].position, snap.players[1].position))
        for player, (ox, oy) in zip(snap.players, offsets):
            node = layout.node_for(player.position)
            cx, cy = self._to_screen(rect, node.x + ox, node.y + oy)
            r = max(8, int(3.5 * unit))
            rgb = PLAYER_RGB.get(player.color, (100, 100, 100))
            if player.id == snap.current_player_index and snap.winner is None:
                pygame.draw.circle(surface, rgb, (cx, cy), r + 5, 2)
            pygame.draw.circle(surface, rgb, (cx, cy), r)
            pygame.draw.circle(surface, (255, 255, 255), (cx, cy), r, 2)
            num = self._small_font.render(str(player.id + 1), True, (255, 255, 255))
            surface.blit(num, num.get_rect(center=(cx, cy)))

    def _draw_panel(self, surface: pygame.Surface, rect: pygame.Rect, snap: BoardSnapshot) -> None:
        pygame.draw.rect(surface, (255, 255, 255), rect, border_radius=20)
        pygame.draw.rect(surface, (226, 232, 240), rect, 1, border_radius=20)

        player_rgb = PLAYER_RGB.get(snap.current_player.color, (100, 100, 100))
        header = self._small_font.render(f"Ход игрока: {snap.current_player.name}", True, player_rgb)
        surface.blit(header, (rect.x + 16, rect.y + 12))
        if snap.phase is not Phase.TASK_REVEAL:
            checker = self._small_font.render(f"Проверяет: {snap.checker.name}", True, (148, 163, 184))
            surface.blit(checker, checker.get_rect(topright=(rect.right - 16, rect.y + 12)))

        y = rect.y + 48
        lines: list[tuple[str, pygame.font.Font, tuple[int, int, int]]] = []
        if snap.phase is Phase.TASK_REVEAL:
            lines.append(("Enter: получить задание", self._mid_font, player_rgb))
        elif snap.phase in (Phase.ANSWER_CHECK, Phase.MOVEMENT) and snap.prompt is not None:
            lines.append((snap.prompt_label or "", self._tiny_font, (148, 163, 184)))
            lines.append((snap.prompt, self._mid_font, (30, 41, 59)))
            if snap.answer is None:
                lines.append(("Enter: показать ответ", self._small_font, (71, 85, 105)))
            else:
                lines.append((f"Правильный ответ: {snap.answer}", self._mid_font, (22, 101, 52)))
                if not snap.turn_switch_pending:
                    lines.append((GRADE_HINT, self._small_font, (71, 85, 105)))

        for text, font, color in lines:
            fitted = _fit_label(font, text, rect.w - 32)
            img = font.render(fitted, True, color)
            surface.blit(img, (rect.x + 16, y))
            y += img.get_height() + 10

        foot = self._tiny_font.render("Esc: выбор режима  |  R: заново  |  F11: весь экран", True, (148, 163, 184))
        surface.blit(foot, foot.get_rect(bottomleft=(rect.x + 16, rect.bottom - 8)))

    def _draw_winner(self, surface: pygame.Surface, winner: PlayerState) -> None:
        w, h = surface.get_size()
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        box = pygame.Rect(w // 2 - 220, h // 2 - 110, 440, 220)
        pygame.draw.rect(surface, (255, 255, 255), box, border_radius=24)
        title = self._mid_font.render("Συγχαρητήρια!", True, (30, 41, 59))
        surface.blit(title, title.get_rect(midtop=(box.centerx, box.y + 24)))
        name = self._mid_font.render(f"Победитель: {winner.name}", True, PLAYER_RGB.get(winner.color, (0, 0, 0)))
        surface.blit(name, name.get_rect(center=box.center))
        hint = self._small_font.render("Enter: новая игра", True, (71, 85, 105))
        surface.blit(hint, hint.get_rect(midbottom=(box.centerx, box.bottom - 20)))


def _fit_label(font: pygame.font.Font, label: str, max_width: int) -> str:
    if max_width <= 0:
        return ""
    if font.size(label)[0] <= max_width:
        return label
    clipped = label
    while clipped and font.size(f"{clipped}...")[0] > max_width:
        clipped = clipped[:-1]
    return f"{clipped}..." if clipped else "..."


def _toggle_fullscreen() -> None:
    try:
        pygame.display.toggle_fullscreen()
    except pygame.error as exc:
        logger.warning("fullscreen toggle unavailable: %s", exc)


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING"
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    mode: GameMode | None = None,
    seed: int | None = None,
    config: GameConfig | None = None,
) -> int:
    _configure_logging()
    pygame.init()

    pygame.display.set_caption("Greek Grammar Journey")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    controller = build_game_controller(
        clock=RealClock(),
        seed=_new_seed() if seed is None else int(seed),
        config=config_from_env() if config is None else config,
    )
    board = BoardScreen(app, controller=controller)

    def open_mode(selected: GameMode) -> None:
        if not controller.select_mode(selected):
            controller.new_game(selected)
        app.push(board)

    items = [MenuItem(m.title, lambda m=m: open_mode(m), m.description) for m in GameMode]
    items.append(MenuItem("Выход", app.quit))
    app.push(MenuScreen(app, "Выбери режим игры", items, is_root=True))
    if mode is not None:
        open_mode(mode)

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0

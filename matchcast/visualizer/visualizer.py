# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Optional pygame window that follows a running match."""
from typing import Callable, List, Optional, Tuple

try:
    import pygame
except Exception:
    pygame = None

from matchcast.engine.match_engine import MatchSimulationEngine
from matchcast.engine.state import BallPosition, MatchState


def _ball_to_screen(ball: BallPosition, pitch_rect: "pygame.Rect") -> Tuple[int, int]:
    """Map the percentage ball coordinates onto the drawn pitch.

    Parameters
    ----------
    ball : BallPosition
        Ball position with both axes on a 0-100 scale.
    pitch_rect : pygame.Rect
        Screen rectangle occupied by the pitch.

    Returns
    -------
    Tuple[int, int]
        Pixel coordinates of the ball centre.
    """
    sx = pitch_rect.left + int(ball.x / 100.0 * pitch_rect.width)
    sy = pitch_rect.top + int(ball.y / 100.0 * pitch_rect.height)
    return sx, sy


def _hex_to_rgb(value: str, fallback: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Convert a ``#RRGGBB`` kit colour to an RGB tuple.

    Parameters
    ----------
    value : str
        Hex colour string.
    fallback : Tuple[int, int, int]
        Colour returned when ``value`` cannot be parsed.

    Returns
    -------
    Tuple[int, int, int]
        Parsed colour.
    """
    text = value.lstrip("#")
    if len(text) != 6:
        return fallback
    try:
        return tuple(int(text[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError:
        return fallback


def _button_label(state: MatchState, engine: MatchSimulationEngine) -> Optional[str]:
    """Return the label of the control button for the current match state.

    Parameters
    ----------
    state : MatchState
        Snapshot being drawn.
    engine : MatchSimulationEngine
        Engine whose clock status decides between start and pause.

    Returns
    -------
    Optional[str]
        ``None`` once the match is over.
    """
    if state.is_full_time:
        return None
    if state.is_paused:
        return "Resume"
    if engine.is_running:
        return "Pause"
    return "Start Match"


def start_visualizer(
    engine: MatchSimulationEngine,
    screen_size: Tuple[int, int] = (1050, 680),
    fps: int = 30,
    on_close: Optional[Callable[[], None]] = None,
) -> None:
    """Start a pygame visualizer for the match engine.

    Draws the pitch, the ball, the score, the clock and the latest commentary,
    with a single button cycling through Start, Pause and Resume. If
    ``pygame`` is not installed the function returns immediately.

    Parameters
    ----------
    engine : MatchSimulationEngine
        Engine to observe and control.
    screen_size : Tuple[int, int]
        Initial window size in pixels.
    fps : int
        Redraw rate.
    on_close : Optional[Callable[[], None]]
        Called when the window is closed; defaults to stopping the engine.
    """
    if pygame is None:
        return

    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption("Matchcast")
    clock = pygame.time.Clock()

    GREEN = (38, 160, 72)
    LINE = (245, 245, 245)
    BALL = (245, 245, 245)
    TEXT = (235, 235, 235)
    HIGHLIGHT = (250, 215, 80)

    font = pygame.font.SysFont(None, 20)
    big_font = pygame.font.SysFont(None, 32)

    button_w, button_h = 140, 36
    button_color = (70, 160, 70)
    button_hover = (90, 190, 90)
    hud_height = 60
    feed_height = 150

    running = True
    while running:
        state = engine.get_state()
        label = _button_label(state, engine)
        mouse_pos = pygame.mouse.get_pos()
        button_rect = pygame.Rect(screen_size[0] - button_w - 10, 12, button_w, button_h)

        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_q):
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen_size = (event.w, event.h)
                screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if label is not None and button_rect.collidepoint(event.pos):
                    if label == "Resume":
                        engine.resume()
                    elif label == "Pause":
                        engine.pause()
                    else:
                        engine.start()

        screen.fill((15, 15, 25))

        pitch_rect = pygame.Rect(
            20,
            hud_height,
            screen_size[0] - 40,
            max(100, screen_size[1] - hud_height - feed_height - 10),
        )
        pygame.draw.rect(screen, GREEN, pitch_rect)
        pygame.draw.rect(screen, LINE, pitch_rect, 3)
        pygame.draw.line(screen, LINE, (pitch_rect.centerx, pitch_rect.top), (pitch_rect.centerx, pitch_rect.bottom), 2)
        pygame.draw.circle(screen, LINE, pitch_rect.center, int(pitch_rect.height * 0.14), 2)

        box_w = int(pitch_rect.width * 0.16)
        box_h = int(pitch_rect.height * 0.6)
        box_y = pitch_rect.centery - box_h // 2
        pygame.draw.rect(screen, LINE, (pitch_rect.left, box_y, box_w, box_h), 2)
        pygame.draw.rect(screen, LINE, (pitch_rect.right - box_w, box_y, box_w, box_h), 2)

        home_color = _hex_to_rgb(state.home_team.color, (200, 30, 30))
        away_color = _hex_to_rgb(state.away_team.color, (30, 90, 200))
        attacking = home_color if state.possession.home >= state.possession.away else away_color
        bx, by = _ball_to_screen(state.ball_position, pitch_rect)
        pygame.draw.circle(screen, attacking, (bx, by), 10)
        pygame.draw.circle(screen, BALL, (bx, by), 6)

        score_text = (
            f"{state.home_team.short_name} {state.home_score} - {state.away_score} {state.away_team.short_name}"
        )
        screen.blit(big_font.render(score_text, True, TEXT), (20, 10))
        status = f"{state.current_minute}'  {state.phase.replace('_', ' ')}"
        if state.is_paused:
            status += "  (paused)"
        possession = f"Possession {state.possession.home:.0f}% - {state.possession.away:.0f}%"
        screen.blit(font.render(status, True, TEXT), (20, 38))
        screen.blit(font.render(possession, True, TEXT), (260, 38))

        if label is not None:
            hover = button_rect.collidepoint(mouse_pos)
            pygame.draw.rect(screen, button_hover if hover else button_color, button_rect, border_radius=6)
            text = font.render(label, True, (255, 255, 255))
            screen.blit(
                text,
                (
                    button_rect.x + (button_rect.w - text.get_width()) // 2,
                    button_rect.y + (button_rect.h - text.get_height()) // 2,
                ),
            )

        lines: List = engine.get_commentaries()[-7:]
        base_y = pitch_rect.bottom + 10
        for idx, line in enumerate(reversed(lines)):
            colour = HIGHLIGHT if line.is_highlight else TEXT
            screen.blit(font.render(f"{line.minute}' {line.text}", True, colour), (20, base_y + idx * 20))

        pygame.display.flip()
        clock.tick(fps)

    if on_close is not None:
        on_close()
    else:
        engine.stop()
    pygame.quit()

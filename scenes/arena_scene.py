"""
scenes/arena_scene.py — Match view

Draws the published snapshot as flat rectangles and feeds keyboard
state into the session.  Between rounds it shows the result for
``[match] round_end_pause`` seconds, then starts the next round.

Controls:
  P1  ←/→  ↑/Space  E attack  Q special
  P2  A/D  W        F attack  G special
  P3  J/L  I        O attack  P special
  Escape = leave the match
  Tab    = toggle the DevLog overlay
  F5     = reload data/tuning.toml
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App
from core import tuning
from core.tuning import get as _tun
from components import PLAYING, ROUND_END, GAME_OVER
from components.dev_log import DevLog
from logic.input_manager import InputManager
from logic.session import MatchSession

# ── UI constants ─────────────────────────────────────────────────────
_BG = (22, 18, 40)
_PLATFORM = (120, 90, 60)
_PLATFORM_MAIN = (150, 110, 70)
_TEXT = (230, 230, 230)
_DIM = (140, 140, 160)
_FLASH = (255, 255, 255)
_STUN = (255, 217, 61)


class ArenaScene(Scene):
    def __init__(self, session: MatchSession):
        self.session = session
        self.input = InputManager()
        self.pause_left = 0.0
        self.show_log = False
        self.banner = ""

    def on_enter(self, app: App):
        self.session.subscribe("RoundEnded", self._on_round_end)
        self.session.subscribe("MatchEnded", self._on_match_end)

    def on_exit(self, app: App):
        self.input.release_all()
        self.session.cancel()

    # ── Notifications ────────────────────────────────────────────────

    def _name(self, eid) -> str:
        view = self.session.snapshot().fighter(eid) if eid is not None else None
        return view.profile.name if view else "Nobody"

    def _on_round_end(self, ev):
        self.pause_left = float(_tun("match", "round_end_pause", 3.0))
        self.banner = ("Draw!" if ev.winner_id is None
                       else f"{self._name(ev.winner_id)} wins round {ev.round}!")

    def _on_match_end(self, ev):
        self.banner = f"{self._name(ev.winner_id)} wins the match!"

    # ── Scene API ────────────────────────────────────────────────────

    def handle_event(self, event, app: App):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            app.pop_scene()
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_TAB:
            self.show_log = not self.show_log
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
            tuning.reload()
            return
        if event.type == pygame.WINDOWFOCUSLOST:
            self.input.release_all()
            return
        self.input.feed(event)

    def update(self, delta_ms: float, app: App):
        if self.session.cancelled:
            return
        self.session.advance(delta_ms, self.input.actions())
        if self.session.match.phase == ROUND_END:
            self.pause_left -= delta_ms / 1000.0
            if self.pause_left <= 0:
                self.banner = ""
                self.session.next_round()

    def draw(self, surface: pygame.Surface, app: App):
        snap = self.session.snapshot()
        surface.fill(_BG)

        for p in snap.platforms:
            pygame.draw.rect(surface, _PLATFORM_MAIN if p.is_main else _PLATFORM,
                             (p.x, p.y, p.width, p.height))

        for d in snap.decoys:
            ghost = pygame.Surface((46, 50), pygame.SRCALPHA)
            ghost.fill((*d.color, int(120 * d.alpha)))
            surface.blit(ghost, (d.x - 23, d.y - 25))

        for f in snap.fighters:
            if not f.alive:
                continue
            flashing = f.hit_flash > 0 and int(f.hit_flash) % 4 < 2
            color = _FLASH if flashing else f.profile.color
            rect = pygame.Rect(int(f.x), int(f.y), int(f.width), int(f.height))
            pygame.draw.rect(surface, color, rect)
            eye_x = rect.centerx + (10 if f.facing == "right" else -10)
            pygame.draw.circle(surface, (20, 20, 20), (eye_x, rect.y + 16), 4)
            if f.stun > 0:
                pygame.draw.rect(surface, _STUN, rect, 2)
            app.draw_text(surface, f.name, rect.x, rect.y - 16, _DIM)

        for p in snap.particles:
            size = max(1, int(p.size * p.life / max(p.max_life, 1.0)))
            pygame.draw.circle(surface, p.color, (int(p.x), int(p.y)), size)

        self._draw_hud(surface, app, snap)
        if self.show_log:
            self._draw_log(surface, app)

    # ── HUD ──────────────────────────────────────────────────────────

    def _draw_hud(self, surface, app: App, snap):
        m = snap.match
        app.draw_text(surface, f"Round {m.round}   {int(m.timer + 0.999):>2}s",
                      12, 10, _TEXT)
        x = 12
        for f, wins in zip(snap.fighters, m.wins):
            label = f"{f.name} {f.profile.name}  lives {f.lives}  wins {wins}"
            x = app.draw_text(surface, label, x, 30, f.profile.color).right + 18

        if m.phase in (ROUND_END, GAME_OVER) and self.banner:
            img = app.font_lg.render(self.banner, True, _TEXT)
            surface.blit(img, img.get_rect(center=(surface.get_width() // 2, 120)))
        if m.phase == GAME_OVER:
            app.draw_text(surface, "Esc to quit", surface.get_width() // 2 - 44, 150, _DIM)
        elif m.phase == PLAYING and m.round == 1 and m.timer > 57:
            app.draw_text(surface, "Knock everyone off the stage!",
                          surface.get_width() // 2 - 120, 120, _DIM)

    def _draw_log(self, surface, app: App):
        log = self.session.world.res(DevLog)
        if log is None:
            return
        y = surface.get_height() - 14 * 12 - 8
        for e in log.recent(12):
            app.draw_text(surface, f"{e['t']:6.1f} {e['name']:<8} {e['cat']:<8} {e['msg']}",
                          12, y, _DIM)
            y += 14

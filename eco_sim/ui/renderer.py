# eco_sim/ui/renderer.py
from __future__ import annotations
from typing import List, Optional, Tuple
import pygame
from ..sim.config import HERBIVORE, PREDATOR, HUNGER, WORLD, HungerConfig
from ..sim.models import Activity

# ---------- Colors / Theme ----------
BG_COLOR     = (14,16,20)
GRID_COLOR   = (35,40,48)
LAND_COLOR   = (58,92,52)
WATER_COLOR  = (40,90,170)
PLANT_COLOR  = (60,200,90)
SOIL_COLOR   = (139,100,60)     # foraged ground
CARCASS_COLOR= (120,40,40)      # where a predator ate
PANEL_BG     = (10,12,16)

# Top bar colors
TOPBAR_BG    = (24,26,32)
TOPBAR_LINE  = (54,58,66)

# Herbivores shade by hunger, predators stay one color
SHEEP_HEALTHY  = (240,240,240)
SHEEP_HUNGRY   = (240,220,60)
SHEEP_CRITICAL = (230,60,60)
WOLF_COLOR     = (110,70,40)
OUTLINE_COLOR  = (20,20,24)

SPECIES_SWATCH = {HERBIVORE: SHEEP_HEALTHY, PREDATOR: WOLF_COLOR}

# ---------- Layout knobs ----------
TOPBAR_HEIGHT    = 140
HUD_PAD_X        = 12
HUD_PAD_Y        = 10
PANEL_PADDING    = 12
SECTION_GAP      = 10
HISTORY_LEN      = 240      # samples kept for the population chart

def _creature_color(c, hunger: HungerConfig = HUNGER) -> Tuple[int, int, int]:
    if c.species_id == PREDATOR:
        return WOLF_COLOR
    if c.hunger > hunger.critical_above:
        return SHEEP_CRITICAL
    if c.hunger > hunger.hungry_above:
        return SHEEP_HUNGRY
    return SHEEP_HEALTHY

class Renderer:
    def __init__(self, screen, world_rect: pygame.Rect, panel_rect: pygame.Rect,
                 map_size: int = WORLD.map_size, font_name="Menlo"):
        self.screen = screen
        self.map_size = int(map_size)
        self.topbar_height = TOPBAR_HEIGHT
        self.resize(world_rect, panel_rect)

        self.font = pygame.font.SysFont(font_name, 14)
        self.bigfont = pygame.font.SysFont(font_name, 18, bold=True)

        self.show_legend = True
        self.history: List[Tuple[int, ...]] = []   # (sheep, wolves, plants) per sample

    def resize(self, world_rect: pygame.Rect, panel_rect: pygame.Rect):
        """Update layout rects after a window resize. The world area stays square."""
        self.panel_rect_outer = panel_rect
        self.panel_content = self.panel_rect_outer.inflate(-2*PANEL_PADDING, -2*PANEL_PADDING)
        avail_h = max(0, world_rect.h - self.topbar_height)
        side = max(1, min(world_rect.w, avail_h))
        self.world_rect = pygame.Rect(world_rect.x, world_rect.y + self.topbar_height, side, side)

    # ---------- coordinate helpers ----------
    @property
    def cell_px(self) -> float:
        return self.world_rect.w / (2 * self.map_size)

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        # north up: grid y grows toward the top of the screen
        m, s = self.map_size, self.cell_px
        sx = self.world_rect.x + (x + m) * s
        sy = self.world_rect.y + (m - 1 - y) * s
        return pygame.Rect(int(sx), int(sy), max(1, int(s + 0.999)), max(1, int(s + 0.999)))

    def cell_center(self, x: int, y: int) -> Tuple[int, int]:
        return self.cell_rect(x, y).center

    def screen_to_cell(self, px: int, py: int) -> Optional[Tuple[int, int]]:
        """Inverse of cell_rect; None when the point is outside the world area."""
        if not self.world_rect.collidepoint(px, py):
            return None
        m, s = self.map_size, self.cell_px
        x = int((px - self.world_rect.x) // s) - m
        y = m - 1 - int((py - self.world_rect.y) // s)
        if not (-m <= x < m and -m <= y < m):
            return None
        return x, y

    # ---------- top bar ----------
    def _draw_topbar(self):
        scr = self.screen.get_rect()
        bar = pygame.Rect(0, 0, scr.w, self.topbar_height)
        pygame.draw.rect(self.screen, TOPBAR_BG, bar)
        pygame.draw.line(self.screen, TOPBAR_LINE, (0, self.topbar_height), (scr.w, self.topbar_height), 1)

    # ---------- world ----------
    def _draw_terrain(self, live):
        pygame.draw.rect(self.screen, LAND_COLOR, self.world_rect)
        for x, y in live.water_cells():
            pygame.draw.rect(self.screen, WATER_COLOR, self.cell_rect(x, y))
        if self.cell_px >= 8:
            rx, ry, rw, rh = self.world_rect
            for k in range(2 * self.map_size + 1):
                off = int(k * self.cell_px)
                pygame.draw.line(self.screen, GRID_COLOR, (rx + off, ry), (rx + off, ry + rh), 1)
                pygame.draw.line(self.screen, GRID_COLOR, (rx, ry + off), (rx + rw, ry + off), 1)
        pygame.draw.rect(self.screen, (70,75,85), self.world_rect, 2)

    def _draw_creature(self, c, hunger: HungerConfig = HUNGER):
        """
        Draw one creature:
         - fill by species (sheep shade white -> yellow -> red with hunger)
         - adults full size, babies smaller
         - dim outline while digesting or stunned, ring while in breeding cooldown
        """
        cx, cy = self.cell_center(c.x, c.y)
        r = max(2, int(self.cell_px * (0.42 if c.is_adult else 0.26)))
        pygame.draw.circle(self.screen, _creature_color(c, hunger), (cx, cy), r)
        pygame.draw.circle(self.screen, OUTLINE_COLOR, (cx, cy), r, 1)
        if c.activity in (Activity.DIGESTING, Activity.BERRY_STUNNED):
            pygame.draw.circle(self.screen, (150,150,160), (cx, cy), max(1, r // 2))
        elif c.in_cooldown():
            pygame.draw.circle(self.screen, (230,120,200), (cx, cy), r + 2, 1)

    def _draw_legend(self):
        """Compact legend in the lower-left of the world region."""
        pad = 8
        w, h = 210, 142
        lx = self.world_rect.x + pad
        ly = self.world_rect.bottom - h - pad
        rect = pygame.Rect(lx, ly, w, h)
        pygame.draw.rect(self.screen, (18,20,24), rect)
        pygame.draw.rect(self.screen, (80,85,95), rect, 1)

        y = ly + 6
        self.screen.blit(self.bigfont.render("Legend", True, (230,230,235)), (lx+6, y))
        y += 22

        def row(label, color):
            nonlocal y
            pygame.draw.rect(self.screen, color, (lx + 8, y + 3, 16, 10))
            self.screen.blit(self.font.render(label, True, (210,210,220)), (lx+30, y))
            y += 16

        row("Sheep (healthy)", SHEEP_HEALTHY)
        row("Sheep (hungry / critical)", SHEEP_CRITICAL)
        row("Wolf", WOLF_COLOR)
        row("Plant", PLANT_COLOR)
        row("Exhausted soil", SOIL_COLOR)
        row("Carcass", CARCASS_COLOR)

    def draw_world(self, live):
        self._draw_topbar()
        self._draw_terrain(live)
        s = self.cell_px
        for m in live.soil_markers():
            col = CARCASS_COLOR if m.cause == "carcass" else SOIL_COLOR
            pygame.draw.rect(self.screen, col, self.cell_rect(m.x, m.y).inflate(-int(s * 0.2), -int(s * 0.2)))
        for p in live.plants():
            pygame.draw.circle(self.screen, PLANT_COLOR, self.cell_center(p.x, p.y), max(2, int(s * 0.22)))
        for c in live.creatures():
            self._draw_creature(c, live.cfg.hunger)
        if self.show_legend:
            self._draw_legend()

    # ---------- population panel ----------
    def record_history(self, live):
        counts = live.current_counts()
        self.history.append((counts.get(HERBIVORE, 0), counts.get(PREDATOR, 0), len(live.plants())))
        if len(self.history) > HISTORY_LEN:
            del self.history[:len(self.history) - HISTORY_LEN]

    def _draw_history(self, box: pygame.Rect):
        pygame.draw.rect(self.screen, (25,30,36), box)
        if len(self.history) < 2:
            return
        peak = max(1, max(max(h) for h in self.history))
        series = ((0, SHEEP_HEALTHY), (1, WOLF_COLOR), (2, PLANT_COLOR))
        n = len(self.history)
        for idx, col in series:
            pts = [
                (box.x + int(box.w * i / (n - 1)), box.bottom - 2 - int((box.h - 4) * h[idx] / peak))
                for i, h in enumerate(self.history)
            ]
            pygame.draw.lines(self.screen, col, False, pts, 2)
        self.screen.blit(self.font.render(f"max {peak}", True, (160,165,175)), (box.x + 4, box.y + 2))

    def _draw_bar(self, x, y, w, label, parts):
        """Stacked horizontal bar of (count, color) parts."""
        total = sum(n for n, _ in parts)
        self.screen.blit(self.font.render(label, True, (200,205,215)), (x, y))
        y += 16
        pygame.draw.rect(self.screen, (25,30,36), (x, y, w, 12))
        if total:
            off = 0
            for n, col in parts:
                seg = int(w * n / total)
                pygame.draw.rect(self.screen, col, (x + off, y, seg, 12))
                off += seg
        return y + 18

    def draw_panel(self, live):
        pr = self.panel_rect_outer
        pc = self.panel_content
        pygame.draw.rect(self.screen, PANEL_BG, pr)
        pygame.draw.rect(self.screen, (70,75,85), pr, 2)

        self.screen.blit(self.bigfont.render("Population", True, (220,220,230)), (pc.x, pc.y))
        y = pc.y + 26

        counts = live.current_counts()
        for sid in sorted(live.cfg.species):
            ctr = live.stats.counters(sid)
            pygame.draw.rect(self.screen, SPECIES_SWATCH.get(sid, (160,160,160)), (pc.x, y + 4, 16, 10))
            line = (f"{live.species_name(sid)}: {counts.get(sid, 0)}  born {ctr.born}  "
                    f"total {ctr.total_ever}")
            self.screen.blit(self.font.render(line, True, (190,195,205)), (pc.x + 24, y))
            y += 18
            deaths = (f"   starved {ctr.deaths.get('starved', 0)}  drowned {ctr.deaths.get('drowned', 0)}  "
                      f"eaten {ctr.deaths.get('eaten', 0)}")
            self.screen.blit(self.font.render(deaths, True, (150,155,165)), (pc.x + 24, y))
            y += 20

        y += SECTION_GAP
        hb = live.health_buckets()
        y = self._draw_bar(pc.x, y, pc.w,
                           f"Health: {hb['healthy']} healthy  {hb['hungry']} hungry  {hb['critical']} critical",
                           [(hb["healthy"], SHEEP_HEALTHY), (hb["hungry"], SHEEP_HUNGRY),
                            (hb["critical"], SHEEP_CRITICAL)])
        demo = live.demographics()
        y = self._draw_bar(pc.x, y, pc.w,
                           f"Age: {demo['adults']} adults  {demo['babies']} babies",
                           [(demo["adults"], (120,170,230)), (demo["babies"], (200,220,250))])

        y += SECTION_GAP
        self.screen.blit(self.font.render("History (sheep / wolves / plants)", True, (200,205,215)), (pc.x, y))
        y += 18
        self._draw_history(pygame.Rect(pc.x, y, pc.w, max(60, pc.bottom - y)))

    def draw_hud(self, live, sim_speed, paused, rec_enabled):
        day = int(live.days) + 1
        frac = live.days - int(live.days)
        sheep = live.cfg.species_config(HERBIVORE)
        wolves = live.cfg.species_config(PREDATOR)
        lines = [
            f"Day: {day}  ({frac * 100:4.0f}% through)  Tick: {live.tick_count}  Elapsed: {live.elapsed:7.1f}s",
            f"Creatures: {len(live.creatures())}  Plants: {len(live.plants())}  "
            f"Soil: {len(live.soil_markers())}  Water tiles: {len(live.water_cells())}",
            f"Plant chance: {live.cfg.world.plant_spawn_chance:.2f}  Sim speed: {sim_speed} ticks/frame  "
            f"{'PAUSED' if paused else ''}  {'REC ON' if rec_enabled else 'REC OFF'}",
            f"Grow-up: sheep {sheep.adult_seconds:g}s  wolves {wolves.adult_seconds:g}s   "
            f"Start counts (on reset): sheep {sheep.starting_count}  wolves {wolves.starting_count}",
            "Controls:",
            " Left click flood tile   Right click dry tile   Space Pause   R Reset   +/- Plant chance   [ ] SimSpeed",
            " V toggle record   C clear record   S save NPZ   L toggle legend   Esc quit",
            " 1/2 sheep grow-up   3/4 wolf grow-up   5/6 sheep start count   7/8 wolf start count",
        ]
        x = HUD_PAD_X
        y = HUD_PAD_Y
        for i, s in enumerate(lines):
            col = (225,225,235) if i < 4 else (170,175,185)
            self.screen.blit(self.font.render(s, True, col), (x, y))
            y += 16

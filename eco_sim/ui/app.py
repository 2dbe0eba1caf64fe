# eco_sim/ui/app.py
from __future__ import annotations
from dataclasses import dataclass
import pygame
from .renderer import Renderer, BG_COLOR
from .recorder import Recorder
from .csv_writer import DailyCsvLogger
from ..sim.live import LiveSim
from ..sim.models import Terrain
from ..sim.config import CONFIG, SIM, HERBIVORE, PREDATOR

MAX_SIM_SPEED = 40
PLANT_CHANCE_STEP = 0.01
HISTORY_EVERY_TICKS = 15
ADULT_SECONDS_STEP = 5.0

# key -> (setting, species, delta); starting counts take effect on the next reset
TUNING_KEYS = {
    pygame.K_1: ("adult_seconds", HERBIVORE, -ADULT_SECONDS_STEP),
    pygame.K_2: ("adult_seconds", HERBIVORE, +ADULT_SECONDS_STEP),
    pygame.K_3: ("adult_seconds", PREDATOR, -ADULT_SECONDS_STEP),
    pygame.K_4: ("adult_seconds", PREDATOR, +ADULT_SECONDS_STEP),
    pygame.K_5: ("starting_count", HERBIVORE, -1),
    pygame.K_6: ("starting_count", HERBIVORE, +1),
    pygame.K_7: ("starting_count", PREDATOR, -1),
    pygame.K_8: ("starting_count", PREDATOR, +1),
}

@dataclass
class UiState:
    paused: bool = False
    sim_speed: int = 1      # ticks per frame
    painting: int = 0       # mouse button held while dragging, 0 = none
    running: bool = True

def _paint(live: LiveSim, renderer: Renderer, pos, button: int) -> None:
    """Left button floods the tile under the cursor, right button dries it."""
    cell = renderer.screen_to_cell(*pos)
    if cell is None:
        return
    live.set_terrain(cell[0], cell[1], Terrain.WATER if button == 1 else Terrain.LAND)

def _tune(cfg, setting: str, sid: int, delta: float) -> None:
    sc = cfg.species_config(sid)
    current = getattr(sc, setting)
    v = getattr(cfg, f"set_{setting}")(sid, current + delta)
    print(f"[UI] {sc.name} {setting.replace('_', ' ')} = {v:g}")

def _handle_key(key, state: UiState, live: LiveSim, renderer: Renderer, recorder: Recorder) -> None:
    if key == pygame.K_ESCAPE:
        state.running = False
    elif key == pygame.K_SPACE:
        state.paused = not state.paused
    elif key == pygame.K_r:
        live.reset()
        renderer.history.clear()
        state.paused = False
    elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS, pygame.K_MINUS, pygame.K_KP_MINUS):
        step = -PLANT_CHANCE_STEP if key in (pygame.K_MINUS, pygame.K_KP_MINUS) else PLANT_CHANCE_STEP
        v = live.cfg.set_plant_spawn_chance(live.cfg.world.plant_spawn_chance + step)
        print(f"[UI] plant spawn chance = {v:.2f}")
    elif key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
        delta = 1 if key == pygame.K_RIGHTBRACKET else -1
        state.sim_speed = max(1, min(MAX_SIM_SPEED, state.sim_speed + delta))
    elif key in TUNING_KEYS:
        _tune(live.cfg, *TUNING_KEYS[key])
    elif key == pygame.K_l:
        renderer.show_legend = not renderer.show_legend
    else:
        recorder_keys = {pygame.K_v: recorder.toggle, pygame.K_c: recorder.clear, pygame.K_s: recorder.save_npz}
        action = recorder_keys.get(key)
        if action is not None:
            action()

def _layout(screen):
    w, h = screen.get_size()
    panel_w = int(w * 0.32)
    world_area = pygame.Rect(10, 10, w - panel_w - 30, h - 20)
    panel_area = pygame.Rect(w - panel_w - 10, 160, panel_w, h - 180)
    return world_area, panel_area

def run_ui(seed: int = SIM.seed, dt: float = SIM.dt):
    pygame.init()
    pygame.display.set_caption("Living World: sheep, wolves and plants")
    flags = pygame.RESIZABLE | pygame.SCALED
    screen = pygame.display.set_mode((1280, 820), flags)
    clock = pygame.time.Clock()

    live = LiveSim(CONFIG, seed=seed)
    day_log = DailyCsvLogger(overall_path="runs/ui_daily.csv", species_path="runs/ui_species_daily.csv")
    renderer = Renderer(screen, *_layout(screen), map_size=CONFIG.world.map_size)
    recorder = Recorder(enabled=False, stride_steps=2, map_size=CONFIG.world.map_size, dt=dt)
    state = UiState()
    print(f"[UI] seed={seed} dt={dt:.4f}s session={day_log.session_id}")

    while state.running:
        clock.tick(30)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                state.running = False
            elif e.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(e.size, flags)
                renderer.screen = screen
                renderer.resize(*_layout(screen))
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button in (1, 3):
                state.painting = e.button
                _paint(live, renderer, e.pos, e.button)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == state.painting:
                state.painting = 0
            elif e.type == pygame.MOUSEMOTION and state.painting:
                _paint(live, renderer, e.pos, state.painting)
            elif e.type == pygame.KEYDOWN:
                _handle_key(e.key, state, live, renderer, recorder)

        if not state.paused:
            for _ in range(state.sim_speed):
                if live.step(dt):
                    day_log.append_day(live)
                recorder.maybe_capture(live)
                if live.tick_count % HISTORY_EVERY_TICKS == 0:
                    renderer.record_history(live)

        screen.fill(BG_COLOR)
        renderer.draw_hud(live, state.sim_speed, state.paused, recorder.enabled)
        renderer.draw_world(live)
        renderer.draw_panel(live)
        pygame.display.flip()

    pygame.quit()

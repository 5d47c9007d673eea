"""
Human Play Mode
================

Play TruckaJumpa interactively. The game ticks at a fixed retro cadence;
the truck jumps when you press a jump key.

Controls:
    - Space / Up / W / K: Jump
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--preset NAME] [--fps FPS]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for direct script execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from truckajumpa.truck_core.config_loader import GameConfig, load_config, load_preset
from truckajumpa.truck_core.input_map import InputAction, key_to_action
from truckajumpa.truck_core.metadata import DEFAULT_METADATA, GameMetadata
from truckajumpa.truck_core.session import GameSession


class TrackRenderer:
    """
    Draws the lane as a row of cells with the truck and obstacles on it.
    """

    def __init__(self, config: GameConfig, metadata: GameMetadata = DEFAULT_METADATA):
        self._config = config
        self._meta = metadata

        self._margin = 20
        self._hud_height = 70
        self._lane_height = metadata.cell_height * 4

        self.width = config.track_length * metadata.cell_width + 2 * self._margin
        self.height = self._hud_height + self._lane_height + 2 * self._margin

        self._bg = (20, 24, 30)
        self._text = (235, 235, 235)
        self._track = metadata.color("track")
        self._truck = metadata.color("truck")
        self._barrier = metadata.color("barrier")

        pygame.font.init()
        self._font = pygame.font.SysFont("monospace", 18, bold=True)
        self._big_font = pygame.font.SysFont("monospace", 32, bold=True)

    def _cell_rect(self, cell: int, lift: int = 0) -> "pygame.Rect":
        cw, ch = self._meta.cell_width, self._meta.cell_height
        ground_y = self._hud_height + self._margin + self._lane_height - ch
        return pygame.Rect(self._margin + cell * cw, ground_y - lift, cw - 2, ch - 2)

    def render(self, screen: "pygame.Surface", session: GameSession) -> None:
        snapshot = session.snapshot()
        config = self._config
        screen.fill(self._bg)

        # Lane
        for cell in range(config.track_length):
            pygame.draw.rect(screen, self._track, self._cell_rect(cell))

        # Obstacles
        for position, width in snapshot.obstacles:
            for cell in range(max(position, 0), min(position + width, config.track_length)):
                pygame.draw.rect(screen, self._barrier, self._cell_rect(cell))

        # Truck, lifted while airborne
        lift = self._meta.cell_height * 2 if snapshot.jump_ticks_left > 0 else 0
        pygame.draw.rect(screen, self._truck, self._cell_rect(config.truck_position, lift))

        hud = (f"SCORE {snapshot.score:>6}   LIVES {snapshot.lives}   "
               f"LEVEL {snapshot.level}   TICK {snapshot.tick_counter}")
        screen.blit(self._font.render(hud, True, self._text), (self._margin, self._margin))

        if snapshot.game_over:
            label = self._big_font.render("GAME OVER  (R to restart)", True, self._barrier)
            screen.blit(label, label.get_rect(center=(self.width // 2, self.height // 2)))


class HumanPlayer:
    """Keyboard-driven game loop."""

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        tick_fps: Optional[int] = None,
        metadata: GameMetadata = DEFAULT_METADATA
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required for human play: pip install pygame")

        self._seed = seed
        self._session = GameSession(config, seed, auto_level=True)
        self._tick_fps = tick_fps or metadata.retro_fps
        self._running = True
        self._finished = False

        pygame.init()
        self._renderer = TrackRenderer(config, metadata)
        self._screen = pygame.display.set_mode((self._renderer.width, self._renderer.height))
        pygame.display.set_caption("TruckaJumpa")
        self._clock = pygame.time.Clock()

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== TruckaJumpa ===")
        print("Space/Up/W to jump, R to restart, ESC to quit")
        print()

        while self._running:
            self._handle_events()

            if not self._session.is_over:
                result = self._session.tick()
                if result.points > 0:
                    print(f"  +{result.points} (Total: {self._session.snapshot().score})")
            elif not self._finished:
                self._finish()

            self._renderer.render(self._screen, self._session)
            pygame.display.flip()
            self._clock.tick(self._tick_fps)

        pygame.quit()
        return self._session.snapshot().score

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()
                elif key_to_action(pygame.key.name(event.key)) is InputAction.JUMP:
                    self._session.jump()

    def _finish(self) -> None:
        self._finished = True
        snapshot = self._session.snapshot()
        print(f"\nGAME OVER - Score: {snapshot.score}  Level: {snapshot.level}")
        if self._session.finish():
            print("New high score!")
        for rank, entry in enumerate(self._session.game.high_scores.entries, start=1):
            print(f"  {rank:>2}. {entry.score:>7}  (level {entry.level})")

    def _restart(self) -> None:
        self._session.start_new_game(seed=self._seed)
        self._finished = False
        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play TruckaJumpa interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--preset", type=str, default=None,
                        help="Preset from game_config.yaml (easy, normal, hard, ...)")
    parser.add_argument("--fps", type=int, default=None, help="Ticks per second")
    parser.add_argument("--verbose", action="store_true", help="Enable engine debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    try:
        config = load_preset(args.preset) if args.preset else load_config()
        player = HumanPlayer(config=config, seed=args.seed, tick_fps=args.fps)
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, KeyError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

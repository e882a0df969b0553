#!/usr/bin/env python3
"""
Pygame viewer for the flow field simulation.

Particles are drawn as translucent points onto a canvas that is never
cleared between frames, so they leave trails. The canvas is cleared to
black whenever the world restarts.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence, Tuple

import pygame

from .config import FlowFieldConfig
from .presets import list_presets
from .simulation import Frame, SimulationContext

logger = logging.getLogger(__name__)

BACKGROUND = (0, 0, 0)
FLOWFIELD_COLOR = (255, 255, 255, 50)
TEXT_COLOR = (255, 255, 255)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single console handler."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Clear existing handlers to avoid duplication
    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)


def point_rect(x: float, y: float, size: int) -> Tuple[int, int, int, int]:
    """Square of ``size`` pixels centred on the point."""
    return int(x) - size // 2, int(y) - size // 2, size, size


class FlowFieldViewer:
    """Window, input handling and drawing around a SimulationContext."""

    def __init__(self, context: SimulationContext, fps: int = 60):
        self.context = context
        self.fps = fps

        pygame.init()
        size = (int(context.width), int(context.height))
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption("Flow Field")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 12)

        self.canvas = pygame.Surface(size)
        self.points = pygame.Surface(size, pygame.SRCALPHA)
        self.generation = None
        self._clear_canvas()

    def _clear_canvas(self) -> None:
        size = (int(self.context.width), int(self.context.height))
        if self.canvas.get_size() != size:
            self.canvas = pygame.Surface(size)
            self.points = pygame.Surface(size, pygame.SRCALPHA)
        self.canvas.fill(BACKGROUND)
        self.generation = self.context.generation

    def handle_events(self) -> bool:
        """Handle pygame events. Returns False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            elif event.type == pygame.VIDEORESIZE:
                self.context.resize(max(1, event.w), max(1, event.h))

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE or event.key == pygame.K_q:
                    return False

                elif event.key == pygame.K_a:
                    self.context.toggle_animate()

                elif event.key == pygame.K_d:
                    self.context.toggle_diagnostics()

                elif event.key == pygame.K_f:
                    self.context.toggle_flowfield()

                elif event.key == pygame.K_SPACE:
                    self.context.randomize()

        return True

    def draw(self, frame: Frame) -> None:
        if self.context.generation != self.generation:
            self._clear_canvas()

        if frame.sprites:
            self.points.fill((0, 0, 0, 0))
            for sprite in frame.sprites:
                self.points.fill(sprite.rgba(), point_rect(sprite.x, sprite.y, sprite.size))
            self.canvas.blit(self.points, (0, 0))

        self.screen.blit(self.canvas, (0, 0))

        if frame.segments is not None:
            overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
            for start, end in frame.segments:
                pygame.draw.line(overlay, FLOWFIELD_COLOR, tuple(start), tuple(end), 1)
            self.screen.blit(overlay, (0, 0))

        if frame.diagnostics is not None:
            self.draw_diagnostics(frame.diagnostics)

    def draw_diagnostics(self, lines: Sequence[str]) -> None:
        pygame.draw.rect(self.screen, BACKGROUND, (5, 5, 80, 40))
        y = 10
        for line in lines:
            text = self.font.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (10, y))
            y += 20

    def run(self) -> None:
        """Main loop"""
        running = True
        delta_ms = 0.0

        while running:
            running = self.handle_events()

            frame = self.context.step(delta_ms)
            if frame.diagnostics is not None:
                frame = frame._replace(diagnostics=self.context.diagnostics(self.clock.get_fps()))
            self.draw(frame)

            pygame.display.flip()
            delta_ms = float(self.clock.tick(self.fps))

        pygame.quit()


def build_context(args: argparse.Namespace) -> SimulationContext:
    config = FlowFieldConfig(seed=args.seed, count=args.count)
    context = SimulationContext(config, width=args.width, height=args.height)
    if args.preset:
        context.apply_preset(args.preset)
    else:
        context.randomize()
    return context


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Flow Field Particles")
    parser.add_argument("--width", type=int, default=1280, help="Initial window width")
    parser.add_argument("--height", type=int, default=800, help="Initial window height")
    parser.add_argument("--count", type=int, default=1000, help="Number of particles")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for replay")
    parser.add_argument("--preset", choices=[p.name for p in list_presets()],
                        help="Start from a preset instead of a random world")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    logger.info("Starting flow field viewer")
    logger.info("Keys: A animate, D diagnostics, F flow field, SPACE randomize, Q quit")

    context = build_context(args)
    FlowFieldViewer(context).run()


if __name__ == "__main__":
    main()

"""Cosmetic particle bursts emitted when food is eaten.

Nothing here feeds back into the simulation; renderers may poll a
:class:`ParticleSystem` for positions, sizes and colours.
"""

from __future__ import annotations

import numpy as np

from roaming_snake.snake import Position

FRICTION = 0.98
SHRINK = 0.95
LIFETIME = 30
BURST_SIZE = 12


class Particle:
    """A spark with randomized velocity that slows, shrinks and expires."""

    def __init__(
        self,
        x: float,
        y: float,
        rng: np.random.Generator | None = None,
    ) -> None:
        rng = rng if rng is not None else np.random.default_rng()
        self.x = x
        self.y = y
        self.vx = float(rng.uniform(-4.0, 4.0))
        self.vy = float(rng.uniform(-4.0, 4.0))
        self.life = LIFETIME
        self.max_life = LIFETIME
        self.size = float(rng.uniform(2.0, 6.0))
        hue = rng.uniform(15.0, 75.0)
        lightness = rng.uniform(50.0, 80.0)
        self.color = f"hsl({hue:.0f}, 100%, {lightness:.0f}%)"

    @property
    def alpha(self) -> float:
        return max(self.life, 0) / self.max_life

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.vx *= FRICTION
        self.vy *= FRICTION
        self.life -= 1
        self.size *= SHRINK

    def is_dead(self) -> bool:
        return self.life <= 0

    def to_dict(self) -> dict:
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "size": round(self.size, 2),
            "color": self.color,
            "alpha": round(self.alpha, 3),
        }


class ParticleSystem:
    """Live particles in pixel space for a board with *grid_size* px cells."""

    def __init__(
        self,
        grid_size: int,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid_size = grid_size
        self.rng = rng if rng is not None else np.random.default_rng()
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def burst(self, cell: Position, count: int = BURST_SIZE) -> None:
        """Emit *count* particles from the pixel centre of *cell*."""
        half = self.grid_size / 2
        cx = cell.x * self.grid_size + half
        cy = cell.y * self.grid_size + half
        self.particles.extend(
            Particle(cx, cy, rng=self.rng) for _ in range(count)
        )

    def update(self) -> None:
        """Advance every particle one frame and drop the expired ones."""
        for particle in self.particles:
            particle.update()
        self.particles = [p for p in self.particles if not p.is_dead()]

    def clear(self) -> None:
        self.particles.clear()

    def to_list(self) -> list[dict]:
        return [p.to_dict() for p in self.particles]

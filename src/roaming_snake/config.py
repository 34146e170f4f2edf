"""Engine configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from roaming_snake.board import tile_count_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Construction parameters for :class:`~roaming_snake.engine.SimulationEngine`.

    Supports JSON serialization for reproducible runs.
    """

    # Geometry (pixels)
    grid_size: int = 20
    canvas_width: int = 400

    # Food
    food_move_interval: int = 3
    max_spawn_attempts: int = 100

    # Randomness; None draws fresh OS entropy.
    seed: int | None = None

    def __post_init__(self) -> None:
        tiles = tile_count_for(self.grid_size, self.canvas_width)
        if tiles < 2:
            raise ValueError("Board must be at least 2×2 tiles.")
        if self.food_move_interval < 1:
            raise ValueError("food_move_interval must be at least 1.")
        if self.max_spawn_attempts < 0:
            raise ValueError("max_spawn_attempts must be >= 0.")

    @property
    def tile_count(self) -> int:
        return tile_count_for(self.grid_size, self.canvas_width)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)

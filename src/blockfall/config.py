"""Game configuration.

A single :class:`GameConfig` describes the grid, timing and palette of a
game.  The two board sizes the game ships with are exposed as the
:data:`STANDARD` and :data:`BIG` presets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .tetromino import SHAPE_OFFSETS

RGB = Tuple[int, int, int]

# Palette keys for the non-color cell states.
EMPTY = "empty"
PREVIEW = "preview"
SHADOW = "shadow"
BACKGROUND = "background"


def default_palette() -> Dict[object, RGB]:
    """Return the default palette keyed by cell state or color index."""

    return {
        EMPTY: (0xFD, 0xFD, 0xFD),
        PREVIEW: (0xDE, 0xDE, 0xDE),
        SHADOW: (0xDE, 0xDE, 0xDE),
        BACKGROUND: (0xDE, 0xDE, 0xDE),
        1: (0x32, 0xB9, 0x13),
        2: (0x13, 0x32, 0xB9),
        3: (0xB9, 0x48, 0x13),
        4: (0xB9, 0x13, 0x82),
    }


@dataclass(frozen=True)
class GameConfig:
    """Immutable settings for one game instance."""

    width: int = 12
    height: int = 20
    tile_size: int = 32
    # Milliseconds before gravity moves the piece down one row.
    tick_ms: int = 400
    min_tick_ms: int = 220
    tick_speedup_ms: int = 15
    speedup_every_s: float = 25.0
    # ``None`` derives the anchor from the grid: horizontal centre, row 2.
    spawn_x: Optional[int] = None
    spawn_y: int = 2
    colors: int = 4
    preview_offset: Tuple[int, int] = (1, 2)
    fps: int = 60
    palette: Dict[object, RGB] = field(default_factory=default_palette)
    debug_dump: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Grid dimensions must be positive")
        if self.tile_size <= 0:
            raise ValueError("tile_size must be positive")
        if not 1 <= self.colors <= 255:
            raise ValueError("colors must be in 1..255")
        if self.min_tick_ms <= 0 or self.min_tick_ms > self.tick_ms:
            raise ValueError("min_tick_ms must be positive and not above tick_ms")
        if self.tick_speedup_ms < 0 or self.speedup_every_s <= 0:
            raise ValueError("Invalid speed-up schedule")
        missing = [
            key
            for key in (EMPTY, PREVIEW, SHADOW, BACKGROUND, *range(1, self.colors + 1))
            if key not in self.palette
        ]
        if missing:
            raise ValueError(f"Palette has no entry for {missing}")
        self._check_footprints("Spawn anchor", self.spawn)
        self._check_footprints("Preview offset", self.preview_offset)

    def _check_footprints(self, label: str, anchor: Tuple[int, int]) -> None:
        """Raise if any catalog shape placed at ``anchor`` leaves the grid."""

        x, y = anchor
        for kind, offsets in SHAPE_OFFSETS.items():
            for dx, dy in offsets:
                if not (0 <= x + dx < self.width and 0 <= y + dy < self.height):
                    raise ValueError(
                        f"{label} {(x, y)} puts the {kind.value} piece outside the grid"
                    )

    @property
    def spawn(self) -> Tuple[int, int]:
        """Return the ``(x, y)`` anchor new pieces spawn at."""

        x = self.width // 2 if self.spawn_x is None else self.spawn_x
        return x, self.spawn_y

    @property
    def screen_size(self) -> Tuple[int, int]:
        return self.width * self.tile_size, self.height * self.tile_size

    @staticmethod
    def preset(name: str) -> "GameConfig":
        """Return the preset registered under ``name``."""

        try:
            return PRESETS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset: {name}") from None

    def with_overrides(self, **changes) -> "GameConfig":
        """Return a copy with ``changes`` applied (and validated)."""

        return replace(self, **changes)


STANDARD = GameConfig()
BIG = GameConfig(width=16, height=26)

PRESETS: Dict[str, GameConfig] = {
    "standard": STANDARD,
    "big": BIG,
}


__all__ = [
    "GameConfig",
    "STANDARD",
    "BIG",
    "PRESETS",
    "EMPTY",
    "PREVIEW",
    "SHADOW",
    "BACKGROUND",
    "default_palette",
]

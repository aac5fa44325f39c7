"""levels.py

Level catalog: the ordered list of brick layouts and colour palettes.

Every layout is a 2-D ``numpy`` integer grid where ``0`` means "no brick" and
any positive value is the number of hits the brick takes before breaking.
Row ``r`` / column ``c`` of the grid maps to the brick slot at
``BRICK_OFFSET_TOP + r * (BRICK_HEIGHT + BRICK_GAP)`` /
``BRICK_OFFSET_LEFT + c * (BRICK_WIDTH + BRICK_GAP)``.

Both lookups wrap modulo the catalog length so callers never index out of
range.  Run this module directly to preview the whole catalog::

    python levels.py
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from config import BRICK_COLS

RGB = Tuple[int, int, int]

# ---------------------------------------------------------------------------
#  Layout builders
# ---------------------------------------------------------------------------

def _grid(rows: int = 6, fill: int = 0) -> np.ndarray:
    return np.full((rows, BRICK_COLS), fill, dtype=int)


def _mirror(grid: np.ndarray) -> np.ndarray:
    """Copy the left half onto the right half so the layout is symmetric."""
    half = grid.shape[1] // 2
    grid[:, grid.shape[1] - half:] = grid[:, :half][:, ::-1]
    return grid


def full_wall(rows: int = 6, health: int = 1) -> np.ndarray:
    return _grid(rows, health)


def graded_wall(rows: int = 6, top: int = 3) -> np.ndarray:
    """Tougher rows at the top, one-hit rows at the bottom."""
    grid = _grid(rows)
    for r in range(rows):
        grid[r, :] = max(1, top - (r * top) // rows)
    return grid


def pyramid(rows: int = 6, health: int = 1) -> np.ndarray:
    grid = _grid(rows)
    for r in range(rows):
        inset = rows - 1 - r
        if inset < BRICK_COLS - inset:
            grid[r, inset:BRICK_COLS - inset] = health
    return grid


def inverted_pyramid(rows: int = 6, health: int = 1) -> np.ndarray:
    return pyramid(rows, health)[::-1].copy()


def checkerboard(rows: int = 6, health: int = 1, phase: int = 0) -> np.ndarray:
    yy, xx = np.indices((rows, BRICK_COLS))
    return np.where((yy + xx + phase) % 2 == 0, health, 0)


def frame(rows: int = 6, outer: int = 2, inner: int = 1) -> np.ndarray:
    grid = _grid(rows, inner)
    grid[0, :] = grid[-1, :] = outer
    grid[:, 0] = grid[:, -1] = outer
    return grid


def diamond(rows: int = 7, health: int = 1, core: int = 3) -> np.ndarray:
    yy, xx = np.indices((rows, BRICK_COLS))
    cy, cx = (rows - 1) / 2.0, (BRICK_COLS - 1) / 2.0
    dist = np.abs(yy - cy) / max(cy, 1) + np.abs(xx - cx) / max(cx, 1)
    grid = np.where(dist <= 1.0, health, 0)
    grid[dist <= 0.35] = core
    return grid


def columns(rows: int = 6, health: int = 2, every: int = 2) -> np.ndarray:
    grid = _grid(rows)
    grid[:, ::every] = health
    return grid


def stripes(rows: int = 7, health: int = 1, strong: int = 3) -> np.ndarray:
    grid = _grid(rows)
    grid[::2, :] = health
    grid[1::4, 2:-2] = strong
    return grid


def scatter(seed: int, rows: int = 6, density: float = 0.6, max_health: int = 3) -> np.ndarray:
    """Deterministic symmetric random layout (fixed seed per catalog slot)."""
    rng = np.random.default_rng(seed)
    grid = rng.integers(1, max_health + 1, size=(rows, BRICK_COLS))
    grid[rng.random((rows, BRICK_COLS)) > density] = 0
    grid = _mirror(grid)
    if not grid.any():
        grid[0, :] = 1
    return grid


def fortress(rows: int = 8) -> np.ndarray:
    grid = frame(rows, outer=3, inner=0)
    grid[2:-2, 3:-3] = 2
    grid[rows // 2 - 1:rows // 2 + 1, 4:6] = 1
    return grid


# ---------------------------------------------------------------------------
#  Catalog
# ---------------------------------------------------------------------------

LEVELS: List[np.ndarray] = [
    full_wall(4),                       # 1
    full_wall(6),                       # 2
    pyramid(6),                         # 3
    checkerboard(6, health=2),          # 4
    graded_wall(6, top=2),              # 5
    frame(6),                           # 6
    inverted_pyramid(6, health=2),      # 7
    diamond(7),                         # 8
    columns(6, health=2),               # 9
    stripes(7),                         # 10
    scatter(11),                        # 11
    graded_wall(7, top=3),              # 12
    checkerboard(7, health=3, phase=1), # 13
    fortress(8),                        # 14
    scatter(15, rows=7, density=0.7),   # 15
    pyramid(7, health=2),               # 16
    diamond(7, health=2, core=3),       # 17
    columns(7, health=3, every=3),      # 18
    frame(7, outer=3, inner=2),         # 19
    scatter(20, rows=8, density=0.5),   # 20
    stripes(8, health=2, strong=3),     # 21
    graded_wall(8, top=3),              # 22
    fortress(8) + checkerboard(8),      # 23
    scatter(24, rows=8, density=0.8),   # 24
    full_wall(8, health=3),             # 25
]

# Per-level colour palettes, applied by row and cycled when exhausted
LEVEL_COLORS: List[List[RGB]] = [
    [(239, 68, 68), (249, 115, 22), (234, 179, 8), (34, 197, 94), (59, 130, 246), (168, 85, 247)],
    [(14, 165, 233), (6, 182, 212), (20, 184, 166), (16, 185, 129), (132, 204, 22), (250, 204, 21)],
    [(236, 72, 153), (217, 70, 239), (168, 85, 247), (139, 92, 246), (99, 102, 241), (59, 130, 246)],
    [(251, 146, 60), (251, 191, 36), (250, 204, 21), (163, 230, 53), (74, 222, 128), (52, 211, 153)],
    [(248, 113, 113), (251, 113, 133), (244, 114, 182), (232, 121, 249), (192, 132, 252), (167, 139, 250)],
    [(45, 212, 191), (34, 211, 238), (56, 189, 248), (96, 165, 250), (129, 140, 248), (165, 180, 252)],
    [(220, 38, 38), (234, 88, 12), (202, 138, 4), (101, 163, 13), (5, 150, 105), (2, 132, 199)],
]


def level_count() -> int:
    return len(LEVELS)


def get_layout(index: int) -> np.ndarray:
    """Return a copy of the layout at *index* (wraps modulo catalog length)."""
    return LEVELS[index % len(LEVELS)].copy()


def get_palette(index: int) -> List[RGB]:
    """Return the colour palette for *index* (wraps modulo palette count)."""
    return list(LEVEL_COLORS[index % len(LEVEL_COLORS)])


def brick_count(layout: np.ndarray) -> int:
    return int(np.count_nonzero(layout))


# ---------------------------------------------------------------------------
#  Preview tool
# ---------------------------------------------------------------------------

def preview_levels(cols: int = 5):
    """Show every layout as a health heat-map in one matplotlib figure."""
    import matplotlib.pyplot as plt

    count = level_count()
    rows = (count + cols - 1) // cols
    fig, axes = plt.subplots(rows, cols, figsize=(cols * 2.6, rows * 1.8))
    for idx, ax in enumerate(np.ravel(axes)):
        ax.axis('off')
        if idx >= count:
            continue
        layout = get_layout(idx)
        ax.imshow(layout, cmap='magma', vmin=0, vmax=max(3, layout.max()))
        ax.set_title(f"Level {idx + 1} ({brick_count(layout)})", fontsize=8)
    fig.tight_layout()
    plt.show()


if __name__ == "__main__":
    preview_levels()

#!/usr/bin/env python3
"""
Render a dungeon level to an image file for visual inspection.

Useful for:
- Eyeballing room and corridor layouts
- Checking where doors, traps and treasure end up
- Debugging enemy placement

Usage:
    uv run tools/render_dungeon_image.py                    # Default: 80x24, random seed
    uv run tools/render_dungeon_image.py --seed 42          # Reproducible dungeon
    uv run tools/render_dungeon_image.py --output my.png    # Custom output path
"""

import argparse
import random
import sys
from pathlib import Path

import cv2
import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from crawler.setup import create_random_dungeon
from crawler.tiles import Tile
from crawler.world import Dungeon

TILE_SIZE: int = 16

# BGR, as cv2 expects
TILE_COLORS = {
    Tile.FLOOR: (90, 90, 90),
    Tile.WALL: (30, 30, 30),
    Tile.DOOR: (40, 90, 160),
    Tile.TREASURE: (0, 215, 255),
    Tile.TRAP: (160, 40, 160),
    Tile.STAIRS_DOWN: (255, 255, 255),
}
ENEMY_COLOR = (0, 0, 255)
START_COLOR = (0, 255, 0)


def render_dungeon_image(dungeon: Dungeon) -> np.ndarray:
    """Draw tiles as filled squares, enemies as red dots and the start as a green dot."""
    image = np.zeros((dungeon.rows * TILE_SIZE, dungeon.cols * TILE_SIZE, 3), dtype=np.uint8)

    for row in range(dungeon.rows):
        for col in range(dungeon.cols):
            color = TILE_COLORS[Tile(dungeon.map[row, col])]
            top_left = (col * TILE_SIZE, row * TILE_SIZE)
            bottom_right = ((col + 1) * TILE_SIZE - 1, (row + 1) * TILE_SIZE - 1)
            cv2.rectangle(image, top_left, bottom_right, color, -1)

    radius = TILE_SIZE // 3
    for enemy in dungeon.living_enemies():
        center = (
            enemy.position.column * TILE_SIZE + TILE_SIZE // 2,
            enemy.position.row * TILE_SIZE + TILE_SIZE // 2,
        )
        cv2.circle(image, center, radius, ENEMY_COLOR, -1)

    start = dungeon.start_position
    start_center = (
        start.column * TILE_SIZE + TILE_SIZE // 2,
        start.row * TILE_SIZE + TILE_SIZE // 2,
    )
    cv2.circle(image, start_center, radius, START_COLOR, -1)

    return image


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a dungeon level to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--width", type=int, default=80, help="Map width in tiles (default: 80)")
    parser.add_argument("--height", type=int, default=24, help="Map height in tiles (default: 24)")
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducible dungeons",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="dungeon_render.png",
        help="Output image path (default: dungeon_render.png)",
    )
    args = parser.parse_args()

    if args.seed is not None:
        print(f"Using random seed: {args.seed}")
    rng = random.Random(args.seed)

    dungeon = create_random_dungeon(rng, args.width, args.height)
    print(f"Dungeon size: {dungeon.cols}x{dungeon.rows} tiles, {len(dungeon.rooms)} rooms")

    image = render_dungeon_image(dungeon)

    output_path = Path(args.output)
    cv2.imwrite(str(output_path), image)
    print(f"Saved to: {output_path.absolute()}")


if __name__ == "__main__":
    main()

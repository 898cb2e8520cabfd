#!/usr/bin/env python3
"""
Render a generated dungeon level as ASCII art for debugging.

Usage:
    uv run tools/render_dungeon_ascii.py [--width N] [--height N] [--seed S]
"""

import argparse
import random
import sys
from pathlib import Path

# Add parent directory to path so we can import crawler
sys.path.insert(0, str(Path(__file__).parent.parent))

from crawler.render import render_dungeon_ascii
from crawler.setup import create_random_dungeon


def main():
    parser = argparse.ArgumentParser(description="Render dungeon as ASCII art")
    parser.add_argument("--width", type=int, default=80, help="Map width in tiles")
    parser.add_argument("--height", type=int, default=24, help="Map height in tiles")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible generation")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    dungeon = create_random_dungeon(rng, args.width, args.height)

    print(render_dungeon_ascii(dungeon, dungeon.start_position))

    # Print some debug info
    print(f"\n--- Debug Info ---")
    print(f"Map size: {dungeon.cols}x{dungeon.rows} tiles")
    print(f"Start position (tile): ({dungeon.start_position.x}, {dungeon.start_position.y})")
    print(f"Rooms generated: {len(dungeon.rooms)}")
    for index, room in enumerate(dungeon.rooms):
        print(f"  Room {index}: at ({room.x}, {room.y}), size {room.width}x{room.height}")
    print(f"Enemies: {len(dungeon.enemies)}")
    for enemy in dungeon.enemies.values():
        print(f"  {enemy.enemy_id}: {enemy.name} at ({enemy.position.x}, {enemy.position.y})")
    print(f"Items: {len(dungeon.items)}")


if __name__ == "__main__":
    main()

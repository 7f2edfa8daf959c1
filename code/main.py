#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import random
from typing import List, Optional

from errors import LevelGenerationError
from grid_renderer import print_grid, render_ascii
from level_config import ConnectivityPolicy, DungeonParams, GenerationParams, LevelType, TownParams
from level_generator import generate
from models import TileType


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a dungeon or town level and print it.")
    parser.add_argument("level_type", choices=[level_type.value for level_type in LevelType])
    parser.add_argument("--name", default="Level")
    parser.add_argument("--seed", type=int, default=None, help="Random seed; picked and printed when omitted")
    parser.add_argument("--grid", type=int, default=3, help="Rooms per side")
    parser.add_argument("--room-size", type=int, default=None, help="Room width and height in tiles")
    parser.add_argument("--multiplier", type=int, default=2, help="Central room multiplier (dungeons)")
    parser.add_argument("--central-template", default=None, help="Pin the central room template (dungeons)")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ConnectivityPolicy],
        default=ConnectivityPolicy.FULL_CONNECT.value,
    )
    parser.add_argument("--starting-town", action="store_true")
    parser.add_argument("--json", action="store_true", help="Print the level as JSON instead of ASCII")
    parser.add_argument("--metrics", action="store_true", help="Collect per-phase timings")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def build_params(args: argparse.Namespace) -> GenerationParams:
    dungeon = DungeonParams(
        rooms_wide=args.grid,
        rooms_high=args.grid,
        room_width=args.room_size or 20,
        room_height=args.room_size or 20,
        central_room_multiplier=min(args.multiplier, args.grid),
        central_room_template=args.central_template,
        connectivity_policy=ConnectivityPolicy(args.policy),
        collect_metrics=args.metrics,
    )
    town = TownParams(
        grid_size=args.grid,
        room_width=args.room_size or 30,
        room_height=args.room_size or 30,
        is_starting_town=args.starting_town,
        collect_metrics=args.metrics,
    )
    return GenerationParams(dungeon=dungeon, town=town)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed
    if seed is None:
        seed = random.randint(0, 1_000_000)
        # Printed so the run can be reproduced.
        if not args.json:
            print(f"Using random seed {seed}")

    try:
        params = build_params(args)
        result = generate(LevelType(args.level_type), args.name, seed, params)
    except LevelGenerationError as exc:
        print(f"Generation failed: {exc}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict()))
        return 0

    canvas = [[TileType.from_code(code) for code in row] for row in result.rows()]
    print_grid(render_ascii(canvas, result.spawn_points))
    print(
        f"{result.width}x{result.height}, {result.room_count} rooms,"
        f" spawn at {result.spawn_position.to_tuple()}, {result.generation_time:.1f} ms"
    )
    for feature in result.special_features:
        print(f"  * {feature}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

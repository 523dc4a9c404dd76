# planet_generator/sampler.py

"""
================================================================================
GRID SAMPLER SCRIPT
================================================================================
A command-line tool that samples a world on a regular longitude/latitude grid
and saves each requested data type as a 2D array. Rows are evaluated with the
batch engine, one row per call.

Outputs (in the output directory):
    - samples.npz: one (height, width) array per data type, keyed by the
      lowercase DataType name. Classifications are stored as enum values.
    - manifest.json: the configuration, grid and data types used.

Usage:
    planet-sample --config path/to/config.json --width 360 --height 180 \
        --types terrain_height biome temperature --output samples/
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time

import numpy as np
from tqdm import tqdm

from .batch import DataType, Location
from .settings import WorldConfig, load_config
from .world import World

DEFAULT_TYPES = ("terrain_height", "biome", "temperature", "precipitation")


def grid_coordinates(width: int, height: int):
    """Cell-centre longitudes (west to east) and latitudes (north to south)."""
    longitudes = -180.0 + (np.arange(width) + 0.5) * (360.0 / width)
    latitudes = 90.0 - (np.arange(height) + 0.5) * (180.0 / height)
    return longitudes, latitudes


def parse_types(names) -> list:
    types = []
    for name in names:
        try:
            types.append(DataType[name.upper()])
        except KeyError:
            valid = ", ".join(t.name.lower() for t in DataType)
            raise ValueError(f"Unknown data type '{name}'. Valid types: {valid}") from None
    return types


def sample_grid(world: World, types, width: int, height: int, hour: float = 0.0,
                altitude: float = 0.0, show_progress: bool = True) -> dict:
    """Samples every type over the grid. Returns {DataType: (height, width) array}."""
    longitudes, latitudes = grid_coordinates(width, height)
    grids = {t: np.zeros((height, width)) for t in types}

    rows = tqdm(enumerate(latitudes), total=height, desc="Sampling Rows", disable=not show_progress)
    for row, lat in rows:
        locations = [Location(lon, lat, altitude, hour) for lon in longitudes]
        result = world.batch_query(locations, types)
        for data_type in types:
            grids[data_type][row] = np.asarray(result.by_type[data_type], dtype=np.float64)
    return grids


def run(config: WorldConfig, types, width: int, height: int, hour: float, output_dir: str,
        logger: logging.Logger, show_progress: bool = True) -> str:
    """Builds a world, samples it and writes the results. Returns the npz path."""
    world = World(config, logger)

    logger.info(f"Sampling a {width}x{height} grid for {len(types)} data types at hour {hour}...")
    start_time = time.perf_counter()
    grids = sample_grid(world, types, width, height, hour, show_progress=show_progress)

    os.makedirs(output_dir, exist_ok=True)
    samples_path = os.path.join(output_dir, "samples.npz")
    np.savez_compressed(samples_path, **{t.name.lower(): grid for t, grid in grids.items()})

    manifest = {
        "config": world.get_config().to_dict(),
        "grid": {"width": width, "height": height, "hour": hour},
        "types": [t.name.lower() for t in types],
        "ranges": {
            t.name.lower(): [float(np.min(grid)), float(np.max(grid))] for t, grid in grids.items()
        },
    }
    manifest_path = os.path.join(output_dir, "manifest.json")
    with open(manifest_path, 'w') as f:
        json.dump(manifest, f, indent=2)

    end_time = time.perf_counter()
    logger.info(f"Sampling complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Samples and manifest.json saved to: {output_dir}")
    return samples_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sample a procedural planet on a lon/lat grid.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON configuration file. Defaults are used if omitted.")
    parser.add_argument("--width", type=int, default=360, help="Number of longitude samples.")
    parser.add_argument("--height", type=int, default=180, help="Number of latitude samples.")
    parser.add_argument("--types", nargs="+", default=list(DEFAULT_TYPES),
                        help="Data types to sample (lowercase DataType names).")
    parser.add_argument("--hour", type=float, default=12.0, help="Hour of day for time-varying types.")
    parser.add_argument("--output", type=str, default="samples", help="Output directory.")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Sampler")

    if args.width < 1 or args.height < 1:
        logger.critical("Grid width and height must be at least 1.")
        return 2

    try:
        types = parse_types(args.types)
        if args.config:
            logger.info(f"Loading configuration from: {args.config}")
            config = load_config(args.config)
        else:
            config = WorldConfig()
    except (OSError, ValueError) as e:
        # ConfigError is a ValueError.
        logger.critical(f"Failed to prepare sampling run: {e}")
        return 2

    run(config, types, args.width, args.height, args.hour, args.output, logger, not args.quiet)
    return 0


if __name__ == "__main__":
    sys.exit(main())

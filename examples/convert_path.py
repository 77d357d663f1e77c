#!/usr/bin/env python3
"""Example script converting a path between Cartesian and Frenet frames.

The scenario file describes a reference line and one path; the other
representation is derived through PathData and printed.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from path_data import (
    CartesianPath,
    FrenetPath,
    FrenetPoint,
    PathData,
    PathDataError,
    ReferenceLine,
    configure_logging,
    load_config,
)


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Convert a path between Cartesian and Frenet frames'
    )
    parser.add_argument(
        '--scenario',
        type=str,
        default='scenarios/lane_shift.yaml',
        help='Path to scenario configuration file'
    )
    parser.add_argument(
        '--samples',
        type=int,
        default=None,
        help='Number of samples to print (overrides config)'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (overrides config)'
    )
    
    args = parser.parse_args()
    
    configure_logging(args.log_level or 'INFO')
    
    logger.info(f"Loading scenario from {args.scenario}")
    config = load_config(args.scenario)
    if args.log_level is None:
        configure_logging(config.log_level)
    
    if not config.cartesian_path and not config.frenet_path:
        logger.error(f"Scenario {args.scenario} has neither cartesian_path nor frenet_path")
        return 1
    
    reference_line = ReferenceLine.from_config(config)
    path_data = PathData(config)
    path_data.set_reference_line(reference_line)
    
    try:
        if config.frenet_path:
            frenet_path = FrenetPath([FrenetPoint(*row) for row in config.frenet_path])
            path_data.set_frenet_path(frenet_path)
            logger.info(f"Derived Cartesian path with {len(path_data.cartesian_path)} points")
        else:
            xs, ys = zip(*config.cartesian_path)
            path_data.set_cartesian_path(CartesianPath.from_xy(xs, ys))
            logger.info(f"Derived Frenet path with {len(path_data.frenet_path)} points")
    except PathDataError as e:
        logger.error(f"Conversion failed: {e}")
        return 1
    
    for frenet_point in path_data.frenet_path:
        print(f"s={frenet_point.s:8.3f}  l={frenet_point.l:7.3f}")
    print(path_data.debug_string(args.samples))
    return 0


if __name__ == '__main__':
    sys.exit(main())

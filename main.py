#!/usr/bin/env python3
"""
Spiral Galaxy Generator

Procedurally generates a particle spiral galaxy with NumPy and shows it
with Vispy. Parameters can be adjusted live; the galaxy is regenerated
once an edit settles.

Usage:
    python main.py                         # Default galaxy (100000 particles)
    python main.py --branches 5 --spin -2  # Five arms, reversed twist
    python main.py --load FILE.h5          # Load a saved parameter preset
"""

import argparse
import sys
from pathlib import Path

from spiral_galaxy.config import (
    COUNT,
    SIZE,
    RADIUS,
    BRANCHES,
    SPIN,
    RANDOMNESS,
    RANDOMNESS_POWER,
    INSIDE_COLOR,
    OUTSIDE_COLOR,
    HELP_CONTENT,
)
from spiral_galaxy.errors import InvalidParameter
from spiral_galaxy.generation.generators import validate_parameters
from spiral_galaxy.state.parameters import GalaxyParameters
from spiral_galaxy.state.persistence import load_preset

# Note: visualization.renderer is imported lazily in main() so the OpenGL
# window backend is only set up once parameters have been validated


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Spiral Galaxy Generator - procedural particle galaxy',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_CONTENT,
    )
    parser.add_argument(
        '--load',
        '-l',
        type=str,
        metavar='FILE',
        help='Load parameter preset from HDF5 file (other parameter flags are ignored)',
    )
    parser.add_argument(
        '--count',
        '-n',
        type=int,
        default=COUNT,
        metavar='N',
        help=f'Number of particles (default: {COUNT})',
    )
    parser.add_argument(
        '--size',
        type=float,
        default=SIZE,
        metavar='SIZE',
        help=f'Point size in scene units (default: {SIZE})',
    )
    parser.add_argument(
        '--radius',
        '-r',
        type=float,
        default=RADIUS,
        metavar='R',
        help=f'Galaxy radius (default: {RADIUS})',
    )
    parser.add_argument(
        '--branches',
        '-b',
        type=int,
        default=BRANCHES,
        metavar='N',
        help=f'Number of spiral arms (default: {BRANCHES})',
    )
    parser.add_argument(
        '--spin',
        type=float,
        default=SPIN,
        metavar='SPIN',
        help=f'Angular twist per unit radius (default: {SPIN})',
    )
    parser.add_argument(
        '--randomness',
        type=float,
        default=RANDOMNESS,
        metavar='X',
        help=f'Randomness control, currently not used by the jitter '
        f'formula (default: {RANDOMNESS})',
    )
    parser.add_argument(
        '--randomness-power',
        '-p',
        type=float,
        default=RANDOMNESS_POWER,
        metavar='P',
        help=f'Jitter exponent; higher values keep particles closer to the '
        f'arms (default: {RANDOMNESS_POWER})',
    )
    parser.add_argument(
        '--inside-color',
        type=str,
        default=INSIDE_COLOR,
        metavar='COLOR',
        help=f'Color at the center (default: {INSIDE_COLOR})',
    )
    parser.add_argument(
        '--outside-color',
        type=str,
        default=OUTSIDE_COLOR,
        metavar='COLOR',
        help=f'Color at the rim (default: {OUTSIDE_COLOR})',
    )
    parser.add_argument(
        '--seed',
        '-s',
        type=int,
        default=None,
        metavar='SEED',
        help='Random seed for reproducibility',
    )
    return parser.parse_args(argv)


def parameters_from_args(args) -> GalaxyParameters:
    """Build galaxy parameters from parsed command line arguments."""
    return GalaxyParameters(
        count=args.count,
        size=args.size,
        radius=args.radius,
        branches=args.branches,
        spin=args.spin,
        randomness=args.randomness,
        randomness_power=args.randomness_power,
        inside_color=args.inside_color,
        outside_color=args.outside_color,
    )


def main():
    """Main entry point."""
    print("Use --help for command-line options.")
    print("Press H in the visualization window to toggle on-screen help.")
    args = parse_args()

    camera_state = None
    if args.load:
        load_path = Path(args.load)
        if not load_path.exists():
            print(f"Error: File not found: {load_path}")
            sys.exit(1)

        print(f"Loading preset from: {load_path}")
        params, camera_state = load_preset(load_path)
    else:
        params = parameters_from_args(args)

    try:
        validate_parameters(params)
    except InvalidParameter as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Import here so the window backend loads only after validation
    from spiral_galaxy.visualization.renderer import run_visualization

    print("Starting visualization...")
    try:
        run_visualization(params, seed=args.seed, initial_camera=camera_state)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        print("Done.")


if __name__ == '__main__':
    main()

"""
CLI entry point for the explosion renderer.

Usage:
    kaboom [options]
    python -m kaboom [options]
"""

import argparse
import math
import sys
import time
from pathlib import Path

from kaboom.encoder import write_image
from kaboom.renderer import ExplosionRenderer, RenderConfig


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  rows {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        print(f"{pct:5.1f}%  rows {current}/{total}", flush=True)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="kaboom",
        description="Sphere-traced procedural explosion renderer",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("out.ppm"),
        help="Output image path; the suffix picks the format (default: out.ppm)",
    )

    # Image
    parser.add_argument("--width", type=int, default=640, help="Image width (default: 640)")
    parser.add_argument("--height", type=int, default=480, help="Image height (default: 480)")
    parser.add_argument(
        "--fov", type=float, default=60.0,
        help="Vertical field of view in degrees (default: 60)",
    )

    # Surface
    parser.add_argument(
        "--radius", type=float, default=1.5,
        help="Bounding sphere radius of the explosion (default: 1.5)",
    )
    parser.add_argument(
        "--amplitude", type=float, default=1.0,
        help="Noise carving depth (default: 1.0)",
    )

    # Performance
    parser.add_argument(
        "-j", "--workers", type=int, default=None,
        help="Worker processes (default: CPU count)",
    )

    args = parser.parse_args(argv)

    try:
        config = RenderConfig(
            width=args.width,
            height=args.height,
            fov=math.radians(args.fov),
            sphere_radius=args.radius,
            noise_amplitude=args.amplitude,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.workers is not None and args.workers < 1:
        print(f"Error: --workers must be at least 1, got {args.workers}", file=sys.stderr)
        sys.exit(1)

    print(f"Rendering {config.width}x{config.height}, fov {args.fov:.1f} deg")
    print(f"  Radius: {config.sphere_radius}, Amplitude: {config.noise_amplitude}")
    t0 = time.time()

    renderer = ExplosionRenderer(config)
    framebuffer = renderer.render(workers=args.workers, progress_callback=_progress_bar)

    elapsed = time.time() - t0

    try:
        output = write_image(framebuffer, args.output)
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    file_size_kb = output.stat().st_size / 1024

    print(f"\nDone! {file_size_kb:.1f} KB")
    print(f"  Render took {elapsed:.1f}s")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()

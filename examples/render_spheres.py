#!/usr/bin/env python3
"""Render one of the demo sphere scenes.

Creates the chosen scene, renders it band by band with a progress line and
writes the result as PPM or, for any other extension, through Pillow.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scene NAME        three_spheres, defocus, random or random_lights
                        (default: three_spheres)
    --width WIDTH       Image width in pixels (default: scene's own)
    --samples SAMPLES   Samples per pixel (default: scene's own)
    --depth DEPTH       Maximum bounce depth (default: scene's own)
    --seed SEED         Random seed for the scene and the sampler (default: 0)
    --output OUTPUT     Output file path (default: spheres.ppm)
    --quiet             Suppress progress output

Example:
    python examples/render_spheres.py --scene defocus --width 200 --samples 20
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

SCENE_NAMES = ("three_spheres", "defocus", "random", "random_lights")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=SCENE_NAMES,
        default="three_spheres",
        help="Scene to render (default: three_spheres)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--samples", type=int, default=None, help="Samples per pixel")
    parser.add_argument("--depth", type=int, default=None, help="Maximum bounce depth")
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for the scene and the sampler (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.ppm",
        help="Output file path (default: spheres.ppm)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene: str = "three_spheres",
    width: int | None = None,
    samples: int | None = None,
    depth: int | None = None,
    seed: int = 0,
    output_path: str = "spheres.ppm",
    quiet: bool = False,
) -> Path:
    """Render a demo scene and save it to a file.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so init_taichi runs before any field is declared
    from dataclasses import replace

    from pathtracer.core.renderer import Renderer
    from pathtracer.output.export import save_raster, write_ppm
    from pathtracer.scene.scenes import SCENES

    setup = SCENES[scene](seed)
    settings = setup.settings
    camera = setup.camera
    if width is not None:
        height = int(width / camera.aspect_ratio)
        settings = replace(settings, width=width, height=height)
    if samples is not None:
        settings = replace(settings, samples_per_pixel=samples)
    if depth is not None:
        settings = replace(settings, max_depth=depth)
    camera = replace(camera, aspect_ratio=settings.aspect_ratio)

    if not quiet:
        print(
            f"Rendering '{scene}' ({settings.width}x{settings.height}, "
            f"{settings.samples_per_pixel} spp, depth {settings.max_depth})..."
        )

    start_time = time.time()

    def progress_callback(rows_done: int, total: int) -> None:
        if not quiet:
            progress_pct = (rows_done / total) * 100 if total > 0 else 100
            print(f"\r  Progress: {rows_done}/{total} rows ({progress_pct:.1f}%)", end="", flush=True)

    image = Renderer(setup.world, camera, settings).render(callback=progress_callback)

    if not quiet:
        print()

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        write_ppm(image, output_file)
    else:
        save_raster(image, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from pathtracer.config import init_taichi
    from pathtracer.errors import RenderError

    init_taichi(seed=args.seed)

    try:
        render_scene(
            scene=args.scene,
            width=args.width,
            samples=args.samples,
            depth=args.depth,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (RenderError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

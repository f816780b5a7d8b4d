#!/usr/bin/env python3
"""
raytracer - A Python Whitted-style Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from raytracer.camera import Camera
from raytracer.color import Color, WHITE
from raytracer.lights import PointLight
from raytracer.logging_config import setup_logging
from raytracer.materials import Material
from raytracer.matrix import Matrix
from raytracer.patterns import checkers_pattern, stripe_pattern
from raytracer.renderer import Renderer, RenderSettings
from raytracer.scene_parser import SceneParseError, load_scene
from raytracer.shapes import ObjectType, Shape
from raytracer.tuples import Point, Vector
from raytracer.world import World

logger = logging.getLogger("raytracer.main")


def create_demo_scene(width: int = 320, height: int = 180) -> tuple:
    """Create a demo scene with reflective, transparent and patterned objects."""
    floor = Shape(
        ObjectType.PLANE,
        material=Material(
            pattern=checkers_pattern(Color(230, 230, 230), Color(40, 40, 40)),
            specular=0.0,
            reflect=0.2,
        ),
    )

    back_wall = Shape(
        ObjectType.PLANE,
        material=Material(color=Color(120, 150, 200), specular=0.0),
    ).translate(0, 0, 10).rotate_x(math.pi / 2)

    # Center sphere - glass
    glass = Shape(
        material=Material(
            color=Color(10, 10, 25),
            diffuse=0.1,
            specular=1.0,
            shine=300,
            reflect=0.9,
            transparent=0.9,
            refractive_index=1.5,
        ),
    ).translate(0, 1, 0)

    # Left sphere - striped
    striped = Shape(
        material=Material(
            pattern=stripe_pattern(Color(255, 90, 60), Color(255, 220, 120)).scale(0.2, 0.2, 0.2),
            diffuse=0.7,
            specular=0.3,
        ),
    ).translate(-2.2, 0.6, 0.8).scale(0.6, 0.6, 0.6)

    # Right sphere - mirror
    mirror = Shape(
        material=Material(color=Color(60, 60, 60), diffuse=0.3, reflect=0.8),
    ).translate(2.0, 0.7, 0.5).scale(0.7, 0.7, 0.7)

    world = World(
        objects=(floor, back_wall, glass, striped, mirror),
        light=PointLight(Point(-10, 10, -10), WHITE),
    )

    camera = Camera(
        width, height, math.pi / 3,
        Matrix.view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0)),
    )

    return world, camera


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='raytracer - A Python Whitted-style Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py scenes/glass.yaml --output glass.ppm --depth 8
  python main.py scene.yaml --threads 8 --processes
        '''
    )

    parser.add_argument('scene', nargs='?', help='Scene file (YAML or JSON); demo scene if omitted')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--width', type=int, default=320, help='Demo scene width (default: 320)')
    parser.add_argument('--height', type=int, default=180, help='Demo scene height (default: 180)')
    parser.add_argument('--depth', type=int, default=5, help='Max reflection/refraction depth (default: 5)')
    parser.add_argument('--threads', type=int, default=0, help='Number of workers (0=auto)')
    parser.add_argument('--tile-size', type=int, default=16, help='Tile edge in pixels (default: 16)')
    parser.add_argument('--processes', action='store_true', help='Use worker processes instead of threads')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level (default: WARNING)')

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    # Print header
    print("=" * 60)
    print("raytracer")
    print("=" * 60)

    if args.scene:
        print(f"\nLoading scene: {args.scene}")
        try:
            world, camera = load_scene(args.scene)
        except SceneParseError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        print("\nCreating demo scene")
        world, camera = create_demo_scene(args.width, args.height)

    settings = RenderSettings(
        max_depth=args.depth,
        tile_size=args.tile_size,
        num_threads=args.threads,
        use_processes=args.processes,
    )

    print(f"  Objects in scene: {len(world)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {camera.hsize}x{camera.vsize}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Workers: {settings.num_threads} {'processes' if settings.use_processes else 'threads'}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    canvas = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    logger.info("Rendered %d pixels in %.2f s", camera.hsize * camera.vsize, elapsed)

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    canvas.save(output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

"""Run the CPU-shaded Bézier surface viewer using Matplotlib."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bezier3d import InvalidArgument, SurfaceRenderer, SurfaceScene, SurfaceSettings


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--accuracy", type=int, default=5, help="Grid steps per side of the patch")
    parser.add_argument("--kd", type=float, default=0.8, help="Diffuse coefficient in [0, 1]")
    parser.add_argument("--ks", type=float, default=0.5, help="Specular coefficient in [0, 1]")
    parser.add_argument("--shininess", type=float, default=32.0, help="Specular exponent")
    parser.add_argument("--light-color", default="#ffffff", help="Light colour as #rrggbb")
    parser.add_argument("--object-color", default="#ffffff", help="Object colour as #rrggbb")
    parser.add_argument("--animate-light", action="store_true", help="Orbit the light around the patch")
    parser.add_argument("--texture", default="", help="Optional diffuse texture image")
    parser.add_argument("--normal-map", default="", help="Optional tangent-space normal map image")
    parser.add_argument("--show-grid", action="store_true", help="Show the flattened tessellation grid")
    parser.add_argument("--seconds", type=float, default=30.0, help="Duration of the animation")
    parser.add_argument("--fps", type=int, default=24, help="Frames per second")
    parser.add_argument("--save", type=str, default="", help="Optional path to save the animation (mp4/gif)")
    parser.add_argument("--verbose", action="store_true", help="Log tessellation and texture events")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = SurfaceSettings(
            accuracy=args.accuracy,
            kd=args.kd,
            ks=args.ks,
            specular_exponent=args.shininess,
            light_color=args.light_color,
            object_color=args.object_color,
            animate_light=args.animate_light,
            texture_path=args.texture,
            normal_map_path=args.normal_map,
            show_grid=args.show_grid,
            use_normal_map=bool(args.normal_map),
        )
    except InvalidArgument as exc:
        parser.error(str(exc))

    scene = SurfaceScene(settings)
    renderer = SurfaceRenderer(scene)
    save_path = args.save or None
    renderer.animate(seconds=args.seconds, fps=args.fps, save_path=save_path)


if __name__ == "__main__":
    main()

"""Export the tessellated Bézier surface as an OBJ file."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bezier3d import InvalidArgument, tessellate


def export_obj(output: Path, accuracy: int) -> None:
    mesh = tessellate(accuracy)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(mesh.to_obj(), encoding="utf-8")
    print(f"Exported {mesh.vertex_count} vertices / {mesh.triangle_count} triangles to {output}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("output", type=Path, nargs="?", default=Path("assets/bezier_surface.obj"))
    parser.add_argument("--accuracy", type=int, default=5, help="Grid steps per side of the patch")
    args = parser.parse_args()
    try:
        export_obj(args.output, args.accuracy)
    except InvalidArgument as exc:
        parser.error(str(exc))

import argparse
from dataclasses import replace

from dragon.settings import CAMERA_POLICIES, STROKE_POLICIES


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Animated dragon curve.", formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--load", type=str, metavar="PATH", help="Path to a YAML settings file.", default=None)
    parser.add_argument("--camera", choices=CAMERA_POLICIES, help="Camera policy (overrides the settings file).")
    parser.add_argument(
        "--consolidate", action="store_true", help="Turn tiny settled segments into static squares."
    )
    parser.add_argument("--stroke", choices=STROKE_POLICIES, help="Stroke width policy (overrides the settings file).")
    parser.add_argument("--export", type=str, metavar="PATH", help="Render a PNG snapshot without opening a window.")
    parser.add_argument("--iterations", type=int, default=10, help="Iterations to grow before exporting.")
    parser.add_argument("--log-file", type=str, metavar="PATH", default="log.txt", help="Log file path.")
    return parser.parse_args(argv)


def apply_overrides(settings, args):
    """Return settings with the command line flags applied on top."""
    updates = {}
    if args.camera:
        updates["camera"] = args.camera
    if args.consolidate:
        updates["consolidate"] = True
    if args.stroke:
        updates["stroke"] = args.stroke
    return replace(settings, **updates)

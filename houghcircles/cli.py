"""
Headless circle detection - no GUI windows, just saves results
Usable for batch processing or remote servers
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from houghcircles.config import load_config
from houghcircles.core import CircleHoughProcessor
from houghcircles.detection.results import DetectedCircle
from houghcircles.errors import HoughCirclesError
from houghcircles.utils.io_handler import JSONWriter, load_image, save_image
from houghcircles.utils.logger import setup_logger
from houghcircles.utils.visualization import draw_circles, draw_edges

USAGE = ("Usage: python detect_circles.py <path_to_image> [radius_min radius_max max_circles] "
         "[--config file.yaml] [--roi x,y,w,h]")

NUMBER_KEYS = ["radius_min", "radius_max", "max_circles"]


def fail(message: str, code: int = 1):
    print(f"[X] Error: {message}")
    sys.exit(code)


def parse_roi(value: Optional[str]):
    """Parse 'x,y,w,h' into four integers."""
    if value is None:
        fail("--roi needs a value x,y,w,h")
    parts = value.split(",")
    try:
        roi = tuple(int(v) for v in parts)
    except ValueError:
        fail(f"--roi must be four integers x,y,w,h, got '{value}'")
    if len(roi) != 4:
        fail(f"--roi must be four integers x,y,w,h, got '{value}'")
    return roi


def parse_args(argv: List[str]) -> Dict[str, Any]:
    """
    Parse command line arguments (without the program name).

    Returns:
        Dictionary with image_path, config_path, roi and detection overrides
    """
    if not argv:
        print(USAGE)
        print("\nExample:")
        print("  python detect_circles.py coins.png")
        print("  python detect_circles.py coins.png 10 20 2")
        print("  python detect_circles.py coins.png --config detect.yaml --roi 0,0,200,200")
        sys.exit(1)

    options = {"image_path": argv[0], "config_path": None, "roi": None, "overrides": {}}
    numbers = []

    args = iter(argv[1:])
    for arg in args:
        if arg == "--config":
            options["config_path"] = next(args, None)
            if options["config_path"] is None:
                fail("--config needs a file path")
        elif arg == "--roi":
            options["roi"] = parse_roi(next(args, None))
        else:
            try:
                numbers.append(int(arg))
            except ValueError:
                fail(f"Unexpected argument '{arg}'")

    if len(numbers) > len(NUMBER_KEYS):
        fail(f"Expected at most {len(NUMBER_KEYS)} numbers "
             f"(radius_min radius_max max_circles), got {len(numbers)}")
    if numbers:
        options["overrides"]["detection"] = dict(zip(NUMBER_KEYS, numbers))

    return options


def main(argv: Optional[List[str]] = None):
    """Detect circles in a single image."""
    options = parse_args(sys.argv[1:] if argv is None else argv)
    image_path = options["image_path"]

    if not Path(image_path).exists():
        fail(f"Image not found at '{image_path}'")

    logger = setup_logger('houghcircles', logging.WARNING)
    config = load_config(options["config_path"], options["overrides"])

    image = load_image(image_path)
    if image is None:
        fail("Cannot load image")

    print("=" * 60)
    print("Hough Circles - Headless Detection")
    print("=" * 60)
    print(f"Input: {image_path}")
    print(f"Image size: {image.shape[1]} x {image.shape[0]} pixels")

    try:
        processor = CircleHoughProcessor(config)
        result, run = processor.process_frame(image, roi=options["roi"], return_run=True)
    except HoughCirclesError as e:
        logger.error(str(e))
        fail(str(e), code=2)

    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    for line in result['report']:
        print(line)
    print(f"Processing Time:  {result['processing_metadata']['processing_time_ms']:.0f}ms")
    print("=" * 60)

    output_dir = Path("output")
    stem = Path(image_path).stem
    circles = [DetectedCircle(**c) for c in result['circles']]
    overlay = draw_circles(image, circles,
                           color=tuple(config['output']['color']),
                           thickness=config['output']['line_width'])

    overlay_path = output_dir / f"{stem}_circles.png"
    save_image(overlay, str(overlay_path))
    print(f"[OK] Overlay saved to: {overlay_path}")

    edges_path = output_dir / f"{stem}_edges.png"
    save_image(draw_edges(run.edge_map.pixels), str(edges_path))
    print(f"[OK] Edge map saved to: {edges_path}")

    json_path = output_dir / f"{stem}_circles.json"
    JSONWriter.save_results(result, str(json_path))
    print(f"[OK] Analysis JSON saved to: {json_path}")

    return result

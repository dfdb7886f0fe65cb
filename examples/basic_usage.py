"""Basic usage example for circle detection."""

from houghcircles.core import CircleHoughProcessor
from houghcircles.detection.results import format_report_line
from houghcircles.utils.synthetic import circle_image
from houghcircles.utils.visualization import draw_circles
from houghcircles.utils.io_handler import save_image


def main():
    """Run circle detection on a synthetic image with two circles."""
    # Build image
    image = circle_image(100, 100, [(30, 30, 12), (70, 70, 12)])

    # Detect circles
    print("Detecting circles...")
    processor = CircleHoughProcessor({
        "detection": {"radius_min": 10, "radius_max": 15, "max_circles": 2}
    })
    circles = processor.detect_circles(image)
    for circle in circles:
        print(format_report_line(circle))

    # Save output
    output_path = "output/basic_detection.png"
    save_image(draw_circles(image, circles), output_path)
    print(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()

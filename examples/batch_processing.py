"""Batch processing example for multiple images."""

from pathlib import Path
from houghcircles.core import CircleHoughProcessor
from houghcircles.config import load_config
from houghcircles.errors import ConfigurationError
from houghcircles.utils.io_handler import JSONWriter
from houghcircles.utils.logger import setup_logger, create_session_log_file


def main():
    """Process every image of a folder in batch."""
    logger = setup_logger('batch_processor', log_file=create_session_log_file())

    processor = CircleHoughProcessor(load_config())

    # Get all images
    images_dir = Path("test_data/images")
    image_files = sorted(images_dir.glob("*.png"))

    logger.info(f"Processing {len(image_files)} images...")

    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")

        try:
            result = processor.process_frame(str(image_path))
        except ValueError as e:
            # ConfigurationError is a ValueError too
            level = "Skipping" if isinstance(e, ConfigurationError) else "Could not load"
            logger.warning(f"{level} {image_path}: {e}")
            continue

        results.append({
            'image_name': image_path.name,
            'circles': result['circles'],
            'processing_time_ms': result['processing_metadata']['processing_time_ms']
        })

    # Save results
    JSONWriter.save_results({'results': results}, "output/batch_results.json")
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()

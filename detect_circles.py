"""
Headless circle detection - no GUI windows, just saves results
Usable for batch processing or remote servers
"""

from houghcircles.cli import main


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Analyze Media - Command Line Shell

Thin presentation layer over the submission core: picks the entry point
from the file's type, prints upload progress, then prints the analysis or
the error message.

Usage:
    python scripts/analyze_media.py photo.png
    python scripts/analyze_media.py session.mp4 --mode overview
    python scripts/analyze_media.py session.mp4 --mock      # No server needed

Exit codes:
    0 - analysis succeeded
    1 - analysis failed (message printed)
    2 - file not found
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import LOG_FORMAT, LOG_LEVEL
from submission import (
    IMAGE_CONSTRAINT,
    AnalysisMode,
    ImageResult,
    MediaFile,
    SubmissionController,
    create_transport,
    format_size,
)

logger = logging.getLogger(__name__)


class ProgressPrinter:
    """Prints progress on one line, switching to "Processing..." at 100%"""

    def __init__(self, kind: str):
        self.kind = kind
        self.last = -1

    def __call__(self, percent: int) -> None:
        if percent == self.last:
            return
        self.last = percent
        if percent >= 100:
            label = f"Analyzing {self.kind} content..."
        else:
            label = f"Uploading: {percent}%"
        print(f"\r{label:<40}", end="", flush=True)

    def finish(self) -> None:
        if self.last >= 0:
            print()


def print_result(result) -> None:
    """Print an ImageResult or VideoResult"""
    if isinstance(result, ImageResult):
        print(f"Description: {result.description}")
        if result.technical_details:
            print("Technical details:")
            print(json.dumps(result.technical_details, indent=2))
        if result.objects:
            print(f"Objects: {', '.join(str(o) for o in result.objects)}")
        if result.text:
            print(f"Text: {' | '.join(str(t) for t in result.text)}")
        return

    for section in result.sections():
        if section.is_header:
            print(f"\n== {section.text.strip()} ==")
        else:
            print(section.text)
            print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Upload an image or video to the analysis service",
        epilog="""
Examples:
  %(prog)s photo.png                    # Image analysis
  %(prog)s session.mp4 --mode overview  # Quick video overview
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("file", type=str, help="Path to the image or video")

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in AnalysisMode],
        default=AnalysisMode.DETAILED.value,
        help="Video analysis type (default: detailed)",
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the mock transport instead of the analysis service",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format=LOG_FORMAT,
    )

    path = Path(args.file)
    if not path.is_file():
        logger.error(f"File not found: {path}")
        return 2

    media_file = MediaFile.from_path(path)
    is_image = media_file.mime_type.startswith("image/") or IMAGE_CONSTRAINT.accepts_type(
        media_file.mime_type,
    )
    kind = "image" if is_image else "video"

    print(f"Selected: {media_file.name} ({format_size(media_file.size)})")

    controller = SubmissionController(transport=create_transport(force_mock=args.mock))
    printer = ProgressPrinter(kind)

    try:
        if is_image:
            outcome = controller.submit_image(media_file, on_progress=printer)
        else:
            outcome = controller.submit_video(
                media_file,
                on_progress=printer,
                analysis_mode=args.mode,
            )
    except KeyboardInterrupt:
        printer.finish()
        print("Cancelled")
        return 1
    finally:
        controller.cleanup()

    printer.finish()

    if not outcome.success:
        print(f"Error: {outcome.error.message}")
        if outcome.error.retriable:
            print("(You can retry this submission)")
        return 1

    print_result(outcome.result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

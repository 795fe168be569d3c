"""
Review Combiner - merge scraped review batch files

CLI entry point for running the merge pipeline.
"""

import argparse
import logging
import random
import sys

from review_combiner.agents.interpolation import DateInterpolator, LEADING_GAP_POLICIES
from review_combiner.orchestrator import PipelineOrchestrator
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review Combiner - merge and deduplicate review batch files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Combine ./review-files into ./combined-reviews
  python main.py

  # Judge.me import format with interpolated dates
  python main.py --convert --interpolate-dates

  # Custom directories, reproducible "Encoded" dates
  python main.py --input-dir ./batches --output-dir ./out \\
                 --interpolate-dates --seed 42
        """
    )

    parser.add_argument(
        "--input-dir",
        default=str(settings.INPUT_DIR),
        help=f"Directory of batch files (default: {settings.INPUT_DIR})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_DIR),
        help=f"Directory for combined output (default: {settings.OUTPUT_DIR})"
    )

    parser.add_argument(
        "--convert", "-jm",
        action="store_true",
        help="Convert to Judge.me format (review -> body, Recommended -> 5 stars)"
    )

    parser.add_argument(
        "--interpolate-dates",
        action="store_true",
        help="Resolve relative dates and interpolate missing ones"
    )

    parser.add_argument(
        "--leading-gap-policy",
        default=settings.LEADING_GAP_POLICY,
        choices=LEADING_GAP_POLICIES,
        help=f"How to date reviews before the first known date (default: {settings.LEADING_GAP_POLICY})"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random source used to date 'Encoded' reviews"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    print("=" * 60)
    print("Review Combiner")
    print("=" * 60)
    print(f"Input: {args.input_dir}")
    print(f"Output: {args.output_dir}")
    print(f"Format: {'judge-me' if args.convert else 'standard'}")
    print(f"Date interpolation: {args.interpolate_dates}")
    print("=" * 60)
    print()

    try:
        interpolator = DateInterpolator(
            rng=random.Random(args.seed),
            leading_gap_policy=args.leading_gap_policy,
            sentinel=settings.ENCODED_DATE_SENTINEL,
            encoded_max_days=settings.ENCODED_DATE_MAX_DAYS
        )

        orchestrator = PipelineOrchestrator(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            convert=args.convert,
            interpolate=args.interpolate_dates,
            interpolator=interpolator
        )

        result = orchestrator.run()

        print()
        print("=" * 60)
        print(f"✅ Combined {result.total_reviews} unique reviews "
              f"({result.duplicates_skipped} duplicates skipped)")
        print("=" * 60)
        print(f"JSON: {result.json_path}")
        print(f"CSV: {result.csv_path}")
        if result.skipped_files:
            print(f"Skipped files: {', '.join(result.skipped_files)}")
        print("=" * 60)

        logger.info("Review Combiner completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\n⚠️  Pipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()

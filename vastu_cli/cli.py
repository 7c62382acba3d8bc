"""
Vastu CLI - Main entry point.

Provides command-line interface for plan analysis and zone inspection.
JSON results go to stdout (or --output); logs and errors go to stderr.
"""

import argparse
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

import yaml

from vastu_zone import VastuKernelError, classify_deviation, generate_32_zones
from vastu_advisor import AdvisorConfig, AdvisorService

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging for CLI runs.

    Args:
        verbose: DEBUG instead of WARNING on stderr
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def run_analysis(
    config_path: str,
    output: Optional[str] = None,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> dict:
    """
    Run the advisor for one plan configuration.

    Ctrl+C cancels outstanding sampling tasks.

    Args:
        config_path: Path to plan YAML
        output: Optional report path (JSON)
        workers: Override worker count
        seed: Override seed
        verbose: Emit DEBUG structured events

    Returns:
        Report dictionary
    """
    config = AdvisorConfig.from_yaml(Path(config_path))
    service = AdvisorService(config)
    if not verbose:
        service.structured_logger.set_level(logging.WARNING)

    cancel_event = threading.Event()

    def _handle_interrupt(signum, frame):
        logger.warning("Interrupt received, cancelling analysis")
        cancel_event.set()

    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGINT, _handle_interrupt)
    try:
        report = service.run(cancel_event=cancel_event, workers=workers, seed=seed)
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)

    if output:
        service.write_report(report, Path(output))
    return report.to_dict()


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vastu-cli",
        description="Vastu CLI - 32-zone coverage analysis of floor plans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyse a plan and write the JSON report
  vastu-cli analyze config/plans/example_plan.yaml --output report.json

  # Same plan, 4 sampling threads, fixed seed
  vastu-cli analyze config/plans/example_plan.yaml --workers 4 --seed 7

  # 32-zone table for a plan rotated 12.5 degrees from North
  vastu-cli zones --rotation 12.5

  # Deviation band for a measured - ideal difference
  vastu-cli classify -- -12.5
"""
    )

    # Global arguments
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging to stderr"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # analyze command
    analyze = subparsers.add_parser('analyze', help='Analyse a plan from YAML config')
    analyze.add_argument('config', help='Path to plan config YAML')
    analyze.add_argument('--output', '-o', help='Write JSON report to this file')
    analyze.add_argument('--workers', type=int, help='Sampling threads (overrides config)')
    analyze.add_argument('--seed', type=int, help='Root seed (overrides config)')

    # zones command
    zones = subparsers.add_parser('zones', help='Print the 32-zone table')
    zones.add_argument(
        '--rotation',
        type=float,
        default=0.0,
        help='North rotation in degrees (default: 0)'
    )

    # classify command
    classify = subparsers.add_parser('classify', help='Classify a deviation into a band')
    classify.add_argument('deviation', type=float, help='Signed deviation (actual - ideal)')

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)

    # Execute command
    try:
        if args.command == 'analyze':
            report = run_analysis(
                args.config,
                output=args.output,
                workers=args.workers,
                seed=args.seed,
                verbose=args.verbose,
            )
            if not args.output:
                print(json.dumps(report, indent=2))

        elif args.command == 'zones':
            partition = generate_32_zones(0.0, 0.0, 1.0, north_rotation=args.rotation)
            print(json.dumps([zone.to_dict() for zone in partition.zones], indent=2))

        elif args.command == 'classify':
            print(classify_deviation(args.deviation).value)

    except (VastuKernelError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()

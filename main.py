#!/usr/bin/env python3
"""
Vacuum Packaging Machine - single cycle launcher.

Validates the product/settings combination and runs one packaging cycle,
reporting stage progress on the console.

Usage:
  python main.py                                   # frozen fish fillet demo run
  python main.py --fast                            # same, timings scaled down 100x
  python main.py --material PA_PE --refrigerated   # rejected: film lacks barrier
  python main.py --vacuum ULTRA --moisture 85      # rejected: moisture too high

Exit codes:
  0 success, 1 stage failure, 2 configuration rejected, 3 machine busy
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime, timedelta

EXIT_CODES = {
    "success": 0,
    "stage_failure": 1,
    "configuration_rejected": 2,
    "machine_busy": 3,
}


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Vacuum Packaging Machine - run one packaging cycle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Product
    parser.add_argument("--product", default="Frozen fish fillet", help="Product name")
    parser.add_argument("--weight", type=float, default=500.0, help="Product weight (g)")
    parser.add_argument("--moisture", type=float, default=75.0, help="Moisture content (%%)")
    parser.add_argument("--refrigerated", dest="refrigerated", action="store_true", default=True,
                        help="Product requires refrigeration (default)")
    parser.add_argument("--ambient", dest="refrigerated", action="store_false",
                        help="Product is shelf-stable")
    parser.add_argument("--shelf-days", type=int, default=90, help="Days until expiry")

    # Settings
    parser.add_argument("--material", default="HIGH_BARRIER",
                        choices=["PA_PE", "PET_PE", "PVDC", "AL_PE", "HIGH_BARRIER"],
                        help="Packaging film")
    parser.add_argument("--vacuum", default="HIGH", choices=["LIGHT", "MEDIUM", "HIGH", "ULTRA"],
                        help="Target vacuum level")
    parser.add_argument("--temperature", type=float, default=150.0, help="Sealing temperature (°C)")
    parser.add_argument("--sealing-time", type=int,
                        help="Sealing time in ms (default: recommended for the material)")
    parser.add_argument("--nitrogen", dest="nitrogen", action="store_true", default=True,
                        help="Flush with nitrogen before sealing (default)")
    parser.add_argument("--no-nitrogen", dest="nitrogen", action="store_false",
                        help="Skip the nitrogen flush")

    # Runtime
    parser.add_argument("--fast", action="store_true", help="Scale stage timings down 100x")
    parser.add_argument("--log-level", choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help="Logging level")
    parser.add_argument("--machine-id", help="Override machine ID")

    return parser.parse_args(argv)


def apply_env_overrides(args):
    """Apply command line arguments to environment variables"""
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    if args.machine_id:
        os.environ["MACHINE_ID"] = args.machine_id


async def run(args) -> int:
    # Imported after env overrides so logging/config pick them up
    from vacpack import PackagingMachine, PackagingMaterial, PackagingSettings, Product, VacuumLevel
    from vacpack.abstractions.interfaces import AsyncioClock
    from vacpack.log_setup import FAIL_MARK, logger
    from vacpack.process_flow.observers import LoggingStageObserver

    material = PackagingMaterial[args.material]
    now = datetime.now()

    try:
        product = Product(
            name=args.product,
            weight=args.weight,
            moisture=args.moisture,
            requires_refrigeration=args.refrigerated,
            packaging_date=now,
            expiry_date=now + timedelta(days=args.shelf_days),
        )
        machine = PackagingMachine(
            clock=AsyncioClock(time_scale=0.01 if args.fast else 1.0),
            observers=[LoggingStageObserver()],
        )
        settings = PackagingSettings(
            material=material,
            vacuum_level=VacuumLevel[args.vacuum],
            sealing_temperature=args.temperature,
            sealing_time_ms=(
                args.sealing_time if args.sealing_time is not None
                else machine.recommended_sealing_time(material)
            ),
            use_nitrogen_flushing=args.nitrogen,
        )
    except ValueError as e:
        logger.error(f"{FAIL_MARK} Invalid input: {e}")
        return EXIT_CODES["configuration_rejected"]

    outcome = await machine.start_packaging(product, settings)
    return EXIT_CODES[outcome.status.value]


def main(argv=None) -> int:
    args = parse_args(argv)
    apply_env_overrides(args)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface parsing and validation."""

import argparse
import os


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Read work orders from a MongoDB work order collection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("uri", help="MongoDB connection string (mongodb://...)")
    parser.add_argument("username", help="Database user")
    parser.add_argument("password", help="Database password")

    parser.add_argument(
        "--database",
        default=os.environ.get("MONGO_DATABASE", "finfabrik"),
        help="Database holding the work order collection",
    )

    parser.add_argument(
        "--collection",
        default=os.environ.get("MONGO_COLLECTION", "workOrder"),
        help="Work order collection name",
    )

    parser.add_argument(
        "--max-pool-size",
        type=int,
        default=int(os.environ.get("MONGO_MAX_POOL_SIZE", "10")),
        help="Maximum number of pooled connections",
    )

    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=int(os.environ.get("MONGO_TIMEOUT_MS", "5000")),
        help="Server selection timeout in milliseconds",
    )

    parser.add_argument(
        "--order-id",
        default=None,
        help="Show a single order instead of the most recent ones",
    )

    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    return parser.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Validate command line arguments. Raises ValueError on invalid input."""
    if not args.uri.strip():
        raise ValueError("uri must not be empty")

    if args.max_pool_size <= 0:
        raise ValueError(f"--max-pool-size must be positive, got {args.max_pool_size}")

    if args.timeout_ms <= 0:
        raise ValueError(f"--timeout-ms must be positive, got {args.timeout_ms}")

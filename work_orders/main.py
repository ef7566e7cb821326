"""Work order store - Entry point."""

import sys

from work_orders.cli import parse_args, validate_args
from work_orders.infrastructure.connection import (
    ConfigurationError,
    ConnectionManager,
    ConnectionOptions,
)
from work_orders.infrastructure.repositories import MongoDataStore
from work_orders.utils import create_logger, log_config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logger = create_logger(args.log_level)

    try:
        validate_args(args)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    options = ConnectionOptions(
        uri=args.uri,
        username=args.username,
        password=args.password,
        database=args.database,
        collection=args.collection,
        max_pool_size=args.max_pool_size,
        timeout_ms=args.timeout_ms,
    )
    log_config(logger, options)

    logger.info("Connecting to MongoDB...")
    try:
        manager = ConnectionManager(options, logger)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    with manager:
        store = MongoDataStore(manager, logger)
        logger.info("Connected to MongoDB")

        if args.order_id is not None:
            order = store.get_data_by_id(args.order_id)
            if order is None:
                return 1
            print(f"Order data: {order}")
            return 0

        logger.info("Getting orders...")
        orders = store.get_data()
        logger.info(f"Orders: {len(orders)}")
        for order in orders:
            print(f"Order data: {order if order is not None else '(unreadable record)'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

import logging

from work_orders.infrastructure.connection import ConnectionOptions


def create_logger(
    level: str = "INFO", name: str = "work-orders"
) -> logging.Logger:
    """Create and configure a logger instance."""
    logger = logging.Logger(name)
    logger.setLevel(getattr(logging, level))

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level))
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def mask(secret: str) -> str:
    return "*" * 8 if secret else "(none)"


def log_config(logger: logging.Logger, options: ConnectionOptions) -> None:
    """Log configuration (safe subset only)."""
    logger.info("=" * 60)
    logger.info("Work Order Store Configuration")
    logger.info("=" * 60)
    logger.info(f"Database: {options.database}")
    logger.info(f"Collection: {options.collection}")
    logger.info(f"Username: {options.username or '(none)'}")
    logger.info(f"Password: {mask(options.password)}")
    logger.info(f"Max pool size: {options.max_pool_size}")
    logger.info(f"Timeout: {options.timeout_ms}ms")
    logger.info("=" * 60)

"""
Example of using logship with Python's standard logging module.
"""

import logging
import os

from logship import Config, IngestHandler


def main():
    handler = IngestHandler(
        Config(
            api_key=os.environ["LOGDNA_API_KEY"],
            hostname="dev-laptop",
            log_file="my_app",
            flush_limit=5,
        )
    )

    # Set formatter
    formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)

    # Create logger
    logger = logging.getLogger("my_app")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    try:
        # Use standard logging API
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")

        try:
            raise ValueError("Something went wrong!")
        except ValueError:
            logger.exception("Caught an exception")

        # Log multiple messages
        for i in range(10):
            logger.info(f"Processing step {i}")

    finally:
        # Close handler
        handler.close()


if __name__ == "__main__":
    main()

"""
Basic usage example for logship.
"""

import os
import sys
from datetime import datetime, timezone

from logship import Client, Config, LogShipError


def main():
    client = Client(
        Config(
            api_key=os.environ["LOGDNA_API_KEY"],
            hostname="dev-laptop",
            log_file="basic_usage",
            flush_limit=10,  # Send after 10 lines
        )
    )

    try:
        client.log(datetime.now(timezone.utc), "Application starting...")

        # The 11th line sends the first 10 before being buffered
        for i in range(15):
            client.log(datetime.now(timezone.utc), f"Processing item {i}")

        print(f"Pending lines: {client.size()}")

        # Force flush remaining lines
        client.flush()
    except LogShipError as exc:
        print(f"Failed to send logs: {exc}", file=sys.stderr)
    finally:
        # Always close the client, buffered lines are not sent otherwise
        client.close()


if __name__ == "__main__":
    main()

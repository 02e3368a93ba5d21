"""
Example of using the client as a context manager.
"""

import os
from datetime import datetime, timezone

from logship import Client, Config


def main():
    # Using context manager ensures buffered lines are sent
    with Client(
        Config(
            api_key=os.environ["LOGDNA_API_KEY"],
            hostname="dev-laptop",
            log_file="events",
            flush_limit=50,
        )
    ) as client:
        client.log(datetime.now(timezone.utc), "Application started")

        for i in range(20):
            client.log(datetime.now(timezone.utc), f"Processing item {i}")

        client.log(datetime.now(timezone.utc), "Application finished successfully")

    # Client is closed here
    print("Done! Logs have been sent.")


if __name__ == "__main__":
    main()

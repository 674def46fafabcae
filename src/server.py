"""Protean Engine runner for OpinaLocal.

In production (``event_processing = "async"``) notification handlers do not
run inside the request. This process subscribes to the event streams and
runs them.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import argparse
import asyncio

from protean.server.engine import Engine


def _get_domain():
    from opinalocal.domain import opinalocal

    opinalocal.init()
    return opinalocal


async def run():
    engine = Engine(_get_domain())
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="OpinaLocal Engine runner")
    parser.parse_args()

    asyncio.run(run())


if __name__ == "__main__":
    main()

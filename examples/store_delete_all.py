#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from bcclient import BigCommerceClient, ClientConfig


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Delete every resource matching a filter")
    p.add_argument("endpoint")
    p.add_argument("--query", action="append", default=[], metavar="KEY=VALUE")
    p.add_argument("--limit", type=int, default=3, help="Set to 1 if 3 errors out")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    query = dict(q.split("=", 1) for q in args.query)

    async with BigCommerceClient(config=ClientConfig.from_env()) as bc:
        report = await bc.delete_all(args.endpoint, query, args.limit)
    print(f"Deleted {report.deleted} resources in {report.rounds} rounds ({report.fetches} fetches)")


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from bcclient import BigCommerceClient, ClientConfig


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch every page of a listing endpoint")
    p.add_argument("endpoint", nargs="?", default="v3/catalog/products")
    p.add_argument("--query", action="append", default=[], metavar="KEY=VALUE")
    p.add_argument("--concurrency", type=int, default=3)
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.debug else logging.WARNING)
    query = dict(q.split("=", 1) for q in args.query)

    config = ClientConfig.from_env(debug=args.debug)
    async with BigCommerceClient(config=config) as bc:
        print("=" * 50)
        async for items, page, total in bc.paginate(args.endpoint, query, args.concurrency):
            print(f"Page {page:>4} / {total:<4} | {len(items):>4} items")
        print("=" * 50)
        everything = await bc.get_all(args.endpoint, query, args.concurrency)
        print(f"Total items: {len(everything)}")


if __name__ == "__main__":
    asyncio.run(main())

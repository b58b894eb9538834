#!/usr/bin/env python3
from __future__ import annotations

import asyncio

from bcclient import BigCommerceClient, ClientConfig, RemoteError


async def main() -> None:
    async with BigCommerceClient(config=ClientConfig.from_env()) as bc:
        customers = await bc.get("v3/customers")
        print("customers:", customers, "\n")

        physical = await bc.get("v3/catalog/products", {"type": "physical"})
        print("physical products:", physical, "\n")

        try:
            product = await bc.post(
                "v3/catalog/products",
                {"name": "New Thing", "type": "physical", "weight": 1, "price": 99.99},
            )
            updated = await bc.put(f"v3/catalog/products/{product['id']}", {"price": 109.99})
            print("updated product:", updated, "\n")
        except RemoteError as e:
            print(e)


if __name__ == "__main__":
    asyncio.run(main())

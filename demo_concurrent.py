import asyncio
from collections import Counter
from sdk.catalog_client import CatalogClient

async def create_one(client, name, price):
    r = await client.create_product_async(name, price)
    if r.status_code == 201:
        print(f"✅ created {name} (id {r.json()['id']})")
    else:
        print(f"❌ {name} failed: {r.status_code} {r.text}")
    return r

async def main():
    c = CatalogClient(base_url="http://127.0.0.1:5000", token="12345")
    before = len(c.list_products(limit=1000))

    print("\n⚡ Creating products concurrently...")
    results = await asyncio.gather(*(create_one(c, f"Widget {i}", i) for i in range(20)))

    created = [r.json() for r in results if r.status_code == 201]
    after = c.list_products(limit=1000)
    print(f"\n📦 Store grew from {before} to {len(after)} products ({len(created)} created)")

    # ids come from a millisecond clock, so a burst can share ids
    dupes = {pid: n for pid, n in Counter(p["id"] for p in after).items() if n > 1}
    if dupes:
        print(f"⚠️  ids shared by more than one product: {dupes}")

if __name__ == "__main__":
    asyncio.run(main())

# sdk/catalog_client.py
import requests
import httpx
from typing import Any, Dict, List, Optional


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:5000", token: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.products_url = f"{self.base_url}/api/products"
        self.session = requests.Session()
        self.timeout = timeout
        self.token = token

    def _auth_headers(self) -> Dict[str, str]:
        return {"token": self.token} if self.token else {}

    @staticmethod
    def _product_payload(name: str, price: float, extra: Dict[str, Any]) -> Dict[str, Any]:
        payload = dict(extra)
        payload["name"] = name
        payload["price"] = price
        return payload

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Reads
    def list_products(self, search: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {}
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self.products_url, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(f"{self.products_url}/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Writes (need the shared token)
    def create_product(self, name: str, price: float, **extra) -> Dict[str, Any]:
        r = self.session.post(
            self.products_url,
            json=self._product_payload(name, price, extra),
            headers=self._auth_headers(),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, price: float, **extra) -> Dict[str, Any]:
        r = self.session.put(
            f"{self.products_url}/{product_id}",
            json=self._product_payload(name, price, extra),
            headers=self._auth_headers(),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(f"{self.products_url}/{product_id}", headers=self._auth_headers(), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (used by the concurrent demo)
    async def create_product_async(self, name: str, price: float, **extra) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(
                self.products_url,
                json=self._product_payload(name, price, extra),
                headers=self._auth_headers(),
            )


if __name__ == "__main__":
    import argparse
    import json
    from rich import print

    parser = argparse.ArgumentParser(description="Catalog API client")
    parser.add_argument("--base-url", default="http://127.0.0.1:5000")
    parser.add_argument("--token", default=None, help="Shared API token for write operations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--search", help="Case-insensitive name filter")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--extra", default="{}", help="JSON object of additional fields")

    up = subparsers.add_parser("update", help="Update a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name", required=True)
    up.add_argument("--price", type=float, required=True)
    up.add_argument("--extra", default="{}", help="JSON object of additional fields")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("health", help="Service health")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, token=args.token)

    if args.command == "list":
        print(c.list_products(args.search, args.page, args.limit))
    elif args.command == "get":
        print(c.get_product(args.product_id))
    elif args.command == "create":
        print(c.create_product(args.name, args.price, **json.loads(args.extra)))
    elif args.command == "update":
        print(c.update_product(args.product_id, args.name, args.price, **json.loads(args.extra)))
    elif args.command == "delete":
        print(c.delete_product(args.product_id))
    elif args.command == "health":
        print(c.health())

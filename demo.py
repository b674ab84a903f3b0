#!/usr/bin/env python
import requests
from sdk.catalog_client import CatalogClient

def main():
    c = CatalogClient(base_url="http://127.0.0.1:5000", token="12345")
    anonymous = CatalogClient(base_url="http://127.0.0.1:5000")

    # -----------------------------
    # Create a product
    # -----------------------------
    print("Creating 'Pen'...")
    pen = c.create_product("Pen", 1.5, color="blue")
    print(pen)

    # -----------------------------
    # Writes without the token are refused
    # -----------------------------
    print("\nCreating 'Notebook' without a token...")
    try:
        anonymous.create_product("Notebook", 3)
    except requests.exceptions.HTTPError as e:
        print(f"Refused: {e.response.status_code} {e.response.text}")

    # -----------------------------
    # Search
    # -----------------------------
    print("\nSearching for 'pen'...")
    print(c.list_products(search="pen"))

    # -----------------------------
    # Update only the price
    # -----------------------------
    print("\nRaising the price...")
    print(c.update_product(pen["id"], pen["name"], 2.25))

    # -----------------------------
    # Delete and confirm it is gone
    # -----------------------------
    print("\nDeleting 'Pen'...")
    print(c.delete_product(pen["id"]))
    try:
        c.get_product(pen["id"])
    except requests.exceptions.HTTPError as e:
        print(f"Lookup after delete: {e.response.status_code} {e.response.text}")

if __name__ == "__main__":
    main()

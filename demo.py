#!/usr/bin/env python
import os
from rich import print
from sdk.product_client import ProductClient, ProductApiError

def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key=os.getenv("API_KEY"))

    print(c.welcome())

    # -----------------------------
    # Seeded catalogue
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nElectronics, one per page...")
    print(c.list_products(category="electronics", page=1, limit=1))

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 35, "kitchen", in_stock=True)
    print(kettle)

    print("\nSearching for 'kett'...")
    print(c.list_products(search="kett"))

    print("\nMarking it out of stock...")
    print(c.update_product(kettle["id"], "Kettle", "1.7L electric kettle", 35, "kitchen", in_stock=False))

    print("\nStats...")
    print(c.stats())

    print("\nDeleting it...")
    print(c.delete_product(kettle["id"]))

    try:
        c.get_product(kettle["id"])
    except ProductApiError as e:
        print(f"[yellow]Gone as expected:[/yellow] {e}")

if __name__ == "__main__":
    main()

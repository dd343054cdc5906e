#!/usr/bin/env python3
"""
Script to seed a region with tables and a small menu.
Existing regions and products with the same name are reused.
"""
import sys
from sqlmodel import select, Session

from core.config import settings
from crud import products as crud_products
from crud import regions as crud_regions
from crud import tables as crud_tables
from db.session import Store
from models.products import Product
from models.regions import Region

DEFAULT_MENU = [
    ("Çay", 1500),
    ("Türk Kahvesi", 4500),
    ("Ayran", 3000),
    ("Lahmacun", 9000),
]


def get_or_create_region(db: Session, name: str) -> Region:
    """Get existing region or create a new one."""
    region = db.exec(select(Region).where(Region.name == name)).first()

    if region:
        print(f"✓ Using existing region: {region.name} (ID: {region.id})")
        return region

    region = crud_regions.create_region(db, name)
    print(f"✓ Created new region: {region.name} (ID: {region.id})")
    return region


def ensure_tables(db: Session, region: Region, count: int) -> None:
    """Add tables until the region has at least `count` of them."""
    existing = len(crud_tables.list_tables(db, region.id))
    for _ in range(existing, count):
        table = crud_tables.add_table(db, region.id)
        print(f"✓ Created table {table.table_number} (ID: {table.id})")


def ensure_menu(db: Session) -> None:
    """Create the default products that are not on the menu yet."""
    for name, price in DEFAULT_MENU:
        if db.exec(select(Product).where(Product.name == name)).first():
            continue
        product = crud_products.create_product(db, name, price)
        print(f"✓ Created product: {product.name} ({product.price})")


def main():
    """Main function to seed the floor plan."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Seed a region with tables and a default menu"
    )
    parser.add_argument(
        "--region",
        type=str,
        default="Main",
        help="Region name (default: Main)"
    )
    parser.add_argument(
        "--tables",
        type=int,
        default=6,
        help="Number of tables the region should have (default: 6)"
    )

    args = parser.parse_args()

    store = Store.from_settings(settings)
    store.create_all()

    try:
        with store.session() as db:
            region = get_or_create_region(db, args.region)
            ensure_tables(db, region, args.tables)
            ensure_menu(db)

            print("\n" + "="*60)
            print(f"✓ Region {region.name} ready with {args.tables} tables")
            print("="*60)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
    finally:
        store.close()


if __name__ == "__main__":
    main()

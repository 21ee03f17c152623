#!/usr/bin/env python3
"""
Basic example showing cycle detection and deep field collection.

This example demonstrates:
- Detecting shared and circular references in a dataclass graph
- Collecting every value reachable through selected fields
- Reading identifiers and null fields without touching __getattr__
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlegraphlib import (
    contains_circular_references,
    find_id,
    get_deep_field_values,
    get_null_property_names,
)


@dataclass(eq=False)
class Customer:
    id: int
    name: str
    referred_by: Optional['Customer'] = None


@dataclass(eq=False)
class Order:
    number: str = field(metadata={'id': True})
    customer: Optional[Customer] = None
    items: List[str] = field(default_factory=list)
    notes: Optional[str] = None


def main():
    """Build a small order graph and inspect it."""
    alice = Customer(1, 'alice')
    bob = Customer(2, 'bob', referred_by=alice)
    order = Order('A-100', bob, ['widget', 'gadget'])

    print("Order graph")
    print("-" * 50)
    print(f"  Circular: {contains_circular_references(order)}")

    # Close the loop: alice was referred by bob
    alice.referred_by = bob
    print(f"  Circular after referral loop: {contains_circular_references(order)}")

    customers = [
        value for value in get_deep_field_values(order, lambda f: f.name != 'items')
        if isinstance(value, Customer)
    ]
    print(f"\nCustomers reachable from {find_id(order)}:")
    for customer in sorted(customers, key=find_id):
        print(f"  #{find_id(customer)} {customer.name}")

    print(f"\nUnset fields on order: {', '.join(get_null_property_names(order))}")


if __name__ == "__main__":
    main()

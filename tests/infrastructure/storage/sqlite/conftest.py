"""Pytest fixtures for SQLite storage tests.

Every store test runs against a freshly migrated temporary database
(the `db` fixture from the root conftest).
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.core.entities import (
    Category,
    Customer,
    Part,
    Quote,
    QuoteLineItem,
    ShippingCosts,
)
from src.core.services.quote_calculator import calculate_quote_totals
from src.infrastructure.storage.sqlite import (
    SQLiteCategoryStore,
    SQLiteCustomerStore,
    SQLiteExchangeRateStore,
    SQLiteOrderStore,
    SQLitePartStore,
    SQLitePreferenceStore,
    SQLiteQuoteStore,
    SQLiteSupplierStore,
)


@pytest.fixture
def category_store(db) -> SQLiteCategoryStore:
    return SQLiteCategoryStore()


@pytest.fixture
def part_store(db) -> SQLitePartStore:
    return SQLitePartStore()


@pytest.fixture
def customer_store(db) -> SQLiteCustomerStore:
    return SQLiteCustomerStore()


@pytest.fixture
def supplier_store(db) -> SQLiteSupplierStore:
    return SQLiteSupplierStore()


@pytest.fixture
def quote_store(db) -> SQLiteQuoteStore:
    return SQLiteQuoteStore()


@pytest.fixture
def order_store(db) -> SQLiteOrderStore:
    return SQLiteOrderStore()


@pytest.fixture
def preference_store(db) -> SQLitePreferenceStore:
    return SQLitePreferenceStore()


@pytest.fixture
def rate_store(db) -> SQLiteExchangeRateStore:
    return SQLiteExchangeRateStore()


@pytest.fixture
async def categories(category_store) -> list[Category]:
    """Brakes, Filters, Lighting at display_order 1, 2, 3."""
    return [
        await category_store.create(Category(name=name, display_order=i + 1))
        for i, name in enumerate(["Brakes", "Filters", "Lighting"])
    ]


@pytest.fixture
async def customer(customer_store) -> Customer:
    return await customer_store.create(
        Customer(name="Harbour Motors", contact_person="Dana Reyes", email="dana@harbour.test")
    )


@pytest.fixture
async def part(part_store, categories) -> Part:
    return await part_store.create(
        Part(part_number="BRK-1042", name="Brake pad set", category_id=categories[0].id)
    )


def make_quote(
    customer_id: int,
    part_id: int,
    quote_number: str,
    unit_price: str = "100.00",
    quote_date: date | None = None,
    with_custom_item: bool = False,
) -> Quote:
    items = [QuoteLineItem(part_id=part_id, quantity=2, unit_price=Decimal(unit_price))]
    if with_custom_item:
        items.append(
            QuoteLineItem(
                is_custom_part=True,
                custom_part_name="Rotor machining",
                custom_part_description="Both fronts",
                quantity=1,
                unit_price=Decimal("35.00"),
            )
        )
    shipping = ShippingCosts(sea=Decimal("50"), air=Decimal("80"))
    quote_date = quote_date or date.today()
    quote = Quote(
        quote_number=quote_number,
        customer_id=customer_id,
        line_items=items,
        shipping_costs=shipping,
        agent_fees=Decimal("10"),
        local_shipping_fees=Decimal("5"),
        quote_date=quote_date,
        expiry_date=quote_date + timedelta(days=30),
    )
    quote.apply_totals(
        calculate_quote_totals(items, shipping, quote.agent_fees, quote.local_shipping_fees)
    )
    return quote


@pytest.fixture
def quote_factory():
    return make_quote

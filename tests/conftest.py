"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

from src.config.settings import reset_settings
from src.core.entities import (
    Customer,
    Part,
    Quote,
    QuoteLineItem,
    ShippingCosts,
    ShippingMethod,
)
from src.core.services.quote_calculator import calculate_quote_totals


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point storage at a per-test directory and rebuild settings around each test."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database bound to the global connection pool."""
    from src.infrastructure.storage.sqlite import close_pool, open_pool
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    db_path = tmp_path / "test.db"
    await initialize_database(db_path, create_backup_before=False)
    await open_pool(db_path)
    yield db_path
    await close_pool()


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(id=1, name="Harbour Motors", contact_person="Dana Reyes", email="dana@harbour.test")


@pytest.fixture
def sample_part() -> Part:
    return Part(id=10, part_number="BRK-1042", name="Brake pad set", category_id=1, current_stock=5, min_stock=2)


@pytest.fixture
def sample_quote(sample_customer: Customer) -> Quote:
    """Draft quote: one catalog row (2 x 100.00), one custom row, sea freight."""
    items = [
        QuoteLineItem(part_id=10, part_number="BRK-1042", part_name="Brake pad set", quantity=2, unit_price=Decimal("100.00")),
        QuoteLineItem(
            is_custom_part=True,
            custom_part_name="Rotor machining",
            custom_part_description="",
            quantity=1,
            unit_price=Decimal("0.00"),
        ),
    ]
    shipping = ShippingCosts(sea=Decimal("50"), air=Decimal("80"), selected=ShippingMethod.SEA)
    quote = Quote(
        id=7,
        quote_number="QTE-2026-000123",
        customer_id=sample_customer.id,
        customer=sample_customer,
        line_items=items,
        shipping_costs=shipping,
        agent_fees=Decimal("10"),
        local_shipping_fees=Decimal("5"),
        quote_date=date.today(),
        expiry_date=date.today() + timedelta(days=30),
    )
    quote.apply_totals(calculate_quote_totals(items, shipping, quote.agent_fees, quote.local_shipping_fees))
    return quote

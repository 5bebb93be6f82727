"""SQLite implementations of customer and supplier storage."""

from datetime import UTC, datetime

from src.config import get_logger
from src.core.entities.customer import Customer
from src.core.entities.order import Supplier
from src.core.interfaces.order_store import ICustomerStore, ISupplierStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.row_utils import datetime_in

logger = get_logger(__name__)

_SUPPLIER_COLUMNS = (
    "name, contact_person, email, phone, address, rating, delivery_time, "
    "payment_terms, notes, is_active, created_at, updated_at"
)


def row_to_customer(row) -> Customer:
    return Customer(
        id=row["id"],
        name=row["name"],
        contact_person=row["contact_person"],
        email=row["email"],
        phone=row["phone"],
        address=row["address"],
        created_at=datetime_in(row["created_at"]),
        updated_at=datetime_in(row["updated_at"]),
    )


def row_to_supplier(row) -> Supplier:
    return Supplier(
        id=row["id"],
        name=row["name"],
        contact_person=row["contact_person"],
        email=row["email"],
        phone=row["phone"],
        address=row["address"],
        rating=row["rating"],
        delivery_time=row["delivery_time"],
        payment_terms=row["payment_terms"],
        notes=row["notes"],
        is_active=bool(row["is_active"]),
        created_at=datetime_in(row["created_at"]),
        updated_at=datetime_in(row["updated_at"]),
    )


async def insert_supplier(conn, supplier: Supplier) -> Supplier:
    """Insert on an open connection; used inside larger transactions."""
    now = datetime.now(UTC)
    supplier.created_at = now
    supplier.updated_at = now
    cursor = await conn.execute(
        f"INSERT INTO suppliers ({_SUPPLIER_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            supplier.name,
            supplier.contact_person,
            supplier.email,
            supplier.phone,
            supplier.address,
            supplier.rating,
            supplier.delivery_time,
            supplier.payment_terms,
            supplier.notes,
            int(supplier.is_active),
            now.isoformat(),
            now.isoformat(),
        ),
    )
    supplier.id = cursor.lastrowid
    return supplier


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer storage."""

    async def create(self, customer: Customer) -> Customer:
        now = datetime.now(UTC)
        customer.created_at = now
        customer.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO customers (
                    name, contact_person, email, phone, address, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    customer.name,
                    customer.contact_person,
                    customer.email,
                    customer.phone,
                    customer.address,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            customer.id = cursor.lastrowid
        logger.info("customer_created", customer_id=customer.id)
        return customer

    async def get(self, customer_id: int) -> Customer | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers WHERE id = ?", (customer_id,))
            row = await cursor.fetchone()
            return row_to_customer(row) if row else None

    async def list(self, search: str = "", limit: int = 100, offset: int = 0) -> list[Customer]:
        query = "SELECT * FROM customers"
        params: list = []
        if search:
            query += " WHERE name LIKE ? OR contact_person LIKE ? OR email LIKE ?"
            like = f"%{search}%"
            params.extend([like, like, like])
        query += " ORDER BY name, id LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            return [row_to_customer(row) for row in await cursor.fetchall()]


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier storage."""

    async def create(self, supplier: Supplier) -> Supplier:
        async with get_transaction() as conn:
            await insert_supplier(conn, supplier)
        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def get(self, supplier_id: int) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers WHERE id = ?", (supplier_id,))
            row = await cursor.fetchone()
            return row_to_supplier(row) if row else None

    async def list(self, active_only: bool = False) -> list[Supplier]:
        query = "SELECT * FROM suppliers"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY name, id"
        async with get_connection() as conn:
            cursor = await conn.execute(query)
            return [row_to_supplier(row) for row in await cursor.fetchall()]

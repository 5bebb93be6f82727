"""Abstract interfaces for orders, suppliers and customers."""

from abc import ABC, abstractmethod

from src.core.entities.customer import Customer
from src.core.entities.order import Order, OrderListFilters, OrderPage, Supplier
from src.core.entities.quote import Quote


class IOrderStore(ABC):
    """Interface for order persistence."""

    @abstractmethod
    async def get(self, order_id: int) -> Order | None:
        """Get order with line items."""
        pass

    @abstractmethod
    async def list(self, filters: OrderListFilters | None = None) -> OrderPage:
        """
        One page of orders.

        Search matches the order number, notes, supplier name or contact,
        and the part number or name of any line item.
        """
        pass

    @abstractmethod
    async def status_counts(self) -> dict[str, int]:
        """Order count per status, every status present, plus 'all'."""
        pass

    @abstractmethod
    async def convert_quote(self, quote: Quote, order: Order, placeholder: Supplier) -> Order:
        """
        Persist a quote conversion atomically.

        In one transaction: use the first active supplier or insert
        placeholder, insert the order and its line items, and mark the quote
        converted_to_order with the order id and number. Nothing is written
        if any step fails.
        """
        pass


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def get(self, supplier_id: int) -> Supplier | None:
        pass

    @abstractmethod
    async def list(self, active_only: bool = False) -> list[Supplier]:
        pass


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get(self, customer_id: int) -> Customer | None:
        pass

    @abstractmethod
    async def list(self, search: str = "", limit: int = 100, offset: int = 0) -> list[Customer]:
        """List customers by name, optionally filtered."""
        pass

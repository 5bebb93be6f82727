"""Customer and supplier endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_cust_store, get_supp_store
from src.application.dto.requests import CreateCustomerRequest, CreateSupplierRequest
from src.application.dto.responses import CustomerResponse, ErrorResponse, SupplierResponse
from src.application.mappers import customer_to_response, supplier_to_response
from src.core.entities.customer import Customer
from src.core.entities.order import Supplier
from src.core.exceptions import CustomerNotFoundError, SupplierNotFoundError
from src.infrastructure.storage.sqlite import SQLiteCustomerStore, SQLiteSupplierStore

customers_router = APIRouter(prefix="/api/customers", tags=["customers"])
suppliers_router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@customers_router.get("", response_model=list[CustomerResponse])
async def list_customers(
    q: str = Query(default="", description="Matches name, contact person or email"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> list[CustomerResponse]:
    customers = await store.list(search=q, limit=limit, offset=offset)
    return [customer_to_response(c) for c in customers]


@customers_router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    request: CreateCustomerRequest,
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    customer = await store.create(Customer(**request.model_dump()))
    return customer_to_response(customer)


@customers_router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: int,
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    customer = await store.get(customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return customer_to_response(customer)


@suppliers_router.get("", response_model=list[SupplierResponse])
async def list_suppliers(
    active_only: bool = False,
    store: SQLiteSupplierStore = Depends(get_supp_store),
) -> list[SupplierResponse]:
    suppliers = await store.list(active_only=active_only)
    return [supplier_to_response(s) for s in suppliers]


@suppliers_router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_supplier(
    request: CreateSupplierRequest,
    store: SQLiteSupplierStore = Depends(get_supp_store),
) -> SupplierResponse:
    supplier = await store.create(Supplier(**request.model_dump()))
    return supplier_to_response(supplier)


@suppliers_router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: int,
    store: SQLiteSupplierStore = Depends(get_supp_store),
) -> SupplierResponse:
    supplier = await store.get(supplier_id)
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)
    return supplier_to_response(supplier)

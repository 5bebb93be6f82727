"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    BulkReassignPartsRequest,
    CreateCategoryRequest,
    CreateCustomerRequest,
    CreatePartRequest,
    CreateQuoteRequest,
    CreateSupplierRequest,
    ListQuotesRequest,
    MergeCategoriesRequest,
    QuoteLineItemRequest,
    RecordPriceRequest,
    RefreshExchangeRatesRequest,
    ReorderCategoriesRequest,
    SaveQuotePreferencesRequest,
    ShippingCostsRequest,
    UpdateCategoryRequest,
    UpdateQuoteRequest,
    UpdateQuoteStatusRequest,
)
from src.application.dto.responses import (
    BulkReassignPartsResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryShareResponse,
    CategoryStatisticsResponse,
    CustomerResponse,
    ErrorResponse,
    ExchangeRateHistoryResponse,
    ExchangeRateResponse,
    HealthResponse,
    MergeCategoriesResponse,
    OrderLineItemResponse,
    OrderListResponse,
    OrderStatusCountsResponse,
    OrderResponse,
    PartListResponse,
    PartPricingResponse,
    PartResponse,
    PriceRecordResponse,
    QuoteLineItemResponse,
    QuoteListResponse,
    QuotePreferencesResponse,
    QuoteResponse,
    QuoteStatusCountsResponse,
    QuoteStatusUpdateResponse,
    ShippingCostsResponse,
    SupplierResponse,
)

__all__ = [
    # Requests
    "CreateCategoryRequest",
    "UpdateCategoryRequest",
    "ReorderCategoriesRequest",
    "MergeCategoriesRequest",
    "BulkReassignPartsRequest",
    "CreatePartRequest",
    "RecordPriceRequest",
    "CreateCustomerRequest",
    "CreateSupplierRequest",
    "QuoteLineItemRequest",
    "ShippingCostsRequest",
    "CreateQuoteRequest",
    "UpdateQuoteRequest",
    "UpdateQuoteStatusRequest",
    "ListQuotesRequest",
    "SaveQuotePreferencesRequest",
    "RefreshExchangeRatesRequest",
    # Responses
    "CategoryResponse",
    "CategoryListResponse",
    "CategoryShareResponse",
    "CategoryStatisticsResponse",
    "MergeCategoriesResponse",
    "BulkReassignPartsResponse",
    "PartResponse",
    "PartListResponse",
    "PriceRecordResponse",
    "PartPricingResponse",
    "CustomerResponse",
    "SupplierResponse",
    "QuoteLineItemResponse",
    "ShippingCostsResponse",
    "QuoteResponse",
    "QuoteListResponse",
    "QuoteStatusCountsResponse",
    "QuotePreferencesResponse",
    "QuoteStatusUpdateResponse",
    "OrderLineItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderStatusCountsResponse",
    "ExchangeRateResponse",
    "ExchangeRateHistoryResponse",
    "HealthResponse",
    "ErrorResponse",
]

"""
Application layer - Use cases, DTOs and entity mappers.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Mapping domain entities onto response DTOs

Use cases are the entry point for API handlers that write or compute.
"""

from src.application.dto.responses import ErrorResponse, HealthResponse
from src.application.use_cases import (
    ConvertQuoteToOrderUseCase,
    CreateCategoryUseCase,
    CreateQuoteUseCase,
    ListQuotesUseCase,
    RefreshExchangeRatesUseCase,
    UpdateQuoteStatusUseCase,
    UpdateQuoteUseCase,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "CreateQuoteUseCase",
    "UpdateQuoteUseCase",
    "UpdateQuoteStatusUseCase",
    "ConvertQuoteToOrderUseCase",
    "ListQuotesUseCase",
    "CreateCategoryUseCase",
    "RefreshExchangeRatesUseCase",
]

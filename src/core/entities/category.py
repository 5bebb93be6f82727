"""Part category domain entities."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class Category(BaseModel):
    """A part category with a user-chosen display position."""

    id: int | None = None
    name: str
    description: str | None = None
    display_order: int = Field(default=1, ge=1)
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name must not be empty")
        return v


class CategoryStats(BaseModel):
    """Rollup over the non-archived parts of one category. Never stored."""

    part_count: int = 0
    total_inventory_value: Decimal = Decimal("0")
    average_stock_level: float = 0.0
    low_stock_count: int = 0


class CategoryWithStats(Category):
    """Category joined with its rollup."""

    stats: CategoryStats = Field(default_factory=CategoryStats)

    @property
    def part_count(self) -> int:
        return self.stats.part_count


class CategoryShare(BaseModel):
    """Share of categorized parts held by one category."""

    category_name: str
    part_count: int
    percentage: float


class CategoryStatistics(BaseModel):
    """Overview across all categories."""

    total_categories: int = 0
    active_categories: int = 0
    total_parts_categorized: int = 0
    distribution: list[CategoryShare] = Field(default_factory=list)

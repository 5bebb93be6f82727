"""Category overview statistics."""

from collections.abc import Sequence

from src.core.entities.category import (
    CategoryShare,
    CategoryStatistics,
    CategoryWithStats,
)


def summarize_categories(categories: Sequence[CategoryWithStats]) -> CategoryStatistics:
    """
    Totals plus each category's share of all categorized parts.

    Percentages are rounded to one decimal place; with no categorized parts
    every share is 0.
    """
    total_parts = sum(c.part_count for c in categories)
    distribution = [
        CategoryShare(
            category_name=c.name,
            part_count=c.part_count,
            percentage=round(c.part_count / total_parts * 100, 1) if total_parts else 0.0,
        )
        for c in categories
    ]
    return CategoryStatistics(
        total_categories=len(categories),
        active_categories=sum(1 for c in categories if c.is_active),
        total_parts_categorized=total_parts,
        distribution=distribution,
    )

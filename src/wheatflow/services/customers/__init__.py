"""Customer service helpers."""

from .stats import (
    compute_customer_overview,
    filter_and_sort_customers,
    list_customer_summaries,
    lookup_customer,
    remove_customer,
    sub_area_suggestions,
    summarize_customers,
)

__all__ = [
    "compute_customer_overview",
    "filter_and_sort_customers",
    "list_customer_summaries",
    "lookup_customer",
    "remove_customer",
    "sub_area_suggestions",
    "summarize_customers",
]

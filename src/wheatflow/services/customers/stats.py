"""Customer analytics helpers."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional

from ...errors import NotFoundError
from ...models.domain import Customer, OrderLine
from ...persistence.customers import delete_customer, find_customer_by_phone, get_customer, list_customers
from ...persistence.orders import delete_order_lines_for_customer, list_order_lines, list_sub_areas
from ..journal import WriteJournal
from ..orders.slots import is_sentinel
from ..validation import validate_phone

CustomerView = Literal["all", "pending", "completed"]
CustomerSort = Literal["name", "area", "totalAmount", "totalKg", "orderCount"]


@dataclass(slots=True)
class CustomerSummary:
    customer: Customer
    order_count: int = 0
    total_quantity: float = 0.0
    total_amount: float = 0.0
    delivered_count: int = 0
    has_pending: bool = False


def summarize_customers(customers: Iterable[Customer], lines: Iterable[OrderLine]) -> list[CustomerSummary]:
    """Per-customer order statistics. Sentinel lines are not orders."""
    by_customer: Dict[str, List[OrderLine]] = defaultdict(list)
    for line in lines:
        if is_sentinel(line.product_type):
            continue
        by_customer[line.customer_id].append(line)

    summaries: list[CustomerSummary] = []
    for customer in customers:
        own = by_customer.get(customer.id, [])
        summaries.append(
            CustomerSummary(
                customer=customer,
                order_count=len(own),
                total_quantity=sum(line.quantity_kg for line in own),
                total_amount=sum(line.total_amount for line in own),
                delivered_count=sum(1 for line in own if line.status == "delivered"),
                has_pending=any(line.status == "pending" for line in own),
            )
        )
    return summaries


def filter_and_sort_customers(
    summaries: Iterable[CustomerSummary],
    *,
    search: Optional[str] = None,
    area_id: Optional[str] = None,
    view: CustomerView = "all",
    sort_by: CustomerSort = "name",
    descending: bool = False,
) -> list[CustomerSummary]:
    normalized_search = search.strip().lower() if isinstance(search, str) and search.strip() else None

    results: list[CustomerSummary] = []
    for summary in summaries:
        customer = summary.customer
        if normalized_search and normalized_search not in customer.name.lower() and normalized_search not in (customer.phone or ""):
            continue
        if area_id and customer.area_id != area_id:
            continue
        if view == "pending" and not summary.has_pending:
            continue
        if view == "completed" and (summary.order_count == 0 or summary.has_pending):
            continue
        results.append(summary)

    sort_keys = {
        "name": lambda item: item.customer.name.lower(),
        "area": lambda item: (item.customer.area_name or "").lower(),
        "totalAmount": lambda item: item.total_amount,
        "totalKg": lambda item: item.total_quantity,
        "orderCount": lambda item: item.order_count,
    }
    return sorted(results, key=sort_keys.get(sort_by, sort_keys["name"]), reverse=descending)


def list_customer_summaries(**filters) -> list[CustomerSummary]:
    summaries = summarize_customers(list_customers(), list_order_lines(exclude_sentinel=True))
    return filter_and_sort_customers(summaries, **filters)


def compute_customer_overview(top_n: int = 3) -> dict:
    """Headline counts for the customers page."""
    customers = list_customers()
    summaries = summarize_customers(customers, list_order_lines(exclude_sentinel=True))
    total_customers = len(customers)

    area_counts: Counter[str] = Counter()
    for customer in customers:
        label = (customer.area_name or "").strip()
        if label:
            area_counts[label] += 1

    top_areas = [{"name": name, "customers": count} for name, count in area_counts.most_common(top_n)]
    return {
        "totalCustomers": total_customers,
        "withPending": sum(1 for summary in summaries if summary.has_pending),
        "withoutOrders": sum(1 for summary in summaries if summary.order_count == 0),
        "areasDetected": len(area_counts),
        "topAreas": top_areas,
    }


def lookup_customer(phone: str) -> Customer:
    customer = find_customer_by_phone(validate_phone(phone))
    if customer is None:
        raise NotFoundError(f"No customer with phone {phone}.")
    return customer


def remove_customer(customer_id: str) -> None:
    """Delete a customer's order lines, then the customer. Stock is not adjusted."""
    if get_customer(customer_id) is None:
        raise NotFoundError(f"Customer {customer_id} not found.")
    journal = WriteJournal(f"delete customer {customer_id}")
    with journal:
        delete_order_lines_for_customer(customer_id)
        journal.record(f"orders.delete customer_id={customer_id}")
        delete_customer(customer_id)
        journal.record(f"customers.delete {customer_id}")


def sub_area_suggestions(query: Optional[str] = None, limit: Optional[int] = None) -> list[str]:
    values = list_sub_areas()
    if query and query.strip():
        needle = query.strip().lower()
        values = [value for value in values if needle in value.lower()]
    if limit is not None:
        return values[: max(limit, 0)]
    return values

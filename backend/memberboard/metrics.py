from __future__ import annotations

from prometheus_client import Counter

membership_pages_fetched_total = Counter(
    "membership_pages_fetched_total",
    "Number of non-empty membership listing pages appended by the collector.",
)
membership_collections_total = Counter(
    "membership_collections_total",
    "Number of membership page-walks finished, by outcome.",
    ["outcome"],
)

from contextlib import contextmanager

from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

# Counters
proxy_operations_total = Counter(
    "proxy_operations_total",
    "Total number of proxy resource operations",
    ["operation", "status"],
)


@contextmanager
def count_operation(operation: str):
    """Count the wrapped block as one `operation`, labelled success or error."""
    try:
        yield
    except Exception:
        proxy_operations_total.labels(operation=operation, status="error").inc()
        raise
    proxy_operations_total.labels(operation=operation, status="success").inc()


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST

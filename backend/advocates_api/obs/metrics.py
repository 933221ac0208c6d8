"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Summary


REQUEST_COUNTER = Counter(
	"advocates_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"advocates_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

SEARCH_QUERIES = Counter(
	"advocates_search_queries_total",
	"Advocate searches executed",
	["outcome"],
)

SEARCH_LATENCY = Histogram(
	"advocates_search_latency_seconds",
	"Advocate search latency in seconds",
	buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0),
)

SEARCH_RESULTS = Histogram(
	"advocates_search_results",
	"Rows returned per search page",
	buckets=(0, 1, 5, 10, 20, 50, 100),
)

POSTGRES_UP = Gauge("advocates_postgres_up", "Postgres availability (1=up,0=down)")
POSTGRES_LATENCY = Summary("advocates_postgres_latency_seconds", "Postgres ping latency (seconds)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_search_query(outcome: str) -> None:
	SEARCH_QUERIES.labels(outcome=outcome).inc()


def observe_search_latency(latency_seconds: float) -> None:
	SEARCH_LATENCY.observe(latency_seconds)


def observe_search_results(count: int) -> None:
	SEARCH_RESULTS.observe(count)


def mark_postgres(ok: bool, *, latency_seconds: float | None = None) -> None:
	POSTGRES_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		POSTGRES_LATENCY.observe(latency_seconds)

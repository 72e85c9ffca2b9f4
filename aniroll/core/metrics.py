"""A module that contains the Prometheus metrics of the bot."""
from __future__ import annotations

import logging
import typing

from prometheus_client import CollectorRegistry, Counter, start_http_server

__all__: typing.Final[typing.List[str]] = ["MetricsService"]
_LOGGER = logging.getLogger("aniroll.core.metrics")


class MetricsService:
    """Counts cache hits, errors, AniList requests, and command outcomes."""

    def __init__(self, registry: typing.Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.cache_hits = Counter(
            "aniroll_cache_hits_total",
            "Number of requests served from the cache",
            ["cache"],
            registry=self.registry,
        )
        self.errors = Counter(
            "aniroll_errors_total",
            "Number of errors by kind and component",
            ["kind", "component"],
            registry=self.registry,
        )
        self.api_requests = Counter(
            "aniroll_api_requests_total",
            "Number of AniList requests by component and outcome",
            ["component", "outcome"],
            registry=self.registry,
        )
        self.commands = Counter(
            "aniroll_commands_total",
            "Number of command invocations by outcome",
            ["command", "outcome"],
            registry=self.registry,
        )

    def track_cache_hit(self, name: str) -> None:
        self.cache_hits.labels(cache=name).inc()

    def track_error(self, kind: str, component: str) -> None:
        self.errors.labels(kind=kind, component=component).inc()

    def track_api_request(self, component: str, outcome: str, identity: str) -> None:
        # identities stay out of the labels, they'd blow up the cardinality
        _LOGGER.debug("%s request for %s: %s", component, identity, outcome)
        self.api_requests.labels(component=component, outcome=outcome).inc()

    def track_command(self, command: str, outcome: str) -> None:
        self.commands.labels(command=command, outcome=outcome).inc()

    def start_server(self, port: int) -> None:
        """Exposes the metrics over HTTP."""
        start_http_server(port, registry=self.registry)
        _LOGGER.info("Serving metrics on port %d", port)

"""Construction of the DNS endpoint records that publish a Gslb."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from gslbctl.depresolver.config import Config
from gslbctl.types import Gslb, HealthStatus, ObjectMeta

log = logging.getLogger(__name__)

GEO_STRATEGY = "geoip"
ROUND_ROBIN_STRATEGY = "roundRobin"
FAILOVER_STRATEGY = "failover"
DNS_TYPE_ANNOTATION = "k8gb.absa.oss/dnstype"


@dataclass
class Endpoint:
    """A single DNS record with its targets."""

    dns_name: str
    record_ttl: int = 0
    record_type: str = "A"
    targets: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class DNSEndpoint:
    """A set of DNS records owned by one Gslb."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    endpoints: List[Endpoint] = field(default_factory=list)


class DNSProvider(Protocol):
    """Edge DNS operations the controller relies on."""

    def gslb_ingress_exposed_ips(self, gslb: Gslb) -> List[str]: ...

    def get_external_targets(self, host: str) -> List[str]: ...

    def save_dns_endpoint(self, gslb: Gslb, endpoint: DNSEndpoint) -> None: ...

    def create_zone_delegation_for_external_dns(self, gslb: Gslb) -> None: ...

    def finalize(self, gslb: Gslb) -> None: ...


@dataclass(frozen=True)
class RuntimeStatusUpdate:
    """One recorded runtime status of a Gslb host."""

    strategy: str
    namespace: str
    name: str
    health: HealthStatus
    targets: Tuple[str, ...]
    is_primary: Optional[bool] = None


class MetricsRecorder:
    """In-memory record of controller counters and runtime status."""

    def __init__(self) -> None:
        self.errors: Counter = Counter()
        self.reconciliations: Counter = Counter()
        self.runtime_updates: List[RuntimeStatusUpdate] = []

    @staticmethod
    def _key(gslb: Gslb) -> Tuple[str, str]:
        return (gslb.namespace, gslb.name)

    def increment_error(self, gslb: Gslb) -> None:
        self.errors[self._key(gslb)] += 1

    def increment_reconciliation(self, gslb: Gslb) -> None:
        self.reconciliations[self._key(gslb)] += 1

    def _record(
        self,
        strategy: str,
        gslb: Gslb,
        health: HealthStatus,
        targets: List[str],
        is_primary: Optional[bool] = None,
    ) -> None:
        self.runtime_updates.append(
            RuntimeStatusUpdate(
                strategy=strategy,
                namespace=gslb.namespace,
                name=gslb.name,
                health=health,
                targets=tuple(targets),
                is_primary=is_primary,
            )
        )

    def update_roundrobin_status(
        self, gslb: Gslb, health: HealthStatus, targets: List[str]
    ) -> None:
        self._record(ROUND_ROBIN_STRATEGY, gslb, health, targets)

    def update_geoip_status(
        self, gslb: Gslb, health: HealthStatus, targets: List[str]
    ) -> None:
        self._record(GEO_STRATEGY, gslb, health, targets)

    def update_failover_status(
        self, gslb: Gslb, is_primary: bool, health: HealthStatus, targets: List[str]
    ) -> None:
        self._record(FAILOVER_STRATEGY, gslb, health, targets, is_primary)


def sort_targets(targets: List[str]) -> List[str]:
    """Sort the targets in place and return them."""
    targets.sort()
    return targets


def gslb_dns_endpoint(
    gslb: Gslb,
    config: Config,
    service_health: Mapping[str, HealthStatus],
    provider: DNSProvider,
    metrics: MetricsRecorder,
) -> DNSEndpoint:
    """Build the DNS records for every host of ``gslb``.

    Raises ValueError when a host lies outside the delegated edge zone.
    """
    strategy = gslb.spec.strategy
    ttl = strategy.dns_ttl_seconds
    local_targets = list(provider.gslb_ingress_exposed_ips(gslb))
    is_primary = strategy.primary_geo_tag == config.cluster_geo_tag
    records: List[Endpoint] = []

    for host, health in service_health.items():
        if config.edge_dns_zone not in host:
            raise ValueError(
                f"ingress host {host} does not match delegated zone {config.edge_dns_zone}"
            )
        is_healthy = health == HealthStatus.HEALTHY
        final_targets: List[str] = []

        if is_healthy:
            final_targets.extend(local_targets)
            records.append(
                Endpoint(
                    dns_name=f"localtargets-{host}",
                    record_ttl=ttl,
                    record_type="A",
                    targets=list(local_targets),
                )
            )

        external_targets = sort_targets(list(provider.get_external_targets(host)))
        if external_targets:
            if strategy.type in (ROUND_ROBIN_STRATEGY, GEO_STRATEGY):
                final_targets.extend(external_targets)
            elif strategy.type == FAILOVER_STRATEGY:
                if is_primary and not is_healthy:
                    final_targets = list(external_targets)
                    log.info(
                        "Executing failover strategy for primary cluster: gslb=%s cluster=%s "
                        "targets=%s workload=%s",
                        gslb.name, strategy.primary_geo_tag, final_targets,
                        HealthStatus.UNHEALTHY,
                    )
                elif not is_primary:
                    final_targets = list(external_targets)
                    log.info(
                        "Executing failover strategy for secondary cluster: gslb=%s cluster=%s "
                        "targets=%s workload=%s",
                        gslb.name, strategy.primary_geo_tag, final_targets,
                        HealthStatus.HEALTHY,
                    )
        else:
            log.info("No external targets have been found for host %s", host)

        update_runtime_status(metrics, gslb, is_primary, health, final_targets)
        log.info("Final target list: gslb=%s targets=%s", gslb.name, final_targets)

        if final_targets:
            records.append(
                Endpoint(
                    dns_name=host,
                    record_ttl=ttl,
                    record_type="A",
                    targets=final_targets,
                    labels={"strategy": strategy.type},
                )
            )

    return DNSEndpoint(
        metadata=ObjectMeta(
            name=gslb.name,
            namespace=gslb.namespace,
            annotations={DNS_TYPE_ANNOTATION: "local"},
            labels={DNS_TYPE_ANNOTATION: "local"},
            owner_references=[gslb.name],
        ),
        endpoints=records,
    )


def update_runtime_status(
    metrics: MetricsRecorder,
    gslb: Gslb,
    is_primary: bool,
    health: HealthStatus,
    final_targets: List[str],
) -> None:
    """Report the outcome for one host according to the Gslb strategy."""
    strategy = gslb.spec.strategy.type
    if strategy == ROUND_ROBIN_STRATEGY:
        metrics.update_roundrobin_status(gslb, health, final_targets)
    elif strategy == GEO_STRATEGY:
        metrics.update_geoip_status(gslb, health, final_targets)
    elif strategy == FAILOVER_STRATEGY:
        metrics.update_failover_status(gslb, is_primary, health, final_targets)
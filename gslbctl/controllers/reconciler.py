"""The Gslb reconciliation loop, finalizers and watch handlers."""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from gslbctl.controllers.dnsupdate import (
    FAILOVER_STRATEGY,
    ROUND_ROBIN_STRATEGY,
    DNSEndpoint,
    DNSProvider,
    MetricsRecorder,
    gslb_dns_endpoint,
)
from gslbctl.depresolver.config import Config
from gslbctl.depresolver.resolver import DependencyResolver
from gslbctl.ingress import V1IngressSpec, from_v1_ingress_spec
from gslbctl.types import Gslb, GslbSpec, HealthStatus, ObjectMeta, Strategy

log = logging.getLogger(__name__)

GSLB_FINALIZER = "k8gb.absa.oss/finalizer"
LEGACY_GSLB_FINALIZER = "finalizer.k8gb.absa.oss"
PRIMARY_GEO_TAG_ANNOTATION = "k8gb.io/primary-geotag"
STRATEGY_ANNOTATION = "k8gb.io/strategy"
DNS_TTL_SECONDS_ANNOTATION = "k8gb.io/dns-ttl-seconds"
SPLIT_BRAIN_THRESHOLD_SECONDS_ANNOTATION = "k8gb.io/splitbrain-threshold-seconds"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class NotFoundError(LookupError):
    """The requested object does not exist."""


@dataclass(frozen=True)
class NamespacedName:
    """Key of a namespaced object."""

    namespace: str
    name: str


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a reconciliation; zero means do not requeue."""

    requeue_after: float = 0.0


@dataclass
class Ingress:
    """An upstream ingress object."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: V1IngressSpec = field(default_factory=V1IngressSpec)


class GslbClient(Protocol):
    """Cluster access needed by the reconciler."""

    def get_gslb(self, key: NamespacedName) -> Gslb: ...

    def update(self, gslb: Gslb) -> None: ...

    def list_gslbs(self, namespace: str) -> List[Gslb]: ...

    def get_ingress(self, key: NamespacedName) -> Ingress: ...

    def create_gslb(self, gslb: Gslb) -> None: ...

    def save_ingress(self, gslb: Gslb) -> None: ...

    def service_health(self, gslb: Gslb) -> Dict[str, HealthStatus]: ...

    def update_status(self, gslb: Gslb, endpoint: DNSEndpoint) -> None: ...


def contains(items: List[str], s: str) -> bool:
    """True when ``s`` is among ``items``."""
    return s in items


def remove(items: List[str], s: str) -> List[str]:
    """Return ``items`` without any occurrence of ``s``."""
    return [item for item in items if item != s]


class GslbReconciler:
    """Reconciles Gslb resources into DNS records."""

    def __init__(
        self,
        client: GslbClient,
        config: Config,
        dns_provider: DNSProvider,
        metrics: Optional[MetricsRecorder] = None,
        dep_resolver: Optional[DependencyResolver] = None,
    ) -> None:
        self.client = client
        self.config = config
        self.dns_provider = dns_provider
        self.metrics = metrics if metrics is not None else MetricsRecorder()
        self.dep_resolver = dep_resolver if dep_resolver is not None else DependencyResolver()

    def _requeue(self) -> ReconcileResult:
        return ReconcileResult(requeue_after=float(self.config.reconcile_requeue_seconds))

    def reconcile(self, request: NamespacedName) -> ReconcileResult:
        """Run one reconciliation of the Gslb named by ``request``."""
        try:
            gslb = self.client.get_gslb(request)
        except NotFoundError:
            return ReconcileResult()
        except Exception as err:
            self.metrics.increment_error(
                Gslb(metadata=ObjectMeta(name=request.name, namespace=request.namespace))
            )
            raise RuntimeError(f"error reading the object ({err})") from err

        try:
            self.dep_resolver.resolve_gslb_spec(gslb, self.client)
        except Exception as err:
            self.metrics.increment_error(gslb)
            raise RuntimeError(f"resolving spec ({err})") from err
        log.debug("Resolved strategy: gslb=%s strategy=%s", gslb.name, gslb.spec.strategy)

        if gslb.metadata.deletion_timestamp is not None:
            for finalizer in (GSLB_FINALIZER, LEGACY_GSLB_FINALIZER):
                if contains(gslb.metadata.finalizers, finalizer):
                    self.finalize_gslb(gslb)
                    gslb.metadata.finalizers = remove(gslb.metadata.finalizers, finalizer)
                    self.client.update(gslb)
            log.info("reconciler exit")
            return ReconcileResult()

        if not contains(gslb.metadata.finalizers, GSLB_FINALIZER):
            self._counting_errors(gslb, self.add_finalizer, gslb)

        self._counting_errors(gslb, self.client.save_ingress, gslb)

        def build_endpoint() -> DNSEndpoint:
            health = self.client.service_health(gslb)
            return gslb_dns_endpoint(gslb, self.config, health, self.dns_provider, self.metrics)

        dns_endpoint = self._counting_errors(gslb, build_endpoint)
        self._counting_errors(gslb, self.dns_provider.save_dns_endpoint, gslb, dns_endpoint)

        try:
            self.dns_provider.create_zone_delegation_for_external_dns(gslb)
        except Exception:
            log.exception("Unable to create zone delegation")
            self.metrics.increment_error(gslb)
            return self._requeue()

        self._counting_errors(gslb, self.client.update_status, gslb, dns_endpoint)

        self.metrics.increment_reconciliation(gslb)
        return self._requeue()

    def _counting_errors(self, gslb: Gslb, action, *args):
        try:
            return action(*args)
        except Exception:
            self.metrics.increment_error(gslb)
            raise

    def finalize_gslb(self, gslb: Gslb) -> None:
        """Release what the DNS provider holds for ``gslb``."""
        try:
            self.dns_provider.finalize(gslb)
        except Exception:
            log.exception("Can't finalize GSLB %s", gslb.name)
            raise
        log.info("Successfully finalized Gslb %s", gslb.name)

    def add_finalizer(self, gslb: Gslb) -> None:
        """Add the Gslb finalizer and store the resource."""
        log.info("Adding Finalizer for the Gslb %s", gslb.name)
        gslb.metadata.finalizers = [*gslb.metadata.finalizers, GSLB_FINALIZER]
        try:
            self.client.update(gslb)
        except Exception:
            log.exception("Failed to update Gslb %s with finalizer", gslb.name)
            raise

    def requests_for_endpoints(self, obj: ObjectMeta) -> List[NamespacedName]:
        """Map a changed service endpoint to the Gslb that routes to it."""
        try:
            gslbs = self.client.list_gslbs(obj.namespace)
        except Exception:
            log.info("Can't fetch gslb objects")
            return []
        gslb_name = ""
        for gslb in gslbs:
            for rule in gslb.spec.ingress.rules:
                if rule.http is None:
                    continue
                for path in rule.http.paths:
                    service = path.backend.service
                    if service is not None and service.name == obj.name:
                        gslb_name = gslb.name
        if gslb_name:
            return [NamespacedName(namespace=obj.namespace, name=gslb_name)]
        return []

    def create_gslb_from_ingress(self, ingress: ObjectMeta, strategy: str) -> Optional[Gslb]:
        """Create a Gslb out of an annotated ingress; return it, or None if skipped."""
        log.info(
            "Detected strategy annotation on ingress %s: (%s:%s)",
            ingress.name, STRATEGY_ANNOTATION, strategy,
        )
        key = NamespacedName(namespace=ingress.namespace, name=ingress.name)
        try:
            ingress_to_reuse = self.client.get_ingress(key)
        except Exception:
            log.info("Ingress %s does not exist anymore. Skipping Gslb creation...", ingress.name)
            return None
        try:
            existing = self.client.get_gslb(key)
        except Exception:
            existing = None
        if existing is not None:
            log.info("Gslb %s already exists. Skipping Gslb creation...", existing.name)
            return None

        gslb = Gslb(
            metadata=ObjectMeta(
                name=ingress.name,
                namespace=ingress.namespace,
                annotations=dict(ingress.annotations),
            ),
            spec=GslbSpec(
                ingress=from_v1_ingress_spec(copy.deepcopy(ingress_to_reuse.spec)),
                strategy=Strategy(type=strategy),
            ),
        )
        for key_name, value in ingress.annotations.items():
            if key_name == DNS_TTL_SECONDS_ANNOTATION:
                gslb.spec.strategy.dns_ttl_seconds = _annotation_to_int(key_name, value)
            elif key_name == SPLIT_BRAIN_THRESHOLD_SECONDS_ANNOTATION:
                gslb.spec.strategy.split_brain_threshold_seconds = _annotation_to_int(
                    key_name, value
                )

        if strategy == FAILOVER_STRATEGY:
            gslb.spec.strategy.primary_geo_tag = ingress.annotations.get(
                PRIMARY_GEO_TAG_ANNOTATION, ""
            )
            if not gslb.spec.strategy.primary_geo_tag:
                log.info(
                    "Annotation %s is missing, skipping Gslb %s creation...",
                    PRIMARY_GEO_TAG_ANNOTATION, gslb.name,
                )
                return None

        gslb.metadata.owner_references.append(ingress_to_reuse.metadata.name)
        log.info("Creating new Gslb %s out of Ingress annotation", gslb.name)
        try:
            self.client.create_gslb(gslb)
        except Exception:
            log.exception("Gslb creation failed")
            return None
        return gslb

    def handle_ingress_event(self, obj: ObjectMeta) -> List[NamespacedName]:
        """React to an ingress change; creates Gslbs and never enqueues requests."""
        value = obj.annotations.get(STRATEGY_ANNOTATION)
        if value in (ROUND_ROBIN_STRATEGY, FAILOVER_STRATEGY):
            self.create_gslb_from_ingress(obj, value)
        return []


def _annotation_to_int(key: str, value: str) -> int:
    if _INT_PATTERN.fullmatch(value):
        return int(value)
    log.error("Can't parse annotation value to int: %s=%s", key, value)
    return 0
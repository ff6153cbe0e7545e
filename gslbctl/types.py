"""Gslb resource types of the ``k8gb.absa.oss/v1beta1`` API group."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from gslbctl.ingress import IngressSpec


@dataclass(frozen=True)
class GroupVersion:
    """API group and version pair."""

    group: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="k8gb.absa.oss", version="v1beta1")


class HealthStatus(str, enum.Enum):
    """Health of a service behind a Gslb host."""

    HEALTHY = "Healthy"
    UNHEALTHY = "Unhealthy"
    NOT_FOUND = "NotFound"

    def __str__(self) -> str:
        return self.value


@dataclass
class Strategy:
    """Load-balancing behaviour of a Gslb."""

    type: str = ""
    primary_geo_tag: str = ""
    dns_ttl_seconds: int = 0
    split_brain_threshold_seconds: int = 0


@dataclass
class GslbSpec:
    """Desired state of a Gslb."""

    ingress: IngressSpec = field(default_factory=IngressSpec)
    strategy: Strategy = field(default_factory=Strategy)


@dataclass
class GslbStatus:
    """Observed state of a Gslb."""

    service_health: Dict[str, HealthStatus] = field(default_factory=dict)
    healthy_records: Dict[str, List[str]] = field(default_factory=dict)
    geo_tag: str = ""


@dataclass
class ObjectMeta:
    """Metadata common to stored resources."""

    name: str = ""
    namespace: str = ""
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    finalizers: List[str] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None
    owner_references: List[str] = field(default_factory=list)


@dataclass
class Gslb:
    """A global server load balancing resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: GslbSpec = field(default_factory=GslbSpec)
    status: GslbStatus = field(default_factory=GslbStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace


@dataclass
class GslbList:
    """A list of Gslb resources."""

    items: List[Gslb] = field(default_factory=list)
"""Operator configuration returned by the dependency resolver."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List


class LogFormat(enum.IntEnum):
    """How the logger prints values."""

    JSON = 1
    SIMPLE = 2
    NO_FORMAT = 4

    def __str__(self) -> str:
        if self is LogFormat.JSON:
            return "json"
        if self is LogFormat.SIMPLE:
            return "simple"
        return "noformat"


class EdgeDNSType(str, enum.Enum):
    """The edge DNS the operator connects to."""

    NO_EDGE_DNS = "NoEdgeDNS"
    INFOBLOX = "Infoblox"
    EXTERNAL = "ExtDNS"
    MULTIPLE_PROVIDERS = "MultipleProviders"

    def __str__(self) -> str:
        return self.value


@dataclass
class LogConfig:
    """Logger settings."""

    level: str = "info"
    format: LogFormat = LogFormat.SIMPLE
    no_color: bool = False


@dataclass
class InfobloxConfig:
    """Connection settings of an Infoblox grid."""

    host: str = ""
    version: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    http_request_timeout: int = 20
    http_pool_connections: int = 10


@dataclass(frozen=True)
class DNSServer:
    """An edge DNS server address."""

    host: str
    port: int = 53

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class Config:
    """Operator configuration."""

    reconcile_requeue_seconds: int = 30
    cluster_geo_tag: str = ""
    ext_clusters_geo_tags: List[str] = field(default_factory=list)
    edge_dns_type: EdgeDNSType = EdgeDNSType.NO_EDGE_DNS
    edge_dns_servers: List[DNSServer] = field(default_factory=list)
    edge_dns_zone: str = ""
    dns_zone: str = ""
    k8gb_namespace: str = ""
    infoblox: InfobloxConfig = field(default_factory=InfobloxConfig)
    coredns_exposed: bool = False
    log: LogConfig = field(default_factory=LogConfig)
    metrics_address: str = "0.0.0.0:8080"
    split_brain_check: bool = False
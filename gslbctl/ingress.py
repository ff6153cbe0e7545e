"""Ingress specification types used inside a Gslb resource.

The ``V1*`` classes mirror the upstream ``networking.k8s.io/v1`` ingress
shapes; :class:`IngressSpec` and :class:`IngressRule` are the Gslb-embedded
variants. The two conversion functions move between them.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ServiceBackendPort:
    """Port of a referenced service, by name or by number."""

    name: str = ""
    number: int = 0


@dataclass
class IngressServiceBackend:
    """A service that receives the traffic of an ingress path."""

    name: str = ""
    port: ServiceBackendPort = field(default_factory=ServiceBackendPort)


@dataclass
class IngressBackend:
    """Backend that an ingress path or default route points to."""

    service: Optional[IngressServiceBackend] = None


@dataclass
class HTTPIngressPath:
    """One path of an HTTP rule together with its backend."""

    path: str = ""
    path_type: Optional[str] = None
    backend: IngressBackend = field(default_factory=IngressBackend)


@dataclass
class HTTPIngressRuleValue:
    """The list of HTTP paths of a rule."""

    paths: List[HTTPIngressPath] = field(default_factory=list)


@dataclass
class IngressTLS:
    """TLS settings for a set of hosts."""

    hosts: List[str] = field(default_factory=list)
    secret_name: str = ""


@dataclass
class IngressRule:
    """Gslb rule mapping the paths under a host to backends."""

    host: str = ""
    http: Optional[HTTPIngressRuleValue] = None


@dataclass
class IngressSpec:
    """Upstream ingress specification embedded into a Gslb."""

    ingress_class_name: Optional[str] = None
    default_backend: Optional[IngressBackend] = None
    tls: List[IngressTLS] = field(default_factory=list)
    rules: List[IngressRule] = field(default_factory=list)

    def deep_copy(self) -> "IngressSpec":
        """Return a fully independent copy of this specification."""
        return copy.deepcopy(self)


@dataclass
class V1IngressRule:
    """Rule of a ``networking.k8s.io/v1`` ingress."""

    host: str = ""
    http: Optional[HTTPIngressRuleValue] = None


@dataclass
class V1IngressSpec:
    """Specification of a ``networking.k8s.io/v1`` ingress."""

    ingress_class_name: Optional[str] = None
    default_backend: Optional[IngressBackend] = None
    tls: List[IngressTLS] = field(default_factory=list)
    rules: List[V1IngressRule] = field(default_factory=list)


def from_v1_ingress_spec(v1_spec: V1IngressSpec) -> IngressSpec:
    """Convert an upstream ingress spec into the Gslb-embedded form."""
    return IngressSpec(
        ingress_class_name=v1_spec.ingress_class_name,
        default_backend=v1_spec.default_backend,
        tls=list(v1_spec.tls),
        rules=[IngressRule(host=rule.host, http=rule.http) for rule in v1_spec.rules],
    )


def to_v1_ingress_spec(spec: IngressSpec) -> V1IngressSpec:
    """Convert a Gslb-embedded ingress spec into the upstream form."""
    return V1IngressSpec(
        ingress_class_name=spec.ingress_class_name,
        default_backend=spec.default_backend,
        tls=list(spec.tls),
        rules=[V1IngressRule(host=rule.host, http=rule.http) for rule in spec.rules],
    )
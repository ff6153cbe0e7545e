# gslbctl

`gslbctl` holds the core logic of a global server load balancing (GSLB)
controller. A `Gslb` resource describes an ingress and a load balancing
strategy. The controller turns it into DNS endpoint records that an external
DNS system can publish.

It has no dependencies outside the standard library.

## Modules

- **`gslbctl.types`** defines `Gslb`, `GslbList`, `GslbSpec`, `Strategy`,
  `GslbStatus`, `ObjectMeta`, `GroupVersion` (with `GROUP_VERSION` for
  `k8gb.absa.oss/v1beta1`) and `HealthStatus` (`Healthy`, `Unhealthy`,
  `NotFound`).
- **`gslbctl.ingress`** defines the ingress specification embedded in a Gslb
  (`IngressSpec`, `IngressRule`, backends, paths, TLS). It also defines the
  upstream form (`V1IngressSpec`, `V1IngressRule`). `from_v1_ingress_spec`
  and `to_v1_ingress_spec` convert between the two. `IngressSpec.deep_copy`
  returns an independent copy.
- **`gslbctl.depresolver.config`** defines the operator `Config`, together
  with `LogConfig`, `InfobloxConfig`, `DNSServer`, `LogFormat` and
  `EdgeDNSType`.
- **`gslbctl.depresolver.validator`** provides chainable field checks, for
  example `field("DNSTtlSeconds", 30).is_higher_or_equal_to_zero()`.
  - A check does not raise. The first failure is kept in the validator's
    `error` attribute as a `ValidationError`, and later checks are skipped.
  - `match_regexps` passes when the value matches any one of the given
    expressions.
  - Ready-made patterns are available, such as `HOST_NAME_REGEX`,
    `IP_ADDRESS_REGEX` and `K8S_NAMESPACE_REGEX`.
- **`gslbctl.depresolver.resolver`**: `DependencyResolver.resolve_gslb_spec`
  prepares a spec in these steps:
  1. It fills in a DNS TTL of 30 seconds and a split-brain threshold of 300
     seconds where those values are zero.
  2. It checks that both values are not negative.
  3. It stores the Gslb through `client.update`.
  4. It remembers the resolved spec. If the same spec is passed again, it
     reuses the earlier outcome.

  It raises `ValueError("nil client")` when the client is `None`. It raises
  the validation or update error when either step failed.
- **`gslbctl.controllers.dnsupdate`**: `gslb_dns_endpoint` builds a
  `DNSEndpoint` made of `Endpoint` records.
  - For each healthy host it adds a `localtargets-<host>` A record.
  - It adds an A record for the host itself when the host has targets. The
    targets depend on the strategy:
    - `roundRobin` and `geoip` merge the local targets with the sorted
      external ones.
    - With `failover`, a primary cluster keeps its own targets while it is
      healthy. An unhealthy primary uses the external targets. A secondary
      cluster always uses the external targets when there are any.
  - It raises `ValueError` when a host does not contain the edge DNS zone.
  - `MetricsRecorder` counts errors and reconciliations in memory. It also
    records runtime status updates.
- **`gslbctl.controllers.reconciler`**: `GslbReconciler.reconcile` runs one
  reconciliation pass.
  - It resolves the spec and handles both the current and the legacy
    finalizer on deletion.
  - It adds the finalizer when it is missing.
  - It saves the ingress and builds and saves the DNS endpoint.
  - It creates the zone delegation and updates the status.
  - It returns a `ReconcileResult` whose `requeue_after` is the configured
    requeue interval.
  - A missing Gslb gives a result that is not requeued.

  Two watch handlers are available:
  - `requests_for_endpoints` maps a service to the Gslb that routes to it.
  - `handle_ingress_event` and `create_gslb_from_ingress` create a Gslb from
    an ingress annotated with `k8gb.io/strategy` (`roundRobin` or
    `failover`). They read `k8gb.io/dns-ttl-seconds`,
    `k8gb.io/splitbrain-threshold-seconds` and, for failover, the required
    `k8gb.io/primary-geotag`.

## Installation

```
pip install gslbctl
```

## Example

```python
from gslbctl.controllers.dnsupdate import sort_targets

sort_targets(["10.1.0.2", "10.0.0.1"])  # ['10.0.0.1', '10.1.0.2']
```

## What it does not do

`gslbctl` is a library and has no command-line program. It does not talk to a
cluster API, a DNS server or a metrics backend by itself. The reconciler
calls objects that you supply:

- The client provides `get_gslb`, `update`, `list_gslbs`, `get_ingress`,
  `create_gslb`, `save_ingress`, `service_health` and `update_status`. The
  reconciler raises `NotFoundError` for a missing Gslb.
- The `DNSProvider` provides `gslb_ingress_exposed_ips`,
  `get_external_targets`, `save_dns_endpoint`,
  `create_zone_delegation_for_external_dns` and `finalize`.

Service health checks, storage and DNS record publication are left to those
objects. The tests run against in-memory ones.

## Running the tests

```
pip install gslbctl[test]
pytest
```
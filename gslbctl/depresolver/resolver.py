"""Resolution of Gslb specs: defaults, validation and persistence."""

from __future__ import annotations

import copy
from typing import Optional, Protocol

from gslbctl.depresolver.validator import field
from gslbctl.types import Gslb, GslbSpec, Strategy

PREDEFINED_STRATEGY = Strategy(dns_ttl_seconds=30, split_brain_threshold_seconds=300)


class GslbUpdater(Protocol):
    """Anything that can store an updated Gslb."""

    def update(self, gslb: Gslb) -> None: ...


class DependencyResolver:
    """Fills Gslb specs with defaults and remembers the last resolved spec."""

    def __init__(self) -> None:
        self._spec: GslbSpec = GslbSpec()
        self._error: Optional[Exception] = None

    def resolve_gslb_spec(self, gslb: Gslb, client: Optional[GslbUpdater]) -> None:
        """Apply defaults to ``gslb``, validate and store it.

        Work is only repeated when the spec differs from the last one seen;
        otherwise the outcome of that earlier resolution is reused.
        """
        if client is None:
            raise ValueError("nil client")
        if gslb.spec != self._spec:
            strategy = gslb.spec.strategy
            if strategy.dns_ttl_seconds == 0:
                strategy.dns_ttl_seconds = PREDEFINED_STRATEGY.dns_ttl_seconds
            if strategy.split_brain_threshold_seconds == 0:
                strategy.split_brain_threshold_seconds = (
                    PREDEFINED_STRATEGY.split_brain_threshold_seconds
                )
            self._error = _validate_strategy(strategy)
            if self._error is None:
                try:
                    client.update(gslb)
                except Exception as exc:  # remembered for later calls
                    self._error = exc
            self._spec = copy.deepcopy(gslb.spec)
        if self._error is not None:
            raise self._error


def _validate_strategy(strategy: Strategy) -> Optional[Exception]:
    return (
        field("DNSTtlSeconds", strategy.dns_ttl_seconds).is_higher_or_equal_to_zero().error
        or field("SplitBrainThresholdSeconds", strategy.split_brain_threshold_seconds)
        .is_higher_or_equal_to_zero()
        .error
    )
"""Global server load balancing controller: resources, spec resolution and DNS endpoints."""

__version__ = "0.1.0"
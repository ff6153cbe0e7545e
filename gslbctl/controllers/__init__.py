"""Gslb reconciliation, watch handlers and DNS endpoint generation."""
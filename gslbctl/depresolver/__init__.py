"""Operator configuration, Gslb spec defaults and field validation."""
"""screamgen -- deterministic scaffolder for screaming-architecture Express projects."""

__version__ = "0.1.0"

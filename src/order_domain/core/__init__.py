"""Core of order_domain: the error taxonomy and the domain model."""

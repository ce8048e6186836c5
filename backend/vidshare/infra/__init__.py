"""Outbound adapters implementing the service-layer ports."""

"""Delivery package carrying materialized items to consumers."""

from .channel import DEFAULT_CAPACITY, DeliveryChannel

__all__ = ["DEFAULT_CAPACITY", "DeliveryChannel"]

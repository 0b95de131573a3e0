"""Relay services: message routing, angle aggregation and delivery."""

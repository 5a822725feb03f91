"""Carrier-agnostic tracking models and status resolution."""

"""Landscape estimator backend: route density discounts for drive-time estimates."""

"""Unified exchange adapters."""

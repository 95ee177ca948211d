"""Logging helpers for packshim (stdlib logging under the 'packshim' namespace)."""

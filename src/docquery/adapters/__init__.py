"""Storage and signal adapters."""

"""Command-line interface for PhysioFlow."""

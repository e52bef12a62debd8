"""Command line interface for DepDelta."""

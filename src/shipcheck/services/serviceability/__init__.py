"""Serviceability pipeline, quote normalization and courier selection."""

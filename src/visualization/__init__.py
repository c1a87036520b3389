"""Matplotlib plots of acceleration profiles and boost budget sweeps."""

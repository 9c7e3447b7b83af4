"""Visualization and human play for Bricks."""

"""Bricks package."""

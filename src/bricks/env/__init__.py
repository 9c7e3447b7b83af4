"""Gymnasium environments for Bricks."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 10x20 playfield environment
register(
    id="Bricks-v0",
    entry_point="bricks.env.bricks_env:BricksEnv",
)

__all__: list = []

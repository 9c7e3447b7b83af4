"""Reinforcement learning agents for Bricks."""

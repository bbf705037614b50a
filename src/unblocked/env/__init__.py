"""Gymnasium environments for Unblocked."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the single-level environment (3 discrete actions)
register(
    id="Unblocked-v0",
    entry_point="unblocked.env.unblocked_env:UnblockedEnv",
)

__all__ = ["Unblocked-v0"]

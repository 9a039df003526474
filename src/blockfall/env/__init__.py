"""Gymnasium environments for Blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 20x10 environment (5 discrete actions, one tick per step)
register(
    id="Blockfall-20x10-v0",
    entry_point="blockfall.env.blockfall_env:BlockfallEnv",
)

__all__ = ["Blockfall-20x10-v0"]

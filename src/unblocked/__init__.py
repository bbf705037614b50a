"""Unblocked: a block-throwing puzzle engine with deterministic replays."""

__version__ = "0.1.0"

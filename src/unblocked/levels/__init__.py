"""Bundled level packs."""

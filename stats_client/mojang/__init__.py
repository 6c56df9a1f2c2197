"""Mojang client."""

from stats_client.mojang.client import MojangClient

__all__ = ["MojangClient"]

"""Hypixel API client."""

from stats_client.hypixel.client import HypixelClient, censor_key

__all__ = ["HypixelClient", "censor_key"]

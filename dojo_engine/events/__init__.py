"""
Publish/subscribe channels that decouple gameplay from its consumers.

IMPORTANT: Emission is best-effort per listener. A failing listener is logged
and skipped; it never breaks the publisher.
"""

from dojo_engine.events.achievements import AchievementApi, AchievementEventBus
from dojo_engine.events.stats import StatsApi, StatsEventBus

__all__ = ["AchievementApi", "AchievementEventBus", "StatsApi", "StatsEventBus"]

"""Observation helpers: consumers to hand to Chain.watch."""

from .watch import Consumer, watch_error, watch_log, watch_ok

__all__ = ["Consumer", "watch_error", "watch_log", "watch_ok"]

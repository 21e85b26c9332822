"""In-memory weighted membership groups and token-staking groups with height snapshots."""

__version__ = "0.1.0"
__all__ = ["core", "errors", "funds", "group", "membership", "messages", "stake"]
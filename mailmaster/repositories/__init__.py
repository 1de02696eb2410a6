from . import campaigns, newsletters, subscribers, users

__all__ = ["campaigns", "newsletters", "subscribers", "users"]

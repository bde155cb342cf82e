"""goscaffold -- scaffold Go backend services from a handful of feature flags."""

__version__ = "0.1.0"

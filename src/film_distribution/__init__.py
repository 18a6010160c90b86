"""
Film distribution backend: video distribution to streaming platforms,
filmmaker subscriptions, magazine subscriptions, moderation and outreach
"""
__version__ = "1.0.0"

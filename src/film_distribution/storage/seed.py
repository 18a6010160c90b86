"""
Default catalogs for streaming platforms and filmmaker subscription plans
"""
import logging

from sqlalchemy.orm import Session

from ..db.models import Platform, SubscriptionPlan

logger = logging.getLogger(__name__)

DEFAULT_PLATFORMS = [
    {
        "name": "Google TV",
        "logo_url": "/assets/platform-logos/google-tv.svg",
        "api_endpoint": "https://api.googletv.com",
    },
    {
        "name": "Prime Video",
        "logo_url": "/assets/platform-logos/prime-video.svg",
        "api_endpoint": "https://api.primevideo.com",
    },
    {
        "name": "Apple TV",
        "logo_url": "/assets/platform-logos/apple-tv.svg",
        "api_endpoint": "https://api.appletv.com",
    },
    {
        "name": "Peacock",
        "logo_url": "/assets/platform-logos/peacock.svg",
        "api_endpoint": "https://api.peacocktv.com",
    },
]

DEFAULT_PLANS = [
    {
        "name": "Basic",
        "price": 9900,
        "duration_months": 3,
        "description": "Basic 3-month plan for independent filmmakers. Your content will be distributed for 3 months.",
    },
    {
        "name": "Premium",
        "price": 59900,
        "duration_months": 6,
        "description": "Premium 6-month plan for independent filmmakers. Your content will be distributed for 6 months.",
    },
    {
        "name": "Professional",
        "price": 99900,
        "duration_months": 12,
        "description": "Professional 12-month plan for independent filmmakers. Your content will be distributed for 1 year.",
    },
]


def seed_platforms(db: Session) -> int:
    """Insert the default platforms iff the table is empty; returns rows inserted"""
    if db.query(Platform.id).first() is not None:
        logger.debug("Platforms already present, skipping seed")
        return 0
    db.add_all(Platform(**platform) for platform in DEFAULT_PLATFORMS)
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_PLATFORMS)} platforms")
    return len(DEFAULT_PLATFORMS)


def seed_plans(db: Session) -> int:
    """Insert the default plans iff the table is empty; returns rows inserted"""
    if db.query(SubscriptionPlan.id).first() is not None:
        logger.debug("Subscription plans already present, skipping seed")
        return 0
    db.add_all(SubscriptionPlan(**plan) for plan in DEFAULT_PLANS)
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_PLANS)} subscription plans")
    return len(DEFAULT_PLANS)


def seed_catalogs(db: Session) -> dict:
    """Seed both catalogs; an existing row in a table suppresses its seed entirely"""
    try:
        return {"platforms": seed_platforms(db), "plans": seed_plans(db)}
    except Exception:
        db.rollback()
        raise

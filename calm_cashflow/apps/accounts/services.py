from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"


def ensure_demo_user() -> User:
    """Return the single demo user every request acts as, creating it on first use"""
    user, created = User.objects.get_or_create(
        username=settings.CALM_CASHFLOW_DEMO_USERNAME,
        defaults={
            "email": DEMO_EMAIL,
            "first_name": "Demo",
            "last_name": "User",
        },
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info("Created demo user %s", user.username)
    return user

# accounts/signals.py
from __future__ import annotations

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_or_update_profile(sender, instance, created, **kwargs):
    """Ensure every user has a Profile.

    - On create: create Profile and seed the display name from the User object.
    - On update: guarantee Profile exists (do not overwrite user-edited Profile fields).
    """

    if created:
        name = f"{getattr(instance, 'first_name', '')} {getattr(instance, 'last_name', '')}".strip()
        role = Profile.Role.ADMIN if getattr(instance, "is_superuser", False) else Profile.Role.USER
        Profile.objects.create(user=instance, name=name, role=role)
        logger.info("profile created user=%s role=%s", instance.pk, role)
        return

    Profile.objects.get_or_create(user=instance)

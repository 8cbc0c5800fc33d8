from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from django.contrib.auth.models import User
from django.db import models
from django.db.models.signals import post_delete, post_save, pre_delete, pre_save

from calm_cashflow.core.constants import ChangeType

from .models import ChangeEvent
from .signals import RowChange, row_changed

logger = logging.getLogger(__name__)


def _previous_row(sender: Type[models.Model], instance: models.Model) -> Optional[Dict[str, Any]]:
    if instance.pk is None:
        return None
    previous = sender._default_manager.filter(pk=instance.pk).first()
    return previous.as_row() if previous else None


def publish(sender: Type[models.Model], event: str, new: Optional[dict], old: Optional[dict]) -> RowChange:
    """Record a change event and notify in-process listeners"""
    row = new or old or {}
    change = RowChange(table=sender._meta.db_table, event=event, new=new, old=old)

    ChangeEvent.objects.create(
        table=change.table,
        event=event,
        row_id=row["id"],
        new=new,
        old=old,
        user_id=row.get("user_id"),
    )
    logger.debug("%s %s#%s", event, change.table, row["id"])

    row_changed.send(sender=sender, change=change)
    return change


def capture_previous_row(sender: Type[models.Model], instance: models.Model, **kwargs: Any) -> None:
    if kwargs.get("raw"):
        return
    instance._previous_row = _previous_row(sender, instance)


def publish_save(sender: Type[models.Model], instance: models.Model, created: bool, **kwargs: Any) -> None:
    if kwargs.get("raw"):
        return
    old = None if created else getattr(instance, "_previous_row", None)
    publish(sender, ChangeType.INSERT if created else ChangeType.UPDATE, instance.as_row(), old)


def capture_deleted_row(sender: Type[models.Model], instance: models.Model, **kwargs: Any) -> None:
    instance._deleted_row = instance.as_row()


def _owner_deleted(origin: Any) -> bool:
    model = origin.model if isinstance(origin, models.QuerySet) else type(origin)
    return model is User


def publish_delete(sender: Type[models.Model], instance: models.Model, **kwargs: Any) -> None:
    # Rows removed together with their owner have nobody left to notify
    if _owner_deleted(kwargs.get("origin")):
        return
    old = getattr(instance, "_deleted_row", None) or instance.as_row()
    publish(sender, ChangeType.DELETE, None, old)


def connect(*tracked: Type[models.Model]) -> None:
    for model in tracked:
        uid = f"changes:{model._meta.label}"
        pre_save.connect(capture_previous_row, sender=model, dispatch_uid=f"{uid}:pre_save")
        post_save.connect(publish_save, sender=model, dispatch_uid=f"{uid}:post_save")
        pre_delete.connect(capture_deleted_row, sender=model, dispatch_uid=f"{uid}:pre_delete")
        post_delete.connect(publish_delete, sender=model, dispatch_uid=f"{uid}:post_delete")

from django.contrib.auth.models import User
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from calm_cashflow.core.constants import ChangeType


class ChangeEvent(models.Model):
    """Row-level change of a tracked table, kept so clients can poll for updates"""

    table = models.CharField(max_length=50, db_index=True)
    event = models.CharField(max_length=10, choices=ChangeType.choices)
    row_id = models.PositiveBigIntegerField()
    new = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder, help_text="Row after the change")
    old = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder, help_text="Row before the change")
    user = models.ForeignKey(User, on_delete=models.CASCADE, null=True, blank=True, related_name="change_events")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "change_events"
        ordering = ["id"]

    def __str__(self):
        return f"{self.event} {self.table}#{self.row_id}"

from django.conf import settings
from django.db import models


class Calendar(models.Model):
    """
    Mirror of an easyVerein calendar. The primary key is the easyVerein id.
    """

    id = models.BigIntegerField(primary_key=True, help_text="easyVerein calendar ID")
    org_id = models.BigIntegerField(null=True, blank=True, help_text="Owning organization ID")
    name = models.CharField(max_length=255, blank=True, default='')
    description = models.TextField(blank=True, default='')
    color = models.CharField(max_length=20, null=True, blank=True)
    is_public = models.BooleanField(default=False)

    # Soft deletion mirrored from easyVerein
    deleted_after = models.DateTimeField(null=True, blank=True)
    deleted_by = models.BigIntegerField(null=True, blank=True, help_text="ID of the user who deleted it")

    class Meta:
        db_table = f'{settings.TABLE_PREFIX}calendars'
        ordering = ['name']

    def __str__(self):
        return self.name or f"Calendar {self.id}"

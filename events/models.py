from django.conf import settings
from django.db import models


class Event(models.Model):
    """
    Mirror of an easyVerein event. The primary key is the easyVerein id.

    Related ids (organization, calendar, parent, creator...) are plain columns
    taken from resource URLs; the related rows may not be synced.
    """

    id = models.BigIntegerField(primary_key=True, help_text="easyVerein event ID")
    org_id = models.BigIntegerField(null=True, blank=True)
    calendar_id = models.BigIntegerField(null=True, blank=True, db_index=True)
    parent_id = models.BigIntegerField(null=True, blank=True)
    creator_id = models.BigIntegerField(null=True, blank=True)
    reservation_parent_id = models.BigIntegerField(null=True, blank=True)

    name = models.CharField(max_length=255, blank=True, default='')
    description = models.TextField(blank=True, default='')
    prologue = models.TextField(blank=True, default='')
    note = models.TextField(blank=True, default='')
    location_name = models.CharField(max_length=255, null=True, blank=True)
    location_object = models.TextField(null=True, blank=True, help_text="Structured location as JSON")

    start = models.DateTimeField(db_index=True)
    end = models.DateTimeField()
    start_participation = models.DateTimeField(null=True, blank=True, help_text="Registration opens")
    end_participation = models.DateTimeField(null=True, blank=True, help_text="Registration closes")

    min_participants = models.IntegerField(null=True, blank=True)
    max_participants = models.IntegerField(null=True, blank=True)
    actual_participants = models.IntegerField(default=0, help_text="Confirmed participations at last sync")

    all_day = models.BooleanField(default=False)
    canceled = models.BooleanField(default=False)
    is_locked = models.BooleanField(default=False)
    is_public = models.BooleanField(default=False)
    is_reservation = models.BooleanField(default=False)
    show_memberarea = models.BooleanField(default=False)
    mass_participations = models.BooleanField(default=False)

    # Soft deletion mirrored from easyVerein
    deleted_after = models.DateTimeField(null=True, blank=True)
    deleted_by = models.BigIntegerField(null=True, blank=True)

    class Meta:
        db_table = f'{settings.TABLE_PREFIX}events'
        ordering = ['-start']

    def __str__(self):
        return f"{self.name} ({self.start.strftime('%Y-%m-%d %H:%M')})"


class Participation(models.Model):
    """
    A member's participation in an event. The primary key is the easyVerein id.
    """

    CONFIRMED = 1

    id = models.BigIntegerField(primary_key=True, help_text="easyVerein participation ID")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='participations')
    member_id = models.BigIntegerField(db_index=True, help_text="Contact details ID of the participant")
    org_id = models.BigIntegerField(null=True, blank=True)
    name = models.CharField(max_length=255, blank=True, default='')
    description = models.TextField(blank=True, default='')
    show_name = models.BooleanField(default=False)
    state = models.IntegerField(null=True, blank=True, help_text="1 = confirmed")
    price_group_id = models.BigIntegerField(null=True, blank=True)

    # Soft deletion mirrored from easyVerein
    deleted_after = models.DateTimeField(null=True, blank=True)
    deleted_by = models.BigIntegerField(null=True, blank=True)

    class Meta:
        db_table = f'{settings.TABLE_PREFIX}participations'
        ordering = ['event', 'id']

    def __str__(self):
        return f"Participation {self.id} of member {self.member_id} in event {self.event_id}"

    @property
    def is_confirmed(self):
        return self.state == self.CONFIRMED

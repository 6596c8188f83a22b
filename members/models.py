from django.conf import settings
from django.db import models


class Member(models.Model):
    """
    Membership fee data of an active easyVerein member.

    Only payment fields are stored; names, emails and membership numbers stay
    in easyVerein.
    """

    id = models.BigIntegerField(primary_key=True, help_text="easyVerein member ID")
    payment_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, help_text="Membership fee per interval"
    )
    payment_interval_months = models.IntegerField(null=True, blank=True, help_text="Months between payments")

    class Meta:
        db_table = f'{settings.TABLE_PREFIX}members'
        ordering = ['id']

    def __str__(self):
        return f"Member {self.id}"

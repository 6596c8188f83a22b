from django.contrib import admin
from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ['id', 'payment_amount', 'payment_interval_months']
    list_filter = ['payment_interval_months']

from django.contrib import admin
from .models import Event, Participation


class ParticipationInline(admin.TabularInline):
    model = Participation
    extra = 0
    fields = ['id', 'member_id', 'name', 'state']
    readonly_fields = fields


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'start', 'calendar_id', 'actual_participants', 'max_participants', 'canceled']
    list_filter = ['canceled', 'is_public', 'calendar_id']
    search_fields = ['name', 'location_name']
    date_hierarchy = 'start'
    inlines = [ParticipationInline]


@admin.register(Participation)
class ParticipationAdmin(admin.ModelAdmin):
    list_display = ['id', 'event', 'member_id', 'state']
    list_filter = ['state']
    search_fields = ['name']

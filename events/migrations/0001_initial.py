import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigIntegerField(help_text='easyVerein event ID', primary_key=True, serialize=False)),
                ('org_id', models.BigIntegerField(blank=True, null=True)),
                ('calendar_id', models.BigIntegerField(blank=True, db_index=True, null=True)),
                ('parent_id', models.BigIntegerField(blank=True, null=True)),
                ('creator_id', models.BigIntegerField(blank=True, null=True)),
                ('reservation_parent_id', models.BigIntegerField(blank=True, null=True)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('prologue', models.TextField(blank=True, default='')),
                ('note', models.TextField(blank=True, default='')),
                ('location_name', models.CharField(blank=True, max_length=255, null=True)),
                ('location_object', models.TextField(blank=True, help_text='Structured location as JSON', null=True)),
                ('start', models.DateTimeField(db_index=True)),
                ('end', models.DateTimeField()),
                ('start_participation', models.DateTimeField(blank=True, help_text='Registration opens', null=True)),
                ('end_participation', models.DateTimeField(blank=True, help_text='Registration closes', null=True)),
                ('min_participants', models.IntegerField(blank=True, null=True)),
                ('max_participants', models.IntegerField(blank=True, null=True)),
                ('actual_participants', models.IntegerField(default=0, help_text='Confirmed participations at last sync')),
                ('all_day', models.BooleanField(default=False)),
                ('canceled', models.BooleanField(default=False)),
                ('is_locked', models.BooleanField(default=False)),
                ('is_public', models.BooleanField(default=False)),
                ('is_reservation', models.BooleanField(default=False)),
                ('show_memberarea', models.BooleanField(default=False)),
                ('mass_participations', models.BooleanField(default=False)),
                ('deleted_after', models.DateTimeField(blank=True, null=True)),
                ('deleted_by', models.BigIntegerField(blank=True, null=True)),
            ],
            options={
                'db_table': f'{settings.TABLE_PREFIX}events',
                'ordering': ['-start'],
            },
        ),
        migrations.CreateModel(
            name='Participation',
            fields=[
                ('id', models.BigIntegerField(help_text='easyVerein participation ID', primary_key=True, serialize=False)),
                ('member_id', models.BigIntegerField(db_index=True, help_text='Contact details ID of the participant')),
                ('org_id', models.BigIntegerField(blank=True, null=True)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('show_name', models.BooleanField(default=False)),
                ('state', models.IntegerField(blank=True, help_text='1 = confirmed', null=True)),
                ('price_group_id', models.BigIntegerField(blank=True, null=True)),
                ('deleted_after', models.DateTimeField(blank=True, null=True)),
                ('deleted_by', models.BigIntegerField(blank=True, null=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participations', to='events.event')),
            ],
            options={
                'db_table': f'{settings.TABLE_PREFIX}participations',
                'ordering': ['event', 'id'],
            },
        ),
    ]

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Calendar',
            fields=[
                ('id', models.BigIntegerField(help_text='easyVerein calendar ID', primary_key=True, serialize=False)),
                ('org_id', models.BigIntegerField(blank=True, help_text='Owning organization ID', null=True)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('color', models.CharField(blank=True, max_length=20, null=True)),
                ('is_public', models.BooleanField(default=False)),
                ('deleted_after', models.DateTimeField(blank=True, null=True)),
                ('deleted_by', models.BigIntegerField(blank=True, help_text='ID of the user who deleted it', null=True)),
            ],
            options={
                'db_table': f'{settings.TABLE_PREFIX}calendars',
                'ordering': ['name'],
            },
        ),
    ]

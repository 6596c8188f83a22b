from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Member',
            fields=[
                ('id', models.BigIntegerField(help_text='easyVerein member ID', primary_key=True, serialize=False)),
                ('payment_amount', models.DecimalField(blank=True, decimal_places=2, help_text='Membership fee per interval', max_digits=10, null=True)),
                ('payment_interval_months', models.IntegerField(blank=True, help_text='Months between payments', null=True)),
            ],
            options={
                'db_table': f'{settings.TABLE_PREFIX}members',
                'ordering': ['id'],
            },
        ),
    ]

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='NotificationLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('recipient', models.CharField(db_index=True, max_length=255)),
                ('channel', models.CharField(choices=[('email', 'Email'), ('sms', 'SMS'), ('log', 'Log only')], max_length=10)),
                ('subject', models.CharField(blank=True, max_length=200)),
                ('message', models.TextField()),
                ('status', models.CharField(choices=[('sent', 'Sent'), ('failed', 'Failed')], db_index=True, max_length=10)),
                ('external_id', models.CharField(blank=True, help_text='Provider message id (e.g. Twilio SID)', max_length=100)),
                ('error', models.TextField(blank=True)),
            ],
            options={
                'verbose_name': 'Notification log',
                'verbose_name_plural': 'Notification logs',
                'ordering': ['-created_at', '-id'],
                'get_latest_by': 'created_at',
                'abstract': False,
            },
        ),
    ]

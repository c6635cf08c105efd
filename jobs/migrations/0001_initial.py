import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('profiles', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Job',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('title', models.CharField(max_length=100)),
                ('description', models.TextField(max_length=1000)),
                ('city', models.CharField(choices=[('Hubli', 'Hubli'), ('Dharwad', 'Dharwad')], db_index=True, max_length=20)),
                ('hourly_rate', models.PositiveIntegerField(help_text='Snapshot rate in rupees per hour')),
                ('estimated_hours', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(100)])),
                ('status', models.CharField(choices=[('open', 'Open'), ('in_progress', 'In progress'), ('awaiting_completion', 'Awaiting completion'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='open', max_length=20)),
                ('accepted_at', models.DateTimeField(blank=True, null=True)),
                ('work_completed_at', models.DateTimeField(blank=True, null=True)),
                ('payment_received_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='jobs', to='catalog.category')),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='jobs', to='profiles.client')),
                ('labour', models.ForeignKey(blank=True, help_text='Assigned when an application is accepted', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='jobs', to='profiles.labour')),
            ],
            options={
                'verbose_name': 'Job',
                'verbose_name_plural': 'Jobs',
                'ordering': ['-created_at', '-id'],
                'get_latest_by': 'created_at',
                'abstract': False,
                'indexes': [models.Index(fields=['status', 'category', 'city'], name='jobs_job_discovery_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('estimated_hours__gte', 1), ('estimated_hours__lte', 100)), name='job_estimated_hours_range'),
                    models.CheckConstraint(condition=models.Q(('status', 'open'), ('labour__isnull', False), ('status', 'cancelled'), _connector='OR'), name='job_labour_assigned_after_open'),
                ],
            },
        ),
        migrations.CreateModel(
            name='JobApplication',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected')], db_index=True, default='pending', max_length=10)),
                ('message', models.CharField(blank=True, max_length=500)),
                ('responded_at', models.DateTimeField(blank=True, null=True)),
                ('job', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='jobs.job')),
                ('labour', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='profiles.labour')),
            ],
            options={
                'verbose_name': 'Job application',
                'verbose_name_plural': 'Job applications',
                'ordering': ['-created_at', '-id'],
                'get_latest_by': 'created_at',
                'abstract': False,
                'constraints': [
                    models.UniqueConstraint(fields=('job', 'labour'), name='unique_application_per_labour_job'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Settlement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('amount', models.PositiveIntegerField(help_text='hourly_rate x estimated_hours, in rupees')),
                ('reference', models.CharField(max_length=40, unique=True)),
                ('recorded_at', models.DateTimeField()),
                ('confirmed_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='confirmed_settlements', to=settings.AUTH_USER_MODEL)),
                ('job', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='settlement', to='jobs.job')),
            ],
            options={
                'verbose_name': 'Settlement',
                'verbose_name_plural': 'Settlements',
                'ordering': ['-created_at', '-id'],
                'get_latest_by': 'created_at',
                'abstract': False,
            },
        ),
    ]

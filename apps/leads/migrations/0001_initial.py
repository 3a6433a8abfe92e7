import uuid

import django.db.models.deletion
import django.utils.timezone
import taggit.managers
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('employees', '0001_initial'),
        ('contenttypes', '0002_remove_content_type_name'),
        ('taggit', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='UUIDTaggedItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('object_id', models.UUIDField(db_index=True, verbose_name='object ID')),
                ('content_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='%(app_label)s_%(class)s_tagged_items', to='contenttypes.contenttype', verbose_name='content type')),
                ('tag', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='%(app_label)s_%(class)s_items', to='taggit.tag')),
            ],
            options={
                'verbose_name': 'Tag',
                'verbose_name_plural': 'Tags',
            },
        ),
        migrations.CreateModel(
            name='Lead',
            fields=[
                ('whalesync_postgres_id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(blank=True, help_text="Lead's full name", max_length=200)),
                ('mobile', models.CharField(blank=True, db_index=True, help_text='Phone number as entered', max_length=30)),
                ('email', models.EmailField(blank=True, help_text='Email address (optional)', max_length=254)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('services', models.CharField(blank=True, help_text='Comma separated, e.g. "USA LLC Formation, Brand Development"', max_length=255)),
                ('source', models.CharField(blank=True, db_index=True, max_length=100)),
                ('stage', models.CharField(blank=True, db_index=True, default='New', max_length=100)),
                ('priority', models.CharField(blank=True, choices=[('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High')], max_length=10)),
                ('follow_up_date', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('call_connected', models.CharField(blank=True, help_text='Yes / No', max_length=20)),
                ('call_remark', models.CharField(blank=True, max_length=255)),
                ('call_notes', models.TextField(blank=True)),
                ('deal_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('client_budget', models.CharField(blank=True, max_length=100)),
                ('date_and_time', models.DateTimeField(db_index=True, default=django.utils.timezone.now, help_text='When the lead came in')),
                ('assigned_to', models.ForeignKey(blank=True, db_column='assigned_to', help_text='Employee responsible for this lead', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_leads', to='employees.employee')),
                ('tags', taggit.managers.TaggableManager(blank=True, help_text='A comma-separated list of tags.', through='leads.UUIDTaggedItem', to='taggit.Tag', verbose_name='Tags')),
            ],
            options={
                'verbose_name': 'Lead',
                'verbose_name_plural': 'Leads',
                'db_table': 'Leads',
                'ordering': ['-date_and_time'],
                'indexes': [models.Index(fields=['assigned_to', 'stage'], name='leads_assigned_stage_idx')],
            },
        ),
        migrations.CreateModel(
            name='CallLog',
            fields=[
                ('whalesync_postgres_id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('client_name', models.CharField(blank=True, max_length=200)),
                ('client_number', models.CharField(blank=True, max_length=30)),
                ('call_type', models.CharField(blank=True, choices=[('Incoming', 'Incoming'), ('Outgoing', 'Outgoing'), ('Missed', 'Missed')], db_index=True, max_length=20)),
                ('call_date', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('duration', models.PositiveIntegerField(default=0, help_text='Seconds')),
                ('sentiment', models.CharField(blank=True, max_length=30)),
                ('service', models.CharField(blank=True, max_length=255)),
                ('employee', models.ForeignKey(blank=True, db_column='employee', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='calls', to='employees.employee')),
                ('leads', models.ForeignKey(blank=True, db_column='leads', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='calls', to='leads.lead')),
            ],
            options={
                'verbose_name': 'Call',
                'verbose_name_plural': 'Calls',
                'db_table': 'Calls',
                'ordering': ['-call_date'],
            },
        ),
    ]

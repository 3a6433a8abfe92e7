import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('whalesync_postgres_id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name', models.CharField(help_text="Employee's full name", max_length=200)),
                ('employee_id', models.CharField(blank=True, db_index=True, help_text='HR employee code, e.g. EMP-014', max_length=50)),
                ('profile_photo', models.URLField(blank=True, max_length=500)),
                ('dob', models.DateField(blank=True, null=True)),
                ('official_email', models.EmailField(blank=True, db_index=True, help_text='Work email, also used for login', max_length=254)),
                ('official_contact_number', models.CharField(blank=True, max_length=30)),
                ('personal_email', models.EmailField(blank=True, max_length=254)),
                ('personal_contact_number', models.CharField(blank=True, max_length=30)),
                ('current_address', models.TextField(blank=True)),
                ('permanent_address', models.TextField(blank=True)),
                ('linkedin_profile', models.URLField(blank=True, max_length=500)),
                ('job_title', models.CharField(blank=True, max_length=150)),
                ('date_of_joining', models.DateField(blank=True, null=True)),
                ('employment_type', models.CharField(blank=True, help_text='Full-time, Intern, Contract...', max_length=50)),
                ('work_mode', models.CharField(blank=True, help_text='Office, Remote, Hybrid', max_length=50)),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Onboarding', 'Onboarding'), ('Resigned', 'Resigned')], db_index=True, default='Active', max_length=20)),
                ('reporting_manager', models.CharField(blank=True, max_length=200)),
                ('teams', models.CharField(blank=True, max_length=200)),
            ],
            options={
                'verbose_name': 'Employee',
                'verbose_name_plural': 'Employees',
                'db_table': 'Employee Directory',
                'ordering': ['full_name'],
            },
        ),
    ]

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('employees', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AttendanceRecord',
            fields=[
                ('whalesync_postgres_id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name_from_employee', models.CharField(blank=True, max_length=200)),
                ('employee_id_from_employee', models.CharField(blank=True, max_length=50)),
                ('date', models.DateField(db_index=True)),
                ('time_in', models.FloatField(blank=True, help_text='HH.MM, e.g. 9.35 for 09:35', null=True)),
                ('time_out', models.FloatField(blank=True, help_text='HH.MM, e.g. 18.3 for 18:30', null=True)),
                ('status', models.CharField(blank=True, db_index=True, help_text='Present / Late / Half Day, optionally with " (Overtime)"', max_length=50)),
                ('working_hours', models.FloatField(default=0)),
                ('employee', models.ForeignKey(db_column='employee', on_delete=django.db.models.deletion.CASCADE, related_name='attendance_records', to='employees.employee')),
            ],
            options={
                'verbose_name': 'Attendance Record',
                'verbose_name_plural': 'Attendance',
                'db_table': 'Attendance',
                'ordering': ['-date', 'full_name_from_employee'],
                'constraints': [models.UniqueConstraint(fields=('employee', 'date'), name='attendance_one_per_employee_per_day')],
            },
        ),
    ]

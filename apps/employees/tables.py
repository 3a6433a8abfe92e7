from apps.core.table import Column, Table, register_table


EMPLOYEE_TABLE = register_table(Table('employees', [
    Column('full_name', label='Name', searchable=True),
    Column('employee_id', label='Employee ID', searchable=True),
    Column('official_email', label='Email', searchable=True),
    Column('official_contact_number', label='Phone', searchable=True),
    Column('job_title', searchable=True),
    Column('status', filterable=True),
    Column('employment_type', filterable=True),
    Column('work_mode', filterable=True),
    Column('date_of_joining', label='Joined', kind='date'),
    Column('reporting_manager', visible=False),
    Column('teams', visible=False),
]))

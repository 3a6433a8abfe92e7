from apps.core.table import Column, Table, register_table


ATTENDANCE_TABLE = register_table(Table('attendance', [
    Column('full_name_from_employee', label='Employee', searchable=True),
    Column('employee_id_from_employee', label='Employee ID', searchable=True),
    Column('date', kind='date', filterable=True),
    Column('check_in', label='Check In'),
    Column('check_out', label='Check Out'),
    Column('status', filterable=True),
    Column('working_hours', label='Hours', kind='number'),
]))

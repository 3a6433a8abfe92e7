from apps.core.table import Column, Table, register_table


LEAD_TABLE = register_table(Table('leads', [
    Column('name', searchable=True),
    Column('mobile', searchable=True),
    Column('email', searchable=True),
    Column('city', searchable=True),
    Column('services', filterable=True),
    Column('source', filterable=True),
    Column('stage', filterable=True),
    Column('priority', filterable=True, visible=False),
    Column('assigned_to_name', label='Assigned To'),
    Column('deal_amount', kind='number', visible=False),
    Column('follow_up_date', label='Follow Up', kind='date', visible=False),
    Column('call_connected', visible=False),
    Column('date_and_time', label='Date', kind='date'),
]))

CALL_TABLE = register_table(Table('calls', [
    Column('client_name', label='Name', searchable=True),
    Column('client_number', label='Mobile', searchable=True),
    Column('service', filterable=True),
    Column('duration', kind='number'),
    Column('call_date', label='Date', kind='date'),
    Column('sentiment', filterable=True),
    Column('call_type', label='Type', filterable=True),
]))

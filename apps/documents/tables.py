from apps.core.table import Column, Table, register_table


DOCUMENT_TABLE = register_table(Table('documents', [
    Column('title', searchable=True),
    Column('description', searchable=True, visible=False),
    Column('file_name', label='File', searchable=True),
    Column('category', filterable=True),
    Column('status', filterable=True),
    Column('file_type', label='Type', visible=False),
    Column('file_size', label='Size', kind='number'),
    Column('created_by_name', label='Created By'),
    Column('assignment_count', label='Assigned To', kind='number'),
    Column('created_at', label='Created', kind='date'),
]))

# Employee side: same columns minus admin bookkeeping
MY_DOCUMENT_TABLE = register_table(Table('my_documents', [
    Column('title', searchable=True),
    Column('description', searchable=True, visible=False),
    Column('file_name', label='File', searchable=True),
    Column('category', filterable=True),
    Column('file_size', label='Size', kind='number'),
    Column('created_at', label='Created', kind='date'),
]))

from apps.core.table import Column, Table, register_table


TASK_TABLE = register_table(Table('tasks', [
    Column('title', searchable=True),
    Column('description', searchable=True, visible=False),
    Column('status', filterable=True),
    Column('priority', filterable=True),
    Column('assignee_name', label='Assignee', filterable=True),
    Column('due_date', label='Due Date', kind='date'),
    Column('created_at', label='Created', kind='date'),
    Column('completed_on', label='Completed On', kind='date', visible=False),
    Column('update_count', label='Updates', kind='number', visible=False),
]))

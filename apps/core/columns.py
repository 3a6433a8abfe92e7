"""
Per-table column visibility, remembered in the user's session.

Stored under '<table key>ColumnVisibility' as {column id: bool}, e.g.
request.session['leadsColumnVisibility'] = {'email': False, 'city': True}
"""


class ColumnVisibility:

    def __init__(self, session, table):
        self.session = session
        self.table = table
        self.session_key = f'{table.key}ColumnVisibility'

    def _defaults(self):
        return {column.id: column.visible for column in self.table.columns.values()}

    def load(self):
        state = self._defaults()
        stored = self.session.get(self.session_key) or {}
        for column_id, visible in stored.items():
            if column_id in state:
                state[column_id] = bool(visible)
        return state

    def update(self, mapping):
        """Merge {column id: bool} into the stored state; unknown ids are ignored"""
        state = self.load()
        for column_id, visible in mapping.items():
            if column_id in state:
                state[column_id] = bool(visible)
        self.session[self.session_key] = state
        return state

    def toggle(self, column_id, visible=None):
        state = self.load()
        if column_id not in state:
            return state
        if visible is None:
            visible = not state[column_id]
        return self.update({column_id: visible})

    def reset(self):
        self.session.pop(self.session_key, None)
        return self._defaults()

    def visible_columns(self):
        state = self.load()
        return [column_id for column_id, visible in state.items() if visible]

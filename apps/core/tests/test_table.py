"""
Table Engine Tests
==================

Test Coverage:
1. Search - case-insensitive substring over searchable columns
2. Filters - OR within a column, AND across columns
3. Sort - text / number / date kinds, header click cycle
4. Pagination - totals, clamping, empty tables
5. TableState.from_query - fallbacks for bad params
6. apply() end to end - pages partition the rows, sort cycle, pages below 1

Run tests:
    python manage.py test apps.core.tests.test_table
"""

from django.http import QueryDict
from django.test import SimpleTestCase

from apps.core.table import Column, Table, TableState, next_sort


def make_table():
    return Table('people', [
        Column('name', searchable=True),
        Column('city', searchable=True, filterable=True),
        Column('stage', filterable=True),
        Column('amount', kind='number'),
        Column('joined', kind='date'),
    ])


ROWS = [
    {'name': 'Raj Kumar', 'city': 'Delhi', 'stage': 'New', 'amount': '5000', 'joined': '2026-03-01'},
    {'name': 'priya shah', 'city': 'Mumbai', 'stage': 'Won', 'amount': 120000, 'joined': '2026-01-15'},
    {'name': 'Aman Gupta', 'city': 'Delhi', 'stage': 'Won', 'amount': None, 'joined': ''},
    {'name': 'Zoya Khan', 'city': 'Pune', 'stage': 'New', 'amount': '900', 'joined': '2026-02-10T09:30:00+05:30'},
]


class TableSearchTest(SimpleTestCase):

    def setUp(self):
        self.table = make_table()

    def test_blank_search_keeps_everything(self):
        self.assertEqual(len(self.table.search(ROWS, '   ')), 4)

    def test_search_is_case_insensitive(self):
        names = [row['name'] for row in self.table.search(ROWS, 'PRIYA')]
        self.assertEqual(names, ['priya shah'])

    def test_search_matches_any_searchable_column(self):
        names = [row['name'] for row in self.table.search(ROWS, 'delhi')]
        self.assertEqual(names, ['Raj Kumar', 'Aman Gupta'])

    def test_search_ignores_non_searchable_columns(self):
        self.assertEqual(self.table.search(ROWS, 'won'), [])

    def test_search_reads_object_attributes(self):
        class Person:
            def __init__(self, name):
                self.name = name
                self.city = ''

        people = [Person('Raj'), Person('Neha')]
        self.assertEqual(self.table.search(people, 'neh'), [people[1]])


class TableFilterTest(SimpleTestCase):

    def setUp(self):
        self.table = make_table()

    def test_values_within_a_column_are_ored(self):
        rows = self.table.filter(ROWS, {'city': ['Delhi', 'Pune']})
        self.assertEqual([row['name'] for row in rows], ['Raj Kumar', 'Aman Gupta', 'Zoya Khan'])

    def test_columns_are_anded(self):
        rows = self.table.filter(ROWS, {'city': ['Delhi'], 'stage': ['Won']})
        self.assertEqual([row['name'] for row in rows], ['Aman Gupta'])

    def test_unknown_columns_and_empty_lists_are_ignored(self):
        self.assertEqual(len(self.table.filter(ROWS, {'nope': ['x'], 'stage': []})), 4)

    def test_distinct_values_skip_blanks(self):
        self.assertEqual(self.table.distinct_values(ROWS, 'stage'), ['New', 'Won'])
        self.assertEqual(set(self.table.filter_options(ROWS)), {'city', 'stage'})


class TableSortTest(SimpleTestCase):

    def setUp(self):
        self.table = make_table()

    def names(self, rows):
        return [row['name'] for row in rows]

    def test_text_sort_is_case_insensitive(self):
        rows = self.table.sort(ROWS, 'name', 'asc')
        self.assertEqual(self.names(rows), ['Aman Gupta', 'priya shah', 'Raj Kumar', 'Zoya Khan'])

    def test_number_sort_treats_blank_as_zero(self):
        rows = self.table.sort(ROWS, 'amount', 'desc')
        self.assertEqual(self.names(rows), ['priya shah', 'Raj Kumar', 'Zoya Khan', 'Aman Gupta'])

    def test_date_sort_puts_unparseable_first_ascending(self):
        rows = self.table.sort(ROWS, 'joined', 'asc')
        self.assertEqual(self.names(rows), ['Aman Gupta', 'priya shah', 'Zoya Khan', 'Raj Kumar'])

    def test_unsorted_keeps_source_order(self):
        self.assertEqual(self.table.sort(ROWS, None, None), ROWS)
        self.assertEqual(self.table.sort(ROWS, 'name', 'sideways'), ROWS)

    def test_sort_is_stable(self):
        rows = self.table.sort(ROWS, 'stage', 'asc')
        self.assertEqual(self.names(rows), ['Raj Kumar', 'Zoya Khan', 'priya shah', 'Aman Gupta'])

    def test_header_click_cycle(self):
        state = TableState()
        self.assertEqual(next_sort(state, 'name'), ('name', 'asc'))

        state.sort, state.direction = 'name', 'asc'
        self.assertEqual(next_sort(state, 'name'), ('name', 'desc'))

        state.direction = 'desc'
        self.assertEqual(next_sort(state, 'name'), (None, None))

        # another column starts over at asc
        self.assertEqual(next_sort(state, 'city'), ('city', 'asc'))

    def test_sort_links_cover_every_column(self):
        links = self.table.sort_links(TableState(sort='city', direction='asc'))
        self.assertEqual(links['city'], {'sort': 'city', 'direction': 'desc'})
        self.assertEqual(links['name'], {'sort': 'name', 'direction': 'asc'})


class TablePaginationTest(SimpleTestCase):

    def setUp(self):
        self.table = make_table()
        self.rows = [{'name': f'Row {i:02d}'} for i in range(23)]

    def test_totals_and_slice(self):
        page = self.table.paginate(self.rows, page=2, page_size=10)

        self.assertEqual(page.total, 23)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.rows[0]['name'], 'Row 10')
        self.assertEqual((page.start_index, page.end_index), (11, 20))
        self.assertTrue(page.has_previous)
        self.assertTrue(page.has_next)
        self.assertTrue(page.can_first)
        self.assertTrue(page.can_last)

    def test_out_of_range_page_is_clamped(self):
        page = self.table.paginate(self.rows, page=99, page_size=10)
        self.assertEqual(page.page, 3)
        self.assertEqual(len(page.rows), 3)
        self.assertFalse(page.can_last)

    def test_empty_table_has_one_page(self):
        page = self.table.paginate([], page=1, page_size=10)
        self.assertEqual(page.total, 0)
        self.assertEqual(page.total_pages, 1)
        self.assertEqual(page.rows, [])
        self.assertFalse(page.can_first)

    def test_apply_runs_the_whole_pipeline(self):
        state = TableState(search='delhi', sort='name', direction='desc', page=1, page_size=10)
        page = self.table.apply(ROWS, state)
        self.assertEqual([row['name'] for row in page.rows], ['Raj Kumar', 'Aman Gupta'])
        self.assertEqual(page.total, 2)


class TableStateTest(SimpleTestCase):

    def setUp(self):
        self.table = make_table()

    def test_from_query_string(self):
        query = QueryDict('search=+raj+&stage=New&stage=Won&sort=amount&direction=desc&page=2&page_size=20')
        state = TableState.from_query(query, self.table)

        self.assertEqual(state.search, 'raj')
        self.assertEqual(state.filters, {'stage': ['New', 'Won']})
        self.assertEqual((state.sort, state.direction), ('amount', 'desc'))
        self.assertEqual((state.page, state.page_size), (2, 20))

    def test_bad_params_fall_back_to_defaults(self):
        query = QueryDict('sort=password&direction=asc&page=abc&page_size=7')
        state = TableState.from_query(query, self.table)

        self.assertIsNone(state.sort)
        self.assertIsNone(state.direction)
        self.assertEqual(state.page, 1)
        self.assertEqual(state.page_size, 10)

    def test_sort_without_direction_is_unsorted(self):
        state = TableState.from_query({'sort': 'name'}, self.table)
        self.assertIsNone(state.sort)

    def test_plain_dict_query(self):
        state = TableState.from_query({'city': ['Delhi', 'Pune'], 'page_size': '50'}, self.table)
        self.assertEqual(state.filters, {'city': ['Delhi', 'Pune']})
        self.assertEqual(state.page_size, 50)

    def test_unknown_column_kind_is_rejected(self):
        with self.assertRaises(ValueError):
            Column('name', kind='money')


class TablePipelineTest(SimpleTestCase):
    """Whole-table behaviour through apply(), across every page size"""

    def setUp(self):
        self.table = make_table()
        cities = ['Delhi', 'Mumbai', 'Pune']
        self.rows = [
            {'name': f'Lead {i:02d}', 'city': cities[i % 3], 'stage': 'New', 'amount': (i * 37) % 50}
            for i in range(57)
        ]
        self.delhi = [row for row in self.rows if row['city'] == 'Delhi']

    def walk(self, state):
        pages = []
        while True:
            page = self.table.apply(self.rows, state)
            pages.append(page)
            if not page.has_next:
                return pages
            state.page += 1

    def test_pages_partition_the_matching_rows(self):
        for page_size in (10, 20, 50, 100):
            with self.subTest(page_size=page_size):
                pages = self.walk(TableState(search='delhi', page=1, page_size=page_size))

                seen = [row['name'] for page in pages for row in page.rows]
                self.assertEqual(seen, [row['name'] for row in self.delhi])
                self.assertEqual(len(seen), len(set(seen)))

                for page in pages:
                    self.assertEqual(page.total, 19)
                    self.assertEqual(page.has_next, page.page != page.total_pages)
                    self.assertLessEqual(len(page.rows), page_size)
                self.assertEqual(pages[-1].page, pages[-1].total_pages)

    def test_sort_cycle_returns_to_source_order(self):
        state = TableState(search='delhi', page_size=100)
        unsorted = self.table.apply(self.rows, state).rows

        state.sort, state.direction = next_sort(state, 'amount')
        ascending = self.table.apply(self.rows, state).rows
        amounts = [row['amount'] for row in ascending]
        self.assertEqual(amounts, sorted(amounts))

        state.sort, state.direction = next_sort(state, 'amount')
        descending = self.table.apply(self.rows, state).rows
        amounts = [row['amount'] for row in descending]
        self.assertEqual(amounts, sorted(amounts, reverse=True))

        state.sort, state.direction = next_sort(state, 'amount')
        self.assertEqual((state.sort, state.direction), (None, None))
        self.assertEqual(self.table.apply(self.rows, state).rows, unsorted)
        self.assertEqual(unsorted, self.delhi)

    def test_page_below_one_starts_at_the_first_page(self):
        for raw in ('0', '-3'):
            with self.subTest(page=raw):
                state = TableState.from_query({'page': raw, 'search': 'delhi'}, self.table)
                self.assertEqual(state.page, 1)

                page = self.table.apply(self.rows, state)
                self.assertEqual(page.page, 1)
                self.assertEqual(page.rows[0]['name'], 'Lead 00')
                self.assertFalse(page.has_previous)

        self.assertEqual(self.table.paginate(self.rows, page=0, page_size=10).page, 1)

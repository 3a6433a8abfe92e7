"""
Sales Overview Tests
====================

Test Coverage:
1. Sale stages and amount parsing
2. Period buckets - today / week / month / last 15 days
3. Per-employee totals, ranking and top performers
4. sales_overview view

Run tests:
    python manage.py test apps.leads.tests.test_sales
"""

from datetime import datetime, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from django.utils import timezone

from apps.employees.models import Employee
from apps.leads.models import Lead
from apps.leads.sales import is_sale_stage, parse_amount, period_bounds, sales_summary

User = get_user_model()

# Monday
NOW = timezone.make_aware(datetime(2026, 10, 19, 15, 0))


def sale(employee_id, amount, when, stage='Won', name=''):
    return {
        'assigned_to': employee_id, 'assigned_to_name': name, 'stage': stage,
        'deal_amount': amount, 'date_and_time': when.isoformat(),
    }


class SaleStageTest(SimpleTestCase):

    def test_won_and_sale_stages(self):
        for stage in ('Won', 'Closed Won', 'sale done', 'SALE'):
            self.assertTrue(is_sale_stage(stage), stage)
        for stage in ('', None, 'New', 'Follow Up Required', 'Lost'):
            self.assertFalse(is_sale_stage(stage), stage)

    def test_parse_amount(self):
        self.assertEqual(parse_amount(5000), 5000.0)
        self.assertEqual(parse_amount('₹ 1,20,000'), 120000.0)
        self.assertEqual(parse_amount(''), 0.0)
        self.assertEqual(parse_amount(None), 0.0)
        self.assertEqual(parse_amount('call me'), 0.0)


class PeriodBoundsTest(SimpleTestCase):

    def test_bounds(self):
        bounds = period_bounds(NOW)

        self.assertEqual(bounds['today'][0].date().isoformat(), '2026-10-19')
        self.assertEqual(bounds['week'][0].date().isoformat(), '2026-10-19')
        self.assertEqual(bounds['week'][1].date().isoformat(), '2026-10-26')
        self.assertEqual(bounds['month'][0].date().isoformat(), '2026-10-01')
        self.assertEqual(bounds['month'][1].date().isoformat(), '2026-11-01')
        self.assertEqual(bounds['last15'][0].date().isoformat(), '2026-10-05')

    def test_december_rolls_into_january(self):
        bounds = period_bounds(timezone.make_aware(datetime(2026, 12, 31, 9, 0)))
        self.assertEqual(bounds['month'][1].date().isoformat(), '2027-01-01')


class SalesSummaryTest(SimpleTestCase):

    def setUp(self):
        self.staff = [
            {'id': 'neha', 'full_name': 'Neha Verma', 'job_title': 'Sales Executive'},
            {'id': 'raj', 'full_name': 'Raj Kumar', 'job_title': 'Sales Executive'},
            {'id': 'zoya', 'full_name': 'Zoya Khan', 'job_title': 'Sales Manager'},
        ]
        self.leads = [
            sale('neha', 50000, NOW - timedelta(hours=2)),
            sale('neha', '10,000', NOW - timedelta(days=10), stage='Sale Done'),
            sale('raj', 80000, NOW - timedelta(days=40)),
            sale('raj', 20000, NOW - timedelta(days=3)),
            sale('amit', 5000, NOW - timedelta(days=1), name='Amit Singh'),
            sale('', 7000, NOW - timedelta(days=1)),
            sale('neha', 99999, NOW - timedelta(hours=1), stage='Follow Up Required'),
        ]

    def test_totals_only_count_sales(self):
        summary = sales_summary(self.leads, self.staff, now=NOW)

        self.assertEqual(summary['totals'], {'count': 6, 'revenue': 172000.0, 'average_deal': 28666.67})
        self.assertEqual(summary['periods']['today'], {'count': 1, 'amount': 50000.0})
        self.assertEqual(summary['periods']['last15']['count'], 5)

    def test_per_employee_periods(self):
        employees = {item['id']: item for item in sales_summary(self.leads, self.staff, now=NOW)['employees']}

        neha = employees['neha']
        self.assertEqual(neha['today'], {'count': 1, 'amount': 50000.0})
        self.assertEqual(neha['week'], {'count': 1, 'amount': 50000.0})
        self.assertEqual(neha['month'], {'count': 2, 'amount': 60000.0})
        self.assertEqual(neha['total'], {'count': 2, 'amount': 60000.0})

        # the 40-day-old deal only shows in the all-time total
        self.assertEqual(employees['raj']['month'], {'count': 1, 'amount': 20000.0})
        self.assertEqual(employees['raj']['total'], {'count': 2, 'amount': 100000.0})

    def test_staff_without_sales_are_listed_and_others_join_when_they_sell(self):
        employees = sales_summary(self.leads, self.staff, now=NOW)['employees']

        self.assertEqual([item['name'] for item in employees], ['Neha Verma', 'Raj Kumar', 'Amit Singh', 'Zoya Khan'])
        self.assertEqual(employees[-1]['total'], {'count': 0, 'amount': 0.0})

    def test_ranking_period_and_top_performers(self):
        summary = sales_summary(self.leads, self.staff, now=NOW, rank_by='today')
        self.assertEqual(summary['employees'][0]['name'], 'Neha Verma')

        summary = sales_summary(self.leads, self.staff, now=NOW, rank_by='everything')
        self.assertEqual(summary['rank_by'], 'month')

        performers = [(item['name'], item['amount']) for item in summary['top_performers']]
        self.assertEqual(performers, [('Raj Kumar', 100000.0), ('Neha Verma', 60000.0), ('Amit Singh', 5000.0)])

    def test_no_sales(self):
        summary = sales_summary([], [], now=NOW)
        self.assertEqual(summary['totals'], {'count': 0, 'revenue': 0.0, 'average_deal': 0})
        self.assertEqual(summary['top_performers'], [])


class SalesOverviewViewTest(TestCase):

    def setUp(self):
        self.viewer = User.objects.create_user(email='viewer@test.com', password='testpass123', role='viewer')
        self.neha = Employee.objects.create(full_name='Neha Verma', job_title='Sales Executive')
        self.raj = Employee.objects.create(full_name='Raj Kumar', job_title='Senior Sales Executive')
        Employee.objects.create(full_name='Amit Singh', job_title='Developer')

        Lead.objects.create(name='A', stage='Won', deal_amount=Decimal('45000'), assigned_to=self.neha)
        Lead.objects.create(name='B', stage='Closed Won', deal_amount=Decimal('15000'), assigned_to=self.raj)
        Lead.objects.create(name='C', stage='New', deal_amount=Decimal('90000'), assigned_to=self.raj)
        self.client.force_login(self.viewer)

    def test_overview(self):
        data = self.client.get(reverse('leads:sales_overview')).json()

        self.assertEqual(data['totals']['count'], 2)
        self.assertEqual(data['totals']['revenue'], 60000.0)
        self.assertEqual([item['name'] for item in data['employees']], ['Neha Verma', 'Raj Kumar'])
        self.assertEqual(data['top_performers'][0]['name'], 'Neha Verma')
        self.assertIsNone(data['error'])

    def test_search_narrows_employees(self):
        data = self.client.get(reverse('leads:sales_overview'), {'search': 'raj'}).json()
        self.assertEqual([item['name'] for item in data['employees']], ['Raj Kumar'])
        self.assertEqual(data['totals']['count'], 2)

    def test_requires_sales_view(self):
        ghost = User.objects.create_user(email='ghost@test.com', password='testpass123', role='contractor')
        self.client.force_login(ghost)
        self.assertEqual(self.client.get(reverse('leads:sales_overview')).status_code, 403)

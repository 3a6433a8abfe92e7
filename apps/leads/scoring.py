"""
Rule-weighted lead scoring.

score = sum(points * weight / 100) over every matched condition of every
enabled rule. It is a fixed, explainable linear function: nothing is
trained and rule edits only live for the request that made them.

Example:
    services = "USA LLC Formation" matches a 25-point condition under the
    weight-20 rule → contributes 25 * 0.20 = 5 points.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, List


CATEGORIES = ('demographic', 'behavioral', 'engagement', 'intent', 'timing')
OPERATORS = ('equals', 'contains', 'greater_than', 'not_null')


@dataclass
class Condition:
    field: str
    operator: str
    value: Any
    points: float

    def matches(self, row):
        value = row.get(self.field)

        if self.operator == 'equals':
            return value == self.value
        if self.operator == 'contains':
            return bool(value) and str(self.value).lower() in str(value).lower()
        if self.operator == 'greater_than':
            try:
                return float(value) > float(self.value)
            except (TypeError, ValueError):
                return False
        if self.operator == 'not_null':
            return value not in (None, '')
        return False


@dataclass
class ScoringRule:
    id: str
    name: str
    category: str
    weight: float
    enabled: bool = True
    conditions: List[Condition] = field(default_factory=list)

    def as_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'weight': self.weight,
            'enabled': self.enabled,
            'conditions': [
                {'field': c.field, 'operator': c.operator, 'value': c.value, 'points': c.points}
                for c in self.conditions
            ],
        }


DEFAULT_SCORING_RULES = [
    ScoringRule('1', 'High Value Service', 'Demographic', 20, conditions=[
        Condition('services', 'contains', 'USA LLC Formation', 25),
        Condition('services', 'contains', 'Brand Development', 20),
        Condition('services', 'contains', 'Dropshipping', 15),
    ]),
    ScoringRule('2', 'Geographic Location', 'Demographic', 15, conditions=[
        Condition('city', 'equals', 'Delhi', 20),
        Condition('city', 'equals', 'Mumbai', 18),
        Condition('city', 'equals', 'Bangalore', 15),
    ]),
    ScoringRule('3', 'Lead Source Quality', 'Behavioral', 25, conditions=[
        Condition('source', 'equals', 'Referral', 30),
        Condition('source', 'equals', 'Website', 20),
        Condition('source', 'equals', 'Social Media', 15),
        Condition('source', 'equals', 'Cold Call', 10),
    ]),
    ScoringRule('4', 'Engagement Level', 'Engagement', 20, conditions=[
        Condition('follow_up_date', 'not_null', None, 15),
        Condition('assigned_to', 'not_null', None, 10),
    ]),
    ScoringRule('5', 'Deal Amount', 'Intent', 20, conditions=[
        Condition('deal_amount', 'greater_than', 100000, 25),
        Condition('deal_amount', 'greater_than', 50000, 15),
        Condition('deal_amount', 'greater_than', 25000, 10),
    ]),
]


def rules_for_request(disabled_ids=()):
    """Fresh copy of the default rules with the given rule ids switched off"""
    rules = copy.deepcopy(DEFAULT_SCORING_RULES)
    for rule in rules:
        if rule.id in disabled_ids:
            rule.enabled = False
    return rules


def priority_for(score):
    if score >= 70:
        return 'High'
    if score >= 40:
        return 'Medium'
    return 'Low'


def next_action_for(score):
    if score >= 70:
        return 'Immediate follow-up'
    if score >= 40:
        return 'Schedule call'
    return 'Nurture sequence'


def _deal_amount(row):
    try:
        return float(row.get('deal_amount') or 0)
    except (TypeError, ValueError):
        return 0.0


def score_lead(row, rules=None):
    """
    Score one lead row (see Lead.as_row()).

    Returns a dict with the raw score, the per-category breakdown, probability
    (clamped to 5..95), priority, next action, risk factors and opportunities.
    """
    rules = DEFAULT_SCORING_RULES if rules is None else rules

    total = 0.0
    breakdown = {category: 0.0 for category in CATEGORIES}

    for rule in rules:
        if not rule.enabled:
            continue
        for condition in rule.conditions:
            if condition.matches(row):
                points = condition.points * (rule.weight / 100)
                total += points
                category = rule.category.lower()
                if category in breakdown:
                    breakdown[category] += points

    probability = min(95, max(5, total))

    risk_factors = []
    if total < 30:
        risk_factors.append('Low engagement score')
        risk_factors.append('Limited demographic data')
    if row.get('stage') == 'Not Connected':
        risk_factors.append('No initial contact made')
    if not row.get('assigned_to'):
        risk_factors.append('No assigned sales rep')

    opportunities = []
    if total >= 70:
        opportunities.append('High conversion probability')
        opportunities.append('Premium service interest')
    if row.get('source') == 'Referral':
        opportunities.append('Warm lead from referral')
    if _deal_amount(row) > 100000:
        opportunities.append('High-value opportunity')

    return {
        'id': row.get('id', ''),
        'name': row.get('name', ''),
        'email': row.get('email', ''),
        'mobile': row.get('mobile', ''),
        'source': row.get('source', ''),
        'stage': row.get('stage', ''),
        'deal_amount': _deal_amount(row),
        'date_and_time': row.get('date_and_time', ''),
        'score': round(total, 2),
        'total_score': round(total),
        'breakdown': {category: round(points, 2) for category, points in breakdown.items()},
        'probability': round(probability),
        'priority': priority_for(total),
        'next_action': next_action_for(total),
        'risk_factors': risk_factors,
        'opportunities': opportunities,
    }


def score_leads(rows, rules=None):
    """Score every row, highest score first"""
    scored = [score_lead(row, rules) for row in rows]
    return sorted(scored, key=lambda item: item['score'], reverse=True)

"""
Duplicate lead detection and merge.

Detection is a pairwise scan over the latest leads. Two leads match when
they share an email (case-insensitive), a phone number (digits only, last
ten digits so '+91 98765-43210' == '9876543210') or one name contains the
other. Each lead joins at most one group.

Confidence is fixed per match kind (email 95, phone 90, name 70) and a
group reports its strongest match.
"""

import logging
import re

from django.db import transaction

from .models import CallLog, Lead

logger = logging.getLogger(__name__)

MATCH_CONFIDENCE = {
    'email': 95,
    'phone': 90,
    'name': 70,
}
MATCH_REASONS = {
    'email': 'Email match',
    'phone': 'Phone match',
    'name': 'Name match',
}

# Fields copied from a duplicate when the kept lead has no value
MERGE_FILL_FIELDS = [
    'name', 'mobile', 'email', 'city', 'services', 'source', 'priority',
    'assigned_to', 'follow_up_date', 'call_connected', 'call_remark', 'call_notes', 'client_budget',
]


def phone_key(number):
    digits = re.sub(r'\D', '', str(number or ''))
    return digits[-10:]


def match_kind(a, b):
    """Strongest reason two lead rows are duplicates, or None"""
    email_a = (a.get('email') or '').strip().lower()
    email_b = (b.get('email') or '').strip().lower()
    if email_a and email_a == email_b:
        return 'email'

    phone_a, phone_b = phone_key(a.get('mobile')), phone_key(b.get('mobile'))
    if phone_a and phone_a == phone_b:
        return 'phone'

    name_a = (a.get('name') or '').strip().lower()
    name_b = (b.get('name') or '').strip().lower()
    if name_a and name_b and (name_a in name_b or name_b in name_a):
        return 'name'

    return None


def find_duplicates(rows):
    """
    Group duplicate lead rows.

    Returns:
        list of {'id', 'reason', 'confidence', 'suggested_action', 'leads'}
    """
    groups = []
    processed = set()

    for index, lead in enumerate(rows):
        if lead['id'] in processed:
            continue

        members = []
        kinds = []
        for other in rows[index + 1:]:
            if other['id'] in processed:
                continue
            kind = match_kind(lead, other)
            if kind:
                members.append(other)
                kinds.append(kind)

        if not members:
            continue

        best = max(kinds, key=lambda kind: MATCH_CONFIDENCE[kind])
        groups.append({
            'id': f"group_{lead['id']}",
            'reason': MATCH_REASONS[best],
            'confidence': MATCH_CONFIDENCE[best],
            'suggested_action': 'merge' if len(members) == 1 else 'manual_review',
            'leads': [lead] + members,
        })
        processed.add(lead['id'])
        processed.update(member['id'] for member in members)

    return groups


def merge_group(leads):
    """
    Merge duplicate leads into the most recent one.

    - deal amount becomes the group maximum
    - empty fields on the kept lead are filled from the others (newest first)
    - tags are combined and call logs are moved to the kept lead
    - the other leads are deleted

    Returns:
        The kept Lead
    """
    leads = list(leads)
    if len(leads) < 2:
        raise ValueError('A merge needs at least two leads')

    leads.sort(key=lambda lead: lead.date_and_time, reverse=True)
    primary, others = leads[0], leads[1:]

    with transaction.atomic():
        amounts = [lead.deal_amount for lead in leads if lead.deal_amount is not None]
        if amounts:
            primary.deal_amount = max(amounts)

        for field_name in MERGE_FILL_FIELDS:
            if getattr(primary, field_name) in (None, ''):
                for other in others:
                    value = getattr(other, field_name)
                    if value not in (None, ''):
                        setattr(primary, field_name, value)
                        break

        primary.save()

        tag_names = {tag.name for other in others for tag in other.tags.all()}
        if tag_names:
            primary.tags.add(*tag_names)

        other_ids = [other.pk for other in others]
        CallLog.objects.filter(leads_id__in=other_ids).update(leads=primary)
        Lead.objects.filter(pk__in=other_ids).delete()

    logger.info(f"Merged {len(others)} duplicate lead(s) into {primary.pk}")
    return primary

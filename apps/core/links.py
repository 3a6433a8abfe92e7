import re

from django.conf import settings


def digits_only(number):
    return re.sub(r'\D', '', str(number or ''))


def tel_link(number):
    """tel: link for the dialer; '' when there is no number"""
    number = str(number or '').strip()
    if not number:
        return ''
    return f"tel:{re.sub(r'[^0-9+]', '', number)}"


def whatsapp_link(number):
    digits = digits_only(number)
    if not digits:
        return ''
    return f'https://wa.me/{digits}'


def payment_system_url():
    return settings.PAYMENT_SYSTEM_URL


def contact_links(number):
    return {'call': tel_link(number), 'whatsapp': whatsapp_link(number)}

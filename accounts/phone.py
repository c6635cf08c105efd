"""
Phone number normalisation for Indian mobile numbers.

Accepted inputs are a 10-digit mobile number starting with 6-9, the same
number prefixed with ``91`` or ``+91``. Spaces, dashes and parentheses are
ignored. The canonical form is E.164 (``+91XXXXXXXXXX``).
"""

import re

import phonenumbers

MOBILE_RE = re.compile(r'^(?:\+?91)?([6-9]\d{9})$')
SEPARATORS_RE = re.compile(r'[\s\-()]')


class InvalidPhoneNumber(ValueError):
    pass


def normalize_phone(value) -> str:
    """Return the E.164 form of an Indian mobile number or raise InvalidPhoneNumber."""
    if value is None:
        raise InvalidPhoneNumber('Phone number is required.')

    raw = SEPARATORS_RE.sub('', str(value))
    match = MOBILE_RE.match(raw)
    if not match:
        raise InvalidPhoneNumber('Invalid phone number format.')

    number = phonenumbers.parse(match.group(1), 'IN')
    return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)


def looks_like_email(identifier: str) -> bool:
    return '@' in (identifier or '')

"""
Safety confirmation for event subscriptions.

Subscribing a member to an event books a place (and possibly a payment)
in Keeo. Before a subscription is sent the user must type a short
confirmation code, so scripts and agents cannot subscribe people without
a human in the loop.

Set KEEO_SKIP_CONFIRM=1 to bypass the prompt in trusted automation.
"""

import os
import sys
import secrets
from typing import Optional, Tuple

from ..config import ENV_SKIP_CONFIRM

CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
CODE_LENGTH = 4


def generate_confirmation_code(length: int = CODE_LENGTH) -> str:
    """Random code without look-alike characters (0/O, 1/I)."""
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def _skip_confirmation() -> bool:
    return os.environ.get(ENV_SKIP_CONFIRM, '').lower() in ('1', 'true', 'yes')


def _prompt(message: str) -> Optional[str]:
    """Read one line from the terminal, or None when there is no terminal."""
    if not sys.stdin.isatty():
        return None
    try:
        print(message, file=sys.stderr, end='', flush=True)
        return input().strip()
    except EOFError:
        return None


def confirm_subscription(person: str, event: str, administrator: str,
                         price_category: str = None) -> Tuple[bool, str]:
    """Ask the user to confirm an event subscription.

    Returns:
        (confirmed, reason) where reason is 'skipped', 'confirmed',
        'no_terminal' or 'mismatch'
    """
    if _skip_confirmation():
        return True, 'skipped'

    code = generate_confirmation_code()
    summary = (
        f"About to subscribe {person} to event {event}"
        f" on behalf of administrator {administrator}"
    )
    if price_category:
        summary += f" (price category {price_category})"

    print(summary, file=sys.stderr)
    answer = _prompt(f"To proceed, type exactly: {code}\n> ")

    if answer is None:
        return False, 'no_terminal'
    if answer.upper() != code:
        return False, 'mismatch'
    return True, 'confirmed'

"""Main CLI entry point for Keeo CLI.

Handles argument parsing, command routing, and output coordination.
"""

import sys
import argparse
import getpass

from .client import KeeoClient, KeeoError
from .commands import PersonCommands, UnitCommands, EventCommands
from .config import KeeoConfig
from .formatters import JsonFormatter, HumanFormatter
from .utils.safety import confirm_subscription
from . import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for Keeo CLI."""

    parser = argparse.ArgumentParser(
        prog='keeo',
        description='Keeo CLI - Query members, units and events and manage event subscriptions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration (environment):
  KEEO_API_URL, KEEO_API_USERNAME, KEEO_API_PASSWORD, KEEO_LOGIN_SALT,
  KEEO_VERIFY_SSL=1 to validate the server certificate, KEEO_TIMEOUT (seconds)

Examples:
  # Check a member's credentials (password is prompted)
  keeo auth check 1234567890

  # Persons
  keeo person get 1234567890
  keeo person functions
  keeo person find --name Peeters --birth-date 2004-05-17

  # Units
  keeo unit get 1512
  keeo unit count 1512 --function 3
  keeo unit members 1512
  keeo unit categories
  keeo unit numbers --category 4

  # Events
  keeo event categories
  keeo event search --category 5 --start-from 2026-07-01
  keeo event get EV-2026-013
  keeo event subscribe --person 1234567890 --event EV-2026-013 \\
      --admin 9876543210 --price-category 2 --dry-run
"""
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--human', action='store_true',
                        help='Human-readable output instead of JSON')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose logging (show HTTP requests)')

    subparsers = parser.add_subparsers(dest='resource', help='Resource to manage')

    # ── auth ────────────────────────────────────────────────────
    auth_parser = subparsers.add_parser('auth', help='Member credential checks')
    auth_sub = auth_parser.add_subparsers(dest='action')

    check_parser = auth_sub.add_parser('check', help="Check a member's stem number and password")
    check_parser.add_argument('stemnumber', help='Stem number of the member')
    check_parser.add_argument('--password', default=None,
                              help='Password (prompted when omitted)')

    # ── person ──────────────────────────────────────────────────
    person_parser = subparsers.add_parser('person', help='Person operations')
    person_sub = person_parser.add_subparsers(dest='action')

    person_get_parser = person_sub.add_parser('get', help='Show a person')
    person_get_parser.add_argument('stemnumber', help='Stem number')

    person_sub.add_parser('functions', help='List all functions')

    person_find_parser = person_sub.add_parser('find',
                                               help='Find persons by name, email or birth date')
    person_find_parser.add_argument('--first-name', help='First name')
    person_find_parser.add_argument('--name', help='Last name')
    person_find_parser.add_argument('--email', help='Email address')
    person_find_parser.add_argument('--birth-date', help='Birth date (YYYY-MM-DD)')

    # ── unit ────────────────────────────────────────────────────
    unit_parser = subparsers.add_parser('unit', help='Unit operations')
    unit_sub = unit_parser.add_subparsers(dest='action')

    unit_get_parser = unit_sub.add_parser('get', help='Show a unit')
    unit_get_parser.add_argument('number', help='Unit number')

    unit_count_parser = unit_sub.add_parser('count', help='Count members in a unit')
    unit_count_parser.add_argument('number', help='Unit number')
    unit_count_parser.add_argument('--function', help='Only members with this function number')

    unit_members_parser = unit_sub.add_parser('members', help='List members in a unit')
    unit_members_parser.add_argument('number', help='Unit number')
    unit_members_parser.add_argument('--function', help='Only members with this function number')

    unit_sub.add_parser('categories', help='Show the unit category tree')

    unit_numbers_parser = unit_sub.add_parser('numbers', help='List unit numbers')
    unit_numbers_parser.add_argument('--category', type=int,
                                     help='Category ID (default: all units)')

    # ── event ───────────────────────────────────────────────────
    event_parser = subparsers.add_parser('event', help='Event operations')
    event_sub = event_parser.add_subparsers(dest='action')

    event_sub.add_parser('categories', help='List event categories')

    event_search_parser = event_sub.add_parser('search', help='Search events')
    event_search_parser.add_argument('--category', type=int, help='Event category ID')
    event_search_parser.add_argument('--start-from', help='Starts on or after (YYYY-MM-DD)')
    event_search_parser.add_argument('--start-until', help='Starts on or before (YYYY-MM-DD)')
    event_search_parser.add_argument('--end-from', help='Ends on or after (YYYY-MM-DD)')
    event_search_parser.add_argument('--end-until', help='Ends on or before (YYYY-MM-DD)')

    event_get_parser = event_sub.add_parser('get', help='Show an event')
    event_get_parser.add_argument('code', help='Event code')

    subscribe_parser = event_sub.add_parser('subscribe',
                                            help='Subscribe a person to an event')
    subscribe_parser.add_argument('--person', required=True, help='Stem number to subscribe')
    subscribe_parser.add_argument('--event', required=True, help='Event code')
    subscribe_parser.add_argument('--admin', required=True,
                                  help='Stem number of the subscribing administrator')
    subscribe_parser.add_argument('--price-category', help='Price category ID')
    subscribe_parser.add_argument('--dry-run', action='store_true',
                                  help='Show what would be sent without subscribing')

    return parser


def main():
    """Main entry point."""
    # Pre-parse global flags so they work anywhere in the command line
    global_parser = argparse.ArgumentParser(add_help=False)
    global_parser.add_argument('--human', action='store_true')
    global_parser.add_argument('--verbose', action='store_true')
    global_args, remaining = global_parser.parse_known_args()

    parser = create_parser()
    args = parser.parse_args(remaining)

    args.human = global_args.human
    args.verbose = global_args.verbose

    if not args.resource:
        parser.print_help()
        sys.exit(0)

    formatter = HumanFormatter() if args.human else JsonFormatter()

    try:
        if not args.action:
            parser.parse_args([args.resource, '--help'])

        client = KeeoClient(KeeoConfig.from_env(), verbose=args.verbose)

        if args.resource == 'auth':
            cmds = PersonCommands(client)
            if args.action == 'check':
                password = args.password or getpass.getpass('Password: ')
                result = cmds.check_login(args.stemnumber, password)
                formatter.output_result(result)

        elif args.resource == 'person':
            cmds = PersonCommands(client)
            if args.action == 'get':
                result = cmds.get_person(args.stemnumber)
                formatter.output_result(result)
            elif args.action == 'functions':
                result = cmds.list_functions()
                formatter.output_result(result)
            elif args.action == 'find':
                result = cmds.find(
                    first_name=args.first_name,
                    name=args.name,
                    email=args.email,
                    birth_date=args.birth_date,
                )
                formatter.output_result(result)

        elif args.resource == 'unit':
            cmds = UnitCommands(client)
            if args.action == 'get':
                result = cmds.get_unit(args.number)
                formatter.output_result(result)
            elif args.action == 'count':
                result = cmds.count_members(args.number, args.function)
                formatter.output_result(result)
            elif args.action == 'members':
                result = cmds.list_members(args.number, args.function)
                formatter.output_result(result)
            elif args.action == 'categories':
                result = cmds.list_categories()
                formatter.output_result(result)
            elif args.action == 'numbers':
                result = cmds.list_numbers(category_id=args.category)
                formatter.output_result(result)

        elif args.resource == 'event':
            cmds = EventCommands(client)
            if args.action == 'categories':
                result = cmds.list_categories()
                formatter.output_result(result)
            elif args.action == 'search':
                result = cmds.search(
                    category_id=args.category,
                    start_from=args.start_from,
                    start_until=args.start_until,
                    end_from=args.end_from,
                    end_until=args.end_until,
                )
                formatter.output_result(result)
            elif args.action == 'get':
                result = cmds.get_event(args.code)
                formatter.output_result(result)
            elif args.action == 'subscribe':
                admin_password = ''
                if not args.dry_run:
                    # Require human confirmation before subscribing
                    confirmed, reason = confirm_subscription(
                        person=args.person,
                        event=args.event,
                        administrator=args.admin,
                        price_category=args.price_category,
                    )
                    if not confirmed:
                        formatter.output_result({
                            'status': 'cancelled',
                            'reason': reason,
                            'message': 'Subscription cancelled by user.',
                        })
                        sys.exit(0)
                    admin_password = getpass.getpass('Administrator password: ')
                result = cmds.subscribe(
                    person=args.person,
                    event=args.event,
                    administrator=args.admin,
                    administrator_password=admin_password,
                    price_category=args.price_category,
                    dry_run=args.dry_run,
                )
                formatter.output_result(result)

        else:
            parser.print_help()

    except KeeoError as e:
        formatter.output_error(e)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        formatter.output_error(e)
        sys.exit(1)


if __name__ == '__main__':
    main()

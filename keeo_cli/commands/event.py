"""Event commands: categories, search, details, subscription."""

from datetime import date


class EventCommands:
    """Commands for events and event subscriptions."""

    def __init__(self, client):
        self.client = client

    def list_categories(self) -> dict:
        categories = self.client.get_event_categories()
        return {
            'categories': [{'id': c.id, 'name': c.name} for c in categories],
            'count': len(categories),
        }

    def search(self, category_id: int = None, start_from: str = None,
               start_until: str = None, end_from: str = None,
               end_until: str = None) -> dict:
        """Search events. Dates are YYYY-MM-DD and inclusive.

        Returns:
            Dict with 'eventCodes' and 'count'
        """
        codes = self.client.find_events(
            category_id,
            _parse_date(start_from),
            _parse_date(start_until),
            _parse_date(end_from),
            _parse_date(end_until),
        )
        return {
            'eventCodes': codes,
            'count': len(codes),
        }

    def get_event(self, event_code: str) -> dict:
        event = self.client.get_event(event_code)
        result = event.to_dict()
        result['priceCategories'] = [
            {'id': p.id, 'name': p.name, 'price': p.price}
            for p in event.price_categories
        ]
        return result

    def subscribe(self, person: str, event: str, administrator: str,
                  administrator_password: str, price_category: str = None,
                  dry_run: bool = False) -> dict:
        """Subscribe a person to an event.

        Args:
            person: Stem number of the person to subscribe
            event: Event code
            administrator: Stem number of the administrator
            administrator_password: Administrator's password
            price_category: Optional price category id
            dry_run: Only show what would be sent

        Returns:
            Dict with 'status' ('subscribed' or 'dry_run') and the request
        """
        request = {
            'person': person,
            'event': event,
            'administrator': administrator,
            'priceCategory': price_category,
        }
        if dry_run:
            return {'status': 'dry_run', 'request': request}

        self.client.subscribe_person_to_event(
            person, event, administrator, administrator_password,
            price_category=price_category,
        )
        return {'status': 'subscribed', 'request': request}


def _parse_date(value):
    return date.fromisoformat(value) if value else None

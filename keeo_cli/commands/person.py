"""Person commands: login check, lookup, functions, search."""

from datetime import date


def _simplify_person(person) -> dict:
    """Extract key fields from a Person."""
    return {
        'stemnumber': person.stemnumber,
        'firstName': person.first_name,
        'name': person.name,
        'fullName': person.full_name,
        'birthDate': person.birth_date,
        'email': person.email,
        'city': person.city,
    }


class PersonCommands:
    """Commands for person records."""

    def __init__(self, client):
        self.client = client

    def check_login(self, stemnumber: str, password: str) -> dict:
        """Check a member's credentials.

        Returns:
            Dict with 'stemnumber' and 'authenticated'
        """
        return {
            'stemnumber': stemnumber,
            'authenticated': self.client.user_login(stemnumber, password),
        }

    def get_person(self, stemnumber: str) -> dict:
        """Get one person.

        Returns:
            Dict with 'found' and, when found, the full 'person' record
        """
        person = self.client.get_person(stemnumber)
        if person is None:
            return {'stemnumber': stemnumber, 'found': False}
        return {'stemnumber': stemnumber, 'found': True, 'person': person.to_dict()}

    def list_functions(self) -> dict:
        functions = self.client.get_functions()
        return {
            'functions': [{'number': f.number, 'name': f.name} for f in functions],
            'count': len(functions),
        }

    def find(self, first_name: str = None, name: str = None, email: str = None,
             birth_date: str = None) -> dict:
        """Search persons by any combination of name, email and birth date.

        Args:
            birth_date: YYYY-MM-DD

        Returns:
            Dict with the raw 'matches' Keeo returned and 'count'
        """
        if birth_date:
            birth_date = date.fromisoformat(birth_date)
        matches = self.client.find_user(
            first_name=first_name or '',
            name=name or '',
            email=email or '',
            birth_date=birth_date,
        )
        return {
            'matches': matches,
            'count': len(matches),
        }

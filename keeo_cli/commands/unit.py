"""Unit commands: unit details, member counts and lists, categories."""

from .person import _simplify_person


class UnitCommands:
    """Commands for units and their members."""

    def __init__(self, client):
        self.client = client

    def get_unit(self, unit_number: str) -> dict:
        return self.client.get_unit(unit_number).to_dict()

    def count_members(self, unit_number: str, function_number: str = None) -> dict:
        count = self.client.get_number_of_persons_in_unit(unit_number, function_number)
        return {
            'unit': unit_number,
            'function': function_number,
            'count': count,
        }

    def list_members(self, unit_number: str, function_number: str = None) -> dict:
        """List members of a unit, optionally filtered on function.

        Returns:
            Dict with simplified 'members' and 'count'
        """
        members = self.client.search_members_in_unit(unit_number, function_number)
        return {
            'unit': unit_number,
            'members': [_simplify_person(m) for m in members],
            'count': len(members),
        }

    def list_categories(self) -> list:
        return self.client.get_unit_categories()

    def list_numbers(self, category_id: int = None) -> dict:
        """List unit numbers in a category, or all units without one."""
        if category_id is None:
            numbers = self.client.get_all_unit_numbers()
        else:
            numbers = self.client.get_units_numbers_in_category(category_id)
        return {
            'unitNumbers': numbers,
            'count': len(numbers),
        }

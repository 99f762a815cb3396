"""Value objects built from Keeo JSON fragments.

Every entity is constructed once from the decoded mapping the API returned
and never changed afterwards. Entities only refer to each other by id
(stem number, unit number, event code, ...); to follow a reference, ask
the client for the other record.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PriceCategory:
    """A pricing tier selectable when subscribing to an event."""

    id: Optional[int] = None
    name: Optional[str] = None
    price: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceCategory':
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            price=data.get('price'),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(frozen=True)
class Person:
    """A member record, identified by its stem number."""

    stemnumber: Optional[str] = None
    first_name: Optional[str] = None
    name: Optional[str] = None
    birth_date: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    gender: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'Person':
        """Build a person from a `person` object or a `unit_members` item."""
        return cls(
            stemnumber=data.get('stemnumber'),
            first_name=data.get('first_name'),
            name=data.get('name'),
            birth_date=data.get('birth_date'),
            email=data.get('email'),
            phone=data.get('phone'),
            mobile=data.get('mobile'),
            street=data.get('street'),
            house_number=data.get('number'),
            postal_code=data.get('postal_code'),
            city=data.get('city'),
            gender=data.get('gender'),
            raw=dict(data),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.name or ''}".strip()

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(frozen=True)
class PersonFunction:
    """A function (role) a person can hold in a unit."""

    number: Optional[int] = None
    name: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'PersonFunction':
        return cls(
            number=data.get('number'),
            name=data.get('name'),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(frozen=True)
class Unit:
    """An organizational unit (group, troop), identified by its unit number."""

    number: Optional[str] = None
    name: Optional[str] = None
    category_id: Optional[int] = None
    email: Optional[str] = None
    website: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'Unit':
        return cls(
            number=data.get('number'),
            name=data.get('name'),
            category_id=data.get('category_id'),
            email=data.get('email'),
            website=data.get('website'),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(frozen=True)
class EventCategory:
    id: Optional[int] = None
    name: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'EventCategory':
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(frozen=True)
class Event:
    """A scheduled event, identified by its event code."""

    code: Optional[str] = None
    name: Optional[str] = None
    category_id: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    location: Optional[str] = None
    price_categories: List[PriceCategory] = field(default_factory=list)
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> 'Event':
        return cls(
            code=data.get('code'),
            name=data.get('name'),
            category_id=data.get('category_id'),
            start=data.get('start'),
            end=data.get('end'),
            location=data.get('location'),
            price_categories=[PriceCategory.from_dict(p)
                              for p in data.get('price_categories') or []],
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)

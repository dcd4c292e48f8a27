"""Closed classification sets used to tag gift suggestions.

Every suggestion carries exactly one value from each of the six enums
below; they double as the exact-match filter dimensions of the search.
"""

from __future__ import annotations

from enum import Enum

from gcs.domain.exceptions import ValidationError


class _Category(Enum):

    @classmethod
    def parse(cls, raw: str | _Category, field: str | None = None):
        """Coerce a name like ``"young_adult"`` into the enum member."""
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Invalid {cls.__name__} {raw!r}; expected one of: {allowed}",
                field=field,
                rule="enum",
            ) from None


class AgeGroup(_Category):
    BABY = "BABY"  # 0-12 months
    TODDLER = "TODDLER"  # 1-3 years
    CHILD = "CHILD"  # 4-12 years
    TEEN = "TEEN"  # 13-17 years
    YOUNG_ADULT = "YOUNG_ADULT"  # 18-25 years
    ADULT = "ADULT"  # 26-64 years
    SENIOR = "SENIOR"  # 65+


class Gender(_Category):
    MALE = "MALE"
    FEMALE = "FEMALE"
    UNISEX = "UNISEX"
    NON_BINARY = "NON_BINARY"


class Interest(_Category):
    SPORTS = "SPORTS"
    MUSIC = "MUSIC"
    READING = "READING"
    COOKING = "COOKING"
    PHOTOGRAPHY = "PHOTOGRAPHY"
    GARDENING = "GARDENING"
    TECHNOLOGY = "TECHNOLOGY"
    TRAVEL = "TRAVEL"
    ART = "ART"
    FASHION = "FASHION"
    FITNESS = "FITNESS"
    GAMING = "GAMING"
    MOVIES = "MOVIES"
    CRAFTS = "CRAFTS"
    SCIENCE = "SCIENCE"
    OUTDOORS = "OUTDOORS"
    COLLECTING = "COLLECTING"
    BEAUTY = "BEAUTY"


class Occasion(_Category):
    BIRTHDAY = "BIRTHDAY"
    WEDDING = "WEDDING"
    ANNIVERSARY = "ANNIVERSARY"
    GRADUATION = "GRADUATION"
    CHRISTMAS = "CHRISTMAS"
    VALENTINES_DAY = "VALENTINES_DAY"
    MOTHERS_DAY = "MOTHERS_DAY"
    FATHERS_DAY = "FATHERS_DAY"
    EASTER = "EASTER"
    NEW_YEAR = "NEW_YEAR"
    THANKSGIVING = "THANKSGIVING"
    BABY_SHOWER = "BABY_SHOWER"
    BRIDAL_SHOWER = "BRIDAL_SHOWER"
    HOUSEWARMING = "HOUSEWARMING"
    RETIREMENT = "RETIREMENT"
    GET_WELL = "GET_WELL"
    THANK_YOU = "THANK_YOU"
    JUST_BECAUSE = "JUST_BECAUSE"


class Relationship(_Category):
    FAMILY = "FAMILY"
    FRIEND = "FRIEND"
    COLLEAGUE = "COLLEAGUE"
    ROMANTIC_PARTNER = "ROMANTIC_PARTNER"
    ACQUAINTANCE = "ACQUAINTANCE"
    EXTENDED_FAMILY = "EXTENDED_FAMILY"
    NEIGHBOR = "NEIGHBOR"
    MENTOR_STUDENT = "MENTOR_STUDENT"
    CLIENT = "CLIENT"
    BOSS = "BOSS"


class PersonalityType(_Category):
    EXTROVERT = "EXTROVERT"
    INTROVERT = "INTROVERT"
    ADVENTUROUS = "ADVENTUROUS"
    CREATIVE = "CREATIVE"
    ANALYTICAL = "ANALYTICAL"
    PRACTICAL = "PRACTICAL"
    NURTURING = "NURTURING"
    COMPETITIVE = "COMPETITIVE"
    RELAXED = "RELAXED"
    INTELLECTUAL = "INTELLECTUAL"
    PLAYFUL = "PLAYFUL"
    SOPHISTICATED = "SOPHISTICATED"
    MINIMALIST = "MINIMALIST"
    TRADITIONAL = "TRADITIONAL"
    MODERN = "MODERN"

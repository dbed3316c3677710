"""
Domain Enums

Enumerations for the catalog's filter and sort controls.
These replace the magic strings the widgets hand back.
"""

from enum import Enum


class DateFilter(Enum):
    """
    Quick date filters offered above the market table.

    The values are the strings the controls use, so ``DateFilter("today")``
    round-trips a widget value.
    """
    NONE = ""
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEKEND = "weekend"

    @classmethod
    def from_value(cls, value) -> "DateFilter":
        """
        Convert a widget value to a DateFilter.

        Args:
            value: DateFilter, None, or one of "", "today", "tomorrow",
                   "weekend" (case-insensitive)

        Returns:
            Corresponding DateFilter

        Raises:
            ValueError: If value is not a known filter

        Example:
            >>> DateFilter.from_value("Weekend")
            <DateFilter.WEEKEND: 'weekend'>
            >>> DateFilter.from_value(None)
            <DateFilter.NONE: ''>
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid date filter: {value!r}. "
            f"Must be one of: {', '.join(repr(m.value) for m in cls)}"
        )

    @property
    def display_name(self) -> str:
        return {
            DateFilter.NONE: "Any day",
            DateFilter.TODAY: "Today",
            DateFilter.TOMORROW: "Tomorrow",
            DateFilter.WEEKEND: "This Weekend",
        }[self]

    @classmethod
    def quick_filters(cls) -> list["DateFilter"]:
        """Filters shown as toggle pills, in display order."""
        return [cls.TODAY, cls.TOMORROW, cls.WEEKEND]


class SortKey(Enum):
    """Columns the market view can be sorted by."""
    NAME = "name"
    DATE = "date"
    CITY = "city"

    @classmethod
    def from_value(cls, value) -> "SortKey":
        """Convert "name"/"date"/"city" (any case) to a SortKey.

        Raises:
            ValueError: If value doesn't match a sort key
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid sort key: {value!r}. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )

    @property
    def display_name(self) -> str:
        return {
            SortKey.NAME: "Name",
            SortKey.DATE: "Date",
            SortKey.CITY: "City",
        }[self]

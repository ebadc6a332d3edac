"""Culture-aware argument formatting for localized templates.

Templates use Python's str.format syntax with positional fields
("Hello {0}", "Total: {0:#,##0.00}"). Numbers and dates are rendered with
Babel in the target culture; a non-empty format spec on those values is a
CLDR pattern rather than a Python format spec. Without a spec, numbers
are ungrouped at full precision and dates use the short date with the
medium time.

Python 3.13+. Uses Babel for CLDR-compliant formatting.
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from sqllocalization.culture import Culture
from sqllocalization.errors import FormattingError

__all__ = ["CultureFormatter", "format_with_culture"]

_GENERAL_DATE_STYLE = "short"
_GENERAL_TIME_STYLE = "medium"


class CultureFormatter(string.Formatter):
    """string.Formatter that renders numbers and dates in one culture.

    Example:
        >>> formatter = CultureFormatter(get_culture("de-DE"))
        >>> formatter.format("{0}", 1234.5)
        '1234,5'
        >>> formatter.format("{0:yyyy-MM-dd}", date(2024, 3, 1))
        '2024-03-01'
    """

    def __init__(self, culture: Culture) -> None:
        super().__init__()
        self._culture = culture

    @property
    def culture(self) -> Culture:
        return self._culture

    def format_field(self, value: Any, format_spec: str) -> str:
        locale = self._culture.babel_locale
        match value:
            case bool():
                return super().format_field(value, format_spec)
            case int() | float() | Decimal():
                if format_spec:
                    return str(
                        babel_numbers.format_decimal(value, format=format_spec, locale=locale)
                    )
                # General rendering: no grouping, full precision
                return str(
                    babel_numbers.format_decimal(
                        value, locale=locale, group_separator=False, decimal_quantization=False
                    )
                )
            # datetime is a date subclass; match it first
            case datetime():
                if format_spec:
                    return str(babel_dates.format_datetime(value, format_spec, locale=locale))
                return self._general_datetime(value)
            case date():
                return str(
                    babel_dates.format_date(
                        value, format_spec or _GENERAL_DATE_STYLE, locale=locale
                    )
                )
            case time():
                return str(
                    babel_dates.format_time(
                        value, format_spec or _GENERAL_TIME_STYLE, locale=locale
                    )
                )
            case _:
                return super().format_field(value, format_spec)

    def _general_datetime(self, value: datetime) -> str:
        """Short date and medium time joined by the culture's short glue pattern."""
        locale = self._culture.babel_locale
        date_part = babel_dates.format_date(value, _GENERAL_DATE_STYLE, locale=locale)
        time_part = babel_dates.format_time(value, _GENERAL_TIME_STYLE, locale=locale)
        glue = str(babel_dates.get_datetime_format(_GENERAL_DATE_STYLE, locale=locale))
        return glue.replace("'", "").replace("{0}", time_part).replace("{1}", date_part)


def format_with_culture(
    template: str, arguments: Sequence[object], culture: Culture
) -> str:
    """Apply positional arguments to a template using a culture's conventions.

    Args:
        template: str.format template with positional fields
        arguments: Positional arguments
        culture: Culture whose number and date conventions apply

    Returns:
        Formatted string

    Raises:
        FormattingError: If the template is malformed or references a
            missing argument
    """
    try:
        return CultureFormatter(culture).vformat(template, arguments, {})
    except (ValueError, IndexError, KeyError, TypeError, AttributeError) as e:
        msg = f"Cannot format '{template}' with {len(arguments)} argument(s): {e}"
        raise FormattingError(msg, template=template) from e

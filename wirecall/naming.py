"""Procedure name conversion between identifier form (``getUser``) and wire form (``get-user``)."""

from __future__ import annotations

import re

_UPPER = re.compile(r"(?<!^)([A-Z])")
_SEPARATOR = re.compile(r"-(.)")


def to_wire_form(identifier: str) -> str:
    """Hyphenate before every uppercase letter (except a leading one) and lowercase.

    Consecutive capitals each start their own segment: ``getXMLData`` -> ``get-x-m-l-data``.
    """
    return _UPPER.sub(r"-\1", identifier).lower()


def to_identifier_form(wire_form: str) -> str:
    """Drop each hyphen and uppercase the character that follows it.

    ``-test`` -> ``Test``; in ``test--case`` the first hyphen consumes the second,
    giving ``test-case``.
    """
    return _SEPARATOR.sub(lambda m: m.group(1).upper(), wire_form)

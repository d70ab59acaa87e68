#  tldsplit - Public Suffix List domain splitter and Punycode codec
#  Copyright (C) 2023 Dominick C. Pastore
#
#  This program is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Extraction policy flags"""

import enum
from typing import Dict

from .exceptions import InvalidPolicyError


class ExtractionPolicy(enum.IntFlag):
    """Flags controlling which suffixes :func:`~tldsplit.matcher.match` will
    consider. Combine with ``|``."""

    #: Consider rules from the ICANN section of the Public Suffix List
    ALLOW_ICANN = 2
    #: Consider rules from the PRIVATE section of the Public Suffix List
    ALLOW_PRIVATE = 4
    #: When no rule matches, treat the last label as an unknown suffix
    ALLOW_NOT_EXISTING_SUFFIXES = 8

    DEFAULT = ALLOW_ICANN | ALLOW_PRIVATE | ALLOW_NOT_EXISTING_SUFFIXES


#: Names accepted for each flag in the configuration file and on the command
#: line
POLICY_NAMES: Dict[str, ExtractionPolicy] = {
    'icann': ExtractionPolicy.ALLOW_ICANN,
    'private': ExtractionPolicy.ALLOW_PRIVATE,
    'not_existing': ExtractionPolicy.ALLOW_NOT_EXISTING_SUFFIXES,
}


def validate_policy(mode) -> ExtractionPolicy:
    """Check that ``mode`` is an integer combination of
    :class:`ExtractionPolicy` flags and convert it to one

    :param mode: The value to check
    :return: The equivalent :class:`ExtractionPolicy`
    :raises InvalidPolicyError: if ``mode`` is not an int (bools are not
                                accepted), is negative, or has bits set
                                outside the defined flags
    """
    if not isinstance(mode, int) or isinstance(mode, bool):
        raise InvalidPolicyError(f"Extraction mode must be an integer, not "
                                 f"{type(mode).__name__}")
    if mode < 0 or mode & ~int(ExtractionPolicy.DEFAULT):
        raise InvalidPolicyError(f"Invalid extraction mode {mode}")
    return ExtractionPolicy(mode)


def parse_policy(text: str) -> ExtractionPolicy:
    """Parse a comma-separated list of policy names (``icann``, ``private``,
    ``not_existing``) into an :class:`ExtractionPolicy`

    :raises InvalidPolicyError: if a name is not recognized
    """
    policy = ExtractionPolicy(0)
    for name in text.split(','):
        name = name.strip().lower()
        if not name:
            continue
        try:
            policy |= POLICY_NAMES[name]
        except KeyError:
            raise InvalidPolicyError(f"Unknown extraction mode '{name}'") \
                from None
    return policy

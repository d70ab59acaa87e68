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

"""Convenience conversions between Unicode and ASCII domain names with full
IDNA processing (UTS #46 mapping and validity checks)

Unlike :mod:`tldsplit.punycode`, these reject names that are not valid IDNA,
so they are not used for suffix matching.
"""

import idna

from .exceptions import CodecError


def to_ascii(domain: str) -> str:
    """Convert a Unicode domain name to ASCII, e.g. ``täst.de`` to
    ``xn--tst-qla.de``

    :raises CodecError: if the name is not valid IDNA
    """
    try:
        return idna.encode(domain, uts46=True).decode('ascii')
    except (idna.IDNAError, UnicodeError) as e:
        raise CodecError(f"Can't convert {domain!r} to ASCII: {e}") from e


def to_unicode(domain: str) -> str:
    """Convert an ASCII domain name to Unicode, e.g. ``xn--tst-qla.de`` to
    ``täst.de``

    :raises CodecError: if the name is not valid IDNA
    """
    try:
        return idna.decode(domain)
    except (idna.IDNAError, UnicodeError) as e:
        raise CodecError(f"Can't convert {domain!r} to Unicode: {e}") from e

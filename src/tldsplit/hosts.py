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

"""Tools for reducing a URL or URL-like string to its bare host"""

import ipaddress
import re
from typing import Tuple

_SCHEME_RE = re.compile(r'^(?:[a-z][a-z0-9+\-.]*:)?//', re.IGNORECASE)
_QUERY_OR_FRAGMENT_RE = re.compile(r'[?#]')
_IPV4_RE = re.compile(r'^[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+$')
_PORT_RE = re.compile(r'^[0-9]*$')


def fix_query_part(url: str) -> str:
    """Insert a slash before a query string or fragment that directly follows
    the host, so ``http://example.com?q`` becomes ``http://example.com/?q``.

    URLs with a path before the query string or fragment are returned
    unchanged.

    :param url: The URL to fix
    :return: The fixed URL
    """
    match = _QUERY_OR_FRAGMENT_RE.search(url)
    if match is None:
        return url
    position = match.start()

    start = url.find('://')
    if start < 0 or start > position:
        start = 0
    else:
        start += len('://')

    if '/' in url[start:position]:
        return url
    return url[:position] + '/' + url[position:]


def is_ip_address(host: str) -> bool:
    """Check whether a host is a valid IPv4 or IPv6 address. An IPv6 zone ID
    (``%eth0``) is allowed.
    """
    try:
        ipaddress.ip_address(host.partition('%')[0])
    except ValueError:
        return False
    return True


def normalize(raw: str) -> Tuple[str, bool]:
    """Strip the scheme, user info, port, path, query string, and fragment
    from a URL-like string, leaving only the host

    Bracketed IPv6 literals are returned without the brackets (a zone ID, if
    any, is kept).

    :param raw: A bare host, a host with path, or a full URL
    :return: A tuple with the lower-cased host (which may be empty) and whether
             it looks like an IP address literal
    """
    url = fix_query_part(raw.strip().lower())
    url = _SCHEME_RE.sub('', url, count=1)
    url = url.partition('/')[0]
    url = url.rpartition('@')[2]

    if url.startswith('['):
        end = url.find(']')
        if end < 0:
            return ('', False)
        return (url[1:end], True)

    # Unbracketed IPv6 has no port, just colons
    if url.count(':') > 1:
        return (url, is_ip_address(url))

    host, sep, port = url.rpartition(':')
    if sep and _PORT_RE.match(port):
        url = host

    return (url, _IPV4_RE.match(url) is not None)

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

"""Results of splitting a host"""

import abc
import json
from typing import Dict, List, Optional


class BaseResult(abc.ABC):
    """Interface every result class given to :class:`~tldsplit.Extract` must
    implement. Results are read-only.

    :param subdomain: Labels to the left of the registrable domain
    :param hostname: The label directly to the left of the suffix, or the
                     address for IP literals
    :param suffix: The public suffix
    :param ip: Whether the host is an IP address literal
    """

    @abc.abstractmethod
    def __init__(self, subdomain: Optional[str], hostname: Optional[str],
                 suffix: Optional[str], ip: bool = False):
        ...

    @property
    @abc.abstractmethod
    def subdomain(self) -> Optional[str]:
        ...

    @property
    @abc.abstractmethod
    def hostname(self) -> Optional[str]:
        ...

    @property
    @abc.abstractmethod
    def suffix(self) -> Optional[str]:
        ...

    @abc.abstractmethod
    def is_ip(self) -> bool:
        ...

    def subdomains(self) -> List[str]:
        """Get the subdomain as a list of labels, e.g. ``['www', 'news']``
        for ``www.news``"""
        if self.subdomain is None:
            return []
        return self.subdomain.split('.')

    def full_host(self) -> Optional[str]:
        """Get the full host, joined back together"""
        parts = [part for part in (self.subdomain, self.hostname, self.suffix)
                 if part is not None]
        if not parts:
            return None
        return '.'.join(parts)

    def registrable_domain(self) -> Optional[str]:
        """Get the registrable domain (hostname plus suffix), e.g.
        ``example.co.uk``, or ``None`` if there isn't one"""
        if self.hostname is None or self.suffix is None:
            return None
        return f"{self.hostname}.{self.suffix}"

    def is_valid_domain(self) -> bool:
        return self.registrable_domain() is not None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            'subdomain': self.subdomain,
            'hostname': self.hostname,
            'suffix': self.suffix,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self):
        return self.full_host() or ''


class Result(BaseResult):
    """The parts of a host, as returned by :meth:`tldsplit.Extract.parse`

    For ``a.b.example.co.uk``, :attr:`subdomain` is ``a.b``, :attr:`hostname`
    is ``example``, and :attr:`suffix` is ``co.uk``. Any part may be ``None``.
    """

    __slots__ = ('_subdomain', '_hostname', '_suffix', '_ip')

    def __init__(self, subdomain: Optional[str], hostname: Optional[str],
                 suffix: Optional[str], ip: bool = False):
        object.__setattr__(self, '_subdomain', subdomain)
        object.__setattr__(self, '_hostname', hostname)
        object.__setattr__(self, '_suffix', suffix)
        object.__setattr__(self, '_ip', ip)

    def __setattr__(self, name, value):
        raise AttributeError("Can't modify an immutable result")

    def __delattr__(self, name):
        raise AttributeError("Can't modify an immutable result")

    @property
    def subdomain(self) -> Optional[str]:
        return self._subdomain

    @property
    def hostname(self) -> Optional[str]:
        return self._hostname

    @property
    def suffix(self) -> Optional[str]:
        return self._suffix

    def is_ip(self) -> bool:
        return self._ip

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return ((self._subdomain, self._hostname, self._suffix, self._ip) ==
                (other._subdomain, other._hostname, other._suffix, other._ip))

    def __hash__(self):
        return hash((self._subdomain, self._hostname, self._suffix, self._ip))

    def __repr__(self):
        return (f"Result(subdomain={self._subdomain!r}, "
                f"hostname={self._hostname!r}, suffix={self._suffix!r}, "
                f"ip={self._ip!r})")

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

"""Extractor: splits hosts and URLs into subdomain, hostname, and suffix"""

import inspect
import logging
from typing import Optional, Type

from . import hosts, matcher, punycode
from .exceptions import CodecError, NotConfiguredError
from .policy import ExtractionPolicy, validate_policy
from .result import BaseResult, Result
from .rules import RuleSet


class Extract:
    """Splits hosts into subdomain, hostname, and public suffix using the
    `Public Suffix List`_

    .. _Public Suffix List: https://publicsuffix.org/

    An :class:`Extract` holds no per-call state, so a single instance can be
    used from many threads at once (as long as :meth:`set_extraction_mode` is
    not called concurrently).

    :param rules: The suffix list rules to match against (see
                  :mod:`tldsplit.suffixlist` for ways to load them)
    :param result_class: Class to create results with. Must be a concrete
                         subclass of :class:`~tldsplit.BaseResult`.
    :param mode: :class:`~tldsplit.ExtractionPolicy` flags
    :raises NotConfiguredError: if ``result_class`` is not a concrete
                                :class:`~tldsplit.BaseResult` subclass
    :raises InvalidPolicyError: if ``mode`` is not a valid combination of
                                flags
    """

    def __init__(self, rules: RuleSet,
                 result_class: Type[BaseResult] = Result,
                 mode: int = ExtractionPolicy.DEFAULT):
        self.log = logging.getLogger('tldsplit.extract')

        if not (isinstance(result_class, type) and
                issubclass(result_class, BaseResult)):
            raise NotConfiguredError(f"Result class {result_class!r} does "
                                     "not implement BaseResult")
        if inspect.isabstract(result_class):
            raise NotConfiguredError(f"Result class {result_class!r} does "
                                     "not implement all of BaseResult")

        self.rules: RuleSet = rules
        self.result_class: Type[BaseResult] = result_class
        self._mode: ExtractionPolicy = validate_policy(mode)

    @property
    def mode(self) -> ExtractionPolicy:
        return self._mode

    @mode.setter
    def mode(self, mode: int):
        self._mode = validate_policy(mode)

    def set_extraction_mode(self, mode: int):
        """Change the extraction policy

        :raises InvalidPolicyError: if ``mode`` is not a valid combination of
                                    flags
        """
        self.mode = mode

    def _empty(self) -> BaseResult:
        return self.result_class(None, None, None)

    def parse(self, url: Optional[str]) -> BaseResult:
        """Split the host in a URL (or a bare host) into its parts

        Never raises for bad input. Hosts that can't be split (empty labels,
        labels or names that are too long, etc.) give a result with every part
        set to ``None``.

        :param url: A host, a host with a path, or a full URL
        :return: A result object of the configured result class
        """
        if not url:
            return self._empty()

        host, likely_ip = hosts.normalize(url)
        if not host:
            return self._empty()
        if likely_ip:
            return self.result_class(None, host, None,
                                     hosts.is_ip_address(host))

        # A fully-qualified name's trailing dot is the DNS root, not a label
        if host.endswith('.'):
            host = host[:-1]

        labels = host.split('.')
        try:
            ace_labels = [punycode.encode_label(label) for label in labels]
            punycode.check_domain_length('.'.join(ace_labels))
        except CodecError as e:
            self.log.debug("Can't split malformed host %r: %s", host, e)
            return self._empty()

        match_result = matcher.match(ace_labels, self.rules, self._mode)
        subdomain, hostname, suffix = matcher.split(labels, match_result)
        return self.result_class(subdomain, hostname, suffix)

    __call__ = parse

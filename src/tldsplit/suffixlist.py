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

"""Loading the `Public Suffix List`_ into a :class:`~tldsplit.RuleSet`

.. _Public Suffix List: https://publicsuffix.org/
"""

import logging
import os
import os.path
import pathlib
import tempfile
import time
from typing import Iterable, List, Optional, TextIO, Union

import requests

from .configuration import Config, PUBLIC_SUFFIX_LIST_URL, USER_AGENT
from .exceptions import SuffixListError
from .rules import Rule, RuleSet, Section

log = logging.getLogger('tldsplit.suffixlist')

_SECTION_MARKERS = {
    '===BEGIN ICANN DOMAINS===': Section.ICANN,
    '===BEGIN PRIVATE DOMAINS===': Section.PRIVATE,
}

CACHE_FILENAME = 'public_suffix_list.dat'


def parse_suffix_list(lines: Iterable[str]) -> RuleSet:
    """Parse the text of the Public Suffix List

    Rules are sorted into the ICANN and PRIVATE sections using the
    ``===BEGIN ... DOMAINS===`` comment markers. Rules before any marker are
    treated as ICANN rules.

    :param lines: Lines of the list
    :raises SuffixListError: if a rule is malformed
    :return: The parsed rules
    """
    section = Section.ICANN
    rules: List[Rule] = []
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue
        if line.startswith('//'):
            marker = line[2:].strip()
            section = _SECTION_MARKERS.get(marker, section)
            continue

        # Only the first whitespace-delimited token is the rule
        text = line.split()[0]
        try:
            rules.append(Rule.from_text(text, section))
        except SuffixListError as e:
            raise SuffixListError(f"Line {lineno}: {e}") from e

    rule_set = RuleSet(rules)
    log.debug("Parsed %d suffix list rules", len(rule_set))
    return rule_set


def read_suffix_list(f: TextIO) -> RuleSet:
    """Read the Public Suffix List from a file-like object

    :raises SuffixListError: if it cannot be read or is malformed
    """
    try:
        return parse_suffix_list(f)
    except OSError as e:
        raise SuffixListError("Could not read suffix list: %s" %
                              e.strerror) from e
    except UnicodeDecodeError as e:
        raise SuffixListError("Suffix list is not valid UTF-8: %s" % e) from e


def read_suffix_list_from_path(
        filename: Union[str, pathlib.Path]) -> RuleSet:
    """Read the Public Suffix List from the named file or
    :class:`~pathlib.Path`

    :raises SuffixListError: if it cannot be read or is malformed
    """
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            return read_suffix_list(f)
    except OSError as e:
        raise SuffixListError("Could not read suffix list %s: %s" %
                              (filename, e.strerror)) from e


class SuffixListFetcher:
    """Fetches the Public Suffix List over HTTP and keeps a cached copy in the
    data directory

    :param datadir: Directory to keep the cached copy in
    :param url: URL to fetch the list from
    :param timeout: HTTP timeout, in seconds
    :param max_age: How long a cached copy is used before fetching a fresh
                    one, in seconds
    """

    def __init__(self, datadir: str, url: str = PUBLIC_SUFFIX_LIST_URL,
                 timeout: float = 10, max_age: int = 86400):
        self.log = logging.getLogger('tldsplit.suffixlist')

        self.datadir = datadir
        #: Path of the cached copy
        self.cache_path: str = os.path.join(datadir, CACHE_FILENAME)
        self.url = url
        self.timeout = timeout
        self.max_age = max_age

    def _cache_age(self) -> Optional[float]:
        """Age of the cached copy in seconds, or ``None`` if there is none"""
        try:
            return time.time() - os.path.getmtime(self.cache_path)
        except OSError:
            return None

    def _download(self) -> str:
        """Fetch the list and return its text

        :raises SuffixListError: if the list could not be fetched
        """
        self.log.info("Fetching public suffix list from %s", self.url)
        try:
            r = requests.get(self.url, timeout=self.timeout,
                             headers={'User-Agent': USER_AGENT})
        except requests.exceptions.RequestException as e:
            self.log.error("Could not fetch public suffix list from %s: %s",
                           self.url, e)
            raise SuffixListError(f"Could not fetch {self.url}: {e}") from e
        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as e:
            self.log.error("Received HTTP %d from %s: %s",
                           r.status_code, self.url, r.text)
            raise SuffixListError(f"Received HTTP {r.status_code} from "
                                  f"{self.url}") from e
        r.encoding = 'utf-8'
        return r.text

    def _write_cache(self, text: str):
        """Save the fetched list. Failure is logged, not raised, since the
        list in memory is still usable."""
        try:
            os.makedirs(self.datadir, exist_ok=True)
        except OSError as e:
            self.log.warning("Could not write suffix list cache %s: %s",
                             self.cache_path, e.strerror)
            return

        # The cache is replaced in one step, never left partly written
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile('w', encoding='utf-8',
                                             dir=self.datadir, suffix='.tmp',
                                             delete=False) as f:
                tmp_path = f.name
                f.write(text)
            os.replace(tmp_path, self.cache_path)
        except OSError as e:
            self.log.warning("Could not write suffix list cache %s: %s",
                             self.cache_path, e.strerror)
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    self.log.debug("Could not remove %s", tmp_path)

    def update(self) -> RuleSet:
        """Fetch a fresh copy of the list, regardless of the cache

        :raises SuffixListError: if the list could not be fetched or is
                                 malformed
        """
        text = self._download()
        rules = parse_suffix_list(text.splitlines())
        self._write_cache(text)
        return rules

    def get_rules(self) -> RuleSet:
        """Get the rules, from the cache if it is fresh enough, otherwise from
        the network. If fetching fails, a stale cached copy is used instead.

        :raises SuffixListError: if there is no usable copy of the list
        """
        age = self._cache_age()
        if age is not None and age < self.max_age:
            self.log.debug("Using cached public suffix list %s",
                           self.cache_path)
            return read_suffix_list_from_path(self.cache_path)

        try:
            return self.update()
        except SuffixListError:
            if age is None:
                raise
            self.log.warning("Falling back to stale public suffix list %s",
                             self.cache_path)
            return read_suffix_list_from_path(self.cache_path)


def load_rules(config: Config) -> RuleSet:
    """Load the rules the configuration asks for: from the local
    ``suffix_list`` file if set, otherwise from the network (with caching in
    ``datadir``)

    :raises SuffixListError: if the rules could not be loaded
    """
    if config.suffix_list is not None:
        log.debug("Reading public suffix list from %s", config.suffix_list)
        return read_suffix_list_from_path(config.suffix_list)
    fetcher = SuffixListFetcher(config.datadir, url=config.url,
                                timeout=config.timeout,
                                max_age=config.max_age)
    return fetcher.get_rules()

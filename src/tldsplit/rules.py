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

"""Public Suffix List rules and the indexed rule set used for matching"""

import enum
from typing import (Dict, FrozenSet, Iterable, Iterator, List, NamedTuple,
                    Optional, Sequence, Tuple)

from . import punycode
from .exceptions import CodecError, SuffixListError


class Section(enum.Enum):
    """Section of the Public Suffix List a rule comes from"""
    ICANN = 'icann'
    PRIVATE = 'private'


class RuleKind(enum.Enum):
    """What kind of Public Suffix List rule this is"""
    EXACT = 'exact'
    WILDCARD = 'wildcard'
    EXCEPTION = 'exception'


class Rule(NamedTuple):
    """A single Public Suffix List rule"""

    #: ASCII-compatible labels, left to right, without the ``*`` or ``!``
    #: markers. For a wildcard rule, these are the labels after the ``*.``.
    labels: Tuple[str, ...]
    kind: RuleKind
    section: Section

    @classmethod
    def from_text(cls, text: str, section: Section) -> 'Rule':
        """Parse one rule as written in the Public Suffix List

        Unicode labels are converted to their ASCII-compatible form.

        :param text: The rule, e.g. ``com``, ``*.kobe.jp``, or
                     ``!city.kobe.jp``
        :param section: The section the rule was found in
        :raises SuffixListError: if the rule is malformed
        """
        rule = text.strip().lower()
        if rule.startswith('!'):
            kind = RuleKind.EXCEPTION
            rule = rule[1:]
        elif rule.startswith('*.'):
            kind = RuleKind.WILDCARD
            rule = rule[2:]
        elif rule == '*':
            return cls((), RuleKind.WILDCARD, section)
        else:
            kind = RuleKind.EXACT

        if '*' in rule or '!' in rule:
            raise SuffixListError(f"Wildcards and exceptions are only "
                                  f"supported on the leftmost label: {text}")
        try:
            labels = tuple(punycode.encode(rule).split('.'))
        except CodecError as e:
            raise SuffixListError(f"Invalid rule {text}: {e}") from e
        return cls(labels, kind, section)

    def __str__(self):
        name = '.'.join(self.labels)
        if self.kind == RuleKind.EXCEPTION:
            return '!' + name
        if self.kind == RuleKind.WILDCARD:
            return '*.' + name if name else '*'
        return name


class _SectionIndex(NamedTuple):
    exact: FrozenSet[Tuple[str, ...]]
    wildcards: FrozenSet[Tuple[str, ...]]
    exceptions: FrozenSet[Tuple[str, ...]]


class RuleSet:
    """Indexed, read-only collection of Public Suffix List rules, queryable
    one section at a time

    A :class:`RuleSet` never changes after construction, so it can be shared
    freely between threads.

    :param rules: The rules to index
    :raises SuffixListError: if an exception rule has no wildcard rule in the
                             same section that it is an exception to
    """

    def __init__(self, rules: Iterable[Rule]):
        self._rules: Tuple[Rule, ...] = tuple(dict.fromkeys(rules))
        self._rule_set: FrozenSet[Rule] = frozenset(self._rules)

        indexes: Dict[Section, _SectionIndex] = dict()
        for section in Section:
            by_kind: Dict[RuleKind, List[Tuple[str, ...]]] = {
                kind: [] for kind in RuleKind
            }
            for rule in self._rules:
                if rule.section == section:
                    by_kind[rule.kind].append(rule.labels)
            indexes[section] = _SectionIndex(
                exact=frozenset(by_kind[RuleKind.EXACT]),
                wildcards=frozenset(by_kind[RuleKind.WILDCARD]),
                exceptions=frozenset(by_kind[RuleKind.EXCEPTION]),
            )
        self._indexes = indexes

        self._check_exceptions()

    def _check_exceptions(self):
        """Make sure every exception rule carves out of a wildcard rule in
        its own section"""
        for section, index in self._indexes.items():
            for labels in index.exceptions:
                if labels[1:] not in index.wildcards:
                    rule = Rule(labels, RuleKind.EXCEPTION, section)
                    raise SuffixListError(f"Exception rule {rule} in "
                                          f"{section.name} section has no "
                                          "matching wildcard rule")

    def lookup(self, section: Section,
               labels: Sequence[str]) -> Optional[RuleKind]:
        """Find what kind of rule in a section matches exactly the given
        labels

        :param section: The section to search
        :param labels: ASCII-compatible, lower-cased candidate suffix labels,
                       left to right
        :return: :data:`RuleKind.EXCEPTION` if an exception rule matches,
                 otherwise :data:`RuleKind.EXACT` or :data:`RuleKind.WILDCARD`,
                 or ``None`` if no rule matches
        """
        key = tuple(labels)
        index = self._indexes[section]
        if key in index.exceptions:
            return RuleKind.EXCEPTION
        if key in index.exact:
            return RuleKind.EXACT
        if key and key[1:] in index.wildcards:
            return RuleKind.WILDCARD
        return None

    def sections(self) -> Tuple[Section, ...]:
        """Get the sections that contain at least one rule"""
        return tuple(section for section in Section
                     if any(self._indexes[section]))

    def __len__(self):
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __contains__(self, rule):
        return rule in self._rule_set

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

"""Public suffix matching, and splitting a host around the matched suffix"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from .policy import ExtractionPolicy
from .rules import RuleKind, RuleSet, Section


class MatchResult(NamedTuple):
    """Outcome of :func:`match`"""

    #: Number of trailing labels that make up the public suffix (0 if none)
    labels: int
    #: Whether the suffix is the unknown one-label suffix used when no rule
    #: matched
    from_fallback: bool = False
    #: Section of the rule that decided the match, if any
    section: Optional[Section] = None


def _allowed_sections(policy: ExtractionPolicy) -> List[Section]:
    sections = []
    if policy & ExtractionPolicy.ALLOW_ICANN:
        sections.append(Section.ICANN)
    if policy & ExtractionPolicy.ALLOW_PRIVATE:
        sections.append(Section.PRIVATE)
    return sections


def match(labels: Sequence[str], rule_set: RuleSet,
          policy: ExtractionPolicy) -> MatchResult:
    """Find the public suffix of a host

    Candidate suffixes are tried from longest to shortest. An exception rule
    wins over any other match and makes the suffix one label shorter than the
    exception. Otherwise, the longest exact or wildcard match wins.

    :param labels: The host's labels in ASCII-compatible form, lower-cased,
                   left to right
    :param rule_set: The rules to match against
    :param policy: Which sections to consult, and whether to fall back to an
                   unknown one-label suffix
    :return: The number of trailing labels in the suffix
    """
    sections = _allowed_sections(policy)
    best: Optional[MatchResult] = None
    for k in range(len(labels), 0, -1):
        candidate = labels[len(labels) - k:]
        for section in sections:
            kind = rule_set.lookup(section, candidate)
            if kind == RuleKind.EXCEPTION:
                return MatchResult(k - 1, section=section)
            if kind is not None and best is None:
                best = MatchResult(k, section=section)

    if best is not None:
        return best

    # A single label host never gets a made-up suffix: there would be nothing
    # left for the registrable domain
    if policy & ExtractionPolicy.ALLOW_NOT_EXISTING_SUFFIXES and \
            len(labels) >= 2:
        return MatchResult(1, from_fallback=True)
    return MatchResult(0)


def split(labels: Sequence[str], match_result: MatchResult) \
        -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Split a host's labels into subdomain, hostname, and suffix

    A host that is nothing but a public suffix (``com``, ``co.uk``, or
    ``test.ck`` under ``*.ck``) has no registrable domain, so every part is
    ``None``.

    :param labels: The host's labels, left to right, in the form they should
                   be returned in
    :param match_result: The result of :func:`match` for these labels
    :return: A tuple ``(subdomain, hostname, suffix)``. Parts that do not exist
             are ``None``.
    """
    k = match_result.labels
    if len(labels) <= k:
        return (None, None, None)

    suffix = '.'.join(labels[len(labels) - k:]) if k else None

    hostname = labels[len(labels) - k - 1]
    subdomain = '.'.join(labels[:len(labels) - k - 1]) or None
    return (subdomain, hostname, suffix)

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

"""Punycode (Bootstring) codec for domain labels, as described in `RFC 3492`_

.. _RFC 3492: https://datatracker.ietf.org/doc/html/rfc3492

:func:`encode_label` and :func:`decode_label` work on a single label.
:func:`encode` and :func:`decode` apply them to every label of a full domain
name.
"""

import types
from typing import List, Mapping

from .exceptions import (LabelOutOfRangeError, DomainOutOfRangeError,
                         DecodeError)

# Bootstring parameter values for Punycode
BASE = 36
TMIN = 1
TMAX = 26
SKEW = 38
DAMP = 700
INITIAL_BIAS = 72
INITIAL_N = 128

#: Prefix marking an ASCII-compatible encoded (ACE) label
PREFIX = 'xn--'
DELIMITER = '-'

MAX_LABEL_LENGTH = 63
MAX_DOMAIN_LENGTH = 255

_ENCODE_TABLE = 'abcdefghijklmnopqrstuvwxyz0123456789'
_DECODE_TABLE: Mapping[str, int] = types.MappingProxyType(
    {digit: value for value, digit in enumerate(_ENCODE_TABLE)}
)


def _threshold(k: int, bias: int) -> int:
    """Calculate the digit threshold for position ``k``, clamped to
    ``[TMIN, TMAX]``"""
    if k <= bias + TMIN:
        return TMIN
    if k >= bias + TMAX:
        return TMAX
    return k - bias


def _adapt(delta: int, num_points: int, first_time: bool) -> int:
    """Bias adaptation function from RFC 3492 section 6.1

    :param delta: The delta just encoded or decoded
    :param num_points: Number of code points handled so far, including this one
    :param first_time: Whether this is the first delta in the label
    :return: The new bias
    """
    delta = delta // DAMP if first_time else delta // 2
    delta += delta // num_points

    k = 0
    while delta > ((BASE - TMIN) * TMAX) // 2:
        delta //= BASE - TMIN
        k += BASE
    return k + ((BASE - TMIN + 1) * delta) // (delta + SKEW)


def check_label_length(label: str) -> None:
    """Check that an ASCII label is between 1 and 63 octets

    :raises LabelOutOfRangeError: if it is not
    """
    length = len(label.encode('utf-8', 'surrogatepass'))
    if length < 1 or length > MAX_LABEL_LENGTH:
        raise LabelOutOfRangeError(
            "The length of any one label is limited to between 1 and "
            f"{MAX_LABEL_LENGTH} octets, but {length} given."
        )


def check_domain_length(domain: str) -> None:
    """Check that a domain name is no longer than 255 octets

    :raises DomainOutOfRangeError: if it is longer
    """
    length = len(domain.encode('utf-8', 'surrogatepass'))
    if length > MAX_DOMAIN_LENGTH:
        raise DomainOutOfRangeError(
            f"A full domain name is limited to {MAX_DOMAIN_LENGTH} octets "
            f"(including the separators), {length} given."
        )


def _encode_integer(q: int, bias: int) -> List[str]:
    """Encode ``q`` as a generalized variable-length integer"""
    digits = []
    k = BASE
    while True:
        t = _threshold(k, bias)
        if q < t:
            break
        digits.append(_ENCODE_TABLE[t + (q - t) % (BASE - t)])
        q = (q - t) // (BASE - t)
        k += BASE
    digits.append(_ENCODE_TABLE[q])
    return digits


def encode_label(label: str) -> str:
    """Encode a single domain label to its ASCII-compatible form

    The label is lower-cased first. Labels that are already pure ASCII are
    returned as-is (without the ``xn--`` prefix).

    :param label: The label to encode
    :return: The ASCII-compatible label
    :raises LabelOutOfRangeError: if the label is empty or too long, before or
                                  after encoding
    """
    label = label.lower()
    code_points = [ord(c) for c in label]
    # Each code point produces at least one output character, so more than 63
    # code points can never fit
    if len(code_points) < 1 or len(code_points) > MAX_LABEL_LENGTH:
        raise LabelOutOfRangeError(
            "The length of any one label is limited to between 1 and "
            f"{MAX_LABEL_LENGTH} octets, but {len(code_points)} characters "
            "given."
        )

    output = [chr(c) for c in code_points if c < INITIAL_N]
    basic_count = len(output)
    if basic_count == len(code_points):
        return label
    if basic_count > 0:
        output.append(DELIMITER)

    n = INITIAL_N
    bias = INITIAL_BIAS
    delta = 0
    handled = basic_count
    for m in sorted({c for c in code_points if c >= INITIAL_N}):
        delta += (m - n) * (handled + 1)
        n = m
        for c in code_points:
            if c < n:
                delta += 1
            elif c == n:
                output.extend(_encode_integer(delta, bias))
                bias = _adapt(delta, handled + 1, handled == basic_count)
                delta = 0
                handled += 1
        delta += 1
        n += 1

    encoded = PREFIX + ''.join(output)
    check_label_length(encoded)
    return encoded


def decode_label(label: str) -> str:
    """Decode a single ASCII-compatible label to Unicode

    Labels without the ``xn--`` prefix are returned lower-cased but otherwise
    unchanged.

    :param label: The label to decode
    :return: The Unicode label
    :raises LabelOutOfRangeError: if the label is empty or longer than 63
                                  octets
    :raises DecodeError: if the label is not valid Punycode
    """
    label = label.lower()
    check_label_length(label)
    if not label.startswith(PREFIX):
        return label
    encoded = label[len(PREFIX):]

    pos = encoded.rfind(DELIMITER)
    if pos >= 0:
        output = list(encoded[:pos])
        if any(ord(c) >= INITIAL_N for c in output):
            raise DecodeError(f"Label {label} has non-basic code points "
                              "before the delimiter")
        pos += 1
    else:
        output = []
        pos = 0

    n = INITIAL_N
    i = 0
    bias = INITIAL_BIAS
    while pos < len(encoded):
        old_i = i
        w = 1
        k = BASE
        while True:
            if pos >= len(encoded):
                raise DecodeError(f"Label {label} ends in the middle of a "
                                  "variable-length integer")
            try:
                digit = _DECODE_TABLE[encoded[pos]]
            except KeyError:
                raise DecodeError(f"Label {label} contains invalid digit "
                                  f"'{encoded[pos]}'") from None
            pos += 1
            i += digit * w
            t = _threshold(k, bias)
            if digit < t:
                break
            w *= BASE - t
            k += BASE

        length = len(output) + 1
        bias = _adapt(i - old_i, length, old_i == 0)
        n += i // length
        i %= length
        if n > 0x10FFFF or 0xD800 <= n <= 0xDFFF:
            raise DecodeError(f"Label {label} decodes to an invalid code "
                              "point")
        output.insert(i, chr(n))
        i += 1

    if not output:
        raise LabelOutOfRangeError(f"Label {label} decodes to an empty label")
    return ''.join(output)


def encode(domain: str) -> str:
    """Encode every label of a domain name to its ASCII-compatible form

    :param domain: Domain name, possibly containing Unicode labels
    :return: The ASCII-compatible domain name
    :raises LabelOutOfRangeError: if any label is empty or too long
    :raises DomainOutOfRangeError: if the encoded domain is too long
    """
    output = '.'.join(encode_label(part) for part in domain.split('.'))
    check_domain_length(output)
    return output


def decode(domain: str) -> str:
    """Decode every ``xn--`` label of a domain name to Unicode

    :param domain: ASCII-compatible domain name
    :return: The Unicode domain name
    :raises LabelOutOfRangeError: if any label is empty or too long
    :raises DomainOutOfRangeError: if the domain is too long
    :raises DecodeError: if a label is not valid Punycode
    """
    check_domain_length(domain)
    output = '.'.join(decode_label(part) for part in domain.split('.'))
    check_domain_length(output)
    return output

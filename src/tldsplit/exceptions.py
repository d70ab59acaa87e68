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

"""All tldsplit exceptions"""


class TldsplitException(Exception):
    """Base class for all tldsplit exceptions"""


class CodecError(TldsplitException):
    """Base class for errors raised while converting between Unicode and
    ASCII-compatible (Punycode) domain names"""


class OutOfRangeError(CodecError):
    """Base class for length limit violations"""


class LabelOutOfRangeError(OutOfRangeError):
    """Raised when a domain label is empty or longer than 63 octets, either
    before or after conversion"""


class DomainOutOfRangeError(OutOfRangeError):
    """Raised when a full domain name is longer than 255 octets (including the
    separators)"""


class DecodeError(CodecError):
    """Raised when an ``xn--`` label is not valid Punycode"""


class TldsplitSetupError(TldsplitException):
    """Base class for tldsplit exceptions that happen while setting up an
    extractor (bad configuration, bad suffix list, etc.)"""


class ConfigError(TldsplitSetupError):
    """Raised when the configuration is malformed or has other errors"""


class InvalidPolicyError(TldsplitSetupError, ValueError):
    """Raised when an extraction policy is not an integer combination of the
    defined :class:`~tldsplit.ExtractionPolicy` flags"""


class NotConfiguredError(TldsplitSetupError):
    """Raised when the result class given to :class:`~tldsplit.Extract` does
    not implement :class:`~tldsplit.BaseResult`"""


class SuffixListError(TldsplitSetupError):
    """Raised when the Public Suffix List cannot be read, fetched, or
    parsed"""

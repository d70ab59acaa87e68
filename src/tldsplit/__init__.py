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

"""tldsplit, a Public Suffix List domain splitter

Top-level module, containing the classes and functions most callers need.
"""

from .configuration import Config, read_config, read_config_from_path
from .exceptions import (TldsplitException, CodecError, OutOfRangeError,
                         LabelOutOfRangeError, DomainOutOfRangeError,
                         DecodeError, TldsplitSetupError, ConfigError,
                         InvalidPolicyError, NotConfiguredError,
                         SuffixListError)
from .extract import Extract
from .matcher import MatchResult, match, split
from .policy import ExtractionPolicy
from .result import BaseResult, Result
from .rules import Rule, RuleKind, RuleSet, Section
from .suffixlist import (SuffixListFetcher, load_rules, parse_suffix_list,
                         read_suffix_list, read_suffix_list_from_path)

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

import pathlib

import pytest

import tldsplit.suffixlist
from tldsplit import Extract

DATA_DIR = pathlib.Path(__file__).parent / 'data'


@pytest.fixture(scope='session')
def suffix_list_path():
    """Path to the Public Suffix List excerpt used by the tests"""
    return DATA_DIR / 'public_suffix_list.dat'


@pytest.fixture(scope='session')
def rules(suffix_list_path):
    """Fixture with the rules from the test Public Suffix List excerpt"""
    return tldsplit.suffixlist.read_suffix_list_from_path(suffix_list_path)


@pytest.fixture
def extract(rules):
    """Fixture creating an :class:`~tldsplit.Extract` with the default
    policy"""
    return Extract(rules)


@pytest.fixture
def rules_factory():
    """Fixture creating a factory for rule sets from inline list text"""
    def factory(text):
        return tldsplit.suffixlist.parse_suffix_list(text.splitlines())
    return factory

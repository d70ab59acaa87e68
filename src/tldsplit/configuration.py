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

"""tldsplit configuration parsing"""

import configparser
import os.path
import pathlib
import sys
from typing import Dict, Optional, TextIO, Union

if sys.version_info < (3, 10):
    from importlib_metadata import version
else:
    from importlib.metadata import version

from .exceptions import ConfigError, InvalidPolicyError
from .policy import ExtractionPolicy, parse_policy


USER_AGENT = f"tldsplit/{version('tldsplit')} (tldsplit@dcpx.org)"

PUBLIC_SUFFIX_LIST_URL = "https://publicsuffix.org/list/public_suffix_list.dat"

DEFAULT_DATA_DIR = '/var/lib/tldsplit'
DEFAULT_CONFIG_FILE = '/etc/tldsplit.conf'


class Config:
    """tldsplit configuration data

    :param main: Options from the ``[tldsplit]`` section
    """

    def __init__(self, main: Dict[str, str]):
        #: Dict containing raw configuration (from the ``[tldsplit]`` section)
        self._main: Dict[str, str] = main

        #: Whether the config has been finalized yet
        self._finalized = False

        self._mode: ExtractionPolicy = ExtractionPolicy.DEFAULT
        self._timeout: float = 10.0
        self._max_age: int = 86400

    def _check_finalized(self):
        """Raise an exception if the config is not finalized"""
        if not self._finalized:
            raise ConfigError("Tried to access config before it was finalized")

    @property
    def main(self) -> Dict[str, str]:
        self._check_finalized()
        return self._main

    @property
    def datadir(self) -> str:
        return self.main['datadir']

    @property
    def suffix_list(self) -> Optional[str]:
        """Path to a local copy of the Public Suffix List, or ``None`` to
        fetch it from :attr:`url`"""
        return self.main.get('suffix_list')

    @property
    def url(self) -> str:
        return self.main['url']

    @property
    def timeout(self) -> float:
        self._check_finalized()
        return self._timeout

    @property
    def max_age(self) -> int:
        self._check_finalized()
        return self._max_age

    @property
    def mode(self) -> ExtractionPolicy:
        self._check_finalized()
        return self._mode

    @property
    def logfile(self) -> str:
        return self.main['logfile']

    @logfile.setter
    def logfile(self, value: str):
        self.main['logfile'] = value

    def _fill_defaults(self):
        """Fill in defaults if they are not yet set"""
        self._main.setdefault('datadir', DEFAULT_DATA_DIR)
        self._main.setdefault('url', PUBLIC_SUFFIX_LIST_URL)
        self._main.setdefault('logfile', 'stderr')

    def _validate(self):
        """Check option values and convert the non-string ones"""
        if not os.path.isabs(self._main['datadir']):
            raise ConfigError("Config option 'datadir' cannot be a relative "
                              "path")

        try:
            self._timeout = float(self._main.get('timeout', '10'))
        except ValueError:
            raise ConfigError("Config option 'timeout' must be a number") \
                from None
        if self._timeout <= 0:
            raise ConfigError("Config option 'timeout' must be positive")

        try:
            self._max_age = int(self._main.get('max_age', '86400'))
        except ValueError:
            raise ConfigError("Config option 'max_age' must be an integer") \
                from None

        if 'mode' in self._main:
            try:
                self._mode = parse_policy(self._main['mode'])
            except InvalidPolicyError as e:
                raise ConfigError(f"Config option 'mode' is invalid: {e}") \
                    from e

    def finalize(self):
        """Finalize the configuration: fill in default values and validate
        the options. Safe to call more than once.

        :raises ConfigError: if the configuration is invalid
        """
        if self._finalized:
            return

        self._fill_defaults()
        self._validate()

        self._finalized = True


def _process_config(config: configparser.ConfigParser) -> Config:
    """Process the given :class:`~configparser.ConfigParser` into a
    :class:`Config`

    :param config: The configuration to process
    :raises ConfigError: if the configuration is invalid
    :returns: the processed and validated configuration
    """
    main: Dict[str, str] = dict()

    for section in config.sections():
        if section == 'tldsplit':
            main.update(config[section])
        else:
            raise ConfigError("Config section %s is not recognized" % section)

    result = Config(main)
    result.finalize()
    return result


def read_config_from_path(filename: Union[str, pathlib.Path]) -> Config:
    """Read configuration from the named file or :class:`~pathlib.Path`

    :param filename: Filename or path to read from
    :raises ConfigError: if the config file cannot be read or is invalid
    :return: A finalized :class:`Config`
    """
    try:
        with open(filename, 'r') as f:
            return read_config(f)
    except OSError as e:
        raise ConfigError("Could not read config file %s: %s" %
                          (filename, e.strerror)) from e


def read_config(configfile: TextIO) -> Config:
    """Read configuration from a file-like object

    :param configfile: Filelike object to read the config from
    :raises ConfigError: if the config file cannot be read or is invalid
    :return: A finalized :class:`Config`
    """
    config = configparser.ConfigParser()
    try:
        config.read_file(configfile)
    except configparser.Error as e:
        raise ConfigError("Error in config file: %s" % e) from e
    except OSError as e:
        raise ConfigError("Could not read config file: %s" % e.strerror) \
            from e

    return _process_config(config)

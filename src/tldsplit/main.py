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

import argparse
import logging
import logging.handlers
import os.path
import sys

from . import configuration, suffixlist
from .exceptions import ConfigError, InvalidPolicyError, SuffixListError
from .extract import Extract
from .policy import parse_policy


def parse_args(argv):
    """Parse command line arguments

    :param argv: Either ``None`` or a list of arguments
    :returns: a :class:`argparse.Namespace` containing the parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Split hosts into subdomain, hostname, and public suffix",
        epilog="Parts that do not exist are printed as '-'",
    )
    parser.add_argument("-c", "--configfile", default=None,
                        help="Path to the config file (default: "
                             f"{configuration.DEFAULT_CONFIG_FILE}, if it "
                             "exists)")
    parser.add_argument("-d", "--debug-logs", action="store_true",
                        help="Increase verbosity of logging significantly")
    parser.add_argument("-s", "--stderr", action="store_true",
                        help="Log to stderr instead of syslog or file")
    parser.add_argument("-m", "--mode", default=None,
                        help="Comma-separated extraction modes: icann, "
                             "private, not_existing (overrides config)")
    parser.add_argument("--json", action="store_true",
                        help="Print one JSON object per host")
    parser.add_argument("hosts", nargs="+", metavar="HOST",
                        help="Host or URL to split")
    return parser.parse_args(argv)


def _read_config(configfile):
    """Read the config file named on the command line, or the default one if
    it exists, or fall back to built-in defaults"""
    if configfile is not None:
        return configuration.read_config_from_path(configfile)
    if os.path.exists(configuration.DEFAULT_CONFIG_FILE):
        return configuration.read_config_from_path(
            configuration.DEFAULT_CONFIG_FILE
        )
    conf = configuration.Config({})
    conf.finalize()
    return conf


def main(argv=None):
    """Main entry point when run as a standalone program

    :param argv: List of arguments. If ``None``, read :data:`sys.argv`.
    """
    args = parse_args(argv)
    try:
        conf = _read_config(args.configfile)
        mode = conf.mode if args.mode is None else parse_policy(args.mode)
    except (ConfigError, InvalidPolicyError) as e:
        print("Config error:", e, file=sys.stderr)
        sys.exit(2)

    if args.stderr:
        conf.logfile = 'stderr'

    if conf.logfile == 'syslog':
        log_handler = logging.handlers.SysLogHandler()
    elif conf.logfile == 'stderr':
        log_handler = logging.StreamHandler()
    else:
        log_handler = logging.FileHandler(conf.logfile)
    log = logging.getLogger('tldsplit')
    log.addHandler(log_handler)

    if args.debug_logs:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.WARNING)

    try:
        rules = suffixlist.load_rules(conf)
    except SuffixListError as e:
        log.critical("Could not load public suffix list: %s", e)
        sys.exit(1)

    extract = Extract(rules, mode=mode)
    for host in args.hosts:
        result = extract.parse(host)
        if args.json:
            print(result.to_json())
        else:
            print(*(part if part is not None else '-'
                    for part in (result.subdomain, result.hostname,
                                 result.suffix)))

import errno
import os

import pytest
import requests

import doubles
import tldsplit
from tldsplit import Rule, RuleKind, Section
from tldsplit.suffixlist import (SuffixListFetcher, load_rules,
                                 parse_suffix_list, read_suffix_list,
                                 read_suffix_list_from_path)

SMALL_LIST = """// ===BEGIN ICANN DOMAINS===
com
// ===END ICANN DOMAINS===
// ===BEGIN PRIVATE DOMAINS===
blogspot.com
// ===END PRIVATE DOMAINS===
"""


@pytest.fixture
def mock_get(mocker):
    """Fixture patching :func:`requests.get` to return :data:`SMALL_LIST`"""
    return mocker.patch('requests.get',
                        return_value=doubles.FakeResponse(SMALL_LIST))


@pytest.fixture
def mock_get_error(mocker):
    """Fixture patching :func:`requests.get` to return an HTTP error"""
    response = doubles.FakeResponse("Service Unavailable", status_code=503)
    return mocker.patch('requests.get', return_value=response)


@pytest.fixture
def cache_factory(tmp_path):
    """Fixture creating a cached list in the data directory, optionally aged
    by some number of seconds"""
    def factory(text, age=0):
        path = tmp_path / 'public_suffix_list.dat'
        path.write_text(text, encoding='utf-8')
        if age:
            mtime = path.stat().st_mtime - age
            os.utime(path, (mtime, mtime))
        return path
    return factory


class TestParse:
    def test_sections(self):
        """Test rules are sorted into sections by the markers"""
        rules = parse_suffix_list(SMALL_LIST.splitlines())
        assert list(rules) == [
            Rule(('com',), RuleKind.EXACT, Section.ICANN),
            Rule(('blogspot', 'com'), RuleKind.EXACT, Section.PRIVATE),
        ]

    def test_no_markers(self):
        """Test rules before any marker are ICANN rules"""
        rules = parse_suffix_list(['com', 'net'])
        assert all(rule.section == Section.ICANN for rule in rules)
        assert len(rules) == 2

    def test_comments_blanks_and_trailing_text(self):
        """Test comments and blank lines are skipped and only the first
        token of a line is used"""
        rules = parse_suffix_list([
            '// a comment',
            '',
            '   ',
            'co.uk some trailing text',
            '\tcom\t',
        ])
        assert list(rules) == [
            Rule(('co', 'uk'), RuleKind.EXACT, Section.ICANN),
            Rule(('com',), RuleKind.EXACT, Section.ICANN),
        ]

    def test_error_has_line_number(self):
        """Test errors say which line the bad rule is on"""
        with pytest.raises(tldsplit.SuffixListError, match='Line 3'):
            parse_suffix_list(['com', '// comment', 'a.*.com'])

    def test_test_data(self, rules):
        """Test the full test list parses with both sections"""
        assert Rule(('xn--55qx5d', 'cn'), RuleKind.EXACT,
                    Section.ICANN) in rules
        assert Rule(('compute', 'example', 'net'), RuleKind.WILDCARD,
                    Section.PRIVATE) in rules


def test_read_suffix_list_read_error():
    """Test read error for read_suffix_list"""
    with pytest.raises(tldsplit.SuffixListError):
        read_suffix_list(doubles.BrokenFile())


def test_read_suffix_list_from_path_nonexistent(tmp_path):
    """Test opening a nonexistent path raises SuffixListError"""
    with pytest.raises(tldsplit.SuffixListError):
        read_suffix_list_from_path(tmp_path / 'nonexistent.dat')


def test_read_suffix_list_from_path_not_utf8(tmp_path):
    """Test a file that is not UTF-8 raises SuffixListError"""
    path = tmp_path / 'latin1.dat'
    path.write_bytes(b'com\nk\xf8benhavn.dk\n')
    with pytest.raises(tldsplit.SuffixListError):
        read_suffix_list_from_path(path)


def test_read_suffix_list_from_path(suffix_list_path, rules):
    assert list(read_suffix_list_from_path(str(suffix_list_path))) == \
        list(rules)


class TestFetcher:
    def test_fetch_without_cache(self, tmp_path, mock_get):
        """Test the list is fetched and cached when there is no cache"""
        fetcher = SuffixListFetcher(str(tmp_path), url='https://psl.test/')
        rules = fetcher.get_rules()

        assert len(rules) == 2
        assert mock_get.call_count == 1
        args, kwargs = mock_get.call_args
        assert args == ('https://psl.test/',)
        assert kwargs['timeout'] == 10
        assert kwargs['headers']['User-Agent'].startswith('tldsplit/')
        assert (tmp_path / 'public_suffix_list.dat').read_text(
            encoding='utf-8'
        ) == SMALL_LIST

    def test_creates_datadir(self, tmp_path, mock_get):
        """Test a missing data directory is created for the cache"""
        datadir = tmp_path / 'sub' / 'dir'
        SuffixListFetcher(str(datadir)).get_rules()
        assert (datadir / 'public_suffix_list.dat').exists()

    def test_fresh_cache(self, tmp_path, cache_factory, mock_get):
        """Test a fresh cache is used without fetching"""
        cache_factory("com\nnet\norg\n", age=60)
        rules = SuffixListFetcher(str(tmp_path)).get_rules()

        assert len(rules) == 3
        assert mock_get.call_count == 0

    def test_stale_cache(self, tmp_path, cache_factory, mock_get):
        """Test a stale cache is replaced by a fresh copy"""
        cache_factory("com\nnet\norg\n", age=100000)
        rules = SuffixListFetcher(str(tmp_path)).get_rules()

        assert len(rules) == 2
        assert mock_get.call_count == 1
        assert (tmp_path / 'public_suffix_list.dat').read_text(
            encoding='utf-8'
        ) == SMALL_LIST

    def test_custom_max_age(self, tmp_path, cache_factory, mock_get):
        cache_factory("com\nnet\norg\n", age=60)
        rules = SuffixListFetcher(str(tmp_path), max_age=30).get_rules()

        assert len(rules) == 2
        assert mock_get.call_count == 1

    def test_http_error_stale_cache(self, tmp_path, cache_factory,
                                    mock_get_error):
        """Test a stale cache is used when fetching fails"""
        cache_factory("com\nnet\norg\n", age=100000)
        rules = SuffixListFetcher(str(tmp_path)).get_rules()

        assert len(rules) == 3
        assert mock_get_error.call_count == 1

    def test_http_error_no_cache(self, tmp_path, mock_get_error):
        """Test fetching failure without a cache is an error"""
        with pytest.raises(tldsplit.SuffixListError, match='503'):
            SuffixListFetcher(str(tmp_path)).get_rules()

    def test_connection_error_no_cache(self, tmp_path, mocker):
        """Test a connection failure without a cache is an error"""
        mocker.patch('requests.get',
                     side_effect=requests.exceptions.ConnectionError("down"))
        with pytest.raises(tldsplit.SuffixListError):
            SuffixListFetcher(str(tmp_path)).get_rules()

    def test_connection_error_stale_cache(self, tmp_path, cache_factory,
                                          mocker):
        mocker.patch('requests.get',
                     side_effect=requests.exceptions.Timeout("slow"))
        cache_factory("com\n", age=100000)
        assert len(SuffixListFetcher(str(tmp_path)).get_rules()) == 1

    def test_malformed_download_not_cached(self, tmp_path, cache_factory,
                                           mock_get):
        """Test a malformed download does not replace the cache"""
        mock_get.return_value.text = "com\nfoo.*.com\n"
        cache_factory("com\nnet\n", age=100000)
        rules = SuffixListFetcher(str(tmp_path)).get_rules()

        assert len(rules) == 2
        assert (tmp_path / 'public_suffix_list.dat').read_text(
            encoding='utf-8'
        ) == "com\nnet\n"

    def test_update_ignores_fresh_cache(self, tmp_path, cache_factory,
                                        mock_get):
        """Test update always fetches"""
        cache_factory("com\nnet\norg\n", age=60)
        rules = SuffixListFetcher(str(tmp_path)).update()

        assert len(rules) == 2
        assert mock_get.call_count == 1

    def test_update_error(self, tmp_path, mock_get_error):
        with pytest.raises(tldsplit.SuffixListError):
            SuffixListFetcher(str(tmp_path)).update()

    def test_cache_write_failure(self, tmp_path, mock_get, mocker):
        """Test failing to write the cache still returns the rules"""
        mocker.patch('os.makedirs', side_effect=PermissionError(
            errno.EACCES, "Permission denied"
        ))
        rules = SuffixListFetcher(str(tmp_path / 'nope')).get_rules()
        assert len(rules) == 2

    def test_interrupted_cache_write(self, tmp_path, cache_factory, mock_get,
                                     mocker):
        """Test a failed cache write leaves the old cache intact and no
        temporary files behind"""
        cache_factory("com\nnet\norg\n", age=100000)
        mocker.patch('os.replace', side_effect=OSError(
            errno.ENOSPC, "No space left on device"
        ))
        rules = SuffixListFetcher(str(tmp_path)).get_rules()

        assert len(rules) == 2
        assert (tmp_path / 'public_suffix_list.dat').read_text(
            encoding='utf-8'
        ) == "com\nnet\norg\n"
        assert [p.name for p in tmp_path.iterdir()] == \
            ['public_suffix_list.dat']


class TestLoadRules:
    def test_local_file(self, suffix_list_path, rules, mock_get):
        """Test a configured local list is read without fetching"""
        config = tldsplit.Config({'suffix_list': str(suffix_list_path)})
        config.finalize()

        assert list(load_rules(config)) == list(rules)
        assert mock_get.call_count == 0

    def test_fetch(self, tmp_path, mock_get):
        """Test the list is fetched using the configured options"""
        config = tldsplit.Config({
            'datadir': str(tmp_path),
            'url': 'https://psl.test/list.dat',
            'timeout': '2.5',
        })
        config.finalize()

        assert len(load_rules(config)) == 2
        args, kwargs = mock_get.call_args
        assert args == ('https://psl.test/list.dat',)
        assert kwargs['timeout'] == 2.5

    def test_local_file_missing(self, tmp_path):
        config = tldsplit.Config({'suffix_list': str(tmp_path / 'missing')})
        config.finalize()

        with pytest.raises(tldsplit.SuffixListError):
            load_rules(config)

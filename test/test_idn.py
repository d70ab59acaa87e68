import pytest

import tldsplit
from tldsplit import idn


def test_to_ascii():
    assert idn.to_ascii('täst.de') == 'xn--tst-qla.de'


def test_to_ascii_maps_case():
    """Test UTS #46 mapping lower-cases the name"""
    assert idn.to_ascii('TÄST.de') == 'xn--tst-qla.de'


def test_to_unicode():
    assert idn.to_unicode('xn--tst-qla.de') == 'täst.de'


@pytest.mark.parametrize('domain', ['täst..de', 'a' * 64 + '.de'])
def test_to_ascii_invalid(domain):
    """Test names that are not valid IDNA raise CodecError"""
    with pytest.raises(tldsplit.CodecError):
        idn.to_ascii(domain)


def test_to_unicode_invalid():
    with pytest.raises(tldsplit.CodecError):
        idn.to_unicode('xn--tst-qla..de')

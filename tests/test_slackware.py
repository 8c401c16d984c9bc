import pytest

from samlib.slackware import SlackPackage, pkgparse


def test_parse_plain_name():
    pkg = pkgparse("bash-5.1.016-x86_64-1")
    assert pkg == SlackPackage("bash", "5.1.016", "x86_64", "1")


def test_parse_strips_directory():
    pkg = pkgparse("slackware64/a/bash-5.1.016-x86_64-1.txz")
    assert pkg.name == "bash"
    assert pkg.build_tag == "1.txz"


def test_name_may_contain_dashes():
    pkg = pkgparse("xf86-video-intel-2.99-x86_64-3_slack")
    assert pkg.name == "xf86-video-intel"
    assert pkg.version == "2.99"
    assert pkg.arch == "x86_64"
    assert pkg.build_tag == "3_slack"


@pytest.mark.parametrize("bad", ["bash", "bash-5.1", "a/b/bash-5.1-x86_64"])
def test_too_few_parts(bad):
    with pytest.raises(ValueError):
        pkgparse(bad)
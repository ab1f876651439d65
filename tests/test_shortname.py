import pytest

from procnet_watch.models import HostingKind
from procnet_watch.tracking.shortname import derive_short_name


@pytest.mark.parametrize("name, expected", [
    ("svchost.exe", "svcx"),
    ("sqlservr.exe", "sqlx"),
    ("MyService.exe", "Mysvc.x"),
    ("2.webhost.app", "wbpp"),
    ("--node-server", "nd-"),
])
def test_direct_names(name, expected):
    assert derive_short_name(name, HostingKind.DIRECT) == expected


@pytest.mark.parametrize("name", ["", "w3wp", "nginx", "1234567"])
def test_short_names_pass_through(name):
    assert derive_short_name(name, HostingKind.DIRECT) == name
    assert derive_short_name(name, HostingKind.SLOT) == name


def test_uppercase_vowels_are_kept():
    assert derive_short_name("DefaultAppPool", HostingKind.DIRECT) == "DfltAppPl"


def test_hosting_slot_prefix():
    assert derive_short_name("DefaultAppPool", HostingKind.SLOT) == "w3wp:DfltAppPl"
    assert derive_short_name("DefaultAppPool", HostingKind.UNKNOWN) == "DfltAppPl"

"""Tests for VersionUpdate parsing."""

import pytest

from depfiles.models import VersionUpdate


def test_parse_token():
    vu = VersionUpdate.parse("rails:6.0.0:6.1.0")
    assert vu == VersionUpdate(package="rails", old_version="6.0.0", target_version="6.1.0")


@pytest.mark.parametrize("token", ["rails", "rails:6.0.0", "rails::6.1.0", "a:b:c:d"])
def test_parse_invalid_token(token):
    with pytest.raises(ValueError):
        VersionUpdate.parse(token)


def test_from_dict_flat():
    vu = VersionUpdate.from_dict(
        {"package": "lodash", "old_version": "4.17.20", "target_version": "4.17.21"}
    )
    assert vu.package == "lodash"
    assert vu.target_version == "4.17.21"


def test_from_dict_nested_package():
    vu = VersionUpdate.from_dict(
        {"package": {"name": "rails"}, "old_version": "6.0.0", "target_version": "6.1.0"}
    )
    assert vu.package == "rails"


def test_from_dict_without_package():
    with pytest.raises(ValueError):
        VersionUpdate.from_dict({"old_version": "1.0"})


def test_is_immutable():
    vu = VersionUpdate.parse("rails:6.0.0:6.1.0")
    with pytest.raises(AttributeError):
        vu.package = "sinatra"

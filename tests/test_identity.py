# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsaciphertext.identity import state_id


def test_state_id_empty():
    assert state_id("") == ""


def test_state_id_known_value():
    assert state_id("abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert state_id("abc") == state_id("abc")


@pytest.mark.parametrize("padded", [" abc", "abc\n", "\t abc \r\n"])
def test_state_id_trims(padded):
    assert state_id(padded) == state_id("abc")


def test_state_id_whitespace_only():
    # Only the empty string itself maps to the empty identity.
    assert state_id("   ") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_state_id_format():
    sid = state_id("SGVsbG8gV29ybGQ=")
    assert len(sid) == 40
    assert sid == sid.lower()
    assert sid != state_id("SGVsbG8gV29ybGQh")

"""Tests for the name/sex locator and status flags."""

import struct

from mew_viewer.models.constants import Sex
from mew_viewer.parser.identity_parser import locate_identity, read_status_flags

from cat_blob import CatBlob


def _header(name: str, len_offset: int, sex_a: int, sex_b: int, size: int = 0x80) -> bytes:
    buf = bytearray(size)
    struct.pack_into("<I", buf, len_offset, len(name))
    encoded = name.encode("utf-16-le")
    buf[0x14 : 0x14 + len(encoded)] = encoded
    end = 0x14 + len(encoded)
    struct.pack_into("<H", buf, end + 8, sex_a)
    struct.pack_into("<H", buf, end + 12, sex_b)
    return bytes(buf)


def test_fixture_identity():
    cat = CatBlob()
    identity = locate_identity(cat.build())
    assert identity.name == "Mittens"
    assert identity.sex is Sex.FEMALE
    assert identity.name_end_offset == cat.name_end


def test_length_at_alternate_offset():
    identity = locate_identity(_header("Tomasina", 0x10, 0, 0))
    assert identity.name == "Tomasina"
    assert identity.sex is Sex.MALE


def test_single_sex_match_still_counts():
    identity = locate_identity(_header("Tomasina", 0x0C, 1, 9))
    assert identity.sex is Sex.FEMALE


def test_unknown_sex_when_codes_disagree_with_table():
    identity = locate_identity(_header("Tomasina", 0x0C, 7, 9))
    assert identity.name == "Tomasina"
    assert identity.sex is Sex.UNKNOWN


def test_oversized_lengths_fall_back():
    buf = bytearray(0x40)
    struct.pack_into("<II", buf, 0x0C, 5000, 5000)
    identity = locate_identity(bytes(buf))
    assert identity.name == ""
    assert identity.sex is Sex.UNKNOWN
    assert identity.name_end_offset == 0x14


def test_tiny_buffer():
    identity = locate_identity(b"\x00" * 8)
    assert identity.name == ""
    assert identity.name_end_offset == 0x14


def test_status_flags_bits():
    data = CatBlob(flags=0x4002).build()
    flags = read_status_flags(data, 0x22)
    assert flags.offset == 0x32
    assert flags.raw == 0x4002
    assert flags.retired and flags.donated
    assert not flags.dead


def test_status_flags_out_of_range():
    flags = read_status_flags(b"\x00" * 0x20, 0x14)
    assert flags.raw == -1
    assert flags.offset == 0x24
    assert not (flags.retired or flags.dead or flags.donated)

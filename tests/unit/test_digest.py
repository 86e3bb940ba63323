# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import hashlib
import string

import pytest

from vtlookup.digest import SUPPORTED_ALGORITHMS, file_hexdigest, hexdigest, sha256_hexdigest

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_sha256_of_empty_input_is_known_value():
    assert sha256_hexdigest(b"") == EMPTY_SHA256
    assert hexdigest(b"") == EMPTY_SHA256


def test_known_vectors_for_supported_algorithms():
    assert hexdigest(b"abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert hexdigest(b"", "sha1") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
    assert hexdigest(b"", "md5") == "d41d8cd98f00b204e9800998ecf8427e"


@pytest.mark.parametrize("algorithm", SUPPORTED_ALGORITHMS)
@pytest.mark.parametrize("data", [b"", b"\x00", b"hello world", bytes(range(256)) * 40])
def test_hexdigest_shape_and_determinism(algorithm, data):
    digest_size = hashlib.new(algorithm).digest_size
    first = hexdigest(data, algorithm)
    assert len(first) == 2 * digest_size
    assert set(first) <= set(string.hexdigits.lower())
    assert first == hexdigest(bytearray(data), algorithm)
    assert first == hexdigest(memoryview(data), algorithm)


def test_unsupported_algorithm_rejected():
    with pytest.raises(ValueError):
        hexdigest(b"x", "crc32")


def test_file_hexdigest_matches_in_memory_digest(tmp_path):
    payload = b"malware-sample" * 10_000
    path = tmp_path / "sample.bin"
    path.write_bytes(payload)
    assert file_hexdigest(path, block_size=1000) == hexdigest(payload)
    assert file_hexdigest(str(path), "md5") == hashlib.md5(payload).hexdigest()


def test_file_hexdigest_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        file_hexdigest(tmp_path / "missing.bin")

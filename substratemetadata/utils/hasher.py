# Python Substrate Metadata Library
#
# Copyright 2018-2024 Stichting Polkascan (Polkascan Foundation).
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

""" Helper functions used to calculate keys for Substrate storage items
"""

from hashlib import blake2b
import xxhash


def blake2_256(data: bytes) -> bytes:
    """
    Helper function to calculate a 32 bytes Blake2b hash for provided data, used as key for Substrate storage items

    Parameters
    ----------
    data

    Returns
    -------
    bytes
    """
    return blake2b(data, digest_size=32).digest()


def blake2_128(data: bytes) -> bytes:
    """
    Helper function to calculate a 16 bytes Blake2b hash for provided data, used as key for Substrate storage items

    Parameters
    ----------
    data

    Returns
    -------
    bytes
    """
    return blake2b(data, digest_size=16).digest()


def blake2_128_concat(data: bytes) -> bytes:
    """
    Helper function to calculate a 16 bytes Blake2b hash for provided data, concatenated with data, used as key
    for Substrate storage items

    Parameters
    ----------
    data

    Returns
    -------
    bytes
    """
    return blake2b(data, digest_size=16).digest() + data


def _xxh64_seeded(data: bytes, seeds: range) -> bytes:
    storage_key = bytearray()
    for seed in seeds:
        storage_key += xxhash.xxh64(data, seed=seed).intdigest().to_bytes(8, byteorder='little')
    return bytes(storage_key)


def xxh64(data: bytes) -> bytes:
    return _xxh64_seeded(data, range(1))


def xxh128(data: bytes) -> bytes:
    """
    Helper function to calculate a 2 concatenated xxh64 hash for provided data, used as key for several Substrate

    Parameters
    ----------
    data

    Returns
    -------
    bytes
    """
    return _xxh64_seeded(data, range(2))


def xxh256(data: bytes) -> bytes:
    return _xxh64_seeded(data, range(4))


def two_x64_concat(data: bytes) -> bytes:
    """
    Helper function to calculate a xxh64 hash with concatenated data for provided data,
    used as key for several Substrate

    Parameters
    ----------
    data

    Returns
    -------
    bytes
    """
    return xxh64(data) + data


def identity(data: bytes) -> bytes:
    return data

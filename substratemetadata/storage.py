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
from typing import Callable, List, Optional, TYPE_CHECKING

from .exceptions import MalformedMetadata
from .utils.hasher import blake2_128, blake2_256, blake2_128_concat, xxh128, xxh256, two_x64_concat, identity

if TYPE_CHECKING:
    from .pallets import StorageItem

__all__ = ['StorageHasher', 'storage_key']


class StorageHasher:
    """
    Hashers used to derive the key of a storage map entry, by their index in the metadata encoding

    * BLAKE2_128 = 0
    * BLAKE2_256 = 1
    * BLAKE2_128_CONCAT = 2
    * TWOX_128 = 3
    * TWOX_256 = 4
    * TWOX_64_CONCAT = 5
    * IDENTITY = 6

    """
    BLAKE2_128 = 0
    BLAKE2_256 = 1
    BLAKE2_128_CONCAT = 2
    TWOX_128 = 3
    TWOX_256 = 4
    TWOX_64_CONCAT = 5
    IDENTITY = 6

    NAMES = {
        BLAKE2_128: 'Blake2_128',
        BLAKE2_256: 'Blake2_256',
        BLAKE2_128_CONCAT: 'Blake2_128Concat',
        TWOX_128: 'Twox128',
        TWOX_256: 'Twox256',
        TWOX_64_CONCAT: 'Twox64Concat',
        IDENTITY: 'Identity',
    }

    HASH_FUNCTIONS = {
        'Blake2_128': blake2_128,
        'Blake2_256': blake2_256,
        'Blake2_128Concat': blake2_128_concat,
        'Twox128': xxh128,
        'Twox256': xxh256,
        'Twox64Concat': two_x64_concat,
        'Identity': identity,
    }

    @classmethod
    def get_name(cls, index: int) -> str:
        try:
            return cls.NAMES[index]
        except KeyError:
            raise MalformedMetadata(f'Unknown storage hasher index {index}')

    @classmethod
    def get_hash_function(cls, name: str) -> Callable[[bytes], bytes]:
        try:
            return cls.HASH_FUNCTIONS[name]
        except KeyError:
            raise ValueError(f'Unsupported storage hasher "{name}"')


def storage_key(pallet_name: str, storage_item: 'StorageItem', keys: Optional[List[bytes]] = None) -> bytes:
    """
    Derives the raw storage key of given storage item: `twox128(pallet) + twox128(item)`, followed by every
    provided key hashed with the hasher declared for its position. Providing fewer keys than hashers results in a
    prefix that can be used to iterate over the remaining map entries.

    Parameters
    ----------
    pallet_name: Name of the pallet that owns the storage item
    storage_item: StorageItem as projected from the metadata
    keys: SCALE encoded key values

    Returns
    -------
    bytes
    """
    keys = keys or []

    if storage_item.map is None:
        if keys:
            raise ValueError(f'Storage function "{pallet_name}.{storage_item.name}" is not a map')
        hashers = []
    else:
        hashers = storage_item.map.hashers
        if len(keys) > len(hashers):
            raise ValueError(
                f'Storage function map requires at most {len(hashers)} parameters, {len(keys)} given'
            )

    data = xxh128(pallet_name.encode()) + xxh128(storage_item.name.encode())

    for hasher, key in zip(hashers, keys):
        data += StorageHasher.get_hash_function(hasher)(bytes(key))

    return data

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

import json
import logging
from typing import Dict, List, Union

from .exceptions import ItemNotFound, MalformedMetadata
from .normalizer import ScaleType, normalize_types
from .pallets import Pallet, project_pallet
from .scale.metadata import decode_runtime_metadata
from .signing import SigningExtensions, filter_signed_extensions
from .utils import hex_to_bytes

__all__ = ['Metadata', 'decode_metadata', 'decode_metadata_hex', 'logger']

logger = logging.getLogger(__name__)


class Metadata:
    """
    Normalized runtime metadata: the pallets, the index of all types by type id and the signed extensions that
    carry payload
    """

    def __init__(self, pallets: List[Pallet], types: Dict[int, ScaleType], signing: SigningExtensions):
        self.pallets = pallets
        self.types = types
        self.signing = signing

    def get_pallet(self, name: str) -> Pallet:
        for pallet in self.pallets:
            if pallet.name == name:
                return pallet
        raise ItemNotFound(f'Pallet "{name}" not found')

    def get_pallet_by_index(self, index: int) -> Pallet:
        for pallet in self.pallets:
            if pallet.index == index:
                return pallet
        raise ItemNotFound(f'Pallet for index "{index}" not found')

    def get_type(self, type_id: int) -> ScaleType:
        try:
            return self.types[type_id]
        except KeyError:
            raise ItemNotFound(f'Type {type_id} not found')

    def serialize(self) -> dict:
        return {
            'pallets': [p.serialize() for p in self.pallets],
            'types': {type_id: t.serialize() for type_id, t in self.types.items()},
            'signing': self.signing.serialize()
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.serialize(), **kwargs)


def decode_metadata(data: Union[bytes, bytearray]) -> Metadata:
    """
    Decodes prefixed runtime metadata and normalizes it into a `Metadata` object

    Parameters
    ----------
    data: raw metadata bytes, starting with the magic number 'meta' and the version byte

    Returns
    -------
    Metadata

    Raises
    ------
    MalformedMetadata, UnsupportedVersion, UnresolvedTypeReference, InvalidVariantShape, CyclicType
    """
    runtime_metadata = decode_runtime_metadata(data)
    registry = runtime_metadata.types

    logger.debug(
        f'Decoded metadata V{runtime_metadata.version} with {len(registry)} types '
        f'and {len(runtime_metadata.pallets)} pallets'
    )

    types = normalize_types(registry)
    pallets = [project_pallet(pallet, registry) for pallet in runtime_metadata.pallets]
    signing = filter_signed_extensions(runtime_metadata.extrinsic, registry)

    logger.debug(f'Normalized metadata, {len(signing.extensions)} signed extensions carry payload')

    return Metadata(pallets=pallets, types=types, signing=signing)


def decode_metadata_hex(hex_string: str) -> Metadata:
    """
    Same as `decode_metadata` for a '0x' prefixed hex string, as returned by the `state_getMetadata` RPC
    """
    try:
        data = hex_to_bytes(hex_string)
    except ValueError as e:
        raise MalformedMetadata(f'Invalid metadata hex string: {e}') from e

    return decode_metadata(data)

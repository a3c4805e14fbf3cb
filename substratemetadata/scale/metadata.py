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

""" Binary decoder of FRAME runtime metadata, based on the SCALE codec of `scalecodec`
"""

import logging
from typing import List, Optional, Union

from scalecodec.base import RuntimeConfigurationObject, ScaleBytes, ScaleType
from scalecodec.type_registry import load_type_registry_preset

from ..constants import METADATA_MAGIC_NUMBER, METADATA_PREFIX_LENGTH, SUPPORTED_METADATA_VERSION
from ..exceptions import MalformedMetadata, UnsupportedVersion
from .registry import PortableRegistry
from .types import Field, Variant, TypeParameter, RegistryType, TypeDefinition, TypeDefPrimitive, TypeDefCompact, \
    TypeDefVariant, TypeDefArray, TypeDefSequence, TypeDefBitSequence, TypeDefComposite, TypeDefTuple

__all__ = [
    'METADATA_V14_TYPES', 'ConstantMetadata', 'StorageEntryMetadata', 'PalletMetadata', 'SignedExtensionMetadata',
    'ExtrinsicMetadata', 'RuntimeMetadataV14', 'decode_runtime_metadata'
]

logger = logging.getLogger(__name__)


class StrictText(ScaleType):
    """
    Length prefixed UTF-8 text. Unlike `Text`, invalid UTF-8 raises a `UnicodeDecodeError` instead of decoding to
    a hex string.
    """

    def process(self):
        length = self.process_type('Compact<u32>').value
        return self.get_next_bytes(length).decode('utf-8')

    def process_encode(self, value):
        raise NotImplementedError()


# Layout of `RuntimeMetadataV14` (everything after the magic number and version byte). Enums without payload
# (primitives, storage hashers, storage modifiers) are decoded as their u8 index. Byte vectors are `Vec<RawByte>`,
# which always decode to a list of single byte structs. All names, paths and docs are `StrictText`.
METADATA_V14_TYPES = {
    'RawByte': {
        'type': 'struct',
        'type_mapping': [
            ['byte', 'u8'],
        ]
    },
    'RawField': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'Option<StrictText>'],
            ['type', 'Compact<u32>'],
            ['type_name', 'Option<StrictText>'],
            ['docs', 'Vec<StrictText>'],
        ]
    },
    'RawVariant': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'StrictText'],
            ['fields', 'Vec<RawField>'],
            ['index', 'u8'],
            ['docs', 'Vec<StrictText>'],
        ]
    },
    'RawTypeDefArray': {
        'type': 'struct',
        'type_mapping': [
            ['len', 'u32'],
            ['type', 'Compact<u32>'],
        ]
    },
    'RawTypeDefBitSequence': {
        'type': 'struct',
        'type_mapping': [
            ['bit_store_type', 'Compact<u32>'],
            ['bit_order_type', 'Compact<u32>'],
        ]
    },
    'RawTypeDef': {
        'type': 'enum',
        'type_mapping': [
            ['composite', 'Vec<RawField>'],
            ['variant', 'Vec<RawVariant>'],
            ['sequence', 'Compact<u32>'],
            ['array', 'RawTypeDefArray'],
            ['tuple', 'Vec<Compact<u32>>'],
            ['primitive', 'u8'],
            ['compact', 'Compact<u32>'],
            ['bitsequence', 'RawTypeDefBitSequence'],
        ]
    },
    'RawTypeParameter': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'StrictText'],
            ['type', 'Option<Compact<u32>>'],
        ]
    },
    'RawRegistryType': {
        'type': 'struct',
        'type_mapping': [
            ['path', 'Vec<StrictText>'],
            ['params', 'Vec<RawTypeParameter>'],
            ['def', 'RawTypeDef'],
            ['docs', 'Vec<StrictText>'],
        ]
    },
    'RawPortableType': {
        'type': 'struct',
        'type_mapping': [
            ['id', 'Compact<u32>'],
            ['type', 'RawRegistryType'],
        ]
    },
    'RawStorageMap': {
        'type': 'struct',
        'type_mapping': [
            ['hashers', 'Vec<RawByte>'],
            ['key', 'Compact<u32>'],
            ['value', 'Compact<u32>'],
        ]
    },
    'RawStorageEntryType': {
        'type': 'enum',
        'type_mapping': [
            ['Plain', 'Compact<u32>'],
            ['Map', 'RawStorageMap'],
        ]
    },
    'RawStorageEntry': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'StrictText'],
            ['modifier', 'u8'],
            ['type', 'RawStorageEntryType'],
            ['default', 'Vec<RawByte>'],
            ['docs', 'Vec<StrictText>'],
        ]
    },
    'RawPalletStorage': {
        'type': 'struct',
        'type_mapping': [
            ['prefix', 'StrictText'],
            ['entries', 'Vec<RawStorageEntry>'],
        ]
    },
    'RawPalletConstant': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'StrictText'],
            ['type', 'Compact<u32>'],
            ['value', 'Vec<RawByte>'],
            ['docs', 'Vec<StrictText>'],
        ]
    },
    'RawPallet': {
        'type': 'struct',
        'type_mapping': [
            ['name', 'StrictText'],
            ['storage', 'Option<RawPalletStorage>'],
            ['calls', 'Option<Compact<u32>>'],
            ['event', 'Option<Compact<u32>>'],
            ['constants', 'Vec<RawPalletConstant>'],
            ['error', 'Option<Compact<u32>>'],
            ['index', 'u8'],
        ]
    },
    'RawSignedExtension': {
        'type': 'struct',
        'type_mapping': [
            ['identifier', 'StrictText'],
            ['type', 'Compact<u32>'],
            ['additional_signed', 'Compact<u32>'],
        ]
    },
    'RawExtrinsic': {
        'type': 'struct',
        'type_mapping': [
            ['type', 'Compact<u32>'],
            ['version', 'u8'],
            ['signed_extensions', 'Vec<RawSignedExtension>'],
        ]
    },
    'RawMetadataV14': {
        'type': 'struct',
        'type_mapping': [
            ['types', 'Vec<RawPortableType>'],
            ['pallets', 'Vec<RawPallet>'],
            ['extrinsic', 'RawExtrinsic'],
            ['runtime_type', 'Compact<u32>'],
        ]
    },
}


class ConstantMetadata:

    def __init__(self, name: str, type_id: int, value: bytes, docs: List[str]):
        self.name = name
        self.type_id = type_id
        self.value = value
        self.docs = docs


class StorageEntryMetadata:
    """
    Storage entry as declared in the metadata: either 'Plain' with a single type id or 'Map' with hasher indices,
    key type id and value type id. The modifier is 'Optional' or 'Default'.
    """

    PLAIN = 'Plain'
    MAP = 'Map'

    MODIFIERS = ['Optional', 'Default']

    def __init__(self, name: str, storage_type: str, docs: List[str], type_id: Optional[int] = None,
                 hashers: Optional[List[int]] = None, key_type_id: Optional[int] = None,
                 value_type_id: Optional[int] = None, modifier: str = 'Default'):
        self.name = name
        self.storage_type = storage_type
        self.docs = docs
        self.type_id = type_id
        self.hashers = hashers
        self.key_type_id = key_type_id
        self.value_type_id = value_type_id
        self.modifier = modifier

    @classmethod
    def get_modifier(cls, index: int) -> str:
        try:
            return cls.MODIFIERS[index]
        except IndexError:
            raise MalformedMetadata(f'Unknown storage modifier index {index}')

    @property
    def is_map(self) -> bool:
        return self.storage_type == self.MAP


class PalletMetadata:

    def __init__(self, index: int, name: str, constants: List[ConstantMetadata],
                 storage: Optional[List[StorageEntryMetadata]] = None, calls_type_id: Optional[int] = None,
                 event_type_id: Optional[int] = None, error_type_id: Optional[int] = None):
        self.index = index
        self.name = name
        self.constants = constants
        self.storage = storage
        self.calls_type_id = calls_type_id
        self.event_type_id = event_type_id
        self.error_type_id = error_type_id


class SignedExtensionMetadata:

    def __init__(self, identifier: str, type_id: int, additional_signed_type_id: int):
        self.identifier = identifier
        self.type_id = type_id
        self.additional_signed_type_id = additional_signed_type_id


class ExtrinsicMetadata:

    def __init__(self, type_id: int, version: int, signed_extensions: List[SignedExtensionMetadata]):
        self.type_id = type_id
        self.version = version
        self.signed_extensions = signed_extensions


class RuntimeMetadataV14:

    version = 14

    def __init__(self, types: PortableRegistry, pallets: List[PalletMetadata], extrinsic: ExtrinsicMetadata,
                 runtime_type_id: int):
        self.types = types
        self.pallets = pallets
        self.extrinsic = extrinsic
        self.runtime_type_id = runtime_type_id


def create_runtime_config() -> RuntimeConfigurationObject:
    runtime_config = RuntimeConfigurationObject()
    runtime_config.update_type_registry(load_type_registry_preset(name="core"))
    runtime_config.type_registry['types']['stricttext'] = StrictText
    runtime_config.update_type_registry_types(METADATA_V14_TYPES)
    return runtime_config


def decode_runtime_metadata(data: Union[bytes, bytearray]) -> RuntimeMetadataV14:
    """
    Decodes prefixed runtime metadata: the magic number 'meta', a version byte and the version specific encoding

    Parameters
    ----------
    data: raw metadata bytes, e.g. as returned by the `state_getMetadata` RPC

    Returns
    -------
    RuntimeMetadataV14
    """
    data = bytes(data)

    if len(data) < METADATA_PREFIX_LENGTH:
        raise MalformedMetadata('Metadata too short to contain magic number and version', offset=len(data))

    if data[:len(METADATA_MAGIC_NUMBER)] != METADATA_MAGIC_NUMBER:
        raise MalformedMetadata(f'Invalid magic number 0x{data[:len(METADATA_MAGIC_NUMBER)].hex()}', offset=0)

    version = data[len(METADATA_MAGIC_NUMBER)]
    if version != SUPPORTED_METADATA_VERSION:
        raise UnsupportedVersion(version)

    logger.debug(f'Decoding metadata V{version} ({len(data)} bytes)')

    scale_obj = create_runtime_config().create_scale_object(
        'RawMetadataV14', data=ScaleBytes(bytearray(data[METADATA_PREFIX_LENGTH:]))
    )

    try:
        scale_obj.decode()
    except Exception as e:
        raise MalformedMetadata(
            f'Invalid metadata V{version}: {e}', offset=METADATA_PREFIX_LENGTH + scale_obj.data.offset
        ) from e

    if scale_obj.data.offset != scale_obj.data.length:
        raise MalformedMetadata(
            f'Invalid metadata V{version}: decoded {scale_obj.data.offset} of {scale_obj.data.length} bytes',
            offset=METADATA_PREFIX_LENGTH + min(scale_obj.data.offset, scale_obj.data.length)
        )

    value = scale_obj.value

    try:
        registry = PortableRegistry([_registry_type(t) for t in value['types']])
    except ValueError as e:
        raise MalformedMetadata(f'Invalid type registry: {e}') from e

    return RuntimeMetadataV14(
        types=registry,
        pallets=[_pallet(p) for p in value['pallets']],
        extrinsic=_extrinsic(value['extrinsic']),
        runtime_type_id=value['runtime_type']
    )


def _raw_bytes(value: list) -> bytes:
    return bytes([b['byte'] for b in value])


def _enum_value(value) -> tuple:
    if type(value) is str:
        return value, None
    if type(value) is dict and len(value) == 1:
        return next(iter(value.items()))
    raise MalformedMetadata(f'Invalid enum value {value!r}')


def _field(value: dict) -> Field:
    return Field(type_id=value['type'], name=value['name'], type_name=value['type_name'], docs=value['docs'])


def _variant(value: dict) -> Variant:
    return Variant(
        index=value['index'], name=value['name'], fields=[_field(f) for f in value['fields']], docs=value['docs']
    )


def _type_def(value) -> TypeDefinition:
    def_name, def_value = _enum_value(value)

    if def_name == 'composite':
        return TypeDefComposite([_field(f) for f in def_value])

    elif def_name == 'variant':
        return TypeDefVariant([_variant(v) for v in def_value])

    elif def_name == 'sequence':
        return TypeDefSequence(def_value)

    elif def_name == 'array':
        return TypeDefArray(def_value['type'], def_value['len'])

    elif def_name == 'tuple':
        return TypeDefTuple(list(def_value))

    elif def_name == 'primitive':
        try:
            return TypeDefPrimitive(TypeDefPrimitive.ALL[def_value])
        except IndexError:
            raise MalformedMetadata(f'Invalid primitive index {def_value}')

    elif def_name == 'compact':
        return TypeDefCompact(def_value)

    elif def_name == 'bitsequence':
        return TypeDefBitSequence(def_value['bit_store_type'], def_value['bit_order_type'])

    else:
        raise MalformedMetadata(f'Unknown type definition "{def_name}"')


def _registry_type(value: dict) -> RegistryType:
    return RegistryType(
        type_id=value['id'],
        type_def=_type_def(value['type']['def']),
        path=value['type']['path'],
        params=[TypeParameter(p['name'], p['type']) for p in value['type']['params']],
        docs=value['type']['docs']
    )


def _storage_entry(value: dict) -> StorageEntryMetadata:
    storage_type, type_value = _enum_value(value['type'])
    modifier = StorageEntryMetadata.get_modifier(value['modifier'])

    if storage_type == StorageEntryMetadata.PLAIN:
        return StorageEntryMetadata(
            name=value['name'], storage_type=storage_type, docs=value['docs'], type_id=type_value, modifier=modifier
        )
    elif storage_type == StorageEntryMetadata.MAP:
        return StorageEntryMetadata(
            name=value['name'],
            storage_type=storage_type,
            docs=value['docs'],
            hashers=[b['byte'] for b in type_value['hashers']],
            key_type_id=type_value['key'],
            value_type_id=type_value['value'],
            modifier=modifier
        )
    else:
        raise MalformedMetadata(f'Unknown storage entry type "{storage_type}"')


def _pallet(value: dict) -> PalletMetadata:
    storage = None
    if value['storage'] is not None:
        storage = [_storage_entry(e) for e in value['storage']['entries']]

    return PalletMetadata(
        index=value['index'],
        name=value['name'],
        constants=[
            ConstantMetadata(name=c['name'], type_id=c['type'], value=_raw_bytes(c['value']), docs=c['docs'])
            for c in value['constants']
        ],
        storage=storage,
        calls_type_id=value['calls'],
        event_type_id=value['event'],
        error_type_id=value['error']
    )


def _extrinsic(value: dict) -> ExtrinsicMetadata:
    return ExtrinsicMetadata(
        type_id=value['type'],
        version=value['version'],
        signed_extensions=[
            SignedExtensionMetadata(
                identifier=se['identifier'], type_id=se['type'], additional_signed_type_id=se['additional_signed']
            ) for se in value['signed_extensions']
        ]
    )

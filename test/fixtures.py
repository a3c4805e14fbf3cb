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

""" Builders of SCALE encoded metadata V14 used as test fixtures
"""

from scalecodec.base import RuntimeConfigurationObject
from scalecodec.type_registry import load_type_registry_preset

from substratemetadata.scale.types import TypeDefPrimitive

runtime_config = RuntimeConfigurationObject()
runtime_config.update_type_registry(load_type_registry_preset("core"))


def encode(type_string, value) -> bytes:
    return bytes(runtime_config.create_scale_object(type_string).encode(value).data)


def compact(value: int) -> bytes:
    return encode('Compact<u32>', value)


def text(value: str) -> bytes:
    return encode('Text', value)


def u8(value: int) -> bytes:
    return encode('u8', value)


def u32(value: int) -> bytes:
    return encode('u32', value)


def vec(items) -> bytes:
    items = list(items)
    return compact(len(items)) + b''.join(items)


def option(item: bytes = None) -> bytes:
    if item is None:
        return b'\x00'
    return b'\x01' + item


def docs(lines=()) -> bytes:
    return vec([text(line) for line in lines])


def field(type_id: int, name: str = None, type_name: str = None) -> bytes:
    return option(text(name) if name is not None else None) + compact(type_id) + \
        option(text(type_name) if type_name is not None else None) + docs()


def variant(name: str, index: int, fields=(), variant_docs=()) -> bytes:
    return text(name) + vec(fields) + u8(index) + docs(variant_docs)


def composite(*fields) -> bytes:
    return u8(0) + vec(fields)


def variant_def(*variants) -> bytes:
    return u8(1) + vec(variants)


def sequence(type_id: int) -> bytes:
    return u8(2) + compact(type_id)


def array(type_id: int, length: int) -> bytes:
    return u8(3) + u32(length) + compact(type_id)


def tuple_def(*type_ids) -> bytes:
    return u8(4) + vec([compact(type_id) for type_id in type_ids])


def primitive(name: str) -> bytes:
    return u8(5) + u8(TypeDefPrimitive.ALL.index(name))


def compact_def(type_id: int) -> bytes:
    return u8(6) + compact(type_id)


def bit_sequence(store_type_id: int, order_type_id: int) -> bytes:
    return u8(7) + compact(store_type_id) + compact(order_type_id)


def portable_type(type_id: int, type_def: bytes, path=(), params=()) -> bytes:
    return compact(type_id) + vec([text(p) for p in path]) + \
        vec([text(name) + option(compact(param_type) if param_type is not None else None)
             for name, param_type in params]) + \
        type_def + docs()


def storage_plain(name: str, type_id: int, entry_docs=(), modifier: int = 1) -> bytes:
    # type Plain, empty default
    return text(name) + u8(modifier) + u8(0) + compact(type_id) + vec([]) + docs(entry_docs)


def storage_map(name: str, hashers, key: int, value: int, entry_docs=(), modifier: int = 1) -> bytes:
    # type Map, empty default
    return text(name) + u8(modifier) + u8(1) + vec([u8(h) for h in hashers]) + compact(key) + compact(value) + \
        vec([]) + docs(entry_docs)


def pallet_storage(prefix: str, entries) -> bytes:
    return text(prefix) + vec(entries)


def constant(name: str, type_id: int, value: bytes, constant_docs=()) -> bytes:
    return text(name) + compact(type_id) + compact(len(value)) + value + docs(constant_docs)


def pallet(name: str, index: int, storage: bytes = None, calls: int = None, event: int = None, constants=(),
           error: int = None) -> bytes:
    return text(name) + option(storage) + \
        option(compact(calls) if calls is not None else None) + \
        option(compact(event) if event is not None else None) + \
        vec(constants) + \
        option(compact(error) if error is not None else None) + \
        u8(index)


def signed_extension(identifier: str, type_id: int, additional_signed: int) -> bytes:
    return text(identifier) + compact(type_id) + compact(additional_signed)


def extrinsic(type_id: int, version: int, signed_extensions=()) -> bytes:
    return compact(type_id) + u8(version) + vec(signed_extensions)


def metadata_v14(types, pallets, extrinsic_data: bytes, runtime_type: int = 0, version: int = 14) -> bytes:
    return b'meta' + bytes([version]) + vec(types) + vec(pallets) + extrinsic_data + compact(runtime_type)


def sample_types() -> list:
    return [
        portable_type(0, primitive('u8')),
        portable_type(1, array(0, 32)),
        portable_type(2, composite(field(1, type_name='[u8; 32]')), path=['sp_core', 'crypto', 'AccountId32']),
        portable_type(3, primitive('u32')),
        portable_type(4, primitive('u128')),
        portable_type(5, compact_def(4)),
        portable_type(
            6, variant_def(variant('None', 0), variant('Some', 1, [field(3)])), path=['Option'], params=[('T', 3)]
        ),
        portable_type(
            7, variant_def(variant('Ok', 0, [field(8)]), variant('Err', 1, [field(9)])), path=['Result'],
            params=[('T', 8), ('E', 9)]
        ),
        portable_type(8, tuple_def()),
        portable_type(
            9,
            variant_def(
                variant('Other', 0),
                variant('BadOrigin', 2),
                variant('Module', 3, [field(10, type_name='ModuleError')]),
            ),
            path=['sp_runtime', 'DispatchError']
        ),
        portable_type(
            10, composite(field(0, name='index', type_name='u8'), field(11, name='error', type_name='[u8; 4]')),
            path=['sp_runtime', 'ModuleError']
        ),
        portable_type(11, array(0, 4)),
        portable_type(
            12, composite(field(3, name='nonce', type_name='Index'), field(4, name='free', type_name='Balance')),
            path=['pallet_balances', 'AccountData']
        ),
        portable_type(13, sequence(0)),
        portable_type(
            14,
            variant_def(
                variant('transfer', 0, [field(2, name='dest'), field(5, name='value')], ['Transfer some balance']),
                variant('burn', 1, [field(5, name='value')]),
            ),
            path=['pallet_balances', 'pallet', 'Call']
        ),
        portable_type(
            15,
            variant_def(variant('Transfer', 2, [field(2, name='from'), field(2, name='to'), field(4, name='amount')])),
            path=['pallet_balances', 'pallet', 'Event']
        ),
        portable_type(
            16,
            variant_def(variant('InsufficientBalance', 0), variant('ExistentialDeposit', 1)),
            path=['pallet_balances', 'pallet', 'Error']
        ),
        portable_type(17, primitive('bool')),
        portable_type(18, primitive('str')),
        portable_type(19, bit_sequence(0, 20), path=[]),
        portable_type(20, composite(), path=['bitvec', 'order', 'Lsb0']),
        portable_type(21, composite(field(22)), path=['frame_system', 'extensions', 'check_nonce', 'CheckNonce']),
        portable_type(22, compact_def(3)),
        portable_type(23, composite(), path=['frame_system', 'extensions', 'check_genesis', 'CheckGenesis']),
        portable_type(24, composite(field(1)), path=['primitive_types', 'H256']),
        portable_type(
            25, variant_def(variant('Immortal', 0), variant('Mortal1', 1, [field(0)])),
            path=['sp_runtime', 'generic', 'era', 'Era']
        ),
        portable_type(
            26, composite(field(5)),
            path=['pallet_transaction_payment', 'ChargeTransactionPayment']
        ),
        portable_type(
            27, composite(), path=['frame_system', 'extensions', 'check_spec_version', 'CheckSpecVersion']
        ),
        portable_type(
            28, composite(), path=['frame_system', 'extensions', 'check_non_zero_sender', 'CheckNonZeroSender']
        ),
        portable_type(29, primitive('char')),
    ]


def sample_pallets() -> list:
    return [
        pallet(
            'System', 0,
            storage=pallet_storage('System', [
                storage_map('Account', [2], 2, 12, ['The full account information for a particular account ID.']),
                storage_plain('Number', 3, ['The current block number being processed.']),
            ]),
            constants=[constant('BlockHashCount', 3, bytes.fromhex('60090000'), ['Maximum number of block hashes'])]
        ),
        pallet(
            'Balances', 10,
            storage=pallet_storage('Balances', [
                storage_plain('TotalIssuance', 4),
                storage_map('Account', [2], 2, 12, ['The balance of an account.']),
            ]),
            calls=14,
            event=15,
            constants=[constant('ExistentialDeposit', 4, bytes.fromhex('00e40b54020000000000000000000000'))],
            error=16
        ),
    ]


def sample_extrinsic() -> bytes:
    return extrinsic(13, 4, [
        signed_extension('CheckNonZeroSender', 28, 8),
        signed_extension('CheckSpecVersion', 27, 3),
        signed_extension('CheckGenesis', 23, 24),
        signed_extension('CheckMortality', 25, 24),
        signed_extension('CheckNonce', 21, 8),
        signed_extension('ChargeTransactionPayment', 26, 8),
    ])


def sample_metadata() -> bytes:
    return metadata_v14(sample_types(), sample_pallets(), sample_extrinsic())

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
from typing import List, Optional

from .exceptions import InvalidVariantShape, ItemNotFound
from .normalizer import ScaleField
from .scale.metadata import PalletMetadata, StorageEntryMetadata, ConstantMetadata
from .scale.registry import PortableRegistry
from .scale.types import TypeDefVariant
from .storage import StorageHasher

__all__ = [
    'Constant', 'MapDef', 'StorageItem', 'PalletVariant', 'Call', 'Event', 'Error', 'Pallet', 'project_pallet'
]


class Constant:

    def __init__(self, name: str, type_id: int, value: bytes, docs: List[str]):
        self.name = name
        self.type_id = type_id
        self.value = value
        self.docs = docs

    @classmethod
    def from_metadata(cls, constant: ConstantMetadata, registry: PortableRegistry) -> 'Constant':
        registry.resolve(constant.type_id)
        return cls(name=constant.name, type_id=constant.type_id, value=constant.value, docs=list(constant.docs))

    def serialize(self) -> dict:
        return {'name': self.name, 'type': self.type_id, 'value': f'0x{self.value.hex()}', 'docs': self.docs}


class MapDef:

    def __init__(self, hashers: List[str], key: int, value: int):
        self.hashers = hashers
        self.key = key
        self.value = value

    def serialize(self) -> dict:
        return {'hashers': list(self.hashers), 'key': self.key, 'value': self.value}


class StorageItem:
    """
    Storage entry of a pallet; exactly one of `type_id` (plain value) or `map` is set
    """

    def __init__(self, name: str, docs: List[str], type_id: Optional[int] = None, map: Optional[MapDef] = None):
        if (type_id is None) == (map is None):
            raise ValueError(f'Storage item "{name}" must define either a plain type or a map')
        self.name = name
        self.docs = docs
        self.type_id = type_id
        self.map = map

    @classmethod
    def from_metadata(cls, entry: StorageEntryMetadata, registry: PortableRegistry) -> 'StorageItem':
        if entry.is_map:
            registry.resolve(entry.key_type_id)
            registry.resolve(entry.value_type_id)
            map_def = MapDef(
                hashers=[StorageHasher.get_name(h) for h in entry.hashers],
                key=entry.key_type_id,
                value=entry.value_type_id
            )
            return cls(name=entry.name, docs=list(entry.docs), map=map_def)

        registry.resolve(entry.type_id)
        return cls(name=entry.name, docs=list(entry.docs), type_id=entry.type_id)

    @property
    def is_map(self) -> bool:
        return self.map is not None

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'type': self.type_id,
            'map': self.map.serialize() if self.map else None,
            'docs': self.docs
        }


class PalletVariant:

    def __init__(self, index: int, name: str, fields: List[ScaleField], docs: List[str]):
        self.index = index
        self.name = name
        self.fields = fields
        self.docs = docs

    def serialize(self) -> dict:
        return {
            'index': self.index,
            'name': self.name,
            'fields': [f.serialize() for f in self.fields],
            'docs': self.docs
        }

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.index}: {self.name})>'


class Call(PalletVariant):
    pass


class Event(PalletVariant):
    pass


class Error(PalletVariant):
    pass


def _project_variants(section: str, type_id: Optional[int], registry: PortableRegistry,
                      variant_cls) -> Optional[list]:
    if type_id is None:
        return None

    type_def = registry.get_type_def(type_id)

    if type(type_def) is not TypeDefVariant:
        raise InvalidVariantShape(section, type_id)

    items = []
    for variant in type_def.variants:
        for field in variant.fields:
            registry.resolve(field.type_id)
        items.append(variant_cls(
            index=variant.index,
            name=variant.name,
            fields=[ScaleField.from_field(f) for f in variant.fields],
            docs=list(variant.docs)
        ))
    return items


class Pallet:

    def __init__(self, index: int, name: str, constants: List[Constant], storage: Optional[List[StorageItem]] = None,
                 errors: Optional[List[Error]] = None, events: Optional[List[Event]] = None,
                 calls: Optional[List[Call]] = None):
        self.index = index
        self.name = name
        self.constants = constants
        self.storage = storage
        self.errors = errors
        self.events = events
        self.calls = calls

    def get_constant(self, name: str) -> Constant:
        for constant in self.constants:
            if constant.name == name:
                return constant
        raise ItemNotFound(f'Constant "{self.name}.{name}" not found')

    def get_storage_item(self, name: str) -> StorageItem:
        for storage_item in self.storage or []:
            if storage_item.name == name:
                return storage_item
        raise ItemNotFound(f'Storage function "{self.name}.{name}" not found')

    def get_call(self, name: str) -> Call:
        for call in self.calls or []:
            if call.name == name:
                return call
        raise ItemNotFound(f'Call "{self.name}.{name}" not found')

    def get_event(self, index: int) -> Event:
        for event in self.events or []:
            if event.index == index:
                return event
        raise ItemNotFound(f'Event with index {index} not found in pallet "{self.name}"')

    def get_error(self, index: int) -> Error:
        for error in self.errors or []:
            if error.index == index:
                return error
        raise ItemNotFound(f'Error with index {index} not found in pallet "{self.name}"')

    def serialize(self) -> dict:
        def serialize_list(items):
            return [i.serialize() for i in items] if items is not None else None

        return {
            'index': self.index,
            'name': self.name,
            'constants': serialize_list(self.constants),
            'storage': serialize_list(self.storage),
            'errors': serialize_list(self.errors),
            'events': serialize_list(self.events),
            'calls': serialize_list(self.calls)
        }

    def __repr__(self):
        return f'<Pallet({self.index}: {self.name})>'


def project_pallet(pallet: PalletMetadata, registry: PortableRegistry) -> Pallet:
    """
    Projects the raw pallet section of the metadata on a `Pallet`, resolving the call, event and error enums in the
    portable registry

    Parameters
    ----------
    pallet: PalletMetadata
    registry: PortableRegistry

    Returns
    -------
    Pallet
    """
    storage = None
    if pallet.storage is not None:
        storage = [StorageItem.from_metadata(entry, registry) for entry in pallet.storage]

    return Pallet(
        index=pallet.index,
        name=pallet.name,
        constants=[Constant.from_metadata(c, registry) for c in pallet.constants],
        storage=storage,
        errors=_project_variants('errors', pallet.error_type_id, registry, Error),
        events=_project_variants('events', pallet.event_type_id, registry, Event),
        calls=_project_variants('calls', pallet.calls_type_id, registry, Call)
    )

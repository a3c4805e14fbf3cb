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

""" Normalization of portable registry types into the compact `ScaleType` vocabulary
"""

from typing import Dict, List, Optional

from .exceptions import CyclicType, InvalidVariantShape
from .scale.registry import PortableRegistry
from .scale.types import Field, TypeDefPrimitive, TypeDefCompact, TypeDefVariant, TypeDefArray, TypeDefSequence, \
    TypeDefBitSequence, TypeDefComposite, TypeDefTuple

__all__ = ['ScaleTypeKind', 'ScaleField', 'ScaleVariant', 'ScaleType', 'normalize', 'normalize_types']


class ScaleTypeKind:
    BOOLEAN = 'Boolean'
    STRING = 'String'
    U8 = 'U8'
    U16 = 'U16'
    U32 = 'U32'
    U64 = 'U64'
    U128 = 'U128'
    U256 = 'U256'
    I8 = 'I8'
    I16 = 'I16'
    I32 = 'I32'
    I64 = 'I64'
    I128 = 'I128'
    I256 = 'I256'
    COMPACT = 'Compact'
    ENUM = 'Enum'
    OPTION = 'Option'
    RESULT = 'Result'
    TUPLE = 'Tuple'
    LIST = 'List'
    STRUCT = 'Struct'

    PRIMITIVES = {
        TypeDefPrimitive.BOOL: BOOLEAN,
        TypeDefPrimitive.CHAR: STRING,
        TypeDefPrimitive.STR: STRING,
        TypeDefPrimitive.U8: U8,
        TypeDefPrimitive.U16: U16,
        TypeDefPrimitive.U32: U32,
        TypeDefPrimitive.U64: U64,
        TypeDefPrimitive.U128: U128,
        TypeDefPrimitive.U256: U256,
        TypeDefPrimitive.I8: I8,
        TypeDefPrimitive.I16: I16,
        TypeDefPrimitive.I32: I32,
        TypeDefPrimitive.I64: I64,
        TypeDefPrimitive.I128: I128,
        TypeDefPrimitive.I256: I256,
    }


class ScaleField:

    def __init__(self, field: int, name: Optional[str] = None):
        self.field = field
        self.name = name

    @classmethod
    def from_field(cls, field: Field) -> 'ScaleField':
        return cls(field=field.type_id, name=field.name)

    def serialize(self) -> dict:
        return {'name': self.name, 'field': self.field}

    def __eq__(self, other):
        return isinstance(other, ScaleField) and (self.field, self.name) == (other.field, other.name)

    def __repr__(self):
        return f'<ScaleField({self.name}: {self.field})>'


class ScaleVariant:

    def __init__(self, index: int, name: str, fields: Optional[List[ScaleField]] = None):
        self.index = index
        self.name = name
        self.fields = fields

    def serialize(self) -> dict:
        return {
            'index': self.index,
            'name': self.name,
            'fields': [f.serialize() for f in self.fields] if self.fields is not None else None
        }

    def __eq__(self, other):
        return isinstance(other, ScaleVariant) and self.serialize() == other.serialize()


class ScaleType:
    """
    Normalized type. Depending on `kind` the following attributes are set:

    * Enum: `variants` and `name`
    * Struct: `fields` and `name`
    * Compact, Option: `store`
    * List: `store` and `length` for fixed size lists
    * Tuple, Result: `fields`

    """

    def __init__(self, kind: str, variants: Optional[List[ScaleVariant]] = None, store: Optional[int] = None,
                 length: Optional[int] = None, fields: Optional[List[ScaleField]] = None, name: Optional[str] = None):
        self.kind = kind
        self.variants = variants
        self.store = store
        self.length = length
        self.fields = fields
        self.name = name

    def serialize(self) -> dict:
        return {
            'type': self.kind,
            'variants': [v.serialize() for v in self.variants] if self.variants is not None else None,
            'store': self.store,
            'length': self.length,
            'fields': [f.serialize() for f in self.fields] if self.fields is not None else None,
            'name': self.name
        }

    def __eq__(self, other):
        return isinstance(other, ScaleType) and self.serialize() == other.serialize()

    def __repr__(self):
        return f'<ScaleType({self.kind}{": " + self.name if self.name else ""})>'


def normalize(type_id: int, registry: PortableRegistry) -> ScaleType:
    """
    Converts the registry type with given id into a `ScaleType`. Composite types with exactly one field are elided
    and normalize to the type of that field.

    Parameters
    ----------
    type_id
    registry

    Returns
    -------
    ScaleType
    """
    visited = []

    while True:
        if type_id in visited:
            raise CyclicType(type_id)
        visited.append(type_id)

        registry_type = registry.resolve(type_id)
        type_def = registry_type.type_def

        if type(type_def) is TypeDefComposite and len(type_def.fields) == 1:
            type_id = type_def.fields[0].type_id
            continue

        for ref_type_id in type_def.referenced_type_ids():
            registry.resolve(ref_type_id)

        return _normalize_type_def(registry_type)


def _normalize_type_def(registry_type) -> ScaleType:
    type_def = registry_type.type_def

    if type(type_def) is TypeDefPrimitive:
        return ScaleType(ScaleTypeKind.PRIMITIVES[type_def.primitive])

    elif type(type_def) is TypeDefCompact:
        return ScaleType(ScaleTypeKind.COMPACT, store=type_def.type_id)

    elif type(type_def) is TypeDefArray:
        return ScaleType(ScaleTypeKind.LIST, store=type_def.type_id, length=type_def.length)

    elif type(type_def) is TypeDefSequence:
        return ScaleType(ScaleTypeKind.LIST, store=type_def.type_id)

    elif type(type_def) is TypeDefBitSequence:
        return ScaleType(ScaleTypeKind.LIST, store=type_def.bit_order_type_id)

    elif type(type_def) is TypeDefTuple:
        return ScaleType(ScaleTypeKind.TUPLE, fields=[ScaleField(type_id) for type_id in type_def.type_ids])

    elif type(type_def) is TypeDefComposite:
        return ScaleType(
            ScaleTypeKind.STRUCT,
            fields=[ScaleField.from_field(f) for f in type_def.fields],
            name=registry_type.qualified_name
        )

    elif type(type_def) is TypeDefVariant:
        variant_names = type_def.variant_names

        if variant_names == ['None', 'Some']:
            return ScaleType(ScaleTypeKind.OPTION, store=_first_field(registry_type, 1))

        if variant_names == ['Ok', 'Err']:
            return ScaleType(
                ScaleTypeKind.RESULT,
                fields=[ScaleField(_first_field(registry_type, 0)), ScaleField(_first_field(registry_type, 1))]
            )

        return ScaleType(
            ScaleTypeKind.ENUM,
            variants=[
                ScaleVariant(
                    index=v.index,
                    name=v.name,
                    fields=[ScaleField.from_field(f) for f in v.fields] if v.fields else None
                ) for v in type_def.variants
            ],
            name=registry_type.qualified_name
        )

    else:
        raise NotImplementedError(f'Type definition {type_def.__class__.__name__} not implemented')


def _first_field(registry_type, variant_idx: int) -> int:
    fields = registry_type.type_def.variants[variant_idx].fields
    if len(fields) == 0:
        raise InvalidVariantShape('type', registry_type.type_id)
    return fields[0].type_id


def normalize_types(registry: PortableRegistry) -> Dict[int, ScaleType]:
    """
    Builds the index of normalized types for all type ids present in the registry
    """
    return {type_id: normalize(type_id, registry) for type_id in registry}

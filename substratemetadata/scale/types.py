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

__all__ = [
    'Field', 'Variant', 'TypeParameter', 'TypeDefinition', 'TypeDefPrimitive', 'TypeDefCompact', 'TypeDefVariant',
    'TypeDefArray', 'TypeDefSequence', 'TypeDefBitSequence', 'TypeDefComposite', 'TypeDefTuple', 'RegistryType'
]


class Field:

    def __init__(self, type_id: int, name: Optional[str] = None, type_name: Optional[str] = None,
                 docs: Optional[List[str]] = None):
        self.type_id = type_id
        self.name = name
        self.type_name = type_name
        self.docs = docs or []

    def __repr__(self):
        return f'<Field({self.name}: {self.type_id})>'


class Variant:

    def __init__(self, index: int, name: str, fields: Optional[List[Field]] = None,
                 docs: Optional[List[str]] = None):
        self.index = index
        self.name = name
        self.fields = fields or []
        self.docs = docs or []

    def __repr__(self):
        return f'<Variant({self.index}: {self.name})>'


class TypeParameter:

    def __init__(self, name: str, type_id: Optional[int] = None):
        self.name = name
        self.type_id = type_id


class TypeDefinition:
    """
    Base class of the definition cases of a portable registry type. The set of subclasses is closed:

    * TypeDefPrimitive
    * TypeDefCompact
    * TypeDefVariant
    * TypeDefArray
    * TypeDefSequence
    * TypeDefBitSequence
    * TypeDefComposite
    * TypeDefTuple

    """

    def referenced_type_ids(self) -> List[int]:
        raise NotImplementedError()


class TypeDefPrimitive(TypeDefinition):

    BOOL = 'bool'
    CHAR = 'char'
    STR = 'str'
    U8 = 'u8'
    U16 = 'u16'
    U32 = 'u32'
    U64 = 'u64'
    U128 = 'u128'
    U256 = 'u256'
    I8 = 'i8'
    I16 = 'i16'
    I32 = 'i32'
    I64 = 'i64'
    I128 = 'i128'
    I256 = 'i256'

    # Ordered as encoded in scale-info
    ALL = [BOOL, CHAR, STR, U8, U16, U32, U64, U128, U256, I8, I16, I32, I64, I128, I256]

    def __init__(self, primitive: str):
        if primitive not in self.ALL:
            raise ValueError(f'"{primitive}" is not a valid primitive')
        self.primitive = primitive

    def referenced_type_ids(self) -> List[int]:
        return []


class TypeDefCompact(TypeDefinition):

    def __init__(self, type_id: int):
        self.type_id = type_id

    def referenced_type_ids(self) -> List[int]:
        return [self.type_id]


class TypeDefVariant(TypeDefinition):

    def __init__(self, variants: List[Variant]):
        self.variants = variants

    @property
    def variant_names(self) -> List[str]:
        return [v.name for v in self.variants]

    def referenced_type_ids(self) -> List[int]:
        return [f.type_id for v in self.variants for f in v.fields]


class TypeDefArray(TypeDefinition):

    def __init__(self, type_id: int, length: int):
        self.type_id = type_id
        self.length = length

    def referenced_type_ids(self) -> List[int]:
        return [self.type_id]


class TypeDefSequence(TypeDefinition):

    def __init__(self, type_id: int):
        self.type_id = type_id

    def referenced_type_ids(self) -> List[int]:
        return [self.type_id]


class TypeDefBitSequence(TypeDefinition):

    def __init__(self, bit_store_type_id: int, bit_order_type_id: int):
        self.bit_store_type_id = bit_store_type_id
        self.bit_order_type_id = bit_order_type_id

    def referenced_type_ids(self) -> List[int]:
        return [self.bit_store_type_id, self.bit_order_type_id]


class TypeDefComposite(TypeDefinition):

    def __init__(self, fields: List[Field]):
        self.fields = fields

    def referenced_type_ids(self) -> List[int]:
        return [f.type_id for f in self.fields]


class TypeDefTuple(TypeDefinition):

    def __init__(self, type_ids: List[int]):
        self.type_ids = type_ids

    def referenced_type_ids(self) -> List[int]:
        return list(self.type_ids)


class RegistryType:
    """
    Entry of the portable registry: the definition of a type together with its path, type parameters and docs
    """

    def __init__(self, type_id: int, type_def: TypeDefinition, path: Optional[List[str]] = None,
                 params: Optional[List[TypeParameter]] = None, docs: Optional[List[str]] = None):
        self.type_id = type_id
        self.type_def = type_def
        self.path = path or []
        self.params = params or []
        self.docs = docs or []

    @property
    def qualified_name(self) -> str:
        return '::'.join(self.path)

    def __repr__(self):
        return f'<RegistryType({self.type_id}: {self.qualified_name or self.type_def.__class__.__name__})>'

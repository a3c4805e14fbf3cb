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
import logging
from typing import List, Optional

from .exceptions import ItemNotFound
from .scale.metadata import ExtrinsicMetadata, SignedExtensionMetadata
from .scale.registry import PortableRegistry
from .scale.types import TypeDefinition, TypeDefComposite, TypeDefTuple, TypeDefVariant, TypeDefArray

__all__ = ['SignedExtension', 'SigningExtensions', 'carries_payload', 'filter_signed_extensions']

logger = logging.getLogger(__name__)


def carries_payload(type_def: TypeDefinition) -> bool:
    """
    Returns False for definitions that encode to zero bytes: composites without fields, empty tuples, variants
    without variants and zero length arrays. Every other definition is considered to carry payload.
    """
    if type(type_def) is TypeDefComposite:
        return len(type_def.fields) > 0
    elif type(type_def) is TypeDefTuple:
        return len(type_def.type_ids) > 0
    elif type(type_def) is TypeDefVariant:
        return len(type_def.variants) > 0
    elif type(type_def) is TypeDefArray:
        return type_def.length > 0
    return True


class SignedExtension:

    def __init__(self, name: str, type_id: Optional[int] = None, additional: Optional[int] = None):
        self.name = name
        self.type_id = type_id
        self.additional = additional

    @classmethod
    def from_metadata(cls, extension: SignedExtensionMetadata,
                      registry: PortableRegistry) -> Optional['SignedExtension']:
        """
        Returns a SignedExtension with only the type ids that carry payload, or None when neither does
        """
        type_def = registry.get_type_def(extension.type_id)
        additional_def = registry.get_type_def(extension.additional_signed_type_id)

        type_id = extension.type_id if carries_payload(type_def) else None
        additional = extension.additional_signed_type_id if carries_payload(additional_def) else None

        if type_id is None and additional is None:
            return None

        return cls(name=extension.identifier, type_id=type_id, additional=additional)

    def serialize(self) -> dict:
        return {'name': self.name, 'type': self.type_id, 'additional': self.additional}

    def __repr__(self):
        return f'<SignedExtension({self.name})>'


class SigningExtensions:

    def __init__(self, version: int, extensions: List[SignedExtension]):
        self.version = version
        self.extensions = extensions

    def get_extension(self, name: str) -> SignedExtension:
        for extension in self.extensions:
            if extension.name == name:
                return extension
        raise ItemNotFound(f'Signed extension "{name}" not found')

    def serialize(self) -> dict:
        return {'type': self.version, 'extensions': [e.serialize() for e in self.extensions]}


def filter_signed_extensions(extrinsic: ExtrinsicMetadata, registry: PortableRegistry) -> SigningExtensions:
    extensions = []

    for signed_extension in extrinsic.signed_extensions:
        extension = SignedExtension.from_metadata(signed_extension, registry)
        if extension is None:
            logger.debug(f'Signed extension "{signed_extension.identifier}" carries no payload, omitted')
        else:
            extensions.append(extension)

    return SigningExtensions(version=extrinsic.version, extensions=extensions)

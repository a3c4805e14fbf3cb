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


class MetadataDecodeError(Exception):
    pass


class MalformedMetadata(MetadataDecodeError):

    def __init__(self, message, offset=None):
        self.offset = offset
        if offset is not None:
            message = f'{message} (at byte offset {offset})'
        super().__init__(message)


class UnsupportedVersion(MetadataDecodeError):

    def __init__(self, version: int):
        self.version = version
        super().__init__(f'Metadata version {version} not supported')


class UnresolvedTypeReference(MetadataDecodeError):

    def __init__(self, type_id: int):
        self.type_id = type_id
        super().__init__(f'Type {type_id} not found in portable registry')


class InvalidVariantShape(MetadataDecodeError):

    def __init__(self, section: str, type_id: int = None):
        self.section = section
        self.type_id = type_id
        if type_id is None:
            super().__init__(f'Metadata of "{section}" must be a Variant type')
        else:
            super().__init__(f'Metadata of "{section}" must be a Variant type (type {type_id})')


class CyclicType(MetadataDecodeError):

    def __init__(self, type_id: int):
        self.type_id = type_id
        super().__init__(f'Type {type_id} refers back to itself through single field wrappers')


class ItemNotFound(ValueError):
    pass

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
from typing import Iterator, List, Optional

from ..exceptions import UnresolvedTypeReference
from .types import RegistryType, TypeDefinition

__all__ = ['PortableRegistry']


class PortableRegistry:
    """
    Read-only lookup table of all types defined in one metadata instance, keyed by their type id
    """

    def __init__(self, types: List[RegistryType]):
        self.__types = {}
        self.__path_lookup = {}

        for registry_type in types:
            if registry_type.type_id in self.__types:
                raise ValueError(f'Duplicate type id {registry_type.type_id} in portable registry')
            self.__types[registry_type.type_id] = registry_type

            if registry_type.path:
                self.__path_lookup.setdefault(registry_type.qualified_name.lower(), []).append(registry_type.type_id)

    def __contains__(self, type_id: int) -> bool:
        return type_id in self.__types

    def __len__(self) -> int:
        return len(self.__types)

    def __iter__(self) -> Iterator[int]:
        return iter(self.__types)

    @property
    def type_ids(self) -> List[int]:
        return list(self.__types)

    def resolve(self, type_id: int) -> RegistryType:
        """
        Returns the registry entry for given type id

        Parameters
        ----------
        type_id

        Returns
        -------
        RegistryType
        """
        try:
            return self.__types[type_id]
        except KeyError:
            raise UnresolvedTypeReference(type_id)

    def get_type_def(self, type_id: int) -> TypeDefinition:
        return self.resolve(type_id).type_def

    def get_type_ids(self, path: str) -> List[int]:
        """
        Returns the ids of all types with given `::` joined path (case insensitive), in registry order. Generic types
        like `BoundedVec` share one path for each of their instantiations.
        """
        return list(self.__path_lookup.get(path.lower(), []))

    def get_type_id(self, path: str) -> Optional[int]:
        """
        Returns the id of the type with given `::` joined path (case insensitive), or None when no type has that path

        Raises
        ------
        ValueError: when more than one type shares the path, see `get_type_ids`
        """
        type_ids = self.get_type_ids(path)

        if len(type_ids) > 1:
            raise ValueError(f'Path "{path}" is ambiguous, it matches type ids {type_ids}')

        return type_ids[0] if type_ids else None

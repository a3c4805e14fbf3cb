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

from .base import *
from .exceptions import *
from .normalizer import ScaleType, ScaleTypeKind, ScaleField, ScaleVariant, normalize
from .pallets import Pallet, StorageItem, MapDef, Constant, Call, Event, Error
from .signing import SignedExtension, SigningExtensions
from .storage import StorageHasher, storage_key

__version__ = '1.0.0'

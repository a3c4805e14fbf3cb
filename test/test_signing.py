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

import unittest

from substratemetadata.exceptions import UnresolvedTypeReference, ItemNotFound
from substratemetadata.scale.metadata import ExtrinsicMetadata, SignedExtensionMetadata
from substratemetadata.scale.registry import PortableRegistry
from substratemetadata.scale.types import RegistryType, TypeDefPrimitive, TypeDefCompact, TypeDefVariant, \
    TypeDefArray, TypeDefSequence, TypeDefBitSequence, TypeDefComposite, TypeDefTuple, Field, Variant
from substratemetadata.signing import carries_payload, filter_signed_extensions, SignedExtension


class CarriesPayloadTestCase(unittest.TestCase):

    def test_empty_definitions(self):
        self.assertFalse(carries_payload(TypeDefComposite([])))
        self.assertFalse(carries_payload(TypeDefTuple([])))
        self.assertFalse(carries_payload(TypeDefVariant([])))
        self.assertFalse(carries_payload(TypeDefArray(0, 0)))

    def test_non_empty_definitions(self):
        self.assertTrue(carries_payload(TypeDefComposite([Field(0)])))
        self.assertTrue(carries_payload(TypeDefTuple([0])))
        self.assertTrue(carries_payload(TypeDefVariant([Variant(0, 'Immortal')])))
        self.assertTrue(carries_payload(TypeDefArray(0, 32)))

    def test_other_definitions(self):
        self.assertTrue(carries_payload(TypeDefPrimitive('u8')))
        self.assertTrue(carries_payload(TypeDefCompact(0)))
        self.assertTrue(carries_payload(TypeDefSequence(0)))
        self.assertTrue(carries_payload(TypeDefBitSequence(0, 0)))


class FilterSignedExtensionsTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.registry = PortableRegistry([
            RegistryType(0, TypeDefPrimitive('u32')),
            RegistryType(1, TypeDefTuple([])),
            RegistryType(2, TypeDefComposite([])),
            RegistryType(3, TypeDefArray(0, 0)),
            RegistryType(4, TypeDefVariant([])),
            RegistryType(5, TypeDefComposite([Field(6)])),
            RegistryType(6, TypeDefCompact(0)),
            RegistryType(7, TypeDefVariant([Variant(0, 'Immortal'), Variant(1, 'Mortal1', [Field(0)])])),
            RegistryType(8, TypeDefArray(0, 32)),
        ])

    def test_extension_without_payload_is_omitted(self):
        extrinsic = ExtrinsicMetadata(0, 4, [SignedExtensionMetadata('CheckNonZeroSender', 1, 2)])

        signing = filter_signed_extensions(extrinsic, self.registry)

        self.assertEqual([], signing.extensions)
        self.assertRaises(ItemNotFound, signing.get_extension, 'CheckNonZeroSender')

    def test_empty_array_and_variant_carry_no_payload(self):
        extrinsic = ExtrinsicMetadata(0, 4, [SignedExtensionMetadata('CheckEmpty', 3, 4)])

        self.assertEqual([], filter_signed_extensions(extrinsic, self.registry).extensions)

    def test_payload_presence(self):
        extrinsic = ExtrinsicMetadata(0, 4, [
            SignedExtensionMetadata('CheckSpecVersion', 2, 0),
            SignedExtensionMetadata('CheckNonZeroSender', 2, 1),
            SignedExtensionMetadata('CheckNonce', 5, 1),
            SignedExtensionMetadata('CheckMortality', 7, 8),
        ])

        signing = filter_signed_extensions(extrinsic, self.registry)

        self.assertEqual(4, signing.version)
        self.assertEqual(
            ['CheckSpecVersion', 'CheckNonce', 'CheckMortality'], [e.name for e in signing.extensions]
        )

        check_spec_version = signing.get_extension('CheckSpecVersion')
        self.assertIsNone(check_spec_version.type_id)
        self.assertEqual(0, check_spec_version.additional)

        check_nonce = signing.get_extension('CheckNonce')
        self.assertEqual(5, check_nonce.type_id)
        self.assertIsNone(check_nonce.additional)

        check_mortality = signing.get_extension('CheckMortality')
        self.assertEqual(7, check_mortality.type_id)
        self.assertEqual(8, check_mortality.additional)

    def test_serialize(self):
        extrinsic = ExtrinsicMetadata(0, 4, [
            SignedExtensionMetadata('CheckNonce', 5, 1),
            SignedExtensionMetadata('CheckWeight', 2, 2),
        ])

        self.assertEqual(
            {'type': 4, 'extensions': [{'name': 'CheckNonce', 'type': 5, 'additional': None}]},
            filter_signed_extensions(extrinsic, self.registry).serialize()
        )

    def test_unresolved_type(self):
        extension = SignedExtensionMetadata('CheckUnknown', 0, 100)

        with self.assertRaises(UnresolvedTypeReference):
            SignedExtension.from_metadata(extension, self.registry)


if __name__ == '__main__':
    unittest.main()

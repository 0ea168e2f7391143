import json
import unittest

from rsakit import parse, construct, KeyKind, MarshalError
from rsakit.IO.KeyPair import keypair_files, key_file_name
from tests.keydata import (TOY_N, TOY_E, TOY_D, TOY_P, TOY_Q,
                           TOY_PRIVATE_DER, TOY_PUBLIC_DER)


class KeyPairTests(unittest.TestCase):
    def setUp(self) -> None:
        self.key = construct(TOY_N, TOY_E, TOY_D, TOY_P, TOY_Q)

    def test_file_names(self) -> None:
        self.assertEqual(key_file_name('id_rsa', 'pem'), 'id_rsa')
        self.assertEqual(key_file_name('id_rsa', 'DER'), 'id_rsa.der')
        self.assertEqual(key_file_name('id_rsa.pub', 'jwk'), 'id_rsa.pub.json')

    def test_der(self) -> None:
        private, public = keypair_files(self.key, 'der')
        self.assertEqual(private, ('id_rsa.der', TOY_PRIVATE_DER, 0o600))
        self.assertEqual(public, ('id_rsa.pub.der', TOY_PUBLIC_DER, 0o644))

    def test_pem(self) -> None:
        private, public = keypair_files(self.key)
        self.assertEqual((private.name, public.name), ('id_rsa', 'id_rsa.pub'))
        self.assertIs(parse(private.data).kind, KeyKind.PRIVATE)
        self.assertEqual(parse(public.data), self.key.public_key())

    def test_jwk(self) -> None:
        private, public = keypair_files(self.key, 'JWK', kid='toy')
        self.assertEqual(json.loads(private.data)['kid'], 'toy')
        self.assertNotIn('d', json.loads(public.data))

    def test_public_key(self) -> None:
        self.assertRaises(ValueError, keypair_files, self.key.public_key())

    def test_unknown_format(self) -> None:
        self.assertRaises(MarshalError, keypair_files, self.key, 'ssh')


if __name__ == '__main__':
    unittest.main()

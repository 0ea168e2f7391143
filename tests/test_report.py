import unittest

from Cryptodome.PublicKey import RSA as CryptodomeRSA

from rsakit import parse, construct, report
from tests.keydata import TOY_N, TOY_E, TOY_D, TOY_P, TOY_Q


class ReportTests(unittest.TestCase):
    def test_public(self) -> None:
        self.assertEqual(report(construct(TOY_N, TOY_E)),
                         "Key Type: RSA PUBLIC KEY\n"
                         "Key Size: 12 bits\n"
                         "Public Exponent (e): 17\n"
                         "Modulus (n): 3233\n")

    def test_private(self) -> None:
        key = construct(TOY_N, TOY_E, TOY_D, TOY_P, TOY_Q)
        self.assertEqual(key.report().splitlines(), [
            "Key Type: RSA PRIVATE KEY",
            "Key Size: 12 bits (2 bytes)",
            "Public Exponent (e): 17",
            "Private Exponent (d): 2753",
            "Modulus (n): 3233 (12 bits)",
            "",
            "Primes: p x q = n",
            "p (6 bits): 61",
            "q (6 bits): 53",
            "",
            "CRT Values",
            "dp = d mod (p-1): 53",
            "dq = d mod (q-1): 49",
            "qi = q ^ -1 mod p: 38",
        ])

    def test_key_size_of_2048_bit_pem(self) -> None:
        pem = CryptodomeRSA.generate(2048).export_key('PEM')
        text = report(parse(pem))
        self.assertIn("Key Size: 2048 bits", text.splitlines()[1])
        self.assertIn("(256 bytes)", text)


if __name__ == '__main__':
    unittest.main()

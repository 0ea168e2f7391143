import unittest

from rsakit.Util import bigint


class IntegerCodecTests(unittest.TestCase):
    def test_encode_is_minimal(self) -> None:
        self.assertEqual(bigint.encode(1), b"\x01")
        self.assertEqual(bigint.encode(255), b"\xff")
        self.assertEqual(bigint.encode(256), b"\x01\x00")
        self.assertEqual(bigint.encode(65537), b"\x01\x00\x01")

    def test_zero_encodes_to_empty(self) -> None:
        self.assertEqual(bigint.encode(0), b"")
        self.assertEqual(bigint.decode(b""), 0)

    def test_encode_negative(self) -> None:
        self.assertRaises(ValueError, bigint.encode, -1)

    def test_decode_accepts_leading_zeros(self) -> None:
        self.assertEqual(bigint.decode(b"\x00\x00\x01\x00"), 256)

    def test_large_value(self) -> None:
        value = 2**2048 - 159
        encoded = bigint.encode(value)
        self.assertEqual(len(encoded), 256)
        self.assertEqual(bigint.decode(encoded), value)


class Base64UrlTests(unittest.TestCase):
    def test_no_padding(self) -> None:
        self.assertEqual(bigint.bytes_to_base64url(b"\x03"), "Aw")
        self.assertEqual(bigint.bytes_to_base64url(b"\x01\x00\x01"), "AQAB")
        self.assertEqual(bigint.bytes_to_base64url(b""), "")

    def test_url_safe_alphabet(self) -> None:
        self.assertEqual(bigint.bytes_to_base64url(b"\xfb\xff"), "-_8")
        self.assertEqual(bigint.base64url_to_bytes("-_8"), b"\xfb\xff")

    def test_empty(self) -> None:
        self.assertEqual(bigint.base64url_to_bytes(""), b"")

    def test_accepts_bytes(self) -> None:
        self.assertEqual(bigint.base64url_to_bytes(b"AQAB"), b"\x01\x00\x01")

    def test_rejects_standard_alphabet(self) -> None:
        for text in ("+_8", "-/8", "Aw==", "AQAB="):
            self.assertRaises(ValueError, bigint.base64url_to_bytes, text)

    def test_rejects_other_characters(self) -> None:
        for text in ("AQ AB", "AQAB\n", "AQ.B", "éA"):
            self.assertRaises(ValueError, bigint.base64url_to_bytes, text)

    def test_rejects_impossible_length(self) -> None:
        self.assertRaises(ValueError, bigint.base64url_to_bytes, "A")
        self.assertRaises(ValueError, bigint.base64url_to_bytes, "AQABA")

    def test_exponent_three(self) -> None:
        self.assertEqual(bigint.base64url_to_int("Aw"), 3)
        self.assertEqual(bigint.int_to_base64url(3), "Aw")

    def test_round_trip_lengths(self) -> None:
        for length in range(0, 9):
            data = bytes(range(250, 250 - length, -1))
            text = bigint.bytes_to_base64url(data)
            self.assertNotIn("=", text)
            self.assertEqual(bigint.base64url_to_bytes(text), data)


if __name__ == '__main__':
    unittest.main()

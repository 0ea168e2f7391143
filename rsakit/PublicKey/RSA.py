# -*- coding: utf-8 -*-
# ===================================================================
#
# Copyright (c) 2016, Legrandin <helderijs@gmail.com>
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in
#    the documentation and/or other materials provided with the
#    distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
# ===================================================================


__all__ = ['construct', 'import_key', 'parse', 'marshal', 'validate',
           'derive_precomputed', 'from_generated',
           'RsaKey', 'KeyKind', 'KeyFormat', 'DEFAULT_FORMAT']

import logging
import re
from enum import Enum

from Cryptodome.IO import PEM
from Cryptodome.Math.Numbers import Integer
from Cryptodome.Util.asn1 import DerSequence
from Cryptodome.Util.py3compat import tobytes

from rsakit.errors import ParseError, InvalidKeyError, MarshalError

logger = logging.getLogger(__name__)


class KeyKind(Enum):
    """Whether a key holds only the public half or the full private key.

    The value is the PEM label of the matching PKCS#1 structure.
    """

    PUBLIC = 'RSA PUBLIC KEY'
    PRIVATE = 'RSA PRIVATE KEY'


class KeyFormat(Enum):
    """Serialization formats supported by :meth:`RsaKey.export_key`."""

    PEM = 'PEM'
    DER = 'DER'
    JWK = 'JWK'

    @classmethod
    def from_tag(cls, tag):
        """Canonical format for ``tag`` (a :class:`KeyFormat` or a string,
        case-insensitive).

        :raises MarshalError: if the tag names no supported format
        """

        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().upper())
        except ValueError:
            raise MarshalError("Unknown key format '%s'" % (tag,)) from None


DEFAULT_FORMAT = KeyFormat.PEM

_PUBLIC_COMPONENTS = ('n', 'e')
_PRIVATE_COMPONENTS = ('n', 'e', 'd', 'p', 'q', 'dp', 'dq', 'qi')

# Errors Cryptodome.Util.asn1 raises on malformed DER
_DER_ERRORS = (ValueError, IndexError, TypeError)

_PEM_BLOCK = re.compile(br'-----BEGIN ([^\r\n]*?)-----.*?-----END \1-----',
                        re.DOTALL)


class RsaKey(object):
    r"""Class defining an RSA key, private or public.
    Do not instantiate directly.
    Use :func:`construct` or :func:`import_key` instead.

    Keys are immutable: every component is exposed through a read-only
    property, and the PKCS#1 encoding is computed once, when the key is
    built.

    :ivar kind: :class:`KeyKind` of the key
    :vartype kind: KeyKind

    :ivar n: RSA modulus
    :vartype n: integer

    :ivar e: RSA public exponent
    :vartype e: integer

    :ivar d: RSA private exponent
    :vartype d: integer

    :ivar p: First factor of the RSA modulus
    :vartype p: integer

    :ivar q: Second factor of the RSA modulus
    :vartype q: integer

    :ivar dp: CRT exponent (:math:`d \text{ mod } (p-1)`)
    :vartype dp: integer

    :ivar dq: CRT exponent (:math:`d \text{ mod } (q-1)`)
    :vartype dq: integer

    :ivar qi: CRT coefficient (:math:`q^{-1} \text{mod } p`)
    :vartype qi: integer

    :ivar raw_pkcs1: PKCS#1 ``RSAPublicKey`` or ``RSAPrivateKey`` DER encoding
    :vartype raw_pkcs1: bytes
    """

    def __init__(self, **kwargs):
        """Build an RSA key.

        :Keywords:
          n : integer
            The modulus.
          e : integer
            The public exponent.
          d : integer
            The private exponent. Only required for private keys.
          p : integer
            The first factor of the modulus. Only required for private keys.
          q : integer
            The second factor of the modulus. Only required for private keys.
          dp, dq, qi : integer
            The CRT components. Only required for private keys.
        """

        input_set = set(kwargs.keys())
        public_set = set(_PUBLIC_COMPONENTS)
        private_set = set(_PRIVATE_COMPONENTS)
        if input_set not in (private_set, public_set):
            raise ValueError("Some RSA components are missing")
        for component, value in kwargs.items():
            setattr(self, "_" + component, int(value))
        if input_set == private_set:
            self._kind = KeyKind.PRIVATE
            binary_key = DerSequence([0,
                                      self._n,
                                      self._e,
                                      self._d,
                                      self._p,
                                      self._q,
                                      self._dp,
                                      self._dq,
                                      self._qi
                                      ])
        else:
            self._kind = KeyKind.PUBLIC
            binary_key = DerSequence([self._n, self._e])
        self._raw_pkcs1 = binary_key.encode()

    @property
    def kind(self):
        return self._kind

    @property
    def n(self):
        return self._n

    @property
    def e(self):
        return self._e

    @property
    def d(self):
        if not self.has_private():
            raise AttributeError("No private exponent available for public keys")
        return self._d

    @property
    def p(self):
        if not self.has_private():
            raise AttributeError("No CRT component 'p' available for public keys")
        return self._p

    @property
    def q(self):
        if not self.has_private():
            raise AttributeError("No CRT component 'q' available for public keys")
        return self._q

    @property
    def dp(self):
        if not self.has_private():
            raise AttributeError("No CRT component 'dp' available for public keys")
        return self._dp

    @property
    def dq(self):
        if not self.has_private():
            raise AttributeError("No CRT component 'dq' available for public keys")
        return self._dq

    @property
    def qi(self):
        if not self.has_private():
            raise AttributeError("No CRT component 'qi' available for public keys")
        return self._qi

    @property
    def raw_pkcs1(self):
        return self._raw_pkcs1

    def size_in_bits(self):
        """Size of the RSA modulus in bits"""
        return self._n.bit_length()

    def size_in_bytes(self):
        """The minimal amount of bytes that can hold the RSA modulus"""
        return (self.size_in_bits() - 1) // 8 + 1

    def has_private(self):
        """Whether this is an RSA private key"""

        return self._kind is KeyKind.PRIVATE

    def public_key(self):
        """A matching RSA public key.

        Returns:
            a new :class:`RsaKey` object
        """
        return RsaKey(n=self._n, e=self._e)

    def validate(self):
        """Check the mathematical consistency of the key.

        :raises InvalidKeyError: on the first failing check
        """
        validate(self)

    def report(self):
        """Human readable description of the key, one value per line."""

        from rsakit.PublicKey._report import report
        return report(self)

    def __eq__(self, other):
        if not isinstance(other, RsaKey):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.n != other.n or self.e != other.e:
            return False
        if not self.has_private():
            return True
        return (self.d, self.p, self.q) == (other.d, other.p, other.q)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __getstate__(self):
        # RSA key is not pickable
        from pickle import PicklingError
        raise PicklingError

    def __repr__(self):
        if self.has_private():
            extra = ", d=%d, p=%d, q=%d" % (self._d, self._p, self._q)
        else:
            extra = ""
        return "RsaKey(n=%d, e=%d%s)" % (self._n, self._e, extra)

    def __str__(self):
        if self.has_private():
            key_type = "Private"
        else:
            key_type = "Public"
        return "%s RSA key at 0x%X" % (key_type, id(self))

    def export_key(self, format=DEFAULT_FORMAT, **jwk_params):
        """Export this RSA key.

        Keyword Args:
          format (string or :class:`KeyFormat`):
            The desired output format, case-insensitive:

            - ``'PEM'``. (default) Text output, according to `RFC1421`_.
              The label is ``RSA PRIVATE KEY`` or ``RSA PUBLIC KEY``.
            - ``'DER'``. Binary output, the bare `PKCS#1`_ structure.
            - ``'JWK'``. UTF-8 JSON output, according to `RFC7517`_.

            Note that PEM contains a DER structure.

          alg, kid, use (string):
            (*JWK only*) Optional JWK members added after the key material.

          indent (string, integer or ``None``):
            (*JWK only*) Indentation of the JSON output. The default is a
            tab; ``None`` gives compact output.

        Returns:
          bytes: the encoded key

        Raises:
          MarshalError: when the format is unknown, or when JWK parameters
            are given for another format.

        .. _RFC1421:    http://www.ietf.org/rfc/rfc1421.txt
        .. _RFC7517:    http://www.ietf.org/rfc/rfc7517.txt
        .. _`PKCS#1`:   http://www.ietf.org/rfc/rfc3447.txt
        """

        key_format = KeyFormat.from_tag(format)

        if jwk_params and key_format is not KeyFormat.JWK:
            raise MarshalError("JWK parameters %s cannot be used with %s output"
                               % (", ".join(sorted(jwk_params)), key_format.value))

        if key_format is KeyFormat.DER:
            return self._raw_pkcs1
        if key_format is KeyFormat.PEM:
            pem_str = PEM.encode(self._raw_pkcs1, self._kind.value)
            return tobytes(pem_str) + b'\n'
        if key_format is KeyFormat.JWK:
            from rsakit.IO import JWK
            return JWK.dumps(self, **jwk_params)

        raise MarshalError("Unknown key format '%s'. Cannot export the RSA key." % format)


def _check_components(n, e, d=None, p=None, q=None):
    if n <= 0:
        raise InvalidKeyError('n', "the modulus must be positive")
    if e <= 0:
        raise InvalidKeyError('e', "the public exponent must be positive")
    if d is None:
        return
    if p <= 1 or q <= 1:
        raise InvalidKeyError('primes', "p and q must be greater than 1")
    if p * q != n:
        raise InvalidKeyError('modulus', "p * q does not equal n")
    lcm = int(Integer(p - 1).lcm(q - 1))
    if d <= 0 or (d * e) % lcm != 1:
        raise InvalidKeyError('private_exponent',
                              "d is not the inverse of e modulo lcm(p-1, q-1)")


def _check_precomputed(d, p, q, dp, dq, qi):
    if (dp - d) % (p - 1):
        raise InvalidKeyError('dp', "dp is not congruent to d modulo p-1")
    if (dq - d) % (q - 1):
        raise InvalidKeyError('dq', "dq is not congruent to d modulo q-1")
    if (q * qi) % p != 1:
        raise InvalidKeyError('qi', "qi is not the inverse of q modulo p")


def validate(key):
    """Check that ``key`` is a consistent RSA key.

    The checks run in this order and stop at the first failure:
    positivity of ``n`` and ``e``; for private keys, ``p, q > 1``,
    ``p * q == n``, ``d * e == 1 mod lcm(p-1, q-1)``, and the three CRT
    values.

    :raises InvalidKeyError: naming the failed check
    """

    if key.has_private():
        _check_components(key.n, key.e, key.d, key.p, key.q)
        _check_precomputed(key.d, key.p, key.q, key.dp, key.dq, key.qi)
    else:
        _check_components(key.n, key.e)


def derive_precomputed(d, p, q):
    """Compute the CRT values ``(dp, dq, qi)`` of a private key."""

    if p <= 1 or q <= 1:
        raise InvalidKeyError('primes', "p and q must be greater than 1")
    try:
        qi = int(Integer(q).inverse(p))
    except ValueError:
        raise InvalidKeyError('qi', "q has no inverse modulo p") from None
    return d % (p - 1), d % (q - 1), qi


def construct(n, e, d=None, p=None, q=None, dp=None, dq=None, qi=None,
              consistency_check=True):
    r"""Construct an RSA key from its components.

    A public key is built from ``n`` and ``e`` alone. A private key needs
    ``d``, ``p`` and ``q`` as well; the CRT values are always derived from
    them. Any CRT value passed in is only checked against ``d``, ``p`` and
    ``q``, it never replaces the derived one.

    Args:
      n, e, d, p, q, dp, dq, qi (integer):
        The key components.
      consistency_check (boolean):
        If ``True``, the key is validated before being returned.

    Returns: an :class:`RsaKey` object.

    Raises:
      ValueError: when only part of the private components is given.
      InvalidKeyError: when the key is not consistent.
    """

    crt = (dp, dq, qi)
    given = [x is not None for x in (d, p, q)]
    if not any(given):
        if any(x is not None for x in crt):
            raise ValueError("CRT components given for a public key")
        n, e = int(n), int(e)
        if consistency_check:
            _check_components(n, e)
        return RsaKey(n=n, e=e)
    if not all(given):
        raise ValueError("Some RSA components are missing")

    n, e, d, p, q = [int(x) for x in (n, e, d, p, q)]
    if consistency_check:
        _check_components(n, e, d, p, q)
    derived = derive_precomputed(d, p, q)
    if consistency_check:
        supplied = [derived[i] if x is None else int(x)
                    for i, x in enumerate(crt)]
        _check_precomputed(d, p, q, *supplied)
    return RsaKey(n=n, e=e, d=d, p=p, q=q,
                  dp=derived[0], dq=derived[1], qi=derived[2])


def from_generated(key):
    """Convert a key produced by :func:`Cryptodome.PublicKey.RSA.generate`
    (or anything exposing the same attributes) into an :class:`RsaKey`.
    """

    if key.has_private():
        return construct(key.n, key.e, key.d, key.p, key.q)
    return construct(key.n, key.e)


def _decode_pkcs1_private(encoded):
    # RSAPrivateKey ::= SEQUENCE {
    #          version Version,
    #          modulus INTEGER, -- n
    #          publicExponent INTEGER, -- e
    #          privateExponent INTEGER, -- d
    #          prime1 INTEGER, -- p
    #          prime2 INTEGER, -- q
    #          exponent1 INTEGER, -- d mod (p-1)
    #          exponent2 INTEGER, -- d mod (q-1)
    #          coefficient INTEGER -- (inverse of q) mod p
    # }
    #
    # Version ::= INTEGER
    der = DerSequence().decode(encoded, strict=True, nr_elements=9,
                               only_ints_expected=True)
    if der[0] != 0:
        raise ValueError("No PKCS#1 encoding of a two-prime RSA private key")
    return [der[i] for i in range(1, 9)]


def _decode_pkcs1_public(encoded):
    # RSAPublicKey ::= SEQUENCE {
    #           modulus INTEGER, -- n
    #           publicExponent INTEGER -- e
    # }
    der = DerSequence().decode(encoded, strict=True, nr_elements=2,
                               only_ints_expected=True)
    return [der[0], der[1]]


def _import_pem(block, label):
    if label == KeyKind.PRIVATE.value:
        decoder = _decode_pkcs1_private
    elif label == KeyKind.PUBLIC.value:
        decoder = _decode_pkcs1_public
    else:
        raise ParseError("Unsupported PEM block type: %s" % label, stage='pem')

    try:
        der, marker, enc_flag = PEM.decode(block.decode('ascii'))
    except ValueError as exc:
        raise ParseError("Invalid PEM block: %s" % exc, stage='pem') from exc

    try:
        components = decoder(der)
    except _DER_ERRORS as exc:
        raise ParseError("Invalid PKCS#1 structure in %s block: %s"
                         % (marker, exc), stage='pem') from exc
    logger.debug("Decoded a %s PEM block", marker)
    return construct(*components)


def import_key(extern_key):
    """Import an RSA key (public or private).

    Args:
      extern_key (string or byte string):
        The RSA key to import.

        The following formats are supported, and tried in this order:

        - PEM armor with label ``RSA PRIVATE KEY`` or ``RSA PUBLIC KEY``
          around a `PKCS#1`_ structure. Any other label is an error.
        - JSON Web Key (`RFC7517`_), when the data is a JSON object.
        - `PKCS#1`_ ``RSAPrivateKey`` DER encoding.
        - `PKCS#1`_ ``RSAPublicKey`` DER encoding.

    Returns: An RSA key object (:class:`RsaKey`), already validated.

    Raises:
      ParseError: when the given key cannot be parsed.
      InvalidKeyError: when the key parses but is not a consistent RSA key.

    .. _RFC7517:   http://www.ietf.org/rfc/rfc7517.txt
    .. _`PKCS#1`:  http://www.ietf.org/rfc/rfc3447.txt
    """

    if isinstance(extern_key, str):
        extern_key = extern_key.encode('utf-8')
    extern_key = bytes(extern_key)

    if not extern_key:
        raise ParseError("No key data: the input is empty")

    match = _PEM_BLOCK.search(extern_key)
    if match:
        label = match.group(1).decode('ascii', 'replace')
        return _import_pem(match.group(0), label)

    if extern_key.lstrip()[:1] == b'{':
        from rsakit.IO import JWK
        return JWK.loads(extern_key)

    attempts = []

    try:
        components = _decode_pkcs1_private(extern_key)
    except _DER_ERRORS as exc:
        attempts.append(('der', "PKCS#1 private key: %s" % exc))
    else:
        logger.debug("Decoded a PKCS#1 DER private key")
        return construct(*components)

    try:
        components = _decode_pkcs1_public(extern_key)
    except _DER_ERRORS as exc:
        attempts.append(('der', "PKCS#1 public key: %s" % exc))
    else:
        logger.debug("Decoded a PKCS#1 DER public key")
        return construct(*components)

    logger.debug("Input of %d bytes matched no key format", len(extern_key))
    raise ParseError("Unrecognized key format (not PEM, JWK or PKCS#1 DER): %s"
                     % "; ".join(msg for _, msg in attempts),
                     stage='der', attempts=attempts)


# Alias
parse = import_key


def marshal(key, format=DEFAULT_FORMAT, **jwk_params):
    """Serialize ``key`` in ``format``; see :meth:`RsaKey.export_key`."""

    return key.export_key(format, **jwk_params)

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


"""JSON Web Key (`RFC7517`_, `RFC7518`_) encoding of RSA keys.

Every integer member is the base64url text, without padding, of the
minimal big-endian magnitude of the value. The members written depend only
on the kind of the key:

- public key: ``kty``, ``n``, ``e``
- private key: ``kty``, ``n``, ``e``, ``d``, ``p``, ``q``, ``dp``, ``dq``, ``qi``

The optional ``alg``, ``kid`` and ``use`` members follow the key material
when they are given.

.. _RFC7517: http://www.ietf.org/rfc/rfc7517.txt
.. _RFC7518: http://www.ietf.org/rfc/rfc7518.txt
"""

__all__ = ['encode', 'decode', 'dumps', 'loads', 'DEFAULT_INDENT']

import json
import logging

from rsakit.errors import ParseError, MarshalError
from rsakit.PublicKey.RSA import KeyKind, construct
from rsakit.Util import bigint

logger = logging.getLogger(__name__)

KEY_TYPE = 'RSA'

DEFAULT_INDENT = '\t'

_MEMBERS = {
    KeyKind.PUBLIC: ('n', 'e'),
    KeyKind.PRIVATE: ('n', 'e', 'd', 'p', 'q', 'dp', 'dq', 'qi'),
}


def encode(key, alg=None, kid=None, use=None):
    """Ordered JWK members of ``key``, as a ``dict`` of strings.

    :raises MarshalError: if the key kind is unknown or a component
      expected for it is missing
    """

    try:
        members = _MEMBERS[key.kind]
    except KeyError:
        raise MarshalError("Unsupported key kind: %r" % (key.kind,)) from None

    jwk = {'kty': KEY_TYPE}
    for name in members:
        try:
            value = getattr(key, name)
        except AttributeError as exc:
            raise MarshalError("%s without component '%s'"
                               % (key.kind.value, name)) from exc
        jwk[name] = bigint.int_to_base64url(value)

    for name, value in (('alg', alg), ('kid', kid), ('use', use)):
        if value is not None:
            jwk[name] = value
    return jwk


def dumps(key, indent=DEFAULT_INDENT, **params):
    """UTF-8 JSON text of :func:`encode`.

    ``indent`` is passed to :func:`json.dumps`; with ``None`` the output is
    compact, without any whitespace.
    """

    jwk = encode(key, **params)
    if indent is None:
        text = json.dumps(jwk, separators=(',', ':'))
    else:
        text = json.dumps(jwk, indent=indent)
    return text.encode('utf-8')


def _member_to_int(jwk, name):
    value = jwk[name]
    if not isinstance(value, str):
        raise ParseError("JWK member '%s' must be a string" % name, stage='jwk')
    try:
        return bigint.base64url_to_int(value)
    except ValueError as exc:
        raise ParseError("JWK member '%s' is not valid base64url: %s"
                         % (name, exc), stage='jwk') from exc


def decode(jwk):
    """Build an :class:`RsaKey` from a parsed JWK object.

    A JWK holding ``d`` is a private key and must also hold ``p`` and
    ``q``. The CRT members are optional: missing ones are derived, present
    ones are checked.

    :raises ParseError: when the object is not an RSA JWK
    :raises InvalidKeyError: when the key is not consistent
    """

    if not isinstance(jwk, dict):
        raise ParseError("A JWK must be a JSON object", stage='jwk')
    if jwk.get('kty') != KEY_TYPE:
        raise ParseError("Unsupported JWK key type: %r" % (jwk.get('kty'),),
                         stage='jwk')
    if 'oth' in jwk:
        raise ParseError("Multi-prime RSA JWKs are not supported", stage='jwk')

    if 'd' in jwk:
        kind = KeyKind.PRIVATE
        required = ('n', 'e', 'd', 'p', 'q')
    else:
        kind = KeyKind.PUBLIC
        required = _MEMBERS[KeyKind.PUBLIC]
    for name in required:
        if name not in jwk:
            raise ParseError("JWK for %s is missing member '%s'"
                             % (kind.value, name), stage='jwk')

    components = {}
    for name in _MEMBERS[kind]:
        if name in jwk:
            components[name] = _member_to_int(jwk, name)

    logger.debug("Decoded a JWK %s", kind.value)
    return construct(**components)


def loads(data):
    """Parse JWK JSON text (``str`` or UTF-8 ``bytes``) into an :class:`RsaKey`."""

    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode('utf-8')
        except UnicodeDecodeError as exc:
            raise ParseError("JWK text is not valid UTF-8", stage='jwk') from exc
    try:
        jwk = json.loads(data)
    except ValueError as exc:
        raise ParseError("Invalid JWK JSON: %s" % exc, stage='jwk') from exc
    return decode(jwk)

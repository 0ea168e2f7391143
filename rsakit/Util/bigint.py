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


"""Conversions between integers, big-endian byte strings and base64url text.

Integers are treated as unsigned magnitudes. The byte form is the minimal
big-endian encoding; by convention zero encodes to the empty byte string,
which is what JWK expects for an absent magnitude and never occurs for real
RSA parameters.

The text form is the URL-safe base64 alphabet of RFC 4648 section 5 with the
``=`` padding removed, as required by RFC 7518 section 6.3 for RSA members.
"""

__all__ = ['encode', 'decode',
           'bytes_to_base64url', 'base64url_to_bytes',
           'int_to_base64url', 'base64url_to_int']

import base64
import binascii
import re

from Cryptodome.Util.number import long_to_bytes, bytes_to_long
from Cryptodome.Util.py3compat import tobytes, tostr

_B64URL_CHARS = re.compile(r'[A-Za-z0-9_-]*\Z')


def encode(value):
    """Minimal big-endian unsigned encoding of ``value``.

    :param value: a non-negative integer
    :return: ``bytes``, empty when ``value`` is 0
    :raises ValueError: if ``value`` is negative
    """

    value = int(value)
    if value < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if value == 0:
        return b''
    return long_to_bytes(value)


def decode(data):
    """Interpret ``data`` as an unsigned big-endian magnitude.

    Leading zero bytes are accepted. An empty string decodes to 0.
    """

    return bytes_to_long(bytes(data))


def bytes_to_base64url(data):
    """Unpadded base64url text of ``data`` (a ``str``)."""

    return tostr(base64.urlsafe_b64encode(bytes(data)).rstrip(b'='))


def base64url_to_bytes(text):
    """Decode unpadded base64url ``text`` (``str`` or ASCII ``bytes``).

    :raises ValueError: if the text holds padding, characters of the
      standard alphabet (``+``, ``/``) or anything else outside the
      URL-safe alphabet, or has a length no encoder can produce.
    """

    if isinstance(text, bytes):
        try:
            text = text.decode('ascii')
        except UnicodeDecodeError:
            raise ValueError("base64url text must be ASCII") from None
    if not _B64URL_CHARS.match(text):
        raise ValueError("Invalid character in base64url text")
    if len(text) % 4 == 1:
        raise ValueError("Invalid base64url length: %d" % len(text))
    padded = text + '=' * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(tobytes(padded))
    except binascii.Error as exc:
        raise ValueError("Invalid base64url text: %s" % exc) from exc


def int_to_base64url(value):
    return bytes_to_base64url(encode(value))


def base64url_to_int(text):
    return decode(base64url_to_bytes(text))

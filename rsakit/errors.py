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


"""Exceptions raised while reading, checking or writing RSA keys.

All of them derive from :class:`ValueError`, so callers that already
handle bad key material the way :mod:`Cryptodome` reports it keep working.
"""

__all__ = ['KeyFormatError', 'ParseError', 'InvalidKeyError', 'MarshalError']


class KeyFormatError(ValueError):
    """Base class of all errors raised by this package."""


class ParseError(KeyFormatError):
    """The input bytes could not be turned into an RSA key.

    :ivar stage: which decoder failed (``'pem'``, ``'jwk'``, ``'der'``,
      ``'validate'``), or ``None``
    :ivar attempts: for unrecognized input, the list of
      ``(stage, message)`` pairs that were tried
    """

    def __init__(self, message, stage=None, attempts=None):
        super(ParseError, self).__init__(message)
        self.stage = stage
        self.attempts = list(attempts or [])


class InvalidKeyError(ParseError):
    """The key components are well formed but mathematically inconsistent.

    :ivar check: name of the first check that failed
      (``'n'``, ``'e'``, ``'primes'``, ``'modulus'``,
      ``'private_exponent'``, ``'dp'``, ``'dq'``, ``'qi'``)
    :ivar reason: human readable description
    """

    def __init__(self, check, reason):
        super(InvalidKeyError, self).__init__("Invalid RSA key (%s): %s"
                                              % (check, reason),
                                              stage='validate')
        self.check = check
        self.reason = reason


class MarshalError(KeyFormatError):
    """A key cannot be serialized as requested."""

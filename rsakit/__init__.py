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


"""RSA key format conversion and inspection.

Keys are read from PEM, PKCS#1 DER or JWK data with :func:`parse`, and
written back in any of those formats with :func:`marshal`::

    >>> from rsakit import parse, marshal, report
    >>> key = parse(open('id_rsa', 'rb').read())
    >>> print(report(key))
    >>> jwk = marshal(key, 'jwk')
"""

__all__ = ['parse', 'import_key', 'marshal', 'report', 'construct',
           'validate', 'derive_precomputed', 'from_generated',
           'RsaKey', 'KeyKind', 'KeyFormat',
           'KeyFormatError', 'ParseError', 'InvalidKeyError', 'MarshalError']

from rsakit.errors import (KeyFormatError, ParseError, InvalidKeyError,
                           MarshalError)
from rsakit.PublicKey.RSA import (RsaKey, KeyKind, KeyFormat, construct,
                                  validate, derive_precomputed, from_generated,
                                  import_key, parse, marshal)
from rsakit.PublicKey._report import report

version_info = (1, 0, 0)

__version__ = "%d.%d.%d" % version_info

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


__all__ = ['report']

from rsakit.PublicKey.RSA import KeyKind


def report(key):
    """Describe ``key`` in a few human readable lines.

    Values are printed in decimal. Nothing is checked here: the key is
    expected to have been validated when it was imported.
    """

    bits = key.size_in_bits()
    lines = ["Key Type: %s" % key.kind.value]

    if key.kind is KeyKind.PUBLIC:
        lines += [
            "Key Size: %d bits" % bits,
            "Public Exponent (e): %d" % key.e,
            "Modulus (n): %d" % key.n,
        ]
    elif key.kind is KeyKind.PRIVATE:
        lines += [
            "Key Size: %d bits (%d bytes)" % (bits, key.size_in_bytes()),
            "Public Exponent (e): %d" % key.e,
            "Private Exponent (d): %d" % key.d,
            "Modulus (n): %d (%d bits)" % (key.n, bits),
            "",
            "Primes: p x q = n",
            "p (%d bits): %d" % (key.p.bit_length(), key.p),
            "q (%d bits): %d" % (key.q.bit_length(), key.q),
            "",
            "CRT Values",
            "dp = d mod (p-1): %d" % key.dp,
            "dq = d mod (q-1): %d" % key.dq,
            "qi = q ^ -1 mod p: %d" % key.qi,
        ]
    else:
        raise ValueError("Unknown key kind: %r" % (key.kind,))

    return "\n".join(lines) + "\n"

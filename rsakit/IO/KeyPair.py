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


"""File names and contents for a freshly generated key pair.

A private key is stored as ``id_rsa`` and its public half as
``id_rsa.pub``. DER and JWK output add a ``.der`` or ``.json`` suffix.
The private file is meant to be readable by its owner only.

Nothing here touches the file system: the caller writes each
:class:`KeyFile` wherever it wants.
"""

__all__ = ['KeyFile', 'key_file_name', 'keypair_files']

import logging
from collections import namedtuple

from rsakit.PublicKey.RSA import KeyFormat, DEFAULT_FORMAT

logger = logging.getLogger(__name__)

KeyFile = namedtuple('KeyFile', ['name', 'data', 'mode'])

PRIVATE_KEY_NAME = 'id_rsa'
PUBLIC_KEY_NAME = 'id_rsa.pub'

PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644

_SUFFIXES = {
    KeyFormat.PEM: '',
    KeyFormat.DER: '.der',
    KeyFormat.JWK: '.json',
}


def key_file_name(base, format=DEFAULT_FORMAT):
    return base + _SUFFIXES[KeyFormat.from_tag(format)]


def keypair_files(key, format=DEFAULT_FORMAT, **jwk_params):
    """Serialize both halves of the private ``key``.

    :return: ``[private KeyFile, public KeyFile]``
    :raises ValueError: if ``key`` is a public key
    """

    if not key.has_private():
        raise ValueError("A key pair can only be built from a private key")

    key_format = KeyFormat.from_tag(format)
    public = key.public_key()
    files = [
        KeyFile(key_file_name(PRIVATE_KEY_NAME, key_format),
                key.export_key(key_format, **jwk_params),
                PRIVATE_KEY_MODE),
        KeyFile(key_file_name(PUBLIC_KEY_NAME, key_format),
                public.export_key(key_format, **jwk_params),
                PUBLIC_KEY_MODE),
    ]
    logger.debug("Prepared %d-bit key pair as %s", key.size_in_bits(),
                 ", ".join(f.name for f in files))
    return files

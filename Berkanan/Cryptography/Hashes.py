# MIT License
#
# Copyright (c) 2018-2026 IZE
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import hashlib
import Berkanan.Cryptography.Provider as cp

if cp.use_pyca:
    from cryptography.hazmat.backends import default_backend
    from cryptography.hazmat.primitives import hashes
else:
    hashes = None

"""
The digest primitives are thin adapters over the active provider.
Every call allocates its own one-shot hashing context, so all three
functions are pure and safe to call from any number of threads.
"""

MD5_LENGTH    = 16
SHA1_LENGTH   = 20
SHA256_LENGTH = 32

def _buffer(data):
    # Anything exposing the buffer protocol is accepted, str is not
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError("Cannot compute digest of "+str(type(data))+", expected bytes-like data")

    if not view.c_contiguous:
        return view.tobytes()
    elif view.ndim != 1 or view.format != "B":
        return view.cast("B")
    else:
        return view

def _pyca_digest(algorithm, data):
    digest = hashes.Hash(algorithm(), backend=default_backend())
    digest.update(data)

    return digest.finalize()

def _internal_digest(constructor, data):
    digest = constructor()
    digest.update(data)

    return digest.digest()

def md5(data):
    data = _buffer(data)
    if cp.active() == cp.PROVIDER_PYCA:
        return _pyca_digest(hashes.MD5, data)
    else:
        return _internal_digest(hashlib.md5, data)

def sha1(data):
    data = _buffer(data)
    if cp.active() == cp.PROVIDER_PYCA:
        return _pyca_digest(hashes.SHA1, data)
    else:
        return _internal_digest(hashlib.sha1, data)

def sha256(data):
    data = _buffer(data)
    if cp.active() == cp.PROVIDER_PYCA:
        return _pyca_digest(hashes.SHA256, data)
    else:
        return _internal_digest(hashlib.sha256, data)

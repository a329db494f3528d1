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

import importlib.util

PROVIDER_NONE     = 0x00
PROVIDER_INTERNAL = 0x01
PROVIDER_PYCA     = 0x02

FORCE_INTERNAL = False
PROVIDER = PROVIDER_NONE

REQUIRED_ALGORITHMS = ["MD5", "SHA1", "SHA256"]
MINIMUM_PYCA_VERSION = (3, 4, 7)

def pyca_version_supported(version):
    numbers = []
    for part in str(version).split(".")[:3]:
        digits = ""
        for c in part:
            if not c.isdigit(): break
            digits += c
        if digits == "": break
        numbers.append(int(digits))

    if len(numbers) == 0:
        return False

    while len(numbers) < 3:
        numbers.append(0)

    return tuple(numbers) >= MINIMUM_PYCA_VERSION

pyca_v = None
use_pyca = False

try:
    if importlib.util.find_spec("cryptography") != None:
        import cryptography
        from cryptography.hazmat.primitives import hashes as pyca_hashes
        pyca_v = cryptography.__version__

        if pyca_version_supported(pyca_v):
            use_pyca = all(hasattr(pyca_hashes, a) for a in REQUIRED_ALGORITHMS)

except Exception as e:
    use_pyca = False

if use_pyca:
    PROVIDER = PROVIDER_PYCA
else:
    PROVIDER = PROVIDER_INTERNAL

def active():
    # FORCE_INTERNAL may be toggled at runtime
    if FORCE_INTERNAL and PROVIDER != PROVIDER_NONE:
        return PROVIDER_INTERNAL
    else:
        return PROVIDER

def backend():
    provider = active()
    if provider == PROVIDER_NONE:
        return "none"
    elif provider == PROVIDER_INTERNAL:
        return "internal"
    elif provider == PROVIDER_PYCA:
        return "openssl, PyCA "+str(pyca_v)

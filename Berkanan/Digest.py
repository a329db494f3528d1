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

import threading

import Berkanan
from Berkanan.Cryptography import Hashes
from Berkanan.Cryptography import Provider

class Digest:
    """
    Single dispatching entry point for the supported digest algorithms.
    Algorithms are selected by tag, and every computation is delegated to
    the functions in ``Berkanan.Cryptography``. The class holds no per-call
    state and is never instantiated.
    """

    MD5    = 0x01
    """
    MD5 as defined in RFC 1321. Broken for security purposes, usable as a checksum.
    """

    SHA1   = 0x02
    """
    SHA-1 as defined in FIPS 180-4. Kept for compatibility with legacy peers.
    """

    SHA256 = 0x03
    """
    SHA-256 as defined in FIPS 180-4.
    """

    # Digest lengths in bytes
    LENGTHS   = {MD5: Hashes.MD5_LENGTH, SHA1: Hashes.SHA1_LENGTH, SHA256: Hashes.SHA256_LENGTH}
    NAMES     = {MD5: "md5", SHA1: "sha1", SHA256: "sha256"}
    FUNCTIONS = {MD5: Hashes.md5, SHA1: Hashes.sha1, SHA256: Hashes.sha256}

    _provider_logged = False
    _provider_lock   = threading.Lock()

    @staticmethod
    def algorithms():
        """
        :returns: A list of all supported algorithm tags in ascending order.
        """
        return sorted(Digest.FUNCTIONS.keys())

    @staticmethod
    def _validate(algorithm):
        if not algorithm in Digest.FUNCTIONS:
            raise ValueError("Unknown digest algorithm "+str(algorithm))

    @staticmethod
    def length(algorithm):
        """
        Get the fixed digest length of an algorithm.

        :param algorithm: One of ``Digest.MD5``, ``Digest.SHA1`` or ``Digest.SHA256``.
        :returns: Digest length in bytes as *int*.
        :raises: *ValueError* if the algorithm is unknown.
        """
        Digest._validate(algorithm)
        return Digest.LENGTHS[algorithm]

    @staticmethod
    def name(algorithm):
        Digest._validate(algorithm)
        return Digest.NAMES[algorithm]

    @staticmethod
    def from_name(name):
        """
        Resolve an algorithm name such as ``"SHA-256"`` or ``"sha1"`` to its tag.

        :param name: Algorithm name as *str*. Case, dashes and underscores are ignored.
        :returns: The algorithm tag as *int*.
        :raises: *ValueError* if no algorithm matches.
        """
        normalized = str(name).lower().replace("-", "").replace("_", "")
        for algorithm in Digest.NAMES:
            if Digest.NAMES[algorithm] == normalized:
                return algorithm

        raise ValueError("Unknown digest algorithm name "+str(name))

    @staticmethod
    def compute(algorithm, data):
        """
        Compute the digest of passed data.

        :param algorithm: One of ``Digest.MD5``, ``Digest.SHA1`` or ``Digest.SHA256``.
        :param data: Data to be hashed as *bytes* or any other object supporting the buffer protocol.
        :returns: The digest as *bytes*, with a length of ``Digest.length(algorithm)``.
        :raises: *ValueError* if the algorithm is unknown, *TypeError* if data is not bytes-like.
        """
        Digest._validate(algorithm)

        with Digest._provider_lock:
            announce = not Digest._provider_logged
            Digest._provider_logged = True

        if announce:
            Berkanan.log("Computing digests with the "+Provider.backend()+" provider", Berkanan.LOG_DEBUG)

        try:
            return Digest.FUNCTIONS[algorithm](data)

        except MemoryError as e:
            # Context allocation failed, nothing the caller can correct
            Berkanan.log("Could not allocate "+Digest.NAMES[algorithm]+" hashing context: "+str(e), Berkanan.LOG_CRITICAL)
            raise

    @staticmethod
    def hexdigest(algorithm, data):
        return Berkanan.hexrep(Digest.compute(algorithm, data), delimit=False)

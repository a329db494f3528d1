import hashlib
import os
import tempfile
import threading
import unittest
from unittest import mock

import Berkanan
from Berkanan import Digest

known_answers = {
    Digest.MD5: [
        (b"", "d41d8cd98f00b204e9800998ecf8427e"),
        (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
    ],
    Digest.SHA1: [
        (b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
        (b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    ],
    Digest.SHA256: [
        (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    ],
}

references = {
    Digest.MD5: hashlib.md5,
    Digest.SHA1: hashlib.sha1,
    Digest.SHA256: hashlib.sha256,
}

class TestDigest(unittest.TestCase):

    def test_known_answers(self):
        for algorithm in known_answers:
            for message, expected in known_answers[algorithm]:
                self.assertEqual(Digest.compute(algorithm, message), bytes.fromhex(expected))
                self.assertEqual(Digest.hexdigest(algorithm, message), expected)

    def test_lengths(self):
        self.assertEqual(Digest.length(Digest.MD5), 16)
        self.assertEqual(Digest.length(Digest.SHA1), 20)
        self.assertEqual(Digest.length(Digest.SHA256), 32)
        for algorithm in Digest.algorithms():
            for l in [0, 1, 64, 4096]:
                self.assertEqual(len(Digest.compute(algorithm, os.urandom(l))), Digest.length(algorithm))

    def test_algorithms(self):
        self.assertEqual(Digest.algorithms(), [Digest.MD5, Digest.SHA1, Digest.SHA256])

    def test_names(self):
        self.assertEqual(Digest.name(Digest.MD5), "md5")
        self.assertEqual(Digest.name(Digest.SHA1), "sha1")
        self.assertEqual(Digest.name(Digest.SHA256), "sha256")
        self.assertEqual(Digest.from_name("SHA-256"), Digest.SHA256)
        self.assertEqual(Digest.from_name("sha_1"), Digest.SHA1)
        self.assertEqual(Digest.from_name("MD5"), Digest.MD5)
        for algorithm in Digest.algorithms():
            self.assertEqual(Digest.from_name(Digest.name(algorithm)), algorithm)

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            Digest.compute(0x7f, b"abc")
        with self.assertRaises(ValueError):
            Digest.length(0x00)
        with self.assertRaises(ValueError):
            Digest.name(None)
        with self.assertRaises(ValueError):
            Digest.from_name("sha512")

    def test_str_rejected(self):
        with self.assertRaises(TypeError):
            Digest.compute(Digest.SHA256, "abc")

    def test_determinism(self):
        for algorithm in Digest.algorithms():
            for i in range(50):
                msg = os.urandom(i*17)
                self.assertEqual(Digest.compute(algorithm, msg), Digest.compute(algorithm, bytes(msg)))

    def test_avalanche(self):
        msg = bytearray(os.urandom(128))
        for algorithm in Digest.algorithms():
            original = Digest.compute(algorithm, bytes(msg))
            for bit in [0, 7, 500, 1023]:
                flipped = bytearray(msg)
                flipped[bit//8] ^= 1 << (bit%8)
                self.assertNotEqual(Digest.compute(algorithm, bytes(flipped)), original)

    def test_concurrent_invocation(self):
        thread_count = 16
        rounds = 200
        failures = []

        def job(seed):
            for i in range(rounds):
                msg = seed.to_bytes(2, "big")+os.urandom(i)
                for algorithm in Digest.algorithms():
                    if Digest.compute(algorithm, msg) != references[algorithm](msg).digest():
                        failures.append((seed, i, algorithm))

        threads = [threading.Thread(target=job, args=(n,)) for n in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(failures, [])


class TestFailureReporting(unittest.TestCase):
    def setUp(self):
        self.lines = []
        self.saved = (Berkanan.logdest, Berkanan.logcall, Berkanan.loglevel)
        Berkanan.logdest = Berkanan.LOG_CALLBACK
        Berkanan.logcall = self.lines.append
        Berkanan.loglevel = Berkanan.LOG_NOTICE

    def tearDown(self):
        Berkanan.logdest, Berkanan.logcall, Berkanan.loglevel = self.saved

    def test_provider_announced_once(self):
        Berkanan.loglevel = Berkanan.LOG_DEBUG
        Digest._provider_logged = False
        start = threading.Event()

        def job():
            start.wait()
            for i in range(50):
                Digest.compute(Digest.SHA256, os.urandom(i))

        threads = [threading.Thread(target=job) for n in range(16)]
        for thread in threads:
            thread.start()
        start.set()
        for thread in threads:
            thread.join()

        announcements = [line for line in self.lines if "provider" in line]
        self.assertEqual(len(announcements), 1)
        self.assertIn("[Debug]", announcements[0])
        self.assertIn(Berkanan.Cryptography.backend(), announcements[0])

    def test_allocation_failure_is_fatal(self):
        def exhausted(data):
            raise MemoryError("out of memory")

        with mock.patch.dict(Digest.FUNCTIONS, {Digest.SHA1: exhausted}):
            with self.assertRaises(MemoryError):
                Digest.compute(Digest.SHA1, b"abc")

        self.assertEqual(len(self.lines), 1)
        self.assertIn("[Critical]", self.lines[0])
        self.assertIn("sha1", self.lines[0])

        # Dispatch is restored once the failing function is gone
        self.assertEqual(Digest.hexdigest(Digest.SHA1, b"abc"), "a9993e364706816aba3e25717850c26c9cd0d89d")


class TestLogging(unittest.TestCase):
    def setUp(self):
        self.saved = (Berkanan.logdest, Berkanan.logcall, Berkanan.logfile, Berkanan.loglevel)

    def tearDown(self):
        Berkanan.logdest, Berkanan.logcall, Berkanan.logfile, Berkanan.loglevel = self.saved
        Berkanan._always_override_destination = False

    def test_level_filter(self):
        lines = []
        Berkanan.logdest = Berkanan.LOG_CALLBACK
        Berkanan.logcall = lines.append
        Berkanan.loglevel = Berkanan.LOG_WARNING
        Berkanan.log("shown", Berkanan.LOG_ERROR)
        Berkanan.log("hidden", Berkanan.LOG_DEBUG)
        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].endswith("[Error]    shown"))

        Berkanan.loglevel = Berkanan.LOG_NONE
        Berkanan.log("silent", Berkanan.LOG_CRITICAL)
        self.assertEqual(len(lines), 1)

    def test_file_destination(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            Berkanan.logdest = Berkanan.LOG_FILE
            Berkanan.logfile = os.path.join(tmpdir, "logfile")
            Berkanan.log("written to file", Berkanan.LOG_NOTICE)
            with open(Berkanan.logfile, "r") as file:
                self.assertIn("[Notice]   written to file", file.read())

    def test_broken_callback_falls_back(self):
        def broken(logstring):
            raise RuntimeError("handler gone")

        Berkanan.logdest = Berkanan.LOG_CALLBACK
        Berkanan.logcall = broken
        with mock.patch("builtins.print") as printed:
            Berkanan.log("still delivered", Berkanan.LOG_NOTICE)

        self.assertTrue(Berkanan._always_override_destination)
        output = " ".join(str(call.args[0]) for call in printed.call_args_list)
        self.assertIn("handler gone", output)
        self.assertIn("still delivered", output)

    def test_trace_exception(self):
        lines = []
        Berkanan.logdest = Berkanan.LOG_CALLBACK
        Berkanan.logcall = lines.append
        Berkanan.loglevel = Berkanan.LOG_NOTICE
        try:
            Digest.compute(Digest.SHA256, "not bytes")
        except TypeError as e:
            Berkanan.trace_exception(e)

        self.assertEqual(len(lines), 2)
        self.assertIn("TypeError", lines[0])
        self.assertIn("Traceback", lines[1])

    def test_hexrep(self):
        self.assertEqual(Berkanan.hexrep(b"\x00\xab\xff"), "00:ab:ff")
        self.assertEqual(Berkanan.hexrep(b"\x00\xab\xff", delimit=False), "00abff")
        self.assertEqual(Berkanan.prettyhexrep(b"\x00\xab\xff"), "<00abff>")


if __name__ == '__main__':
    unittest.main(verbosity=2)

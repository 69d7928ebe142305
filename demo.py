# demo.py

# 1. Check the SHA-1 engine against known test vectors
# 2. Forge a message and MAC for a secret-prefix SHA-1 MAC
# 3. Optionally hash a file

from __future__ import annotations
import argparse
import json
import logging
import sys

from sha1 import InvalidDigestFormat, hash_file, sha1_hex
from length_extension import (
    SAMPLE_EXTENSION, SAMPLE_KEY_BITS, SAMPLE_MESSAGE, demo as le_demo, forge,
)

SAMPLE_MAC = "f4b645e89faaec2ff8e443c595009c16dbdfba4b"

VECTORS = {
    b"": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
    b"abc": "a9993e364706816aba3e25717850c26c9cd0d89d",
    b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq":
        "84983e441c3bd26ebaae4aa1f95129e5e54670f1",
}

def test_vector():
    """
    Hash each known message and compare with the published SHA-1 digest.
    Returns (all_ok, {message: (got, expected)}).
    """
    results = {m.decode(): (sha1_hex(m), want) for m, want in VECTORS.items()}
    return all(got == want for got, want in results.values()), results

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Forge a secret-prefix SHA-1 MAC by length extension.")
    p.add_argument("--message", default=SAMPLE_MESSAGE.decode(),
                   help="message the known MAC was computed over")
    p.add_argument("--key-bits", type=int, default=SAMPLE_KEY_BITS,
                   help="length of the secret key in bits")
    p.add_argument("--mac", default=SAMPLE_MAC, help="known MAC as 40 hex characters")
    p.add_argument("--extension", default=SAMPLE_EXTENSION.decode(),
                   help="data to append")
    p.add_argument("--file", help="print the SHA-1 of FILE and exit")
    p.add_argument("--self-test", action="store_true",
                   help="run the test vectors and a random-key attack")
    p.add_argument("-v", "--verbose", action="store_true")
    return p

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        print(hash_file(args.file))
        return 0

    if args.self_test:
        tv_ok, results = test_vector()
        report = le_demo()
        print(json.dumps({"vectors_ok": tv_ok, "vectors": results,
                          "length_extension": report}, indent=2))
        return 0 if tv_ok and report["match"] else 1

    try:
        forged, forged_mac = forge(args.message.encode(), args.key_bits,
                                   args.mac, args.extension.encode())
    except (InvalidDigestFormat, ValueError) as exc:
        parser.error(str(exc))

    print("Spoofed message:")
    print(forged.hex())
    print()
    print("Spoofed mac:")
    print(forged_mac)
    return 0

if __name__ == "__main__":
    sys.exit(main())

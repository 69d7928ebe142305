# SHA-1 (RFC 3174), resumable from a published digest

from __future__ import annotations
from typing import BinaryIO, Optional, Tuple
import logging
import re

log = logging.getLogger(__name__)

IV = (
    0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0
)

K = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)

BLOCK_BYTES = 64
BLOCK_WORDS = BLOCK_BYTES // 4
LENGTH_BYTES = 8
DIGEST_HEX_LEN = 40

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1
_HEX_DIGEST = re.compile(r'[0-9a-fA-F]{%d}' % DIGEST_HEX_LEN)


class InvalidDigestFormat(ValueError):
    """Raised when a digest string is not exactly 40 hex characters."""


class InvalidState(RuntimeError):
    """Raised when an operation is not legal in the engine's current state."""


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK32

def _f(x: int, y: int, z: int, j: int) -> int:
    if j < 20:
        return (x & (y ^ z)) ^ z            # choose
    if j < 40:
        return x ^ y ^ z
    if j < 60:
        return ((x | y) & z) | (x & y)      # majority
    return x ^ y ^ z

def _schedule(W: list, j: int) -> int:
    # 16-word ring: w[j-3], w[j-8], w[j-14], w[j-16]
    w = _rotl(W[(j + 13) & 15] ^ W[(j + 8) & 15] ^ W[(j + 2) & 15] ^ W[j & 15], 1)
    W[j & 15] = w
    return w

def block_to_words(B: bytes) -> list:
    assert len(B) == BLOCK_BYTES
    return [int.from_bytes(B[4*i:4*i+4], 'big') for i in range(BLOCK_WORDS)]

def compress(V: Tuple[int, ...], B: bytes) -> Tuple[int, ...]:
    a, b, c, d, e = V
    W = block_to_words(B)
    for j in range(80):
        wj = W[j] if j < 16 else _schedule(W, j)
        t = (_rotl(a, 5) + _f(b, c, d, j) + e + K[j // 20] + wj) & _MASK32
        e = d
        d = c
        c = _rotl(b, 30)
        b = a
        a = t
    return tuple((x + y) & _MASK32 for x, y in zip(V, (a, b, c, d, e)))

def state_to_hex(V: Tuple[int, ...]) -> str:
    return ''.join('%08x' % x for x in V)

def hex_to_state(hex_digest: str) -> Tuple[int, ...]:
    if not isinstance(hex_digest, str) or not _HEX_DIGEST.fullmatch(hex_digest):
        raise InvalidDigestFormat(
            "expected %d hex characters, got %r" % (DIGEST_HEX_LEN, hex_digest))
    return tuple(int(hex_digest[i:i+8], 16) for i in range(0, DIGEST_HEX_LEN, 8))


class Hasher:
    """Incremental SHA-1.

    ``finalize`` consumes the running hash and puts the engine back in its
    initial state, so one instance can be reused for any number of messages.
    ``import_state`` starts a hash from a previous digest instead of the IV;
    that is the length-extension primitive and is only used on that path.
    """
    __slots__ = ("_state", "_buf", "_blocks")

    def __init__(self, data: Optional[bytes] = None):
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> 'Hasher':
        self._state = IV
        self._buf = bytearray()
        self._blocks = 0
        return self

    def update(self, data: bytes) -> 'Hasher':
        if isinstance(data, str):
            raise TypeError("data must be bytes-like, not str")
        if len(data) == 0:
            return self
        buf = self._buf
        buf.extend(data)
        off = 0
        while len(buf) - off >= BLOCK_BYTES:
            self._state = compress(self._state, bytes(buf[off:off+BLOCK_BYTES]))
            self._blocks += 1
            off += BLOCK_BYTES
        del buf[:off]
        return self

    def update_stream(self, stream: BinaryIO, chunk_size: int = 8192) -> 'Hasher':
        for chunk in iter(lambda: stream.read(chunk_size), b''):
            self.update(chunk)
        return self

    def finalize(self, total_bits: Optional[int] = None) -> str:
        """Pad, run the last one or two transforms and return the hex digest.

        ``total_bits`` overrides the length written into the padding; the
        forger needs it to account for bytes hashed before an imported state.
        """
        if total_bits is None:
            total_bits = (self._blocks * BLOCK_BYTES + len(self._buf)) * 8
        elif total_bits < 0:
            raise ValueError("total_bits must be non-negative")
        block = bytearray(self._buf)
        block.append(0x80)
        used = len(block)
        block.extend(b'\x00' * (BLOCK_BYTES - used))
        st = self._state
        if used > BLOCK_BYTES - LENGTH_BYTES:
            # no room left for the length field
            st = compress(st, bytes(block))
            block = bytearray(BLOCK_BYTES)
        block[-LENGTH_BYTES:] = (total_bits & _MASK64).to_bytes(LENGTH_BYTES, 'big')
        st = compress(st, bytes(block))
        self.reset()
        return state_to_hex(st)

    def import_state(self, hex_digest: str) -> 'Hasher':
        if self._buf or self._blocks:
            raise InvalidState("cannot import a chaining state after data has been absorbed")
        self._state = hex_to_state(hex_digest)
        log.debug("imported chaining state %s", state_to_hex(self._state))
        return self

    @classmethod
    def resume(cls, hex_digest: str) -> 'Hasher':
        return cls().import_state(hex_digest)

    def copy(self) -> 'Hasher':
        h = Hasher()
        h._state = tuple(self._state)
        h._buf = bytearray(self._buf)
        h._blocks = self._blocks
        return h

    def hexdigest(self) -> str:
        return self.copy().finalize()

    def digest(self) -> bytes:
        return bytes.fromhex(self.hexdigest())

    @property
    def blocks(self) -> int:
        return self._blocks

    @property
    def pending(self) -> int:
        return len(self._buf)


def sha1(data: bytes) -> bytes:
    return Hasher(data).digest()

def sha1_hex(data: bytes) -> str:
    return Hasher(data).finalize()

def hash_file(path: str, chunk_size: int = 8192) -> str:
    with open(path, 'rb') as fh:
        return Hasher().update_stream(fh, chunk_size).finalize()

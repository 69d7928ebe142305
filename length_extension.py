# Length-extension attack on secret-prefix SHA-1 MACs

from __future__ import annotations
from typing import Optional, Tuple
import logging
import secrets

from sha1 import BLOCK_BYTES, LENGTH_BYTES, Hasher, sha1_hex

log = logging.getLogger(__name__)

SAMPLE_MESSAGE = b"No one has completed lab 2 so give them all a 0"
SAMPLE_EXTENSION = b", but go ahead and Venmo Zach Brogan $1000 for his valiant effort."
SAMPLE_KEY_BITS = 128


def _check_key_bits(key_bits: int) -> None:
    if key_bits < 0 or key_bits % 8:
        raise ValueError("key length must be a non-negative multiple of 8 bits, got %r" % key_bits)

def glue_padding(total_bits: int) -> bytes:
    """Padding SHA-1 appends to a stream of ``total_bits`` bits (a whole number of bytes)."""
    msg_len_bytes = total_bits // 8
    pad = b'\x80'
    k = (BLOCK_BYTES - LENGTH_BYTES - (msg_len_bytes + 1) % BLOCK_BYTES) % BLOCK_BYTES
    pad += b'\x00' * k
    pad += (total_bits & ((1 << 64) - 1)).to_bytes(LENGTH_BYTES, 'big')
    return pad

def forge_message(original: bytes, key_bits: int, extension: bytes) -> bytes:
    _check_key_bits(key_bits)
    total_bits = len(original) * 8 + key_bits
    glue = glue_padding(total_bits)
    log.debug("glue padding: %d bytes for %d hashed bits", len(glue), total_bits)
    return bytes(original) + glue + bytes(extension)

def forge_mac(original_mac: str, key_bits: int, extension: bytes, forged_len: int) -> str:
    """MAC of ``key || forged`` given only the MAC of ``key || original``.

    ``forged_len`` is the byte length of the message from ``forge_message``;
    the key's bits are added here so the final length block matches what the
    key holder would write.
    """
    _check_key_bits(key_bits)
    if forged_len < 0:
        raise ValueError("forged message length must be non-negative")
    total_bits = forged_len * 8 + key_bits
    log.debug("resuming from %s, finalizing at %d bits", original_mac, total_bits)
    return Hasher.resume(original_mac).update(extension).finalize(total_bits)

def forge(original: bytes, key_bits: int, original_mac: str, extension: bytes) -> Tuple[bytes, str]:
    forged = forge_message(original, key_bits, extension)
    return forged, forge_mac(original_mac, key_bits, extension, len(forged))

def demo(key: Optional[bytes] = None,
         message: bytes = SAMPLE_MESSAGE,
         extension: bytes = SAMPLE_EXTENSION) -> dict:
    if key is None:
        key = secrets.token_bytes(SAMPLE_KEY_BITS // 8)
    key_bits = len(key) * 8
    mac = sha1_hex(key + message)
    forged, forged_mac = forge(message, key_bits, mac, extension)
    honest = sha1_hex(key + forged)
    return {
        "key_bits": key_bits,
        "orig_mac": mac,
        "forged_message": forged.hex(),
        "glue_len": len(forged) - len(message) - len(extension),
        "forged_mac": forged_mac,
        "honest_mac": honest,
        "match": forged_mac == honest
    }

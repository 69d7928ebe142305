import hashlib
import io

import pytest

from sha1 import (
    IV, Hasher, InvalidDigestFormat, InvalidState, compress, hash_file, sha1, sha1_hex,
    state_to_hex,
)

EMPTY = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
ABC = "a9993e364706816aba3e25717850c26c9cd0d89d"


def _data(n):
    return bytes((i * 31 + 7) & 0xFF for i in range(n))


def test_empty_digest():
    assert Hasher().finalize() == EMPTY


def test_abc():
    assert Hasher().update(b"abc").finalize() == ABC
    assert sha1(b"abc") == bytes.fromhex(ABC)


def test_two_block_vector():
    msg = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
    assert sha1_hex(msg) == "84983e441c3bd26ebaae4aa1f95129e5e54670f1"


@pytest.mark.parametrize("n", [1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 200, 1000])
def test_matches_hashlib(n):
    data = _data(n)
    assert sha1_hex(data) == hashlib.sha1(data).hexdigest()


def test_chunking_invariance():
    data = _data(150)
    want = sha1_hex(data)
    for cut in range(len(data) + 1):
        h = Hasher()
        h.update(data[:cut])
        h.update(data[cut:])
        assert h.finalize() == want, cut


def test_many_small_updates():
    data = _data(333)
    h = Hasher()
    for i in range(0, len(data), 7):
        h.update(data[i:i+7])
    assert h.finalize() == hashlib.sha1(data).hexdigest()


def test_bytes_like_inputs():
    data = _data(70)
    assert Hasher().update(bytearray(data)).finalize() == sha1_hex(data)
    assert Hasher().update(memoryview(data)).finalize() == sha1_hex(data)


def test_str_rejected():
    with pytest.raises(TypeError):
        Hasher().update("abc")


def test_block_counter_and_residual():
    h = Hasher().update(_data(130))
    assert h.blocks == 2
    assert h.pending == 2
    h.finalize()
    assert h.blocks == 0
    assert h.pending == 0


def test_finalize_resets_engine():
    h = Hasher().update(b"abc")
    assert h.finalize() == ABC
    assert h.finalize() == EMPTY
    assert h.update(b"abc").finalize() == ABC


def test_explicit_total_bits_matches_derived():
    data = _data(90)
    assert Hasher(data).finalize(len(data) * 8) == sha1_hex(data)


def test_negative_total_bits():
    with pytest.raises(ValueError):
        Hasher().finalize(-1)


def test_hexdigest_does_not_consume():
    h = Hasher().update(b"ab")
    assert h.hexdigest() == hashlib.sha1(b"ab").hexdigest()
    h.update(b"c")
    assert h.hexdigest() == ABC
    assert h.digest() == bytes.fromhex(ABC)
    assert h.finalize() == ABC


def test_copy_is_independent():
    h = Hasher().update(b"ab")
    c = h.copy()
    c.update(b"zzz")
    assert h.update(b"c").finalize() == ABC


def test_compress_is_pure():
    block = _data(64)
    assert compress(IV, block) == compress(IV, block)
    assert len(compress(IV, block)) == 5


def test_resume_from_iv_is_plain_sha1():
    assert Hasher.resume(state_to_hex(IV)).update(b"abc").finalize() == ABC


def test_resume_continues_a_block_boundary():
    data = _data(100)
    mid = state_to_hex(compress(IV, data[:64]))
    resumed = Hasher.resume(mid).update(data[64:]).finalize(len(data) * 8)
    assert resumed == hashlib.sha1(data).hexdigest()


def test_import_state_accepts_uppercase():
    h = Hasher().import_state(ABC.upper())
    assert state_to_hex(h._state) == ABC


@pytest.mark.parametrize("bad", [
    "",
    EMPTY[:-1],
    EMPTY + "0",
    "g" * 40,
    " " + EMPTY[1:],
    EMPTY[:-1] + "\n",
    "0x" + EMPTY[2:],
    bytes.fromhex(EMPTY),
    None,
])
def test_import_state_rejects_malformed(bad):
    with pytest.raises(InvalidDigestFormat):
        Hasher().import_state(bad)


def test_invalid_digest_is_value_error():
    with pytest.raises(ValueError):
        Hasher.resume("nope")


def test_import_state_mid_stream():
    h = Hasher().update(b"a")
    with pytest.raises(InvalidState):
        h.import_state(EMPTY)
    h = Hasher().update(_data(64))
    with pytest.raises(InvalidState):
        h.import_state(EMPTY)


def test_import_state_after_reset():
    h = Hasher().update(b"abc")
    h.finalize()
    h.import_state(state_to_hex(IV))
    assert h.update(b"abc").finalize() == ABC


def test_update_stream():
    data = _data(500)
    h = Hasher().update_stream(io.BytesIO(data), chunk_size=7)
    assert h.finalize() == hashlib.sha1(data).hexdigest()


def test_hash_file(tmp_path):
    path = tmp_path / "blob.bin"
    data = _data(10000)
    path.write_bytes(data)
    assert hash_file(str(path)) == hashlib.sha1(data).hexdigest()


def test_hash_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        hash_file(str(tmp_path / "missing"))

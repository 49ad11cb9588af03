"""SHA-256 message digest and HMAC-SHA-256."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_INITIAL_STATE = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _as_bytes(data) -> memoryview:
    if isinstance(data, str):
        raise TypeError("Sha256 hashes bytes, not str")
    return memoryview(data).cast("B")


class Sha256:
    """Incremental SHA-256 hasher."""

    block_size = 64
    digest_size = 32

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return the hasher to its initial, empty state."""
        self._state = list(_INITIAL_STATE)
        self._count = 0
        self._buffer = bytearray()

    def update(self, data) -> None:
        """Feed more bytes into the digest."""
        view = _as_bytes(data)
        self._count += len(view)
        self._absorb(view)

    def finalize(self) -> bytes:
        """Return the 32 byte digest and reset the hasher."""
        bit_length = (self._count << 3) & 0xFFFFFFFFFFFFFFFF
        pad_len = (55 - self._count) % 64
        self._absorb(b"\x80" + b"\x00" * pad_len + struct.pack(">Q", bit_length))
        digest = struct.pack(">8L", *self._state)
        self.reset()
        return digest

    @staticmethod
    def hash(data) -> bytes:
        """Return the SHA-256 digest of ``data``."""
        hasher = Sha256()
        hasher.update(data)
        return hasher.finalize()

    @staticmethod
    def hmac(key, message) -> bytes:
        """Return the HMAC-SHA-256 of ``message`` under ``key``."""
        key_bytes = bytes(_as_bytes(key))
        if len(key_bytes) > Sha256.block_size:
            key_bytes = Sha256.hash(key_bytes)
        key_bytes = key_bytes.ljust(Sha256.block_size, b"\x00")
        outer_pad = bytes(b ^ 0x5C for b in key_bytes)
        inner_pad = bytes(b ^ 0x36 for b in key_bytes)
        hasher = Sha256()
        hasher.update(inner_pad)
        hasher.update(message)
        inner = hasher.finalize()
        hasher.update(outer_pad)
        hasher.update(inner)
        return hasher.finalize()

    def _absorb(self, data) -> None:
        buffer = self._buffer
        buffer += data
        full = len(buffer) - len(buffer) % 64
        for offset in range(0, full, 64):
            self._compress(buffer[offset:offset + 64])
        del buffer[:full]

    def _compress(self, block) -> None:
        w = list(struct.unpack(">16L", block))
        for i in range(16, 64):
            x, y = w[i - 15], w[i - 2]
            s0 = _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)
            s1 = _rotr(y, 17) ^ _rotr(y, 19) ^ (y >> 10)
            w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK)

        a, b, c, d, e, f, g, h = self._state
        for k, wi in zip(_K, w):
            big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
            ch = g ^ (e & (f ^ g))
            t1 = (h + big_s1 + ch + k + wi) & _MASK
            big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
            maj = (a & b) | (c & (a | b))
            t2 = (big_s0 + maj) & _MASK
            h, g, f, e = g, f, e, (d + t1) & _MASK
            d, c, b, a = c, b, a, (t1 + t2) & _MASK

        self._state = [
            (s + v) & _MASK for s, v in zip(self._state, (a, b, c, d, e, f, g, h))
        ]
"""Block-chained XOR cipher over the packed student table."""

from __future__ import annotations

from pathlib import Path
from typing import Union

BLOCK_COUNT = 4


def _xor_cyclic(block: bytearray, pad: bytes) -> None:
    for position in range(len(block)):
        block[position] ^= pad[position % len(pad)]


def _permute(block: bytearray) -> bytearray:
    size = len(block)
    result = bytearray(size)
    for position, value in enumerate(block):
        result[(position * (size - 1) + 2) % size] = value
    return result


def encrypt_bytes(data, key, iv):
    """Encrypt ``data`` as four chained blocks.

    The data is zero-padded to a multiple of four and split into four
    equal blocks. The first block is mixed with ``iv``, each later block
    with the previous encrypted block; every block is then mixed with
    ``key`` and permuted.
    """
    data = bytes(data)
    key = bytes(key)
    iv = bytes(iv)
    remainder = len(data) % BLOCK_COUNT
    size = len(data) + (BLOCK_COUNT - remainder if remainder else 0)
    block_size = size // BLOCK_COUNT
    if block_size == 0:
        return b""
    if not key:
        raise ValueError("key must not be empty")
    if not iv:
        raise ValueError("iv must not be empty")

    # Only size - remainder bytes of the input are taken before padding.
    buffer = bytearray(size)
    taken = data[: size - remainder]
    buffer[: len(taken)] = taken

    output = bytearray()
    previous = iv
    for index in range(BLOCK_COUNT):
        block = buffer[index * block_size : (index + 1) * block_size]
        _xor_cyclic(block, previous)
        _xor_cyclic(block, key)
        block = _permute(block)
        output += block
        previous = bytes(block)
    return bytes(output)


def encrypt_students(secretariat, key, iv, output_path: Union[str, Path]):
    """Encrypt the packed student table and write it to ``output_path``."""
    packed = b"".join(student.pack() for student in secretariat.students)
    encrypted = encrypt_bytes(packed, key, iv)
    Path(output_path).write_bytes(encrypted)
    return encrypted
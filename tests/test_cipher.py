import pytest

from secretariat.cipher import encrypt_bytes, encrypt_students
from secretariat.models import Secretariat


def _decrypt(cipher, key, iv):
    size = len(cipher) // 4
    plain = bytearray()
    previous = iv
    for index in range(4):
        block = cipher[index * size : (index + 1) * size]
        restored = bytearray(block[(2 - i) % size] for i in range(size))
        for i in range(size):
            restored[i] ^= key[i % len(key)] ^ previous[i % len(previous)]
        plain += restored
        previous = block
    return bytes(plain)


def test_worked_example_single_byte_blocks():
    assert encrypt_bytes(b"\x01\x02\x03\x04", b"\x00", b"\x00") == b"\x01\x03\x00\x04"


@pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 53, 106, 159, 212])
def test_output_is_padded_to_multiple_of_four(length):
    data = bytes(range(length))
    out = encrypt_bytes(data, b"k", b"v")
    assert len(out) % 4 == 0
    assert len(out) - length in range(0, 4)


def test_empty_input_gives_empty_output():
    assert encrypt_bytes(b"", b"k", b"v") == b""


@pytest.mark.parametrize("data", [bytes(range(16)), bytes(range(40)), b"abcdefghij"])
def test_round_trip(data):
    key = b"secret"
    iv = b"placeholder"
    out = encrypt_bytes(data, key, iv)
    plain = _decrypt(out, key, iv)
    assert plain[: len(data)] == data
    assert set(plain[len(data):]) <= {0}


def test_permutation_of_first_block_with_zero_pads():
    data = bytes(range(1, 17))
    out = encrypt_bytes(data, b"\x00", b"\x00")
    assert out[:4] == bytes([data[2], data[1], data[0], data[3]])


def test_remainder_three_keeps_only_leading_bytes():
    key, iv = b"ab", b"cd"
    assert encrypt_bytes(b"\x01\x02\x03", key, iv) == encrypt_bytes(b"\x01\x00\x00\x00", key, iv)


def test_remainder_two_pads_with_zeros():
    key, iv = b"ab", b"cd"
    assert encrypt_bytes(b"\x05\x06", key, iv) == encrypt_bytes(b"\x05\x06\x00\x00", key, iv)


def test_key_is_repeated_cyclically():
    data = bytes(range(32))
    assert encrypt_bytes(data, b"ab", b"xyz") == encrypt_bytes(data, b"abab", b"xyz")


def test_empty_key_raises():
    with pytest.raises(ValueError):
        encrypt_bytes(b"data", b"", b"iv")


def test_empty_iv_raises():
    with pytest.raises(ValueError):
        encrypt_bytes(b"data", b"key", b"")


def test_encrypt_students_writes_file(tmp_path):
    secretariat = Secretariat()
    secretariat.add_student(0, "Ion Popescu", 1, "b", 7.5)
    secretariat.add_student(1, "Maria Ionescu", 2, "t", 1.5)
    path = tmp_path / "out.bin"
    key, iv = b"token", b"secret"
    written = encrypt_students(secretariat, key, iv, path)
    packed = b"".join(s.pack() for s in secretariat.students)
    assert written == encrypt_bytes(packed, key, iv)
    assert path.read_bytes() == written
    assert _decrypt(written, key, iv)[: len(packed)] == packed
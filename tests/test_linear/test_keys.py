"""Tests for packed term keys and alphabet tables."""

import pytest

from symbolax.linear.keys import Alphabet, PackedCodec, check_capacity


def test_pack_unpack() -> None:
    codec = PackedCodec(capacity=4)
    key = codec.pack((3, 1, 2))
    assert codec.unpack(key) == (3, 1, 2)
    assert codec.length(key) == 3
    assert len(key) == codec.num_bytes == 8


def test_empty_term() -> None:
    codec = PackedCodec(capacity=3)
    key = codec.pack(())
    assert codec.unpack(key) == ()
    assert codec.length(key) == 0


def test_byte_order_is_lexicographic() -> None:
    """Zero padding makes byte comparison agree with word comparison."""
    codec = PackedCodec(capacity=4)
    words = [(2,), (1, 2, 1), (1, 2), (1,), (300,), (1, 3)]
    by_key = sorted(words, key=codec.pack)
    assert by_key == sorted(words)


@pytest.mark.parametrize(
    "codes",
    [
        pytest.param((1, 2, 3, 4, 5), id="overflow"),
        pytest.param((0, 1), id="padding-code"),
        pytest.param((1, 256), id="code-too-large"),
    ],
)
def test_pack_rejects(codes: tuple[int, ...]) -> None:
    codec = PackedCodec(capacity=4, width=1)
    with pytest.raises(ValueError):
        codec.pack(codes)


def test_concat() -> None:
    codec = PackedCodec(capacity=4)
    assert codec.concat(codec.pack((1, 2)), codec.pack((3,))) == codec.pack((1, 2, 3))
    assert codec.concat(codec.pack(()), codec.pack((3,))) == codec.pack((3,))
    with pytest.raises(ValueError):
        codec.concat(codec.pack((1, 2, 3)), codec.pack((4, 5)))


def test_bad_codec_shape() -> None:
    with pytest.raises(ValueError):
        PackedCodec(capacity=0)
    with pytest.raises(ValueError):
        PackedCodec(capacity=4, width=3)


def test_check_capacity() -> None:
    check_capacity((1, 2), 2)
    with pytest.raises(ValueError):
        check_capacity((1, 2, 3), 2)


def test_alphabet() -> None:
    alphabet = Alphabet(["a", "b", "c"])
    assert alphabet.size == 3
    assert alphabet.to_code("b") == 2
    assert alphabet.from_code(1) == "a"
    assert "c" in alphabet
    assert "d" not in alphabet
    with pytest.raises(ValueError):
        alphabet.to_code("d")
    with pytest.raises(ValueError):
        alphabet.from_code(0)


def test_alphabet_rejects_duplicates() -> None:
    with pytest.raises(ValueError):
        Alphabet(["a", "a"])

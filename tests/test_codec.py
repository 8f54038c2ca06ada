import pytest

from codec import MalformedBitStringError, decode, decode_text, encode
from huffman import build_frequency_table, build_tree, generate_codes


def _pipeline(text):
    root = build_tree(build_frequency_table(text))
    return root, generate_codes(root)


@pytest.mark.parametrize(
    "text",
    ["", "a", "aaaa", "aabb", "abracadabra", "hello, world!\n", "éèê ok \U0001f600"],
)
def test_roundtrip(text):
    root, codes = _pipeline(text)
    bits = encode(text, codes)
    assert decode_text(bits, root) == text
    assert decode_text(bits, root, strict=True) == text


def test_roundtrip_bytes():
    data = bytes(range(256)) + b"\x00" * 100
    root, codes = _pipeline(data)
    assert bytes(decode(encode(data, codes), root)) == data


def test_single_symbol_case():
    root, codes = _pipeline("aaaa")
    assert codes == {"a": "0"}
    bits = encode("aaaa", codes)
    assert bits == "0000"
    assert decode_text(bits, root) == "aaaa"


def test_two_symbol_case():
    root, codes = _pipeline("aabb")
    assert encode("aabb", codes) == "0011"
    assert decode_text("0011", root) == "aabb"


def test_empty_inputs():
    assert encode("", {}) == ""
    assert decode("", None) == []
    assert decode("0101", None) == []
    root, _ = _pipeline("ab")
    assert decode("", root) == []


def test_encode_skips_unknown_symbols():
    assert encode("abz", {"a": "0", "b": "1"}) == "01"


def test_permissive_decode_drops_trailing_partial_code():
    root, codes = _pipeline("aabbcd")
    bits = encode("ab", codes) + codes["c"][:-1]
    assert decode_text(bits, root) == "ab"


def test_strict_decode_rejects_trailing_partial_code():
    root, codes = _pipeline("aabbcd")
    bits = encode("ab", codes) + codes["c"][:-1]
    with pytest.raises(MalformedBitStringError) as exc:
        decode(bits, root, strict=True)
    assert exc.value.position == len(bits)


def test_strict_decode_rejects_non_binary_characters():
    root, _ = _pipeline("aabbcd")
    with pytest.raises(MalformedBitStringError) as exc:
        decode("0x1", root, strict=True)
    assert exc.value.position == 1
    assert isinstance(exc.value, ValueError)


def test_strict_decode_single_symbol_rejects_ones():
    root, _ = _pipeline("aaa")
    assert decode_text("010", root) == "aaa"
    with pytest.raises(MalformedBitStringError):
        decode("010", root, strict=True)


def test_mismatched_tree_gives_garbage_not_error():
    _, codes = _pipeline("aaaabbc")
    other_root, _ = _pipeline("xyz")
    out = decode(encode("aaaabbc", codes), other_root)
    assert set(out) <= {"x", "y", "z"}

from typing import Dict, Hashable, Iterable, List, Optional

from huffman import HuffmanNode


class MalformedBitStringError(ValueError):
    """Raised by strict decoding when a bit-string cannot be fully decoded.

    :ivar position: Index of the offending bit, or ``len(bits)`` when the
                    input ends in the middle of a code.
    :type position: int
    """

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at bit {position})")
        self.position = position


def encode(sequence: Iterable[Hashable], codes: Dict[Hashable, str]) -> str:
    """Encode ``sequence`` by concatenating the code of every symbol.

    Symbols missing from ``codes`` contribute nothing.

    :param sequence: Symbols to encode, in order.
    :type sequence: Iterable[Hashable]
    :param codes: Codebook produced by :func:`huffman.generate_codes`.
    :type codes: Dict[Hashable, str]
    :returns: String of ``"0"``/``"1"`` characters.
    :rtype: str
    """
    return "".join(codes.get(symbol, "") for symbol in sequence)


def decode(
    bits: str, root: Optional[HuffmanNode], strict: bool = False
) -> List[Hashable]:
    """Decode a bit-string by walking the Huffman tree.

    Each ``"0"`` moves left and any other character moves right. On
    reaching a leaf its symbol is emitted and the walk restarts at the
    root. A single-leaf tree decodes every bit to its one symbol.

    By default a trailing incomplete code is dropped silently. With
    ``strict`` set, characters other than ``"0"`` and ``"1"`` and a
    trailing incomplete code raise :class:`MalformedBitStringError`.
    Neither mode can detect bits encoded with a different tree.

    :param bits: Encoded bit-string.
    :type bits: str
    :param root: The tree that produced the encoding, or ``None``.
    :type root: HuffmanNode | None
    :param bool strict: Reject malformed input instead of ignoring it.
    :returns: Decoded symbols, in order.
    :rtype: List[Hashable]
    :raises MalformedBitStringError: In strict mode, on malformed input.
    """
    if root is None or not bits:
        return []

    if root.is_leaf:
        if strict:
            for pos, bit in enumerate(bits):
                if bit != "0":
                    raise MalformedBitStringError(
                        f"Unexpected bit {bit!r} for single-symbol code", pos
                    )
        return [root.symbol] * len(bits)

    output: List[Hashable] = []
    node = root
    for pos, bit in enumerate(bits):
        if strict and bit not in "01":
            raise MalformedBitStringError(f"Invalid bit {bit!r}", pos)
        node = node.left if bit == "0" else node.right
        if node.is_leaf:
            output.append(node.symbol)
            node = root

    if strict and node is not root:
        raise MalformedBitStringError("Bit-string ends mid-code", len(bits))
    return output


def decode_text(
    bits: str, root: Optional[HuffmanNode], strict: bool = False
) -> str:
    """Decode ``bits`` with :func:`decode` and join the symbols into a string."""
    return "".join(decode(bits, root, strict=strict))

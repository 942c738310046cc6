"""
Unsigned fixed width integers seen as a row of bits

A truth assignment for N variables is just a counter between 0 and 2**N - 1.
Bit 0 is the least significant bit. Positions outside the width never raise:
reads give None and writes report False.
"""

DEFAULT_WIDTH = 64

WIDTHS = {
    "u8": 8,
    "u16": 16,
    "u32": 32,
    "u64": 64,
    "u128": 128,
}


def _in_range(pos, width):
    return 0 <= pos < width


def get_bit(value: int, pos: int, width: int = DEFAULT_WIDTH):
    if not _in_range(pos, width):
        return None
    return (value >> pos) & 1


class BitString:
    def __init__(self, value: int = 0, width: int = DEFAULT_WIDTH):
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width
        self.value = int(value) & self.mask

    @classmethod
    def of_type(cls, name: str, value: int = 0):
        """
        BitString.of_type("u8", 5)
        """
        return cls(value, WIDTHS[name])

    @property
    def mask(self):
        return (1 << self.width) - 1

    def get_bit(self, pos: int):
        return get_bit(self.value, pos, self.width)

    def set_bit(self, pos: int) -> bool:
        if not _in_range(pos, self.width):
            return False
        self.value |= 1 << pos
        return True

    def clear_bit(self, pos: int) -> bool:
        if not _in_range(pos, self.width):
            return False
        self.value &= ~(1 << pos) & self.mask
        return True

    def toggle_bit(self, pos: int) -> bool:
        if not _in_range(pos, self.width):
            return False
        self.value ^= 1 << pos
        return True

    def clear(self):
        self.value = 0

    def __getitem__(self, pos):
        if not isinstance(pos, int):
            raise TypeError(f"bit positions are integers, got {pos!r}")
        return self.get_bit(pos)

    def __iter__(self):
        # Least significant bit first
        return (self.get_bit(pos) for pos in range(self.width))

    def __len__(self):
        return self.width

    def __int__(self):
        return self.value

    __index__ = __int__

    def __eq__(self, other):
        if isinstance(other, BitString):
            return (self.value, self.width) == (other.value, other.width)
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash((self.value, self.width))

    def __str__(self):
        return format(self.value, f"0{self.width}b")

    def __repr__(self):
        return f"BitString({self.value:#x}, width={self.width})"


def read_bit(assignment, pos: int):
    """
    Bit pos of either a BitString or a plain non negative int
    """
    if isinstance(assignment, BitString):
        return assignment.get_bit(pos)
    if pos < 0:
        return None
    return (assignment >> pos) & 1

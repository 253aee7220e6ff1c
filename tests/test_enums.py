import enum

from mcuasync.enums import (
    enum_cast,
    enum_count,
    enum_entries,
    enum_names,
    enum_str,
    enum_values,
)


class Color(enum.IntEnum):
    invalid = 0
    red = 1
    green = 2
    blue = 3


def test_values():
    assert ", ".join(str(int(v)) for v in enum_values(Color)) == "0, 1, 2, 3"


def test_names():
    assert ", ".join(enum_names(Color)) == "invalid, red, green, blue"


def test_entries():
    text = ", ".join(f"({int(v)},{n})" for v, n in enum_entries(Color))
    assert text == "(0,invalid), (1,red), (2,green), (3,blue)"


def test_count():
    assert enum_count(Color) == 4


def test_enum_str():
    assert enum_str(Color.red) == "red"


def test_enum_cast_known_name():
    assert enum_cast("red", Color.invalid) is Color.red


def test_enum_cast_unknown_name_gives_default():
    assert enum_cast("purple", Color.invalid) is Color.invalid
    assert enum_cast("", Color.blue) is Color.blue


def test_name_round_trip():
    for member in enum_values(Color):
        assert enum_cast(enum_str(member), Color.invalid) is member
"""Shared test utilities."""

import pathlib

EXAMPLE_CONF = """\
# example.conf
# Example configuration file for ConfigFile

apples = 7             # comment after apples
pears  = 3             # comment after pears
price  = 1.99          # comment after price
sale   = true          # comment after sale
title  = one fine day  # comment after title
weight = 2.5 kg        # comment after weight
zone   = 1 2 3  # comment after 1st point
         4 5 6  # comment after 2nd point
         7 8 9  # comment after 3rd point

This is also a comment since it has no equals sign and follows a blank line.
"""


class Triplet:
    """User-defined value type used to exercise custom serializers."""

    def __init__(self, a: int, b: int, c: int) -> None:
        self.a, self.b, self.c = a, b, c

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triplet):
            return NotImplemented
        return (self.a, self.b, self.c) == (other.a, other.b, other.c)


class TripletSerializer:
    """Reads the first three integers of a value."""

    def format(self, value: Triplet) -> str:
        return f"{value.a} {value.b} {value.c}"

    def parse(self, text: str) -> Triplet:
        a, b, c = (int(tok) for tok in text.split()[:3])
        return Triplet(a, b, c)


def write_config(directory: pathlib.Path, name: str, text: str) -> pathlib.Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path

"""Shared test fixtures for the table grid detector."""

import pytest

from table_grid_detector.structures import NormalizedObservation, WordObservation

# ── Helpers ────────────────────────────────────────────────────────────


def make_word(text: str, xc: float, yc: float, w: float = 10.0, h: float = 10.0) -> WordObservation:
    """Pixel-space word centred on (xc, yc)."""
    return WordObservation(text=text, x=xc - w / 2.0, y=yc - h / 2.0, width=w, height=h)


def make_observation(
    text: str,
    xc: float,
    yc: float,
    image_size=(100.0, 100.0),
    w: float = 10.0,
    h: float = 10.0,
) -> NormalizedObservation:
    """Normalized, bottom-left-origin observation for a word centred on pixel (xc, yc)."""
    W, H = image_size
    return NormalizedObservation(
        text=text,
        min_x=(xc - w / 2.0) / W,
        min_y=(H - (yc + h / 2.0)) / H,
        width=w / W,
        height=h / H,
    )


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def two_by_three_words():
    """Scenario A: columns at x=10,50,90; rows at y=10,40."""
    return [
        make_word("A", 10, 10),
        make_word("B", 50, 10),
        make_word("C", 90, 10),
        make_word("D", 10, 40),
        make_word("E", 50, 40),
        make_word("F", 90, 40),
    ]


@pytest.fixture
def two_by_three_observations():
    texts = iter("ABCDEF")
    return [
        make_observation(next(texts), xc, yc)
        for yc in (10, 40)
        for xc in (10, 50, 90)
    ]


@pytest.fixture
def invoice_words():
    """A 4x3 price list with a multi-word description column and jittered boxes."""
    data = [
        (["Item"], ["Qty"], ["Price"]),
        (["Red", "apple"], ["3"], ["1.20"]),
        (["Banana"], ["12"], ["0.35"]),
        (["Green", "tea", "box"], ["1"], ["4.99"]),
    ]
    words = []
    for ri, row in enumerate(data):
        yc = 20.0 + ri * 30.0 + (1.5 if ri % 2 else -1.0)
        for cell, col_x in zip(row, (20.0, 200.0, 300.0)):
            for wi, token in enumerate(cell):
                words.append(make_word(token, col_x + wi * 40.0, yc + wi * 0.5, w=30.0, h=12.0))
    return words

import sys
from pathlib import Path

import pytest


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from catalog.models import Record  # noqa: E402


@pytest.fixture
def seasons():
    """Spring (2020), Winter (undated) and Autumn (2021), in source order."""
    return [
        Record(id="A", title="Spring", date="2020-03-01"),
        Record(id="B", title="Winter", date=None),
        Record(id="C", title="Autumn", date="2021-09-01"),
    ]


@pytest.fixture
def library():
    """A small catalog covering every filter dimension, including empty values."""
    return [
        Record(
            id=1, title="Moonlight", album="Night Songs", date="2021-05-04",
            type=["Original"], lyricist=["Alice"], composer=["Bob"], arranger=["Carol"],
        ),
        Record(
            id=2, title="Harbor Lights", album="Night Songs", date="2021-01-10",
            type=["Cover"], lyricist=["Alice", "张三"], composer=["Dave"], arranger=[],
        ),
        Record(
            id=3, title="春天", album=None, date="2019-03-21",
            type=["Original", "Collaboration"], lyricist=[], composer=["Bob"], arranger=["Carol"],
        ),
        Record(
            id=4, title="Paper Boats", album="Early Days", date=None,
            type=[], lyricist=["李四"], composer=[], arranger=["Erin"],
        ),
        Record(
            id=5, title="Other Song", album=None, date="2018-12-31",
            type=["Remix"], lyricist=["Moonlight"], composer=["Dave"], arranger=["Carol"],
        ),
    ]

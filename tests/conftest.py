import uuid

import pytest

from Crunch.History import HistoryManager
from Crunch.VarTable import VarTable


class FakeAnswers:
    """Answer history stand-in: '@1' is the last expression given."""

    def __init__(self, expressions=()):
        self.ids = [uuid.uuid4() for _ in expressions]
        self.expressions = dict(zip(self.ids, expressions))

    def resolve_by_index(self, index):
        if 1 <= index <= len(self.ids):
            return self.ids[-index]
        return None

    def resolve_expression(self, answer_id):
        return self.expressions.get(answer_id)


@pytest.fixture
def var_table():
    return VarTable()


@pytest.fixture
def answers():
    return FakeAnswers()


@pytest.fixture
def history():
    """In-memory history, nothing is written to disk."""
    return HistoryManager()

"""
Tests for utils/answer_formatter.py
"""

from agents.symbolic_solvers import SolverMismatch, SolverSolution
from rag.dataset_search import DatasetMatch
from utils.answer_formatter import format_answer


def test_plain_string_is_identity():
    assert format_answer("hello") == "hello"


def test_dataset_match():
    match = DatasetMatch(found=True, class_name="10", subject="Science", chapter="Light", answer="Light travels.")
    assert format_answer(match) == "[Class 10] Light travels.\n\nSubject: Science\nChapter: Light"


def test_dataset_dict_shape():
    data = {"found": True, "class": 9, "answer": "Text"}
    assert format_answer(data) == "[Class 9] Text"


def test_solver_solution():
    solution = SolverSolution(steps=["Step a", "Step b"], final_answer="x = 1")
    assert format_answer(solution) == "**Solution Steps:**\n\n1. Step a\n2. Step b\n\n**Answer:** x = 1"


def test_object_with_answer_field():
    assert format_answer({"answer": "42"}) == "42"


def test_unknown_shape_is_dumped():
    assert '"reason": "nope"' in format_answer(SolverMismatch("nope"))
    assert format_answer({"foo": 1}) == '{\n  "foo": 1\n}'


def test_never_raises_on_odd_input():
    class Weird:
        pass

    assert isinstance(format_answer(None), str)
    assert isinstance(format_answer(Weird()), str)

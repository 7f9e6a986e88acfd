from backend.segmentation import (
    extract_flashcards,
    extract_key_points,
    extract_problems,
    extract_quick_reference,
    parse_summary,
    render_markdown,
)


def test_flashcard_across_blank_line():
    assert extract_flashcards("Q: What is X?\n\nA: X is Y.") == [
        {"question": "What is X?", "answer": "X is Y."}
    ]


def test_no_flashcards_without_pair():
    assert extract_flashcards("Just some notes.\n\nQ: dangling question") == []
    assert extract_flashcards("A: answer without question") == []
    assert extract_flashcards("") == []


def test_flashcards_in_review_sheet():
    text = """## Flashcards

**Q:** What organelle makes ATP?
**A:** The mitochondrion.

Q: Formula for glucose?
A: C6H12O6
which is a hexose.

## Tips
Sleep well."""
    assert extract_flashcards(text) == [
        {"question": "What organelle makes ATP?", "answer": "The mitochondrion."},
        {"question": "Formula for glucose?", "answer": "C6H12O6\nwhich is a hexose."},
    ]


def test_two_problems_in_source_order():
    text = """Here is your practice set.

Problem 1: Solve 2x = 4.
Solution: x = 2.

Problem 2:
Solve x + 3 = 5.

Solution:
x = 2 as well."""
    assert extract_problems(text) == [
        {"question": "Solve 2x = 4.", "solution": "x = 2."},
        {"question": "Solve x + 3 = 5.", "solution": "x = 2 as well."},
    ]


def test_problem_headings_and_missing_solution():
    text = "### Exercise 1\nDraw a cell.\n\n**Problem 2:** Name the nucleus parts.\n**Solution:** Envelope, nucleolus."
    assert extract_problems(text) == [
        {"question": "Draw a cell.", "solution": ""},
        {"question": "Name the nucleus parts.", "solution": "Envelope, nucleolus."},
    ]
    assert extract_problems("No problems here at all.") == []


def test_key_points_and_quick_reference():
    text = "# Title\n- first\n* second\n  - nested\n• bullet\nplain"
    assert extract_key_points(text) == ["first", "second"]
    assert extract_quick_reference(text) == ["first", "bullet"]


def test_parse_summary_shapes():
    assert set(parse_summary("learn", "- a")) == {"overview", "key_points"}
    assert set(parse_summary("practice", "")) == {"problems"}
    assert set(parse_summary("review", "")) == {"summary", "quick_reference", "flashcards"}


def test_rendered_practice_reads_back():
    problems = [
        {"question": "Add 1 and 1.", "solution": "2"},
        {"question": "Multiply 3 by 4.\nShow work.", "solution": "3 * 4 = 12"},
    ]
    assert extract_problems(render_markdown("practice", {"problems": problems})) == problems


def test_rendered_review_reads_back():
    materials = {
        "summary": "Cells are the unit of life.",
        "quick_reference": ["DNA lives in the nucleus"],
        "flashcards": [{"question": "Unit of life?", "answer": "The cell."}],
    }
    text = render_markdown("review", materials)
    assert extract_flashcards(text) == materials["flashcards"]
    assert extract_quick_reference(text) == materials["quick_reference"]


def test_flashcard_on_one_line():
    assert extract_flashcards("Q: What is X? A: X is Y.") == [
        {"question": "What is X?", "answer": "X is Y."}
    ]
    assert extract_flashcards("**Q:** What is X? **A:** X is Y.\n\nQ: Unit of life? A: The cell.") == [
        {"question": "What is X?", "answer": "X is Y."},
        {"question": "Unit of life?", "answer": "The cell."},
    ]


def test_problems_under_titled_headings():
    text = """## Practice Problem 1
Solve 2x = 4.
Solution: x = 2.

## Practice Problem 2
Solve x + 3 = 5.
Solution: x = 2."""
    assert extract_problems(text) == [
        {"question": "Solve 2x = 4.", "solution": "x = 2."},
        {"question": "Solve x + 3 = 5.", "solution": "x = 2."},
    ]


def test_problems_as_numbered_items():
    text = "1. Problem: Solve 2x = 4.\nSolution: x = 2.\n\n2. Problem: Solve 3x = 9.\nSolution: x = 3."
    assert extract_problems(text) == [
        {"question": "Solve 2x = 4.", "solution": "x = 2."},
        {"question": "Solve 3x = 9.", "solution": "x = 3."},
    ]


def test_problem_word_inside_solution_text_stays_in_solution():
    text = "Problem 1: Factor x^2 - 1.\nSolution: the problem reduces to (x - 1)(x + 1)."
    assert extract_problems(text) == [
        {"question": "Factor x^2 - 1.", "solution": "the problem reduces to (x - 1)(x + 1)."}
    ]

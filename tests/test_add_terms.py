import pytest

from cassie import (
    ConstantTerm,
    ProductTerm,
    SineTerm,
    SumTerm,
    Term,
    VariableTerm,
    add_terms,
)


def test_add_terms_neither_side_is_sum():
    left = VariableTerm("x")
    right = ConstantTerm(100.0)
    result = left + right
    assert isinstance(result, SumTerm)
    assert result.terms == (left, right)
    values = [t.evaluate({"x": 28.0}) for t in result.terms]
    assert values == [28.0, 100.0]


def test_add_terms_both_sides_are_sums():
    a, b, c, d = [ConstantTerm(v) for v in (1, 2, 3, 4)]
    result = SumTerm(a, b) + SumTerm(c, d)
    assert result == SumTerm(a, b, c, d)
    assert result.find_type(SumTerm) == [result]


def test_add_terms_sum_on_left_appends():
    a, b, c = [ConstantTerm(v) for v in (1, 2, 3)]
    product = ProductTerm(b, c)
    assert SumTerm(a, b) + product == SumTerm(a, b, product)


def test_add_terms_sum_on_right_prepends():
    a, b, c = [ConstantTerm(v) for v in (1, 2, 3)]
    sine = SineTerm(a)
    assert sine + SumTerm(b, c) == SumTerm(sine, b, c)


def test_add_terms_does_not_change_inputs():
    left = SumTerm(VariableTerm("x"), ConstantTerm(1))
    right = SumTerm(ConstantTerm(2))
    left_copy = left.clone()
    right_copy = right.clone()
    result = add_terms(left, right)
    assert left == left_copy
    assert right == right_copy
    assert len(left.terms) == 2
    assert result is not left
    for child in result.terms:
        assert all(child is not original for original in left.terms + right.terms)


def test_add_terms_evaluates_to_sum_of_sides():
    x = VariableTerm("x")
    term = (x + ConstantTerm(2)) + (ConstantTerm(3) + x)
    assert len(term.terms) == 4
    assert term.evaluate({"x": 5.0}) == pytest.approx(15.0)


def test_add_terms_with_builtin_sum():
    terms = [ConstantTerm(v) for v in (1, 2, 3)]
    total = sum(terms, SumTerm())
    assert total == SumTerm(terms)
    assert total.reduce() == 6.0


@pytest.mark.parametrize("other", [1, 2.5, "x", None])
def test_add_terms_requires_terms(other):
    with pytest.raises(TypeError):
        VariableTerm("x") + other
    with pytest.raises(TypeError):
        other + VariableTerm("x")


def test_add_terms_returns_term():
    assert isinstance(add_terms(ConstantTerm(1), ConstantTerm(2)), Term)

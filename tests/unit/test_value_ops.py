from __future__ import annotations

import math

import pytest

from tiny_autograd import functional as F
from tiny_autograd.graph.ir import Graph, GraphError, Op
from tiny_autograd.graph.value import Value


def test_leaf_construction(graph: Graph) -> None:
    v = F.lift(3, "v")
    assert v.value == 3.0
    assert isinstance(v.value, float)
    assert v.grad == 0.0
    assert v.label == "v"
    assert v.op is Op.LEAF
    assert v.children == ()
    assert v.is_leaf()
    assert v.graph is graph


def test_forward_values(graph: Graph) -> None:
    a = F.lift(2.0, "a")
    b = F.lift(3.0, "b")

    assert (a + b).value == 5.0
    assert (a * b).value == 6.0
    assert (-a).value == -2.0
    assert (a - b).value == -1.0
    assert (a / b).value == pytest.approx(2.0 / 3.0)
    assert (a ** 3).value == 8.0
    assert F.inverse(b).value == pytest.approx(1.0 / 3.0)
    assert F.exp(a).value == pytest.approx(math.exp(2.0))
    assert F.rectify(a).value == 2.0
    assert F.rectify(-a).value == 0.0


def test_scalar_operand_orders_stay_distinct(graph: Graph) -> None:
    v = F.lift(4.0, "v")

    assert (v + 2).value == 6.0
    assert (2 + v).value == 6.0
    assert (v - 1).value == 3.0
    assert (1 - v).value == -3.0
    assert (v * 3).value == 12.0
    assert (3 * v).value == 12.0
    assert (v / 2).value == 2.0
    assert (2 / v).value == 0.5


def test_scalar_left_addition_is_not_multiplication(graph: Graph) -> None:
    v = F.lift(3.0, "v")
    out = 2 + v
    assert out.op is Op.ADD
    assert out.value == 5.0


def test_lifted_scalar_is_labelled_leaf_in_operand_graph(graph: Graph) -> None:
    other = Graph(name="other")
    v = F.lift(1.0, "v", graph=other)

    out = v * 2.5
    constant = out.children[1]

    assert out.graph is other
    assert constant.graph is other
    assert constant.label == "2.5"
    assert constant.is_leaf()


def test_children_follow_operand_order(graph: Graph) -> None:
    a = F.lift(1.0, "a")
    b = F.lift(2.0, "b")
    out = b * a
    assert out.children == (b, a)


def test_subtraction_and_division_structure(graph: Graph) -> None:
    a = F.lift(6.0, "a")
    b = F.lift(2.0, "b")

    diff = a - b
    assert diff.op is Op.ADD
    assert diff.children[1].op is Op.NEG

    quot = a / b
    assert quot.op is Op.MUL
    assert quot.children[1].op is Op.INV


def test_power_records_exponent(graph: Graph) -> None:
    out = F.power(F.lift(3.0), 2)
    assert out.op is Op.POW
    assert out.exponent == 2.0
    assert out.value == 9.0


def test_functional_helpers_accept_scalars(graph: Graph) -> None:
    assert F.rectify(-1.5).value == 0.0
    assert F.exp(0).value == 1.0
    assert F.inverse(4).value == 0.25
    assert F.add(1, 2).value == 3.0
    assert F.subtract(1, 2).value == -1.0
    assert F.multiply(2, 5).value == 10.0
    assert F.divide(1, 4).value == 0.25
    assert F.negate(3).value == -3.0


def test_functional_binary_lifts_into_value_graph(graph: Graph) -> None:
    other = Graph(name="other")
    v = F.lift(2.0, graph=other)
    assert F.subtract(10, v).graph is other
    assert F.subtract(10, v).value == 8.0
    assert F.divide(1, v).value == 0.5


def test_division_by_zero_is_infinite(graph: Graph) -> None:
    out = 1 / F.lift(0.0, "zero")
    assert math.isinf(out.value)


def test_negative_base_fractional_power_is_nan(graph: Graph) -> None:
    out = F.lift(-8.0) ** 0.5
    assert math.isnan(out.value)
    downstream = out + 1
    assert math.isnan(downstream.value)


def test_exp_overflow_is_infinite(graph: Graph) -> None:
    assert math.isinf(F.exp(1000.0).value)


def test_mixing_graphs_is_rejected(graph: Graph) -> None:
    a = F.lift(1.0, graph=Graph())
    b = F.lift(2.0, graph=Graph())
    with pytest.raises(GraphError):
        _ = a + b


def test_value_exponent_unsupported(graph: Graph) -> None:
    a = F.lift(2.0)
    with pytest.raises(TypeError):
        _ = a ** a
    with pytest.raises(TypeError):
        F.power(a, a)  # type: ignore[arg-type]


def test_non_numeric_operands_rejected(graph: Graph) -> None:
    a = F.lift(2.0)
    with pytest.raises(TypeError):
        _ = a + "1"  # type: ignore[operator]
    with pytest.raises(TypeError):
        F.lift(True)
    with pytest.raises(TypeError):
        F.lift("3")  # type: ignore[arg-type]


def test_handles_compare_by_identity(graph: Graph) -> None:
    a = F.lift(1.0)
    b = F.lift(1.0)
    assert a != b
    assert a == Value(graph, a.index)
    assert len({a, b, Value(graph, a.index)}) == 2


def test_repr_includes_label() -> None:
    v = F.lift(1.5, "weight", graph=Graph())
    assert repr(v) == "Value('weight', value=1.5, grad=0.0)"


NAN = float("nan")


@pytest.mark.parametrize(
    "build",
    [
        lambda x: x + 1,
        lambda x: 1 + x,
        lambda x: x * 2,
        lambda x: 2 * x,
        lambda x: x - 1,
        lambda x: 1 - x,
        lambda x: x / 2,
        lambda x: 2 / x,
        lambda x: -x,
        lambda x: x ** 2,
        lambda x: x ** 0.5,
        lambda x: F.inverse(x),
        lambda x: F.rectify(x),
        lambda x: F.exp(x),
    ],
    ids=[
        "add", "radd", "mul", "rmul", "sub", "rsub", "div", "rdiv",
        "neg", "square", "sqrt", "inverse", "rectify", "exp",
    ],
)
def test_nan_operand_propagates(graph: Graph, build) -> None:
    assert math.isnan(build(F.lift(NAN, "x")).value)


def test_rectify_keeps_nan_from_invalid_power(graph: Graph) -> None:
    assert math.isnan(F.rectify(F.lift(-8.0) ** 0.5).value)


@pytest.mark.parametrize(
    "x, expected",
    [(math.inf, math.inf), (-math.inf, 0.0), (-0.0, 0.0)],
)
def test_rectify_of_special_values(graph: Graph, x: float, expected: float) -> None:
    assert F.rectify(F.lift(x)).value == expected


def test_infinity_times_zero_is_nan(graph: Graph) -> None:
    assert math.isnan((F.lift(math.inf) * 0).value)

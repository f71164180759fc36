"""
field, value, expression 모듈 테스트.

테스트 대상:
  - field: 모듈러스, 서브클래스 산술, FIELDS 레지스트리, to_field
  - Value: Known/Unknown 산술, 일반 피연산자 승격, map/zip, 동등성
  - Rotation: cur/next/prev
  - Expression: 문자열 표현, 차수, 평가, 스칼라 곱(Scaled),
                스칼라 덧셈/뺄셈의 Constant 승격
"""
import pytest

from plonkish.field import (
    FR, Fp, Fq, CURVE_ORDER, PALLAS_MODULUS, VESTA_MODULUS,
    FIELDS, field_name, to_field,
)
from plonkish.value import Value
from plonkish.expression import (
    AdviceQuery, Constant, FixedQuery, Rotation, Scaled, SelectorExpression, Sum,
)
from plonkish.constraint_system import Selector


# =====================================================================
# Fields
# =====================================================================

class TestFields:
    def test_modulus(self):
        assert FR.field_modulus == CURVE_ORDER
        assert Fp.field_modulus == PALLAS_MODULUS
        assert Fq.field_modulus == VESTA_MODULUS

    def test_arithmetic_stays_in_subclass(self):
        x = Fp(3) * Fp(3)
        assert isinstance(x, Fp)
        assert x == Fp(9)

    def test_wraparound(self):
        assert Fp(PALLAS_MODULUS - 1) + Fp(1) == Fp(0)
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_registry(self):
        assert FIELDS == {"fr": FR, "fp": Fp, "fq": Fq}
        assert field_name(Fp) == "fp"
        assert field_name(FR) == "fr"

    def test_to_field_from_int(self):
        assert to_field(Fq, 5) == Fq(5)
        assert isinstance(to_field(Fq, 5), Fq)

    def test_to_field_same_field_is_identity(self):
        x = FR(11)
        assert to_field(FR, x) is x

    def test_to_field_rejects_other_field(self):
        with pytest.raises(TypeError):
            to_field(FR, Fp(1))


# =====================================================================
# Value
# =====================================================================

class TestValue:
    def test_known_arithmetic(self):
        a = Value.known(FR(2))
        b = Value.known(FR(3))
        assert a + b == Value.known(FR(5))
        assert a - b == Value.known(FR(-1))
        assert a * b == Value.known(FR(6))
        assert -a == Value.known(FR(-2))

    def test_unknown_is_absorbing(self):
        a = Value.known(FR(2))
        u = Value.unknown()
        for result in (a + u, u + a, a * u, u * a, a - u, -u, u.square()):
            assert result.is_unknown()

    def test_plain_operand_is_lifted(self):
        a = Value.known(FR(4))
        assert a * FR(2) == Value.known(FR(8))
        assert a + 1 == Value.known(FR(5))
        assert 2 * a == Value.known(FR(8))
        assert 10 - a == Value.known(FR(6))

    def test_square_and_cube(self):
        a = Value.known(Fp(3))
        assert a.square() == Value.known(Fp(9))
        assert a.cube() == Value.known(Fp(27))

    def test_into_option(self):
        assert Value.known(FR(1)).into_option() == FR(1)
        assert Value.unknown().into_option() is None

    def test_map_and_zip(self):
        a = Value.known(FR(3))
        assert a.map(lambda x: x + FR(1)) == Value.known(FR(4))
        assert Value.unknown().map(lambda x: x).is_unknown()
        assert a.zip(Value.known(FR(5))).into_option() == (FR(3), FR(5))
        assert a.zip(Value.unknown()).is_unknown()

    def test_equality(self):
        assert Value.unknown() == Value.unknown()
        assert Value.known(FR(1)) != Value.unknown()
        assert Value.known(FR(1)) != Value.known(FR(2))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Value.known(FR(1)))

    def test_repr(self):
        assert repr(Value.unknown()) == "Value(unknown)"
        assert repr(Value.known(1)) == "Value(known=1)"


# =====================================================================
# Expression
# =====================================================================

def _a(column, rotation=None):
    rotation = rotation or Rotation.cur()
    return AdviceQuery(column, column, rotation)


def _evaluate(expr, advice, selectors=(), fixed=()):
    return expr.evaluate(
        constant=lambda v: v,
        selector_column=lambda s: selectors[s.index],
        fixed_column=lambda q: fixed[q.column_index],
        advice_column=lambda q: advice[(q.column_index, q.rotation.offset)],
        instance_column=lambda q: FR(0),
        negated=lambda a: -a,
        sum=lambda a, b: a + b,
        product=lambda a, b: a * b,
        scaled=lambda a, k: a * k,
    )


class TestRotation:
    def test_named_rotations(self):
        assert Rotation.cur().offset == 0
        assert Rotation.next().offset == 1
        assert Rotation.prev().offset == -1

    def test_equality(self):
        assert Rotation.next() == Rotation(1)


class TestExpression:
    def test_str(self):
        expr = _a(0) * _a(1) - _a(0, Rotation.next())
        assert str(expr) == "((A0@0 * A1@0) + -A0@1)"

    def test_scalar_multiplication_is_scaled(self):
        expr = _a(0) * FR(3)
        assert isinstance(expr, Scaled)
        assert isinstance(3 * _a(0), Scaled)
        assert str(expr) == "(A0@0 * 3)"

    def test_degree(self):
        l, r, c = _a(0), _a(1), _a(2)
        e = (l * r) * (l * r) * c + c
        assert e.degree() == 5
        assert (e * e * e).degree() == 15
        s = SelectorExpression(Selector(0))
        assert (s * (e.cube() - _a(0, Rotation.next()))).degree() == 16
        assert Constant(FR(1)).degree() == 0

    def test_evaluate(self):
        advice = {(0, 0): FR(2), (1, 0): FR(3), (2, 0): FR(2), (0, 1): FR(405224)}
        l, r, c = _a(0), _a(1), _a(2)
        e = (l * r) * (l * r) * c + c
        poly = SelectorExpression(Selector(0)) * (e.cube() - _a(0, Rotation.next()))
        assert _evaluate(poly, advice, selectors=[FR(1)]) == FR(0)

        advice[(0, 1)] = FR(405225)
        assert _evaluate(poly, advice, selectors=[FR(1)]) == FR(-1)
        # 셀렉터가 꺼진 행에서는 항상 0
        assert _evaluate(poly, advice, selectors=[FR(0)]) == FR(0)

    def test_fixed_query_and_constant(self):
        expr = FixedQuery(0, 0, Rotation.cur()) + Constant(FR(5))
        assert _evaluate(expr, {}, fixed=[FR(2)]) == FR(7)
        assert str(expr) == "(F0@0 + 5)"

    def test_scalar_addition_is_lifted(self):
        x = _a(0)
        expr = x + FR(5)
        assert isinstance(expr, Sum)
        assert expr.right == Constant(FR(5))
        assert str(expr) == "(A0@0 + 5)"
        assert _evaluate(expr, {(0, 0): FR(2)}) == FR(7)
        assert _evaluate(3 + x, {(0, 0): FR(2)}) == FR(5)

    def test_scalar_subtraction_is_lifted(self):
        x = _a(0)
        advice = {(0, 0): FR(2)}
        assert _evaluate(x - 1, advice) == FR(1)
        assert _evaluate(1 - x, advice) == FR(-1)
        assert _evaluate(Constant(FR(1)) - x, advice) == FR(-1)
        assert str(1 - x) == "(1 + -A0@0)"

    def test_non_numeric_operand(self):
        with pytest.raises(TypeError):
            _a(0) + "a"
        with pytest.raises(TypeError):
            "a" - _a(0)
        with pytest.raises(TypeError):
            _a(0) * None

    def test_nodes_are_immutable(self):
        q = _a(0)
        with pytest.raises(Exception):
            q.column_index = 3

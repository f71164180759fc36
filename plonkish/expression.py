"""
게이트 다항식 표현식 (Expression)
==================================

게이트는 열(column) 값에 대한 다항식 항등식이다. 이 모듈은 그 다항식을
트리로 표현한다.

**노드 종류**:
  | 노드                | 의미                                      |
  |---------------------|-------------------------------------------|
  | Constant            | 필드 상수                                 |
  | SelectorExpression  | 셀렉터 값 (행마다 0 또는 1)               |
  | FixedQuery          | fixed 열의 (현재 행 + rotation) 값        |
  | AdviceQuery         | advice 열의 (현재 행 + rotation) 값       |
  | InstanceQuery       | instance 열의 (현재 행 + rotation) 값     |
  | Negated / Sum / Product / Scaled | 산술 결합                    |

**Rotation**:
  게이트가 적용되는 행을 기준으로 한 상대 위치.
  ``Rotation.cur()`` = 0, ``Rotation.next()`` = +1, ``Rotation.prev()`` = -1.

  | 행  | advice[0] | advice[1] | advice[2] |
  |-----|-----------|-----------|-----------|
  | r   | l (cur)   | r (cur)   | c (cur)   |
  | r+1 | out (next)|           |           |

사용 예시:
    >>> l = meta.query_advice(advice[0], Rotation.cur())
    >>> out = meta.query_advice(advice[0], Rotation.next())
    >>> poly = l * l - out
    >>> poly.degree()   # 2
"""

from dataclasses import dataclass

from py_ecc.fields.field_elements import FQ


@dataclass(frozen=True)
class Rotation:
    """게이트 행을 기준으로 한 상대 행 오프셋."""
    offset: int = 0

    @classmethod
    def cur(cls):
        return cls(0)

    @classmethod
    def next(cls):
        return cls(1)

    @classmethod
    def prev(cls):
        return cls(-1)


class Expression:
    """다항식 표현식 트리의 기반 클래스.

    ``+``, ``-``, ``*``, 단항 ``-`` 연산자로 트리를 조립한다.
    표현식이 아닌 값과 곱하면 ``Scaled`` 노드가 된다. 덧셈과 뺄셈에서는
    정수나 필드 원소가 ``Constant`` 노드로 올라간다.
    """

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return Sum(self, _lift(other))

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return Sum(_lift(other), self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return Sum(self, Negated(_lift(other)))

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return Sum(_lift(other), Negated(self))

    def __mul__(self, other):
        if isinstance(other, Expression):
            return Product(self, other)
        if not _is_operand(other):
            return NotImplemented
        return Scaled(self, other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return Scaled(self, other)

    def __neg__(self):
        return Negated(self)

    def square(self):
        return self * self

    def cube(self):
        return self * self * self

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        """노드 종류별 콜백으로 트리를 접는다(fold).

        Args:
            constant: fn(value)
            selector_column: fn(selector)
            fixed_column / advice_column / instance_column: fn(query)
            negated: fn(a)
            sum: fn(a, b)
            product: fn(a, b)
            scaled: fn(a, scalar)

        Returns:
            콜백이 만든 값 (필드 원소, 차수, 문자열 등)
        """
        raise NotImplementedError

    def degree(self):
        """다항식 차수. 셀렉터와 열 쿼리는 각각 차수 1이다."""
        return self.evaluate(
            constant=lambda _: 0,
            selector_column=lambda _: 1,
            fixed_column=lambda _: 1,
            advice_column=lambda _: 1,
            instance_column=lambda _: 1,
            negated=lambda a: a,
            sum=max,
            product=lambda a, b: a + b,
            scaled=lambda a, _: a,
        )

    def __str__(self):
        return self.evaluate(
            constant=lambda v: str(int(v)),
            selector_column=lambda s: f"S{s.index}",
            fixed_column=lambda q: f"F{q.column_index}@{q.rotation.offset}",
            advice_column=lambda q: f"A{q.column_index}@{q.rotation.offset}",
            instance_column=lambda q: f"I{q.column_index}@{q.rotation.offset}",
            negated=lambda a: f"-{a}",
            sum=lambda a, b: f"({a} + {b})",
            product=lambda a, b: f"({a} * {b})",
            scaled=lambda a, k: f"({a} * {int(k)})",
        )


@dataclass(frozen=True, eq=True)
class Constant(Expression):
    value: object

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        return constant(self.value)


@dataclass(frozen=True, eq=True)
class SelectorExpression(Expression):
    selector: object

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        return selector_column(self.selector)


@dataclass(frozen=True, eq=True)
class FixedQuery(Expression):
    query_index: int
    column_index: int
    rotation: Rotation

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        return fixed_column(self)


@dataclass(frozen=True, eq=True)
class AdviceQuery(Expression):
    query_index: int
    column_index: int
    rotation: Rotation

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        return advice_column(self)


@dataclass(frozen=True, eq=True)
class InstanceQuery(Expression):
    query_index: int
    column_index: int
    rotation: Rotation

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        return instance_column(self)


@dataclass(frozen=True, eq=True)
class Negated(Expression):
    inner: Expression

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        args = (constant, selector_column, fixed_column, advice_column,
                instance_column, negated, sum, product, scaled)
        return negated(self.inner.evaluate(*args))


@dataclass(frozen=True, eq=True)
class Sum(Expression):
    left: Expression
    right: Expression

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        args = (constant, selector_column, fixed_column, advice_column,
                instance_column, negated, sum, product, scaled)
        return sum(self.left.evaluate(*args), self.right.evaluate(*args))


@dataclass(frozen=True, eq=True)
class Product(Expression):
    left: Expression
    right: Expression

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        args = (constant, selector_column, fixed_column, advice_column,
                instance_column, negated, sum, product, scaled)
        return product(self.left.evaluate(*args), self.right.evaluate(*args))


@dataclass(frozen=True, eq=True)
class Scaled(Expression):
    inner: Expression
    scalar: object

    def evaluate(self, constant, selector_column, fixed_column, advice_column,
                 instance_column, negated, sum, product, scaled):
        args = (constant, selector_column, fixed_column, advice_column,
                instance_column, negated, sum, product, scaled)
        return scaled(self.inner.evaluate(*args), self.scalar)


def _is_operand(value):
    return isinstance(value, (Expression, int, FQ))


def _lift(value):
    """정수나 필드 원소를 ``Constant`` 노드로 올린다."""
    if isinstance(value, Expression):
        return value
    return Constant(value)

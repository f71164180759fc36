"""
제약 시스템 (Constraint System)
================================

회로의 *정적인 모양*을 선언한다: 어떤 열(column)이 있고, 어떤 셀렉터가
있으며, 어떤 게이트 다항식이 어느 셀렉터 아래에서 강제되는지.
witness 값과는 무관하며, 회로 모양마다 한 번만 구성된다.

**열 종류**:
  | 종류     | 값의 주인            | 복사 제약             |
  |----------|----------------------|-----------------------|
  | ADVICE   | 증명자 (비공개)      | enable_equality       |
  | INSTANCE | 공개 입력            | enable_equality       |
  | FIXED    | 회로 전체 상수 (키)  | enable_constant       |

**셀렉터**:
  행마다 0/1인 플래그. 게이트 다항식에 곱해져서, 셀렉터가 1인 행에서만
  다항식 = 0 이 강제된다. 셀렉터를 엉뚱한 행에 켜면 게이트는 조용히
  아무것도 제약하지 않는다.

**게이트 등록**:
  ``create_gate(name, fn)``의 ``fn``은 ``VirtualCells``를 받아
  다항식 리스트를 반환한다. VirtualCells가 어떤 셀/셀렉터가 쿼리되었는지
  기록한다.

사용 예시:
    >>> meta = ConstraintSystem(FR)
    >>> a = meta.advice_column()
    >>> s = meta.selector()
    >>> def gate(meta):
    ...     x = meta.query_advice(a, Rotation.cur())
    ...     y = meta.query_advice(a, Rotation.next())
    ...     return Constraints.with_selector(meta.query_selector(s), [x * x - y])
    >>> meta.create_gate("square", gate)
"""

from dataclasses import dataclass
from enum import Enum

from plonkish.errors import ConfigurationError
from plonkish.expression import (
    AdviceQuery,
    Expression,
    FixedQuery,
    InstanceQuery,
    Rotation,
    SelectorExpression,
)


# ─────────────────────────────────────────────────────────────────────
# 열(Column)과 셀렉터(Selector)
# ─────────────────────────────────────────────────────────────────────

class ColumnType(Enum):
    ADVICE = "advice"
    FIXED = "fixed"
    INSTANCE = "instance"


@dataclass(frozen=True)
class Column:
    """회로의 한 열. (종류, 종류 내 인덱스)로 식별된다."""
    column_type: ColumnType
    index: int

    def __str__(self):
        return f"{self.column_type.value}[{self.index}]"


@dataclass(frozen=True)
class Selector:
    """게이트를 켜고 끄는 행 단위 플래그."""
    index: int
    simple: bool = True

    def enable(self, region, offset):
        """``region``의 상대 행 ``offset``에서 이 셀렉터를 켠다."""
        region.enable_selector(f"selector {self.index}", self, offset)


# ─────────────────────────────────────────────────────────────────────
# 게이트
# ─────────────────────────────────────────────────────────────────────

class Constraints:
    """셀렉터 하나로 여러 제약을 묶는 도우미."""

    @staticmethod
    def with_selector(selector, constraints):
        """각 제약에 셀렉터 표현식을 곱한다.

        Args:
            selector: query_selector()가 반환한 표현식
            constraints: 표현식 또는 (이름, 표현식) 튜플의 리스트

        Returns:
            list: (이름, selector · 표현식) 튜플 리스트
        """
        result = []
        for constraint in constraints:
            if isinstance(constraint, tuple):
                name, poly = constraint
            else:
                name, poly = "", constraint
            result.append((name, selector * poly))
        return result


@dataclass(frozen=True)
class Gate:
    """이름이 있는 다항식 항등식. 구성 후에는 바뀌지 않는다."""
    name: str
    constraint_names: tuple
    polys: tuple
    queried_selectors: tuple
    queried_cells: tuple

    def constraint_name(self, index):
        name = self.constraint_names[index]
        return name or f"constraint {index}"


class VirtualCells:
    """게이트 정의 중에 쿼리된 셀과 셀렉터를 기록한다."""

    def __init__(self, meta):
        self.meta = meta
        self.queried_selectors = []
        self.queried_cells = []

    def query_selector(self, selector):
        if selector.index >= self.meta.num_selectors:
            raise ConfigurationError(f"할당되지 않은 셀렉터입니다: selector {selector.index}")
        self.queried_selectors.append(selector)
        return SelectorExpression(selector)

    def query_advice(self, column, rotation):
        self._check(column, ColumnType.ADVICE)
        self.queried_cells.append((column, rotation))
        index = self.meta.query_advice_index(column, rotation)
        return AdviceQuery(index, column.index, rotation)

    def query_fixed(self, column, rotation):
        self._check(column, ColumnType.FIXED)
        self.queried_cells.append((column, rotation))
        index = self.meta.query_fixed_index(column, rotation)
        return FixedQuery(index, column.index, rotation)

    def query_instance(self, column, rotation):
        self._check(column, ColumnType.INSTANCE)
        self.queried_cells.append((column, rotation))
        index = self.meta.query_instance_index(column, rotation)
        return InstanceQuery(index, column.index, rotation)

    def _check(self, column, expected):
        if column.column_type is not expected:
            raise ConfigurationError(
                f"{expected.value} 열이 필요하지만 {column}이(가) 들어왔습니다"
            )
        if column.index >= self.meta.num_columns(expected):
            raise ConfigurationError(f"할당되지 않은 열입니다: {column}")


# ─────────────────────────────────────────────────────────────────────
# 제약 시스템
# ─────────────────────────────────────────────────────────────────────

class ConstraintSystem:
    """회로 모양 선언을 담는 핸들.

    속성:
        field: 회로가 정의된 필드 클래스
        gates: Gate 리스트 (선언 순서)
        permutation_columns: 복사 제약이 허용된 열 리스트
        constants: 상수 바인딩용 fixed 열 리스트
        advice_queries / fixed_queries / instance_queries:
            (열, Rotation) 리스트 — 중복 없이 등록 순서대로
        num_advice_queries: advice 열별 쿼리 수
    """

    def __init__(self, field):
        self.field = field
        self.num_fixed_columns = 0
        self.num_advice_columns = 0
        self.num_instance_columns = 0
        self.num_selectors = 0
        self.gates = []
        self.permutation_columns = []
        self.constants = []
        self.advice_queries = []
        self.fixed_queries = []
        self.instance_queries = []
        self.num_advice_queries = []

    # ── 열 할당 ──

    def advice_column(self):
        column = Column(ColumnType.ADVICE, self.num_advice_columns)
        self.num_advice_columns += 1
        self.num_advice_queries.append(0)
        return column

    def fixed_column(self):
        column = Column(ColumnType.FIXED, self.num_fixed_columns)
        self.num_fixed_columns += 1
        return column

    def instance_column(self):
        column = Column(ColumnType.INSTANCE, self.num_instance_columns)
        self.num_instance_columns += 1
        return column

    def selector(self):
        selector = Selector(self.num_selectors)
        self.num_selectors += 1
        return selector

    def num_columns(self, column_type):
        return {
            ColumnType.ADVICE: self.num_advice_columns,
            ColumnType.FIXED: self.num_fixed_columns,
            ColumnType.INSTANCE: self.num_instance_columns,
        }[column_type]

    # ── 복사 제약 / 상수 ──

    def enable_equality(self, column):
        """열을 순열(permutation)에 등록하여 복사 제약을 허용한다."""
        if column.index >= self.num_columns(column.column_type):
            raise ConfigurationError(f"할당되지 않은 열입니다: {column}")
        if column not in self.permutation_columns:
            self.permutation_columns.append(column)

    def enable_constant(self, column):
        """fixed 열을 상수 바인딩용으로 등록한다 (복사 제약도 함께 켠다)."""
        if column.column_type is not ColumnType.FIXED:
            raise ConfigurationError(f"상수는 fixed 열에만 둘 수 있습니다: {column}")
        if column not in self.constants:
            self.constants.append(column)
        self.enable_equality(column)

    # ── 쿼리 인덱스 ──

    def query_advice_index(self, column, rotation):
        key = (column, rotation)
        if key not in self.advice_queries:
            self.advice_queries.append(key)
            self.num_advice_queries[column.index] += 1
        return self.advice_queries.index(key)

    def query_fixed_index(self, column, rotation):
        key = (column, rotation)
        if key not in self.fixed_queries:
            self.fixed_queries.append(key)
        return self.fixed_queries.index(key)

    def query_instance_index(self, column, rotation):
        key = (column, rotation)
        if key not in self.instance_queries:
            self.instance_queries.append(key)
        return self.instance_queries.index(key)

    # ── 게이트 ──

    def create_gate(self, name, constraints_fn):
        """게이트를 등록한다.

        Args:
            name: 게이트 이름 (예: "complex_gate")
            constraints_fn: fn(VirtualCells) → 표현식 또는 (이름, 표현식) 리스트

        Raises:
            ConfigurationError: 제약이 하나도 없거나 표현식이 아닌 값이 섞인 경우
        """
        cells = VirtualCells(self)
        constraints = list(constraints_fn(cells))
        if not constraints:
            raise ConfigurationError(f"게이트 '{name}'에는 제약이 하나 이상 있어야 합니다")

        names = []
        polys = []
        for constraint in constraints:
            if isinstance(constraint, tuple):
                constraint_name, poly = constraint
            else:
                constraint_name, poly = "", constraint
            if not isinstance(poly, Expression):
                raise ConfigurationError(
                    f"게이트 '{name}'이(가) 표현식이 아닌 제약을 반환했습니다: {poly!r}"
                )
            names.append(constraint_name)
            polys.append(poly)

        gate = Gate(
            name=name,
            constraint_names=tuple(names),
            polys=tuple(polys),
            queried_selectors=tuple(cells.queried_selectors),
            queried_cells=tuple(cells.queried_cells),
        )
        self.gates.append(gate)
        return gate

    # ── 파생 정보 ──

    def degree(self):
        """게이트 다항식의 최대 차수 (순열 인자 최소 차수 3 포함)."""
        degree = 3
        for gate in self.gates:
            for poly in gate.polys:
                degree = max(degree, poly.degree())
        return degree

    def blinding_factors(self):
        """witness 블라인딩을 위해 예약되는 행 수 (마지막 1행 제외)."""
        factors = max(self.num_advice_queries, default=1)
        factors = max(3, factors)
        return factors + 2

    def minimum_rows(self):
        """회로가 동작하기 위한 최소 행 수."""
        return self.blinding_factors() + 3

    def usable_rows(self, n):
        """2^k = n 행 중 witness가 쓸 수 있는 행 수."""
        return n - (self.blinding_factors() + 1)

    def pinned(self):
        """검증 키 다이제스트용 결정론적 구조 기술 문자열."""
        lines = [
            f"field={self.field.field_modulus}",
            f"columns advice={self.num_advice_columns} "
            f"fixed={self.num_fixed_columns} instance={self.num_instance_columns}",
            f"selectors={self.num_selectors}",
            "permutation=" + ",".join(str(c) for c in self.permutation_columns),
            "constants=" + ",".join(str(c) for c in self.constants),
        ]
        for gate in self.gates:
            for i, poly in enumerate(gate.polys):
                lines.append(f"gate {gate.name}/{gate.constraint_name(i)}: {poly}")
        return "\n".join(lines)

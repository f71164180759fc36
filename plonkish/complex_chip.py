"""
복합 게이트 회로: out = (a²·b²·c + c)³
========================================

비밀 값 a, b, c를 알고 있음을 증명하고, 결과 ``out``만 공개한다.

  d   = a² · b² · c
  e   = c + d
  out = e³

**회로 모양** (advice 3열, instance 1열, fixed 1열, 셀렉터 1개):

  | 행 | advice[0] | advice[1] | advice[2] | fixed[0] | s_cpx |
  |----|-----------|-----------|-----------|----------|-------|
  | 0  | a         | b         | c         | c (상수) |   1   |
  | 1  | out       |           |           |          |   0   |

  "complex_gate":  s_cpx · (((l·r)·(l·r)·c + c)³ − out) = 0
    l = advice[0]@cur, r = advice[1]@cur, c = advice[2]@cur
    out = advice[0]@next

  복사 제약:
    advice[2]@0 == fixed[0]@0   (상수 바인딩)
    advice[0]@1 == instance[0]@0 (공개 출력)

**행 정렬**:
  셀렉터는 a, b, c가 있는 행(INPUT_ROW)에 켜야 하고, out은 반드시 그 다음
  행(OUTPUT_ROW)에 써야 한다. 셀렉터를 다른 행에 켜면 게이트는 아무것도
  검사하지 않게 되어, 틀린 출력도 통과하는 회로가 된다.

**c에 대해**:
  c는 상수 경로(assign_advice_from_constant)로 쓰인다. 그 값이 fixed 열에
  들어가므로 검증 키에 포함되고, 회로 패밀리의 파라미터처럼 동작한다.

사용 예시:
    >>> circuit = ComplexCircuit(FR, a=2, b=3, c=2)
    >>> verify(DEFAULT_K, circuit, [[FR(405224)]])   # True
"""

import logging
from dataclasses import dataclass

from plonkish.circuit import Circuit
from plonkish.constraint_system import Column, Constraints, Selector
from plonkish.expression import Rotation
from plonkish.field import FR, to_field
from plonkish.value import Value

logger = logging.getLogger(__name__)

# 게이트의 cur 피연산자(a, b, c)가 놓이는 영역 내 행
INPUT_ROW = 0
# 게이트의 next 참조(out)가 놓이는 행
OUTPUT_ROW = INPUT_ROW + 1


def complex_output(a, b, c):
    """((a·b)²·c + c)³ 를 계산한다.

    필드 원소와 Value 모두에 동작한다. 곱셈 순서는 게이트 다항식과 같다.

    예시:
        >>> int(complex_output(FR(2), FR(3), FR(2)))   # 405224
    """
    e = a * a * b * b * c + c
    return e * e * e


# ─────────────────────────────────────────────────────────────────────
# 설정과 칩
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ComplexConfig:
    """configure가 만든 열과 셀렉터 핸들."""
    advice: tuple
    instance: Column
    s_cpx: Selector


class Number:
    """칩이 주고받는 변수: 할당된 advice 셀 하나."""

    def __init__(self, assigned):
        self.assigned = assigned

    @property
    def cell(self):
        return self.assigned.cell

    def value(self):
        return self.assigned.value()


class ComplexChip:
    """복합 게이트를 선언하고 그 witness를 채우는 칩."""

    def __init__(self, config):
        self.config = config

    @classmethod
    def construct(cls, config):
        return cls(config)

    @staticmethod
    def configure(meta):
        """열 5개, 셀렉터 1개, 게이트 "complex_gate"를 선언한다.

        Args:
            meta: ConstraintSystem

        Returns:
            ComplexConfig
        """
        advice = (meta.advice_column(), meta.advice_column(), meta.advice_column())
        instance = meta.instance_column()
        constant = meta.fixed_column()

        meta.enable_equality(instance)
        meta.enable_constant(constant)
        for column in advice:
            meta.enable_equality(column)

        s_cpx = meta.selector()

        def complex_gate(meta):
            lhs = meta.query_advice(advice[0], Rotation.cur())
            rhs = meta.query_advice(advice[1], Rotation.cur())
            c = meta.query_advice(advice[2], Rotation.cur())
            out = meta.query_advice(advice[0], Rotation.next())
            s_cpx_expr = meta.query_selector(s_cpx)

            e = (lhs * rhs) * (lhs * rhs) * c + c
            e_cub = e * e * e
            return Constraints.with_selector(s_cpx_expr, [("e³ - out", e_cub - out)])

        meta.create_gate("complex_gate", complex_gate)
        return ComplexConfig(advice=advice, instance=instance, s_cpx=s_cpx)

    # ── witness 할당 ──

    def enable_gate(self, region):
        # 셀렉터 행 == a, b, c 행
        self.config.s_cpx.enable(region, INPUT_ROW)

    def compute(self, a, b, c):
        return complex_output(a, b, c)

    def assign(self, layouter, a, b, c):
        """a, b, c를 쓰고 게이트를 켠 뒤, 출력 셀을 반환한다.

        Args:
            layouter: Layouter
            a, b: Value (또는 필드 원소)
            c: 필드 원소 (상수 경로로 바인딩)

        Returns:
            Number: advice[0]@OUTPUT_ROW 셀

        Raises:
            AssignmentError: 열/행/상수 바인딩이 잘못된 경우
        """
        config = self.config

        def assign_region(region):
            self.enable_gate(region)

            lhs = region.assign_advice("private input a", config.advice[0], INPUT_ROW, a)
            rhs = region.assign_advice("private input b", config.advice[1], INPUT_ROW, b)
            constant = region.assign_advice_from_constant(
                "constant c", config.advice[2], INPUT_ROW, c
            )

            e_cub = self.compute(lhs.value(), rhs.value(), constant.value())
            out = region.assign_advice("(a²b²c + c)³", config.advice[0], OUTPUT_ROW, e_cub)
            return Number(out)

        return layouter.assign_region("load private & witness", assign_region)

    def expose_public(self, layouter, number, row):
        """출력 셀을 instance 열의 ``row``에 바인딩한다."""
        layouter.constrain_instance(number.cell, self.config.instance, row)


# ─────────────────────────────────────────────────────────────────────
# 회로
# ─────────────────────────────────────────────────────────────────────

def _witness(field, value):
    if value is None:
        return Value.unknown()
    if isinstance(value, Value):
        return value.map(lambda v: to_field(field, v))
    return Value.known(to_field(field, value))


class ComplexCircuit(Circuit):
    """a, b, c를 들고 있는 회로 드라이버.

    속성:
        field: 필드 클래스 (기본 FR)
        a, b: Value (None이면 Unknown)
        c: 필드 원소 (None이면 0)
    """

    chip = ComplexChip

    def __init__(self, field=FR, a=None, b=None, c=None):
        self.field = field
        self.a = _witness(field, a)
        self.b = _witness(field, b)
        self.c = field.zero() if c is None else to_field(field, c)

    def without_witnesses(self):
        # c는 상수 열에 들어가므로 키 생성 시에도 같은 값이어야 한다
        return type(self)(self.field, c=self.c)

    @classmethod
    def configure(cls, meta):
        return cls.chip.configure(meta)

    def synthesize(self, config, layouter):
        chip = self.chip.construct(config)
        out = chip.assign(layouter.namespace("complex chip"), self.a, self.b, self.c)
        logger.debug(f"complex chip output: {out.value()!r}")
        chip.expose_public(layouter.namespace("expose out"), out, 0)

    def expected_output(self):
        """witness로 계산한 공개 출력 (Value)."""
        return complex_output(self.a, self.b, self.c)

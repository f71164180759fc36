"""
MockProver — 개발용 제약 만족 검사기
=====================================

실제 증명(커밋먼트, 트랜스크립트, 페어링)을 만들지 않고, 회로를 합성한 뒤
할당된 표(table) 위에서 모든 제약을 직접 확인한다.

**검사 항목**:
  ┌─────────────────────────────────────────────────────┐
  │  1. 게이트: 사용 가능한 모든 행에서 다항식 = 0       │
  │     (셀렉터가 꺼진 행은 다항식 전체가 0이 된다)      │
  ├─────────────────────────────────────────────────────┤
  │  2. 셀 할당: 켜진 게이트가 읽는 advice 셀은 모두      │
  │     값이 있어야 한다                                 │
  ├─────────────────────────────────────────────────────┤
  │  3. 복사 제약: 순열 σ의 모든 셀 x에 대해             │
  │     value(x) == value(σ(x))                          │
  └─────────────────────────────────────────────────────┘

공개 입력 벡터는 2^k 행으로 0 패딩된다. 따라서 공개 입력 길이를 넘는
슬롯에 바인딩한 셀은 0과 비교되어 검증 시점에 거부된다.

사용 예시:
    >>> prover = MockProver.run(5, circuit, [[FR(405224)]])
    >>> prover.verify()          # [] (성공)
    >>> prover.assert_satisfied()
"""

import logging

from plonkish.assignment import Assignment
from plonkish.constraint_system import ColumnType, ConstraintSystem
from plonkish.dev.failure import CellNotAssigned, ConstraintNotSatisfied, Permutation
from plonkish.errors import (
    AssignmentError,
    BindingError,
    InstanceTooLarge,
    NotEnoughRowsAvailable,
)
from plonkish.field import to_field
from plonkish.permutation import Assembly

logger = logging.getLogger(__name__)


class RegionRecord:
    """MockProver가 기록하는 영역 정보 (실패 보고, 레이아웃 출력용)."""

    def __init__(self, name):
        self.name = name
        self.rows = None
        self.enabled_selectors = []
        self.cells = []

    def track_row(self, row):
        if self.rows is None:
            self.rows = (row, row)
        else:
            self.rows = (min(self.rows[0], row), max(self.rows[1], row))

    def __contains__(self, row):
        return self.rows is not None and self.rows[0] <= row <= self.rows[1]


class MockProver(Assignment):
    """할당된 표를 들고 있는 검사기.

    속성:
        cs: ConstraintSystem
        instance: instance[i][row] — 0 패딩된 공개 입력
        advice: advice[i][row] — 필드 원소 또는 None (미할당)
        fixed: fixed[i][row] — 필드 원소 또는 None
        selectors: selectors[i][row] — bool
        permutation: permutation.Assembly
        regions: RegionRecord 리스트 (할당 순서)
        layouter: 합성에 사용된 SingleChipLayouter
    """

    def __init__(self, k, cs, usable_rows, instance):
        super().__init__(k, usable_rows)
        self.cs = cs
        self.field = cs.field
        self.instance = instance
        self.advice = [[None] * self.n for _ in range(cs.num_advice_columns)]
        self.fixed = [[None] * self.n for _ in range(cs.num_fixed_columns)]
        self.selectors = [[False] * self.n for _ in range(cs.num_selectors)]
        self.permutation = Assembly(self.n, cs.permutation_columns)
        self.regions = []
        self.layouter = None
        self._current_region = None

    @classmethod
    def run(cls, k, circuit, instance):
        """회로를 구성하고 합성하여 MockProver를 만든다.

        Args:
            k: 회로 크기 파라미터 (행 수 2^k)
            circuit: plonkish.circuit.Circuit 인스턴스
            instance: instance 열마다 하나씩, 공개 입력 값 리스트의 리스트

        Returns:
            MockProver

        Raises:
            NotEnoughRowsAvailable: 2^k가 최소 행 수보다 작거나 회로가 넘치는 경우
            BindingError: 공개 입력 벡터 수가 instance 열 수와 다르거나,
                공개 입력에 다른 필드의 원소가 섞인 경우
            InstanceTooLarge: 공개 입력 벡터가 사용 가능한 행보다 긴 경우
            SynthesisError: 회로 합성 중 발생한 그 밖의 오류
        """
        cs = ConstraintSystem(circuit.field)
        config = circuit.configure(cs)

        n = 1 << k
        if n < cs.minimum_rows():
            raise NotEnoughRowsAvailable(k)
        usable_rows = cs.usable_rows(n)

        if len(instance) != cs.num_instance_columns:
            raise BindingError(
                f"공개 입력 벡터는 {cs.num_instance_columns}개여야 합니다 (받은 수: {len(instance)})"
            )
        padded = []
        for values in instance:
            if len(values) > usable_rows:
                raise InstanceTooLarge(
                    f"공개 입력 {len(values)}개가 사용 가능한 행 {usable_rows}개에 들어가지 않습니다"
                )
            try:
                column = [to_field(cs.field, v) for v in values]
            except TypeError as e:
                raise BindingError(str(e)) from e
            column.extend(cs.field.zero() for _ in range(n - len(column)))
            padded.append(column)

        prover = cls(k, cs, usable_rows, padded)
        prover.layouter = circuit.floor_planner.synthesize(cs, prover, circuit, config)
        logger.info(
            f"mock prover synthesized {len(prover.regions)} regions "
            f"(k={k}, usable rows={usable_rows})"
        )
        return prover

    # ── Assignment 구현 ──

    def enter_region(self, name):
        self._current_region = RegionRecord(name)
        self.regions.append(self._current_region)

    def exit_region(self):
        self._current_region = None

    def _track(self, column, row):
        if self._current_region is not None:
            self._current_region.track_row(row)
            self._current_region.cells.append((column, row))

    def enable_selector(self, name, selector, row):
        self.check_row(None, row)
        self.selectors[selector.index][row] = True
        if self._current_region is not None:
            self._current_region.track_row(row)
            self._current_region.enabled_selectors.append((selector, row))

    def assign_advice(self, name, column, row, value):
        self.check_row(column, row)
        if value.is_unknown():
            raise AssignmentError(f"advice 셀 '{name}' ({column}[{row}])에 witness 값이 없습니다")
        self.advice[column.index][row] = value.into_option()
        self._track(column, row)

    def assign_fixed(self, name, column, row, value):
        self.check_row(column, row)
        if value.is_unknown():
            raise AssignmentError(f"fixed 셀 '{name}' ({column}[{row}])에 값이 없습니다")
        self.fixed[column.index][row] = value.into_option()
        self._track(column, row)

    def copy(self, left_column, left_row, right_column, right_row):
        self.check_row(left_column, left_row)
        self.check_row(right_column, right_row)
        self.permutation.copy(left_column, left_row, right_column, right_row)

    # ── 셀 값 ──

    def cell_value(self, column, row):
        """열 종류에 상관없이 셀 값을 반환한다 (미할당은 0)."""
        row = row % self.n
        if column.column_type is ColumnType.INSTANCE:
            return self.instance[column.index][row]
        table = self.advice if column.column_type is ColumnType.ADVICE else self.fixed
        value = table[column.index][row]
        return self.field.zero() if value is None else value

    def region_at(self, row):
        for region in self.regions:
            if row in region:
                return region.name
        return "outside any region"

    def _evaluate(self, poly, row):
        one = self.field.one()
        zero = self.field.zero()
        n = self.n

        def query(table):
            def lookup(q):
                value = table[q.column_index][(row + q.rotation.offset) % n]
                return zero if value is None else value
            return lookup

        return poly.evaluate(
            constant=lambda v: to_field(self.field, v),
            selector_column=lambda s: one if self.selectors[s.index][row] else zero,
            fixed_column=query(self.fixed),
            advice_column=query(self.advice),
            instance_column=query(self.instance),
            negated=lambda a: -a,
            sum=lambda a, b: a + b,
            product=lambda a, b: a * b,
            scaled=lambda a, k: a * k,
        )

    def _gate_cells(self, gate):
        cells = []
        for cell in gate.queried_cells:
            if cell not in cells:
                cells.append(cell)
        return cells

    # ── 검증 ──

    def verify(self):
        """모든 제약을 검사하고 실패 목록을 반환한다 (빈 리스트 = 성공)."""
        failures = []
        zero = self.field.zero()

        for gate in self.cs.gates:
            cells = self._gate_cells(gate)
            for row in range(self.usable_rows):
                enabled = gate.queried_selectors and all(
                    self.selectors[s.index][row] for s in gate.queried_selectors
                )
                if enabled:
                    for column, rotation in cells:
                        if column.column_type is not ColumnType.ADVICE:
                            continue
                        target = (row + rotation.offset) % self.n
                        if self.advice[column.index][target] is None:
                            failures.append(CellNotAssigned(
                                gate.name, self.region_at(row), column, target,
                            ))

                for i, poly in enumerate(gate.polys):
                    if self._evaluate(poly, row) == zero:
                        continue
                    values = tuple(
                        (f"{column}@{rotation.offset}",
                         self.cell_value(column, row + rotation.offset))
                        for column, rotation in cells
                    )
                    failures.append(ConstraintNotSatisfied(
                        gate.name, gate.constraint_name(i), row, self.region_at(row), values,
                    ))

        columns = self.permutation.columns
        for i, column in enumerate(columns):
            for row in range(self.n):
                other_index, other_row = self.permutation.mapping[i][row]
                other_column = columns[other_index]
                if self.cell_value(column, row) != self.cell_value(other_column, other_row):
                    failures.append(Permutation(column, row, other_column, other_row))

        if failures:
            logger.warning(f"mock prover found {len(failures)} failures")
            for failure in failures:
                logger.debug(str(failure))
        else:
            logger.info("mock prover: all constraints satisfied")
        return failures

    def assert_satisfied(self):
        """제약이 하나라도 깨졌으면 AssertionError를 던진다."""
        failures = self.verify()
        if failures:
            raise AssertionError(
                "회로 제약이 만족되지 않았습니다:\n" + "\n".join(f"  {f}" for f in failures)
            )

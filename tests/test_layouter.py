"""
layouter 모듈 테스트.

테스트 대상:
  - SimpleFloorPlanner: 영역 배치, 열 공유, 이름 공간(namespace)
  - ConstantTable: 상수 셀 배정, 복사 제약 연결, 필드 불일치
  - 기록 오류: 미등록 열/셀렉터, 음수 오프셋, 행 부족, enable_equality 누락
"""
import pytest

from plonkish.field import FR, Fp
from plonkish.circuit import Circuit
from plonkish.constraint_system import Column, ColumnType, Selector
from plonkish.dev import MockProver
from plonkish.errors import (
    AssignmentError, NotEnoughColumnsForConstants, NotEnoughRowsAvailable,
)
from plonkish.value import Value


class RegionsCircuit(Circuit):
    """advice 1열 + 상수 열. ``regions``의 함수마다 영역 하나를 만든다."""

    field = FR

    def __init__(self, regions, with_constants=True, with_equality=True):
        self.regions = regions
        self.with_constants = with_constants
        self.with_equality = with_equality

    def without_witnesses(self):
        return self

    def configure(self, meta):
        advice = meta.advice_column()
        other = meta.advice_column()
        fixed = meta.fixed_column()
        if self.with_equality:
            meta.enable_equality(advice)
        if self.with_constants:
            meta.enable_constant(fixed)
        return advice, other, fixed

    def synthesize(self, config, layouter):
        for name, assign in self.regions:
            layouter.assign_region(name, lambda region, assign=assign: assign(region, config))


def _run(circuit, k=5):
    return MockProver.run(k, circuit, [])


def load_constant(value):
    def assign(region, config):
        advice, _, _ = config
        return region.assign_advice_from_constant("c", advice, 0, value)
    return assign


def load_witness(value, offset=0, column=0):
    def assign(region, config):
        return region.assign_advice("w", config[column], offset, value)
    return assign


# =====================================================================
# Placement
# =====================================================================

class TestPlacement:
    def test_regions_stack_on_shared_columns(self):
        circuit = RegionsCircuit([
            ("first", load_witness(FR(1), offset=1)),
            ("second", load_witness(FR(2))),
        ])
        prover = _run(circuit)
        assert prover.layouter.regions == [0, 2]
        assert prover.advice[0][1] == FR(1)
        assert prover.advice[0][2] == FR(2)

    def test_disjoint_columns_share_rows(self):
        circuit = RegionsCircuit([
            ("left", load_witness(FR(1), column=0)),
            ("right", load_witness(FR(2), column=1)),
        ])
        prover = _run(circuit)
        assert prover.layouter.regions == [0, 0]

    def test_region_names_and_namespace(self):
        class Namespaced(RegionsCircuit):
            def synthesize(self, config, layouter):
                inner = layouter.namespace("outer").namespace("inner")
                inner.assign_region("r", lambda region: region.assign_advice(
                    "w", config[0], 0, FR(1)))

        prover = _run(Namespaced([]))
        assert prover.layouter.region_names == ["outer/inner/r"]
        assert prover.regions[0].name == "outer/inner/r"
        assert prover.region_at(0) == "outer/inner/r"

    def test_plain_values_are_known(self):
        cells = []

        def assign(region, config):
            cells.append(region.assign_advice("w", config[0], 0, FR(5)))

        _run(RegionsCircuit([("r", assign)]))
        assert cells[-1].value() == Value.known(FR(5))


# =====================================================================
# Constant table
# =====================================================================

class TestConstants:
    def test_distinct_constants_get_one_cell_each(self):
        circuit = RegionsCircuit([
            ("load 0", load_constant(FR(7))),
            ("load 1", load_constant(FR(7))),
            ("load 2", load_constant(FR(9))),
        ])
        prover = _run(circuit)
        assert prover.fixed[0][:3] == [FR(7), FR(9), None]
        assert prover.verify() == []

    def test_constant_cell_is_copy_bound(self):
        circuit = RegionsCircuit([
            ("load 0", load_constant(FR(7))),
            ("load 1", load_constant(FR(7))),
        ])
        prover = _run(circuit)
        fixed = Column(ColumnType.FIXED, 0)
        advice = Column(ColumnType.ADVICE, 0)
        assert set(prover.permutation.cycle(fixed, 0)) == {(fixed, 0), (advice, 0), (advice, 1)}

    def test_no_constant_column(self):
        circuit = RegionsCircuit([("load", load_constant(FR(7)))], with_constants=False)
        with pytest.raises(NotEnoughColumnsForConstants):
            _run(circuit)

    def test_constant_from_other_field(self):
        circuit = RegionsCircuit([("load", load_constant(Fp(7)))])
        with pytest.raises(AssignmentError):
            _run(circuit)


# =====================================================================
# Bookkeeping errors
# =====================================================================

class TestBookkeeping:
    def test_unregistered_column(self):
        def assign(region, config):
            region.assign_advice("w", Column(ColumnType.ADVICE, 5), 0, FR(1))

        with pytest.raises(AssignmentError):
            _run(RegionsCircuit([("r", assign)]))

    def test_fixed_column_as_advice(self):
        def assign(region, config):
            region.assign_advice("w", config[2], 0, FR(1))

        with pytest.raises(AssignmentError):
            _run(RegionsCircuit([("r", assign)]))

    def test_negative_offset(self):
        with pytest.raises(AssignmentError):
            _run(RegionsCircuit([("r", load_witness(FR(1), offset=-1))]))

    def test_unregistered_selector(self):
        def assign(region, config):
            Selector(3).enable(region, 0)

        with pytest.raises(AssignmentError):
            _run(RegionsCircuit([("r", assign)]))

    def test_rows_exhausted(self):
        # k=5: 32행 중 26행 사용 가능
        with pytest.raises(NotEnoughRowsAvailable):
            _run(RegionsCircuit([("r", load_witness(FR(1), offset=26))]))
        _run(RegionsCircuit([("r", load_witness(FR(1), offset=25))]))

    def test_copy_without_equality(self):
        def assign(region, config):
            left = region.assign_advice("l", config[1], 0, FR(1))
            right = region.assign_advice("r", config[1], 1, FR(1))
            region.constrain_equal(left.cell, right.cell)

        with pytest.raises(AssignmentError):
            _run(RegionsCircuit([("r", assign)]))

    def test_constrain_equal(self):
        def assign(region, config):
            left = region.assign_advice("l", config[0], 0, FR(1))
            right = region.assign_advice("r", config[0], 1, FR(2))
            region.constrain_equal(left.cell, right.cell)

        failures = _run(RegionsCircuit([("r", assign)])).verify()
        assert len(failures) == 2

"""
레이아우터 (Layouter)와 영역 (Region)
======================================

칩(chip)이 셀을 쓰는 방식과 그 셀이 회로의 어느 절대 행에 놓이는지를
분리한다.

**영역(Region)**:
  관련된 셀들을 모아 쓰는 국소적 행 주소 공간. 영역 안의 오프셋은
  0, 1, 2, ... 상대값이고, 영역 시작 행은 레이아우터가 정한다.

**배치 방식 (SimpleFloorPlanner)**:
  1. 모양(shape) 패스: 영역 함수를 ``RegionShape`` 위에서 한 번 실행해
     사용하는 열(셀렉터 포함)과 행 수를 알아낸다.
  2. 배치: 그 열들이 모두 비어 있는 첫 행을 영역 시작 행으로 정한다.
  3. 할당 패스: 영역 함수를 실제 백엔드 위에서 다시 실행한다.
  4. 모든 영역이 끝나면 상수 테이블을 상수용 fixed 열에 채우고,
     상수에 바인딩된 advice 셀마다 복사 제약을 건다.

  | 행 | advice[0] | advice[1] | advice[2] | fixed[0] | s_cpx |
  |----|-----------|-----------|-----------|----------|-------|
  | 0  | a         | b         | c ────────┼─→ c      |   1   |
  | 1  | out       |           |           |          |       |

**상수 테이블**:
  같은 상수 값은 회로 전체에서 fixed 셀 하나만 차지한다.
  ``assign_advice_from_constant``로 쓴 모든 advice 셀은 그 fixed 셀과
  복사 제약으로 연결된다.

사용 예시:
    >>> def assign(region):
    ...     config.s_cpx.enable(region, 0)
    ...     return region.assign_advice("a", config.advice[0], 0, a)
    >>> cell = layouter.assign_region("load a", assign)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from plonkish.constraint_system import Column, ColumnType
from plonkish.errors import AssignmentError, NotEnoughColumnsForConstants
from plonkish.value import Value

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 셀
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Cell:
    """할당된 셀의 위치. 영역 인덱스 + 영역 내 상대 행 + 열."""
    region_index: int
    row_offset: int
    column: Column


class AssignedCell:
    """할당된 셀의 값(Value)과 위치(Cell)."""

    def __init__(self, value, cell):
        self._value = value
        self.cell = cell

    def value(self):
        return self._value

    def __repr__(self):
        return f"AssignedCell({self._value!r}, {self.cell})"


# ─────────────────────────────────────────────────────────────────────
# 영역
# ─────────────────────────────────────────────────────────────────────

class RegionLayouter(ABC):
    """Region이 호출을 위임하는 대상 (모양 패스 / 할당 패스)."""

    @abstractmethod
    def enable_selector(self, name, selector, offset):
        pass

    @abstractmethod
    def assign_advice(self, name, column, offset, value):
        pass

    @abstractmethod
    def assign_advice_from_constant(self, name, column, offset, constant):
        pass

    @abstractmethod
    def assign_fixed(self, name, column, offset, value):
        pass

    @abstractmethod
    def constrain_constant(self, cell, constant):
        pass

    @abstractmethod
    def constrain_equal(self, left, right):
        pass


class Region:
    """칩이 보는 영역 핸들. 오프셋은 모두 영역 상대값이다."""

    def __init__(self, region):
        self._region = region

    def enable_selector(self, name, selector, offset):
        self._region.enable_selector(name, selector, offset)

    def assign_advice(self, name, column, offset, value):
        """advice 셀에 Value를 쓰고 AssignedCell을 반환한다.

        일반 필드 원소가 들어오면 Known으로 취급한다.
        """
        if not isinstance(value, Value):
            value = Value.known(value)
        cell = self._region.assign_advice(name, column, offset, value)
        return AssignedCell(value, cell)

    def assign_advice_from_constant(self, name, column, offset, constant):
        """상수를 advice 셀에 쓰고, 같은 상수를 담은 fixed 셀과 묶는다."""
        cell = self._region.assign_advice_from_constant(name, column, offset, constant)
        return AssignedCell(Value.known(constant), cell)

    def assign_fixed(self, name, column, offset, value):
        if not isinstance(value, Value):
            value = Value.known(value)
        cell = self._region.assign_fixed(name, column, offset, value)
        return AssignedCell(value, cell)

    def constrain_constant(self, cell, constant):
        self._region.constrain_constant(cell, constant)

    def constrain_equal(self, left, right):
        self._region.constrain_equal(left, right)


def _check_offset(offset):
    if offset < 0:
        raise AssignmentError(f"영역 오프셋은 0 이상이어야 합니다: {offset}")


class RegionShape(RegionLayouter):
    """모양 패스: 사용한 열과 행 수만 기록한다."""

    def __init__(self, region_index):
        self.region_index = region_index
        self.columns = set()
        self.row_count = 0

    def _touch(self, column, offset):
        _check_offset(offset)
        self.columns.add(column)
        self.row_count = max(self.row_count, offset + 1)

    def enable_selector(self, name, selector, offset):
        self._touch(selector, offset)

    def assign_advice(self, name, column, offset, value):
        self._touch(column, offset)
        return Cell(self.region_index, offset, column)

    def assign_advice_from_constant(self, name, column, offset, constant):
        return self.assign_advice(name, column, offset, Value.known(constant))

    def assign_fixed(self, name, column, offset, value):
        self._touch(column, offset)
        return Cell(self.region_index, offset, column)

    def constrain_constant(self, cell, constant):
        pass

    def constrain_equal(self, left, right):
        pass


class SingleChipRegion(RegionLayouter):
    """할당 패스: 상대 오프셋을 절대 행으로 바꿔 백엔드에 쓴다."""

    def __init__(self, layouter, region_index):
        self.layouter = layouter
        self.region_index = region_index

    @property
    def start(self):
        return self.layouter.regions[self.region_index]

    def enable_selector(self, name, selector, offset):
        _check_offset(offset)
        if selector.index >= self.layouter.cs.num_selectors:
            raise AssignmentError(f"등록되지 않은 셀렉터입니다: selector {selector.index}")
        self.layouter.backend.enable_selector(name, selector, self.start + offset)

    def assign_advice(self, name, column, offset, value):
        _check_offset(offset)
        self.layouter.check_column(column, ColumnType.ADVICE)
        self.layouter.backend.assign_advice(name, column, self.start + offset, value)
        return Cell(self.region_index, offset, column)

    def assign_advice_from_constant(self, name, column, offset, constant):
        if not isinstance(constant, self.layouter.cs.field):
            raise AssignmentError(
                f"상수 {constant!r}는 {self.layouter.cs.field.__name__}의 원소가 아닙니다"
            )
        cell = self.assign_advice(name, column, offset, Value.known(constant))
        self.constrain_constant(cell, constant)
        return cell

    def assign_fixed(self, name, column, offset, value):
        _check_offset(offset)
        self.layouter.check_column(column, ColumnType.FIXED)
        self.layouter.backend.assign_fixed(name, column, self.start + offset, value)
        return Cell(self.region_index, offset, column)

    def constrain_constant(self, cell, constant):
        self.layouter.constants_to_assign.append((constant, cell))

    def constrain_equal(self, left, right):
        self.layouter.backend.copy(
            left.column, self.layouter.absolute_row(left),
            right.column, self.layouter.absolute_row(right),
        )


# ─────────────────────────────────────────────────────────────────────
# 상수 테이블
# ─────────────────────────────────────────────────────────────────────

class ConstantTable:
    """상수 값 → fixed 셀 매핑. 서로 다른 상수마다 한 번만 채워진다.

    속성:
        columns: enable_constant로 등록된 fixed 열 리스트
        cells: int(상수) → (열, 절대 행)
    """

    def __init__(self, columns, next_rows):
        self.columns = list(columns)
        self.next_rows = {column: next_rows.get(column, 0) for column in self.columns}
        self.cells = {}

    def bind(self, backend, constant):
        """상수를 담은 fixed 셀을 반환한다. 처음 보는 상수면 새로 채운다.

        Raises:
            NotEnoughColumnsForConstants: 상수용 열이 없는 경우
        """
        key = int(constant)
        if key in self.cells:
            return self.cells[key]
        if not self.columns:
            raise NotEnoughColumnsForConstants()

        column = min(self.columns, key=lambda c: self.next_rows[c])
        row = self.next_rows[column]
        self.next_rows[column] = row + 1
        backend.assign_fixed("constant", column, row, Value.known(constant))
        self.cells[key] = (column, row)
        logger.debug(f"constant {key} committed at {column}[{row}]")
        return column, row


# ─────────────────────────────────────────────────────────────────────
# 레이아우터
# ─────────────────────────────────────────────────────────────────────

class Layouter(ABC):
    """칩이 영역을 요청하고 공개 입력을 바인딩하는 인터페이스."""

    @abstractmethod
    def assign_region(self, name, assignment):
        """영역을 하나 배치하고 ``assignment(region)``의 결과를 반환한다."""

    @abstractmethod
    def constrain_instance(self, cell, column, row):
        """``cell``과 instance 열의 절대 행 ``row``를 복사 제약으로 묶는다."""

    def namespace(self, name):
        return NamespacedLayouter(self, name)


class SingleChipLayouter(Layouter):
    """영역을 차례로 쌓는 레이아우터.

    속성:
        cs: ConstraintSystem
        backend: Assignment (MockProver 또는 keygen Assembly)
        regions: regions[i] = i번째 영역의 시작 행
        region_names: regions와 같은 순서의 영역 이름
        columns: 열(또는 셀렉터) → 다음 빈 행
        constants_to_assign: (상수, advice Cell) 리스트
    """

    def __init__(self, cs, backend):
        self.cs = cs
        self.backend = backend
        self.regions = []
        self.region_names = []
        self.columns = {}
        self.constants_to_assign = []

    def assign_region(self, name, assignment):
        region_index = len(self.regions)

        shape = RegionShape(region_index)
        assignment(Region(shape))

        region_start = max((self.columns.get(c, 0) for c in shape.columns), default=0)
        self.regions.append(region_start)
        self.region_names.append(name)
        for column in shape.columns:
            self.columns[column] = max(self.columns.get(column, 0), region_start + shape.row_count)
        logger.debug(f"region '{name}' placed at row {region_start} ({shape.row_count} rows)")

        self.backend.enter_region(name)
        result = assignment(Region(SingleChipRegion(self, region_index)))
        self.backend.exit_region()
        return result

    def constrain_instance(self, cell, column, row):
        self.check_column(column, ColumnType.INSTANCE)
        self.backend.copy(cell.column, self.absolute_row(cell), column, row)

    def absolute_row(self, cell):
        return self.regions[cell.region_index] + cell.row_offset

    def check_column(self, column, expected):
        if column.column_type is not expected or column.index >= self.cs.num_columns(expected):
            raise AssignmentError(f"{column}은(는) 등록된 {expected.value} 열이 아닙니다")

    def assign_constants(self):
        """상수 테이블을 채우고 상수에 바인딩된 셀들을 연결한다."""
        if not self.constants_to_assign:
            return None
        table = ConstantTable(self.cs.constants, self.columns)
        self.backend.enter_region("constants")
        for constant, advice_cell in self.constants_to_assign:
            column, row = table.bind(self.backend, constant)
            self.backend.copy(column, row, advice_cell.column, self.absolute_row(advice_cell))
        self.backend.exit_region()
        for column, next_row in table.next_rows.items():
            self.columns[column] = next_row
        return table


class NamespacedLayouter(Layouter):
    """영역 이름에 접두어를 붙여 부모 레이아우터로 위임한다."""

    def __init__(self, parent, name):
        self.parent = parent
        self.name = name

    def assign_region(self, name, assignment):
        return self.parent.assign_region(f"{self.name}/{name}", assignment)

    def constrain_instance(self, cell, column, row):
        self.parent.constrain_instance(cell, column, row)

    def namespace(self, name):
        return NamespacedLayouter(self.parent, f"{self.name}/{name}")


class SimpleFloorPlanner:
    """영역을 순서대로 쌓고, 마지막에 상수를 배치하는 플로어 플래너."""

    @staticmethod
    def synthesize(cs, backend, circuit, config):
        """``circuit.synthesize``를 실행한다.

        Returns:
            SingleChipLayouter: 영역 배치 정보 (시각화/디버깅용)
        """
        layouter = SingleChipLayouter(cs, backend)
        circuit.synthesize(config, layouter)
        layouter.assign_constants()
        return layouter

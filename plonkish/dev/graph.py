"""
회로 레이아웃 출력
===================

회로가 표의 어느 셀을 사용하는지 텍스트 표로 그린다. 셀 값은 보지 않으므로
witness가 없는 회로(``without_witnesses()``)도 그릴 수 있다.

  기호:
    #   할당된 셀
    =   복사 제약에 참여하는 셀
    1   켜진 셀렉터

출력 예시 (k=5, 상수 영역 포함):

   row | advice[0] | advice[1] | advice[2] | fixed[0] | instance[0] | s0 | region
  -----+-----------+-----------+-----------+----------+-------------+----+----------
     0 |    #=     |     #     |    #=     |    #=    |      =      | 1  | complex chip/load private & witness
     1 |    #=     |           |           |          |             |    | complex chip/load private & witness
"""

from plonkish.assignment import Assignment
from plonkish.constraint_system import Column, ColumnType, ConstraintSystem
from plonkish.errors import NotEnoughRowsAvailable


class Layout(Assignment):
    """셀 사용 위치만 기록하는 백엔드."""

    def __init__(self, k, cs, usable_rows):
        super().__init__(k, usable_rows)
        self.cs = cs
        self.region_rows = {}
        self.assigned = set()
        self.copied = set()
        self.selectors = [[False] * self.n for _ in range(cs.num_selectors)]
        self._region = None

    def enter_region(self, name):
        self._region = name

    def exit_region(self):
        self._region = None

    def _mark(self, row):
        if self._region is not None:
            self.region_rows.setdefault(row, self._region)

    def enable_selector(self, name, selector, row):
        self.check_row(None, row)
        self.selectors[selector.index][row] = True
        self._mark(row)

    def assign_advice(self, name, column, row, value):
        self.check_row(column, row)
        self.assigned.add((column, row))
        self._mark(row)

    def assign_fixed(self, name, column, row, value):
        self.check_row(column, row)
        self.assigned.add((column, row))
        self._mark(row)

    def copy(self, left_column, left_row, right_column, right_row):
        self.check_row(left_column, left_row)
        self.check_row(right_column, right_row)
        self.copied.add((left_column, left_row))
        self.copied.add((right_column, right_row))

    @property
    def last_row(self):
        rows = [row for _, row in self.assigned | self.copied]
        rows.extend(row for column in self.selectors for row, on in enumerate(column) if on)
        return max(rows, default=-1)


def _columns(cs):
    columns = []
    for column_type in (ColumnType.ADVICE, ColumnType.FIXED, ColumnType.INSTANCE):
        columns.extend(Column(column_type, i) for i in range(cs.num_columns(column_type)))
    return columns


def render_layout(k, circuit, rows=None):
    """회로 레이아웃을 텍스트 표로 반환한다.

    Args:
        k: 회로 크기 파라미터
        circuit: plonkish.circuit.Circuit
        rows: 출력할 행 수 (기본: 마지막으로 사용된 행까지)

    Returns:
        str
    """
    cs = ConstraintSystem(circuit.field)
    config = circuit.configure(cs)
    n = 1 << k
    if n < cs.minimum_rows():
        raise NotEnoughRowsAvailable(k)

    layout = Layout(k, cs, cs.usable_rows(n))
    circuit.floor_planner.synthesize(cs, layout, circuit, config)

    columns = _columns(cs)
    header = ["row"] + [str(c) for c in columns] + [f"s{i}" for i in range(cs.num_selectors)]
    widths = [max(len(h), 3) for h in header]

    if rows is None:
        rows = layout.last_row + 1

    def line(cells, region=""):
        text = " | ".join(cell.center(width) for cell, width in zip(cells, widths))
        return f"{text} | {region}".rstrip()

    lines = [line(header, "region"), "-+-".join("-" * w for w in widths) + "-+-" + "-" * 6]
    for row in range(min(rows, n)):
        cells = [str(row)]
        for column in columns:
            mark = ""
            if (column, row) in layout.assigned:
                mark += "#"
            if (column, row) in layout.copied:
                mark += "="
            cells.append(mark)
        cells.extend("1" if column[row] else "" for column in layout.selectors)
        lines.append(line(cells, layout.region_rows.get(row, "")))

    lines.append(f"(usable rows: {layout.usable_rows} of {n})")
    return "\n".join(lines)

"""
MockProver 검증 실패 타입
==========================

검증 실패는 예외가 아니라 데이터다. ``MockProver.verify()``는 아래 객체들의
리스트를 반환하며, 빈 리스트가 "모든 제약 만족"을 뜻한다.

  | 실패                    | 의미                                          |
  |-------------------------|-----------------------------------------------|
  | ConstraintNotSatisfied  | 셀렉터가 켜진 행에서 게이트 다항식 ≠ 0        |
  | CellNotAssigned         | 켜진 게이트가 읽는 advice 셀이 비어 있음      |
  | Permutation             | 복사 제약으로 묶인 두 셀의 값이 다름          |
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConstraintNotSatisfied:
    gate: str
    constraint: str
    row: int
    region: str
    cell_values: tuple

    def __str__(self):
        values = ", ".join(f"{name} = {int(value)}" for name, value in self.cell_values)
        return (
            f"게이트 '{self.gate}'의 제약 '{self.constraint}'이(가) {self.row}행 "
            f"(영역 '{self.region}')에서 만족되지 않습니다: {values}"
        )


@dataclass(frozen=True)
class CellNotAssigned:
    gate: str
    region: str
    column: object
    row: int

    def __str__(self):
        return (
            f"게이트 '{self.gate}'(영역 '{self.region}')가 읽는 {self.column}의 "
            f"{self.row}행이 할당되지 않았습니다"
        )


@dataclass(frozen=True)
class Permutation:
    column: object
    row: int
    other_column: object
    other_row: int

    def __str__(self):
        return (
            f"복사 제약 위반: {self.column}[{self.row}]와 "
            f"{self.other_column}[{self.other_row}]의 값이 다릅니다"
        )

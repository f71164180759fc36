"""
복사 제약 순열 (Permutation Assembly)
======================================

배선 복사 제약(copy constraint)을 순열(permutation)의 순환(cycle)으로
인코딩한다.

**배경: 왜 순열이 필요한가?**
  게이트는 한 행(과 rotation으로 닿는 이웃 행)의 값만 본다.
  서로 다른 위치의 셀이 "같은 값"을 가져야 한다는 사실은 게이트로
  표현할 수 없다. 예: advice[0]의 출력 셀 == instance[0]의 0행.

  해결: 복사 제약이 허용된 열들의 모든 셀에 순열 σ를 정의하고,
  같은 값을 가져야 하는 셀들을 하나의 순환으로 묶는다.
  검사자는 "모든 셀 x에 대해 value(x) == value(σ(x))"를 확인한다.

**순환 병합**:
  각 셀은 처음에 자기 자신만으로 된 순환이다 (σ = 항등 순열).
  copy(x, y)가 호출되면 x가 속한 순환과 y가 속한 순환을 합친다.
  - aux[x]: x가 속한 순환의 대표 셀
  - sizes[대표]: 순환의 크기 (작은 순환을 큰 순환에 합친다)
  - 이미 같은 순환이면 아무것도 하지 않는다 (σ를 교환하면 순환이 쪼개진다)

사용 예시:
    >>> assembly = Assembly(n=8, columns=[advice0, instance0])
    >>> assembly.copy(advice0, 1, instance0, 0)
    >>> assembly.mapping_at(advice0, 1)   # (1, 0) = instance0의 0행
"""

from plonkish.errors import AssignmentError


class Assembly:
    """열 × 행 셀 위의 순열 σ를 구성한다.

    셀은 (순열 열 인덱스, 행) 튜플로 표현한다.

    속성:
        n: 행 수 (2^k)
        columns: 순열에 참여하는 열 리스트 (enable_equality 순서)
        mapping: mapping[i][j] = σ((i, j))
        aux: aux[i][j] = (i, j)가 속한 순환의 대표
        sizes: sizes[i][j] = (i, j)가 대표인 순환의 크기
    """

    def __init__(self, n, columns):
        self.n = n
        self.columns = list(columns)
        self.mapping = [[(i, j) for j in range(n)] for i in range(len(self.columns))]
        self.aux = [[(i, j) for j in range(n)] for i in range(len(self.columns))]
        self.sizes = [[1] * n for _ in self.columns]

    def column_index(self, column):
        """순열 안에서의 열 인덱스.

        Raises:
            AssignmentError: 열이 enable_equality로 등록되지 않은 경우
        """
        try:
            return self.columns.index(column)
        except ValueError:
            raise AssignmentError(f"{column}은(는) 순열에 없습니다 (enable_equality 필요)") from None

    def copy(self, left_column, left_row, right_column, right_row):
        """두 셀이 속한 순환을 합친다.

        Raises:
            AssignmentError: 순열에 없는 열이거나 행이 범위를 벗어난 경우
        """
        left = (self.column_index(left_column), left_row)
        right = (self.column_index(right_column), right_row)
        for row in (left_row, right_row):
            if not 0 <= row < self.n:
                raise AssignmentError(f"행 {row}이(가) 범위를 벗어났습니다 (전체 {self.n}행)")

        left_cycle = self.aux[left[0]][left[1]]
        right_cycle = self.aux[right[0]][right[1]]
        if left_cycle == right_cycle:
            return

        # 작은 순환을 큰 순환에 합친다
        if self._size(left_cycle) < self._size(right_cycle):
            left_cycle, right_cycle = right_cycle, left_cycle

        self.sizes[left_cycle[0]][left_cycle[1]] += self._size(right_cycle)
        cell = right_cycle
        while True:
            self.aux[cell[0]][cell[1]] = left_cycle
            cell = self.mapping[cell[0]][cell[1]]
            if cell == right_cycle:
                break

        # σ(left) ↔ σ(right) 교환으로 두 순환을 하나로 잇는다
        self.mapping[left[0]][left[1]], self.mapping[right[0]][right[1]] = (
            self.mapping[right[0]][right[1]],
            self.mapping[left[0]][left[1]],
        )

    def _size(self, cell):
        return self.sizes[cell[0]][cell[1]]

    def mapping_at(self, column, row):
        """σ((column, row))를 (순열 열 인덱스, 행)으로 반환한다."""
        return self.mapping[self.column_index(column)][row]

    def cycle(self, column, row):
        """(column, row)가 속한 순환의 모든 셀을 (열, 행) 리스트로 반환한다."""
        start = (self.column_index(column), row)
        cells = [start]
        cell = self.mapping[start[0]][start[1]]
        while cell != start:
            cells.append(cell)
            cell = self.mapping[cell[0]][cell[1]]
        return [(self.columns[i], j) for i, j in cells]

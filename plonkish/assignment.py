"""
할당 백엔드 인터페이스 (Assignment)
====================================

레이아우터(layouter)가 셀 값을 실제로 써 넣는 대상. 같은 회로 합성 코드가
여러 백엔드 위에서 그대로 실행된다.

  | 백엔드                   | 용도                        | advice 값     |
  |--------------------------|-----------------------------|---------------|
  | plonkish.dev.MockProver  | 제약 만족 여부 검사 (증명)  | 반드시 Known  |
  | plonkish.keygen.Assembly | 검증 키 구조 추출           | 무시          |

모든 행 번호는 절대 행(absolute row)이다. 영역(region) 상대 오프셋은
레이아우터가 변환한다.

**사용 가능한 행**:
  2^k 행 중 마지막 (blinding_factors + 1) 행은 블라인딩용으로 예약된다.
  그 범위를 넘는 쓰기는 NotEnoughRowsAvailable, 공개 입력 슬롯이면
  BindingError이다.
"""

from abc import ABC, abstractmethod

from plonkish.constraint_system import ColumnType
from plonkish.errors import BindingError, NotEnoughRowsAvailable


class Assignment(ABC):
    """회로 합성 결과를 기록하는 백엔드.

    속성:
        k: 회로 크기 파라미터 (행 수 n = 2^k)
        n: 전체 행 수
        usable_rows: witness가 쓸 수 있는 행 수
    """

    def __init__(self, k, usable_rows):
        self.k = k
        self.n = 1 << k
        self.usable_rows = usable_rows

    def check_row(self, column, row):
        """``row``가 사용 가능한 행 범위 안인지 확인한다.

        Raises:
            BindingError: instance 열의 슬롯이 범위를 벗어난 경우
            NotEnoughRowsAvailable: 그 밖의 열이 범위를 벗어난 경우
        """
        if 0 <= row < self.usable_rows:
            return
        if column is not None and column.column_type is ColumnType.INSTANCE:
            raise BindingError(
                f"공개 입력 행 {row}이(가) k={self.k}에서 사용 가능한 "
                f"instance 행 {self.usable_rows}개를 벗어났습니다"
            )
        raise NotEnoughRowsAvailable(self.k, row)

    def enter_region(self, name):
        """영역 진입 (기본: 아무것도 하지 않음)."""

    def exit_region(self):
        """영역 종료 (기본: 아무것도 하지 않음)."""

    @abstractmethod
    def enable_selector(self, name, selector, row):
        """``row``에서 셀렉터를 켠다."""

    @abstractmethod
    def assign_advice(self, name, column, row, value):
        """advice 셀에 Value를 쓴다."""

    @abstractmethod
    def assign_fixed(self, name, column, row, value):
        """fixed 셀에 Value를 쓴다."""

    @abstractmethod
    def copy(self, left_column, left_row, right_column, right_row):
        """두 셀 사이에 복사(동등) 제약을 추가한다."""

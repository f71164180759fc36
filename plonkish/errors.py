"""
회로 합성(synthesis) 오류
==========================

회로 구성과 witness 할당 중에 발생하는 구조적 오류를 정의한다.
모든 오류는 데이터가 아니라 회로 코드의 잘못에서 발생하며,
같은 입력으로 재시도해도 결과는 같다.

  SynthesisError
  ├── ConfigurationError          열/게이트 선언 오류
  ├── AssignmentError             셀 쓰기, 복사 제약, 상수 바인딩 오류
  │   ├── NotEnoughRowsAvailable  2^k 행 안에 회로가 들어가지 않음
  │   └── NotEnoughColumnsForConstants
  └── BindingError                공개 입력(instance) 슬롯 오류
      └── InstanceTooLarge

검증 실패(잘못된 공개 입력 등)는 예외가 아니다. MockProver는 실패 목록을,
verifier는 bool을 반환한다.
"""


class SynthesisError(Exception):
    """회로 합성 중 발생하는 모든 오류의 기반 클래스."""


class ConfigurationError(SynthesisError):
    """열, 셀렉터, 게이트의 구조적 선언 오류."""


class AssignmentError(SynthesisError):
    """등록되지 않은 열/행에 대한 쓰기 또는 잘못된 복사 제약."""


class NotEnoughRowsAvailable(AssignmentError):
    """할당하려는 행이 사용 가능한 행 수를 넘는다."""

    def __init__(self, current_k, row=None):
        self.current_k = current_k
        self.row = row
        message = f"k={current_k}에서 사용 가능한 행이 부족합니다"
        if row is not None:
            message += f" (행 {row})"
        super().__init__(message)


class NotEnoughColumnsForConstants(AssignmentError):
    """상수 바인딩에 사용할 fixed 열이 enable_constant로 등록되지 않았다."""

    def __init__(self):
        super().__init__("enable_constant로 등록된 fixed 열이 없습니다")


class BindingError(SynthesisError):
    """공개 입력 슬롯이 instance 열의 범위를 벗어난다."""


class InstanceTooLarge(BindingError):
    """공개 입력 벡터가 사용 가능한 행 수보다 길다."""

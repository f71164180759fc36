"""
검증 키 생성 (Key Generation)
==============================

비밀 값 없이 회로 *구조*만으로 검증 키를 만든다.

**키 생성이란?**
  회로 모양이 정해지면 셀렉터 위치, fixed 열 값(상수), 복사 제약 순열은
  witness와 무관하게 결정된다. 이것들을 한 번만 계산해 두고, 같은 모양의
  모든 증명 검증에 재사용한다.

**witness 없이 합성하기**:
  ``circuit.without_witnesses()``로 비밀 값을 Unknown으로 바꾼 회로를
  합성한다. 칩 코드는 Value 산술 덕분에 그대로 실행되고, advice 값은
  Assembly 백엔드가 무시한다.

  | 항목          | 키 생성 (Unknown) | 증명 (Known) |
  |---------------|-------------------|--------------|
  | 셀렉터 행     | 같음              | 같음         |
  | fixed 값      | 같음              | 같음         |
  | 복사 제약     | 같음              | 같음         |
  | advice 값     | 없음              | 있음         |

**다이제스트**:
  위 구조 항목을 Transcript에 누적한 SHA-256 값. 증명 쪽 회로에서 같은
  방식으로 계산한 다이제스트가 다르면, 그 회로는 이 키로 검증할 수 없다.

사용 예시:
    >>> vk = keygen_vk(5, circuit.without_witnesses())
    >>> vk.digest
"""

import logging
from dataclasses import dataclass

from plonkish import permutation
from plonkish.assignment import Assignment
from plonkish.constraint_system import ConstraintSystem
from plonkish.errors import AssignmentError, NotEnoughRowsAvailable
from plonkish.transcript import Transcript

logger = logging.getLogger(__name__)


class Assembly(Assignment):
    """구조만 기록하는 백엔드. advice 값은 버린다.

    속성:
        fixed: fixed[i][row] — 필드 원소 또는 None
        selectors: selectors[i][row] — bool
        permutation: permutation.Assembly
    """

    def __init__(self, k, cs, usable_rows):
        super().__init__(k, usable_rows)
        self.cs = cs
        self.fixed = [[None] * self.n for _ in range(cs.num_fixed_columns)]
        self.selectors = [[False] * self.n for _ in range(cs.num_selectors)]
        self.permutation = permutation.Assembly(self.n, cs.permutation_columns)

    def enable_selector(self, name, selector, row):
        self.check_row(None, row)
        self.selectors[selector.index][row] = True

    def assign_advice(self, name, column, row, value):
        self.check_row(column, row)

    def assign_fixed(self, name, column, row, value):
        self.check_row(column, row)
        if value.is_unknown():
            raise AssignmentError(f"fixed 셀 '{name}' ({column}[{row}])에 값이 없습니다")
        self.fixed[column.index][row] = value.into_option()

    def copy(self, left_column, left_row, right_column, right_row):
        self.check_row(left_column, left_row)
        self.check_row(right_column, right_row)
        self.permutation.copy(left_column, left_row, right_column, right_row)


@dataclass(frozen=True)
class VerifyingKey:
    """검증 키: 회로 구조의 기술과 다이제스트.

    속성:
        k: 회로 크기 파라미터
        field: 필드 클래스
        pinned: 제약 시스템 기술 문자열
        fixed: fixed 열 값 (미할당은 None)
        selectors: 셀렉터 비트맵
        digest: 구조 다이제스트 (SHA-256 hex)
    """
    k: int
    field: type
    pinned: str
    fixed: tuple
    selectors: tuple
    digest: str


def structure_digest(cs, k, fixed, selectors, perm):
    """회로 구조의 다이제스트를 계산한다.

    keygen과 verifier가 같은 함수를 사용해야 다이제스트를 비교할 수 있다.

    Args:
        cs: ConstraintSystem
        k: 회로 크기 파라미터
        fixed: fixed[i][row] (None = 미할당)
        selectors: selectors[i][row] (bool)
        perm: permutation.Assembly

    Returns:
        str: SHA-256 hex 다이제스트
    """
    transcript = Transcript()
    transcript.append_int(b"k", k)
    transcript.append_bytes(b"cs", cs.pinned().encode())

    for column in fixed:
        for value in column:
            if value is None:
                transcript.append_bytes(b"fixed", b"")
            else:
                transcript.append_scalar(b"fixed", value)

    for column in selectors:
        transcript.append_bytes(b"selector", bytes(int(enabled) for enabled in column))

    for column in perm.mapping:
        for other_column, other_row in column:
            transcript.append_int(b"sigma", other_column)
            transcript.append_int(b"sigma", other_row)

    return transcript.digest()


def keygen_vk(k, circuit):
    """회로 구조로부터 검증 키를 만든다.

    보통 ``circuit.without_witnesses()``를 넘긴다. 합성 코드는 witness를
    읽지 않으므로 Known 값이 섞여 있어도 결과는 같다.

    Args:
        k: 회로 크기 파라미터 (행 수 2^k)
        circuit: plonkish.circuit.Circuit 인스턴스

    Returns:
        VerifyingKey

    Raises:
        NotEnoughRowsAvailable: 2^k 행에 회로가 들어가지 않는 경우
        SynthesisError: 회로 합성 중 발생한 그 밖의 오류
    """
    cs = ConstraintSystem(circuit.field)
    config = circuit.configure(cs)

    n = 1 << k
    if n < cs.minimum_rows():
        raise NotEnoughRowsAvailable(k)

    assembly = Assembly(k, cs, cs.usable_rows(n))
    circuit.floor_planner.synthesize(cs, assembly, circuit, config)

    digest = structure_digest(cs, k, assembly.fixed, assembly.selectors, assembly.permutation)
    logger.info(f"verifying key generated for k={k}: {digest[:16]}...")
    return VerifyingKey(
        k=k,
        field=cs.field,
        pinned=cs.pinned(),
        fixed=tuple(tuple(column) for column in assembly.fixed),
        selectors=tuple(tuple(column) for column in assembly.selectors),
        digest=digest,
    )

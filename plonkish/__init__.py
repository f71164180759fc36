"""
plonkish: halo2 스타일 PLONKish 회로 빌더
==========================================

열(column), 셀렉터, 게이트로 회로 모양을 선언하고, 영역(region) 단위로
witness를 채운 뒤, 개발용 검사기(MockProver)로 모든 제약을 확인한다.

모듈 구성:
  field            py_ecc 기반 필드 (FR, Fp, Fq)
  value            Known/Unknown 지연 값
  expression       게이트 다항식 표현식
  constraint_system 열/셀렉터/게이트 선언
  layouter         영역 배치와 상수 테이블
  permutation      복사 제약 순열
  circuit          Circuit 인터페이스
  complex_chip     out = (a²b²c + c)³ 회로
  keygen           검증 키 생성
  verifier         수락/거부 판정
  dev              MockProver, 레이아웃 출력
"""

from plonkish.circuit import DEFAULT_K, Circuit
from plonkish.complex_chip import ComplexChip, ComplexCircuit, ComplexConfig
from plonkish.field import FIELDS, FR, Fp, Fq
from plonkish.value import Value

__all__ = [
    "DEFAULT_K",
    "Circuit",
    "ComplexChip",
    "ComplexCircuit",
    "ComplexConfig",
    "FIELDS",
    "FR",
    "Fp",
    "Fq",
    "Value",
]

"""
회로 인터페이스 (Circuit)
==========================

검증 엔진(MockProver, keygen, verifier)이 회로를 다루는 유일한 통로.

**두 단계**:
  1. ``configure(meta)``: 회로 모양 선언. witness와 무관하며 클래스 메서드다.
     반환한 설정(config) 객체가 2단계로 전달된다.
  2. ``synthesize(config, layouter)``: witness를 셀에 쓰고 셀렉터를 켠다.
     증명 시(Known)와 키 생성 시(Unknown) 모두 같은 구조를 만들어야 한다.

  ┌────────────┐  configure   ┌──────────────────┐
  │  Circuit   │ ───────────→ │ ConstraintSystem │ → config
  │ (witness)  │              └──────────────────┘
  │            │  synthesize  ┌──────────────────┐
  │            │ ───────────→ │  Layouter        │ → Assignment 백엔드
  └────────────┘              └──────────────────┘
"""

from abc import ABC, abstractmethod

from plonkish.layouter import SimpleFloorPlanner

# 데모와 테스트가 사용하는 기본 회로 크기 (2^5 = 32행)
DEFAULT_K = 5


class Circuit(ABC):
    """회로 구현의 기반 클래스.

    속성:
        field: 회로가 정의된 필드 클래스 (인스턴스마다 지정)
        floor_planner: 영역 배치 전략
    """

    floor_planner = SimpleFloorPlanner
    field = None

    @abstractmethod
    def without_witnesses(self):
        """비밀 값을 Unknown으로 바꾼, 구조가 같은 회로를 반환한다."""

    @classmethod
    @abstractmethod
    def configure(cls, meta):
        """``meta``(ConstraintSystem)에 회로 모양을 선언하고 config를 반환한다."""

    @abstractmethod
    def synthesize(self, config, layouter):
        """witness를 할당하고 공개 입력을 바인딩한다."""

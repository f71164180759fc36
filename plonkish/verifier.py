"""
Verifier
========

회로와 공개 입력을 받아 수락/거부를 결정한다.

**검증 과정**:
  1. MockProver로 회로를 합성하고 모든 게이트/복사 제약을 검사
  2. (검증 키가 주어지면) 증명 쪽 회로의 구조 다이제스트를 다시 계산하여
     검증 키의 다이제스트와 비교

잘못된 공개 입력은 예외가 아니라 ``False``로 끝난다. 합성 자체가 실패하는
구조적 오류(SynthesisError)만 예외로 전파된다.

사용 예시:
    >>> vk = keygen_vk(5, circuit.without_witnesses())
    >>> verify(5, circuit, [[FR(405224)]], vk)   # True
    >>> verify(5, circuit, [[FR(405225)]], vk)   # False
"""

import logging

from plonkish.dev import MockProver
from plonkish.keygen import structure_digest

logger = logging.getLogger(__name__)


def verify(k, circuit, instances, vk=None):
    """회로가 주어진 공개 입력에 대해 만족되는지 검증한다.

    Args:
        k: 회로 크기 파라미터 (행 수 2^k)
        circuit: witness가 채워진 plonkish.circuit.Circuit
        instances: instance 열마다 하나씩, 공개 입력 값 리스트의 리스트
        vk: VerifyingKey (선택). 주어지면 구조 일치도 확인한다.

    Returns:
        bool: 검증 성공 여부

    Raises:
        BindingError: 공개 입력의 모양이나 필드가 회로와 맞지 않는 경우
        SynthesisError: 회로 합성이 구조적으로 실패한 경우
    """
    prover = MockProver.run(k, circuit, instances)
    failures = prover.verify()
    if failures:
        logger.warning(f"verification rejected: {len(failures)} constraint failures")
        return False

    if vk is not None:
        if vk.k != k or vk.field is not prover.field:
            logger.warning("verification rejected: verifying key was built for another circuit size or field")
            return False
        digest = structure_digest(
            prover.cs, k, prover.fixed, prover.selectors, prover.permutation
        )
        if digest != vk.digest:
            logger.warning("verification rejected: circuit structure does not match the verifying key")
            return False

    logger.info("verification accepted")
    return True

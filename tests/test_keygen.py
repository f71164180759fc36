"""
keygen, transcript, verifier 모듈 테스트.

테스트 대상:
  - Transcript: 결정론성, 라벨 구분, 길이 접두사
  - keygen_vk: witness 독립성, 상수 c가 키에 포함되는지, 최소 k
  - verify: 검증 키 일치, 다른 c·k·필드의 키 거부
"""
import pytest

from plonkish.field import FR, Fp
from plonkish.complex_chip import ComplexCircuit
from plonkish.errors import NotEnoughRowsAvailable
from plonkish.keygen import VerifyingKey, keygen_vk
from plonkish.transcript import Transcript
from plonkish.verifier import verify

K = 5
OUT = 405224


@pytest.fixture(scope="module")
def circuit():
    return ComplexCircuit(FR, a=2, b=3, c=2)


@pytest.fixture(scope="module")
def vk(circuit):
    return keygen_vk(K, circuit.without_witnesses())


# =====================================================================
# Transcript
# =====================================================================

class TestTranscript:
    def test_deterministic(self):
        left, right = Transcript(), Transcript()
        for t in (left, right):
            t.append_int(b"k", 5)
            t.append_scalar(b"x", FR(7))
        assert left.digest() == right.digest()
        assert len(left.digest()) == 64

    def test_labels_separate_domains(self):
        left, right = Transcript(), Transcript()
        left.append_scalar(b"a", FR(1))
        right.append_scalar(b"b", FR(1))
        assert left.digest() != right.digest()

    def test_length_prefix(self):
        left, right = Transcript(), Transcript()
        left.append_bytes(b"x", b"ab")
        left.append_bytes(b"x", b"c")
        right.append_bytes(b"x", b"a")
        right.append_bytes(b"x", b"bc")
        assert left.digest() != right.digest()


# =====================================================================
# keygen_vk
# =====================================================================

class TestKeygen:
    def test_returns_verifying_key(self, vk):
        assert isinstance(vk, VerifyingKey)
        assert vk.k == K
        assert vk.field is FR
        assert "complex_gate" in vk.pinned

    def test_structure_recorded(self, vk):
        assert vk.selectors[0][0] is True
        assert not any(vk.selectors[0][1:])
        assert len(vk.fixed[0]) == 1 << K

    def test_c_is_part_of_the_key(self, vk):
        # c는 상수 열에 들어가므로 검증 키에 포함된다
        assert vk.fixed[0][0] == FR(2)

    def test_witness_independent(self, circuit, vk):
        assert keygen_vk(K, circuit).digest == vk.digest
        other = ComplexCircuit(FR, a=5, b=7, c=2)
        assert keygen_vk(K, other.without_witnesses()).digest == vk.digest

    def test_deterministic(self, circuit, vk):
        assert keygen_vk(K, circuit.without_witnesses()) == vk

    def test_digest_depends_on_k_field_and_c(self, vk):
        assert keygen_vk(K + 1, ComplexCircuit(FR, c=2)).digest != vk.digest
        assert keygen_vk(K, ComplexCircuit(Fp, c=2)).digest != vk.digest
        assert keygen_vk(K, ComplexCircuit(FR, c=3)).digest != vk.digest

    def test_too_small(self):
        with pytest.raises(NotEnoughRowsAvailable):
            keygen_vk(2, ComplexCircuit(FR, c=2))


# =====================================================================
# verify with a verifying key
# =====================================================================

class TestVerifyWithKey:
    def test_accepts(self, circuit, vk):
        assert verify(K, circuit, [[OUT]], vk)

    def test_rejects_wrong_output(self, circuit, vk):
        assert not verify(K, circuit, [[OUT + 1]], vk)

    def test_rejects_circuit_with_other_c(self, vk):
        # c=3: 그 자체로는 만족되는 회로지만 다른 키에 속한다
        other = ComplexCircuit(FR, a=2, b=3, c=3)
        out = int(other.expected_output().into_option())
        assert verify(K, other, [[out]])
        assert not verify(K, other, [[out]], vk)

    def test_rejects_key_for_other_k(self, circuit, vk):
        assert verify(K + 1, circuit, [[OUT]])
        assert not verify(K + 1, circuit, [[OUT]], vk)

    def test_rejects_key_for_other_field(self, vk):
        circuit = ComplexCircuit(Fp, a=2, b=3, c=2)
        assert not verify(K, circuit, [[OUT]], vk)

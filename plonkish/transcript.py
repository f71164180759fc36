"""
구조 다이제스트용 트랜스크립트
================================

회로 구조(제약 시스템 기술, fixed 값, 셀렉터, 순열)를 레이블과 함께
누적하고 SHA-256 다이제스트를 만든다. 검증 키(VerifyingKey)의 정체성은
이 다이제스트로 결정된다.

**도메인 분리**:
  모든 데이터는 레이블과 함께 추가한다. 같은 바이트열이라도 레이블이 다르면
  다른 다이제스트가 나온다. 추가 순서가 바뀌어도 다이제스트가 바뀐다.

사용 예시:
    >>> t = Transcript()
    >>> t.append_int(b"k", 5)
    >>> t.append_scalar(b"fixed", FR(2))
    >>> t.digest()
"""

import hashlib


class Transcript:
    """SHA-256 기반 누적 해시.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
    """

    def __init__(self, label=b"plonkish-vk"):
        self.state = bytearray()
        self.state.extend(label)

    def append_scalar(self, label, scalar):
        """필드 원소를 32바이트 빅엔디안으로 추가한다."""
        self.state.extend(label)
        self.state.extend(int(scalar).to_bytes(32, "big"))

    def append_int(self, label, value):
        """음이 아닌 정수를 8바이트 빅엔디안으로 추가한다."""
        self.state.extend(label)
        self.state.extend(value.to_bytes(8, "big"))

    def append_bytes(self, label, data):
        """길이 접두어가 붙은 바이트열을 추가한다."""
        self.state.extend(label)
        self.state.extend(len(data).to_bytes(8, "big"))
        self.state.extend(data)

    def digest(self):
        """누적 상태의 SHA-256 16진 다이제스트."""
        return hashlib.sha256(bytes(self.state)).hexdigest()

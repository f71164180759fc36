"""
지연 값 (Deferred Value)
=========================

witness 값이 "알려져 있음(known)" 또는 "알 수 없음(unknown)" 중 하나인
컨테이너. 같은 회로 코드를 두 가지 상황에서 그대로 실행하기 위해 사용한다.

  - **증명 생성 시**: 모든 비밀 값이 알려져 있다 → ``Value.known(x)``
  - **키 생성 시**: 회로 *구조*만 필요하고 비밀 값은 없다 → ``Value.unknown()``

**산술 규칙** (전 함수, 예외 없음):
  | 왼쪽     | 오른쪽   | 결과                 |
  |----------|----------|----------------------|
  | Known(x) | Known(y) | Known(x ∘ y)         |
  | Known(x) | Unknown  | Unknown              |
  | Unknown  | 임의     | Unknown              |

  연산자 반대편에 일반 필드 원소가 오면 ``Known``으로 취급한다.

사용 예시:
    >>> a = Value.known(FR(2))
    >>> b = Value.known(FR(3))
    >>> (a * b).square()          # Value(known=FR(36))
    >>> a * Value.unknown()       # Value(unknown)
"""


class Value:
    """Known(x) | Unknown 태그 유니온.

    내부 상태는 불변(immutable)이며, 모든 연산은 새 Value를 반환한다.
    """

    __slots__ = ("_known", "_inner")

    def __init__(self, inner=None, known=False):
        self._known = known
        self._inner = inner if known else None

    @classmethod
    def known(cls, inner):
        """알려진 값을 감싼다."""
        return cls(inner, known=True)

    @classmethod
    def unknown(cls):
        """알 수 없는 값을 만든다."""
        return cls()

    def is_known(self):
        return self._known

    def is_unknown(self):
        return not self._known

    def into_option(self):
        """알려진 값이면 내부 값을, 아니면 None을 반환한다."""
        return self._inner

    def map(self, fn):
        """Known(x) → Known(fn(x)), Unknown → Unknown."""
        if not self._known:
            return Value.unknown()
        return Value.known(fn(self._inner))

    def zip(self, other):
        """두 값을 튜플로 묶는다. 한쪽이라도 Unknown이면 Unknown."""
        other = _lift(other)
        if self._known and other._known:
            return Value.known((self._inner, other._inner))
        return Value.unknown()

    # ── 산술 ──

    def _combine(self, other, op):
        other = _lift(other)
        if self._known and other._known:
            return Value.known(op(self._inner, other._inner))
        return Value.unknown()

    def __add__(self, other):
        return self._combine(other, lambda x, y: x + y)

    def __radd__(self, other):
        return _lift(other) + self

    def __sub__(self, other):
        return self._combine(other, lambda x, y: x - y)

    def __rsub__(self, other):
        return _lift(other) - self

    def __mul__(self, other):
        return self._combine(other, lambda x, y: x * y)

    def __rmul__(self, other):
        return _lift(other) * self

    def __neg__(self):
        return self.map(lambda x: -x)

    def square(self):
        return self * self

    def cube(self):
        return self * self * self

    # ── 비교 및 표현 ──

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self._known != other._known:
            return False
        return not self._known or self._inner == other._inner

    __hash__ = None

    def __repr__(self):
        if self._known:
            return f"Value(known={self._inner!r})"
        return "Value(unknown)"


def _lift(other):
    """일반 값을 Known으로 올린다. 이미 Value이면 그대로 반환."""
    if isinstance(other, Value):
        return other
    return Value.known(other)

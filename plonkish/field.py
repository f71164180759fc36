"""
회로 기반 모듈: 유한체(Finite Field)
=====================================

회로 구성, witness 계산, 제약 검사 전체에서 사용되는 필드 타입을 정의한다.

**필드 요구사항**:
  회로 빌더, 칩, 드라이버는 특정 필드에 묶이지 않는다.
  다음 연산만 제공하면 어떤 필드 타입이든 사용할 수 있다.
  - 덧셈, 뺄셈, 곱셈, 거듭제곱 (``+``, ``-``, ``*``, ``**``)
  - 동등 비교 (``==``)
  - 작은 정수로부터의 변환 (``F(2)``), ``int(x)``
  - ``F.zero()``, ``F.one()``

  py_ecc의 ``FQ`` 클래스가 이 조건을 모두 만족하므로, 필드 위수(modulus)만
  바꾼 서브클래스로 여러 필드를 정의한다.

**제공 필드**:
  | 이름 | 위수                       | 비고                         |
  |------|----------------------------|------------------------------|
  | FR   | bn128 curve order          | PLONK/KZG 기본 스칼라 필드   |
  | Fp   | Pallas 베이스 필드 (pasta) | halo2 튜토리얼 테스트 필드   |
  | Fq   | Vesta 베이스 필드 (pasta)  | Pallas 스칼라 필드           |

사용 예시:
    >>> from plonkish.field import FR, Fp
    >>> a = Fp(3)
    >>> a * a            # Fp(9)
    >>> FIELDS["fr"]     # FR
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# bn128 스칼라 필드
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


# ─────────────────────────────────────────────────────────────────────
# Pasta 필드 (Pallas / Vesta)
# ─────────────────────────────────────────────────────────────────────

PALLAS_MODULUS = 0x40000000000000000000000000000000224698fc094cf91b992d30ed00000001
VESTA_MODULUS = 0x40000000000000000000000000000000224698fc0994a8dd8c46eb2100000001


class Fp(FQ):
    """Pallas 곡선의 베이스 필드 원소 (= Vesta 스칼라 필드)."""
    field_modulus = PALLAS_MODULUS


class Fq(FQ):
    """Vesta 곡선의 베이스 필드 원소 (= Pallas 스칼라 필드)."""
    field_modulus = VESTA_MODULUS


# CLI 등에서 이름으로 필드를 고를 때 사용하는 레지스트리
FIELDS = {
    "fr": FR,
    "fp": Fp,
    "fq": Fq,
}


def field_name(field):
    """필드 클래스의 짧은 이름을 반환한다 (레지스트리에 없으면 클래스 이름).

    예시:
        >>> field_name(Fp)   # "fp"
    """
    for name, cls in FIELDS.items():
        if cls is field:
            return name
    return field.__name__


def to_field(field, value):
    """정수 또는 필드 원소를 ``field`` 원소로 변환한다.

    Args:
        field: 필드 클래스 (FQ 서브클래스)
        value: 정수 또는 같은 필드의 원소

    Returns:
        field 원소

    Raises:
        TypeError: 다른 필드의 원소가 들어온 경우
    """
    if isinstance(value, field):
        return value
    if isinstance(value, FQ):
        raise TypeError(
            f"{type(value).__name__} 원소를 {field.__name__}로 변환할 수 없습니다"
        )
    return field(value)

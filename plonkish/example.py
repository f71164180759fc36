"""
복합 게이트 데모: out = (a²·b²·c + c)³
========================================

이 스크립트는 회로 구성부터 검증까지의 전체 흐름을 시연한다.

실행:
    python -m plonkish.example
    python -m plonkish.example -a 2 -b 3 -c 2 --field fp --layout -v

흐름:
    1. 회로 구성 (a, b, c 비밀, out 공개)
    2. 검증 키 생성 (witness 없이)
    3. MockProver로 제약 검사
    4. 올바른 공개 입력으로 검증
    5. 조작된 공개 입력으로 검증 (거부되어야 함)
"""

import argparse
import logging

from plonkish.circuit import DEFAULT_K
from plonkish.complex_chip import ComplexCircuit
from plonkish.dev import MockProver
from plonkish.dev.graph import render_layout
from plonkish.field import FIELDS
from plonkish.keygen import keygen_vk
from plonkish.verifier import verify


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="complex gate circuit demo")
    parser.add_argument("-k", type=int, default=DEFAULT_K, help="circuit size (2^k rows)")
    parser.add_argument("-a", type=int, default=2, help="private input a")
    parser.add_argument("-b", type=int, default=3, help="private input b")
    parser.add_argument("-c", type=int, default=2, help="constant c")
    parser.add_argument("--field", choices=sorted(FIELDS), default="fr", help="scalar field")
    parser.add_argument("--layout", action="store_true", help="print the circuit layout")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    field = FIELDS[args.field]

    print("=" * 60)
    print("  Complex Gate Circuit Demo")
    print(f"  회로: out = (a²·b²·c + c)³  (a={args.a}, b={args.b}, c={args.c})")
    print("=" * 60)

    # ── 1. 회로 구성 ──
    print("\n[1] 회로 구성...")
    circuit = ComplexCircuit(field, a=args.a, b=args.b, c=args.c)
    out = circuit.expected_output().into_option()
    print(f"    필드: {field.__name__}")
    print(f"    행 수: 2^{args.k} = {1 << args.k}")
    print(f"    공개 출력 out = {int(out)}")

    # ── 2. 검증 키 생성 ──
    print("\n[2] 검증 키 생성 (witness 없이)...")
    vk = keygen_vk(args.k, circuit.without_witnesses())
    print(f"    다이제스트: {vk.digest}")

    if args.layout:
        print("\n    회로 레이아웃:")
        for line in render_layout(args.k, circuit.without_witnesses()).splitlines():
            print(f"      {line}")

    # ── 3. 제약 검사 ──
    print("\n[3] MockProver 제약 검사...")
    prover = MockProver.run(args.k, circuit, [[out]])
    failures = prover.verify()
    print(f"    실패 수: {len(failures)}")
    for failure in failures:
        print(f"      {failure}")

    # ── 4. 검증 ──
    print("\n[4] 올바른 공개 입력으로 검증...")
    result = verify(args.k, circuit, [[out]], vk)
    print(f"    검증 결과: {'성공 ✓' if result else '실패 ✗'}")

    # ── 5. 조작된 공개 입력 ──
    print(f"\n[5] 조작된 공개 입력으로 검증 (out + 1 = {int(out + field.one())})...")
    wrong_result = verify(args.k, circuit, [[out + field.one()]], vk)
    print(f"    검증 결과: {'성공 ✓' if wrong_result else '실패 ✗ (예상대로 실패)'}")

    print("\n" + "=" * 60)
    if result and not wrong_result:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return result and not wrong_result


if __name__ == "__main__":
    raise SystemExit(0 if main() else 1)

"""
금액 유틸리티

내부 금액은 정수 최소 단위(cents)로 관리하고,
표시 시점에만 Decimal(소수점 2자리)로 변환.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.constants import Money
from core.ledger.types import InvalidAmountError


CENT = Decimal("0.01")
HALF_CENT = Decimal("0.005")


def parse_amount(value: str | int | float | Decimal) -> int:
    """금액 입력을 최소 단위 정수로 변환

    - 문자열: 공백 제거, 소수점 구분자로 쉼표(,) 하나 허용
    - nan / inf / 숫자가 아닌 값 거부
    - 소수점 3자리 이하는 반올림(ROUND_HALF_UP)
    - 0 이하(반올림 후 포함) 및 상한 초과 거부

    Args:
        value: 사용자 입력 또는 숫자

    Returns:
        최소 단위 금액 (예: "12.5" → 1250)

    Raises:
        InvalidAmountError: 유효하지 않은 금액
    """
    if isinstance(value, bool):
        raise InvalidAmountError(str(value))

    raw = value
    if isinstance(value, str):
        text = value.strip()
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        raw = text
    elif isinstance(value, float):
        # float 이진 오차를 피하기 위해 repr 기준으로 변환
        raw = repr(value)

    try:
        amount = Decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(str(value)) from e

    # 스케일링 전 부호/크기 검증
    if not amount.is_finite() or amount <= 0 or amount.copy_abs() > Money.MAX_AMOUNT:
        raise InvalidAmountError(str(value))
    # 반올림 후 0.00이 되는 값
    if amount < HALF_CENT:
        raise InvalidAmountError(str(value))

    minor = int(
        (amount * Money.MINOR_UNITS_PER_UNIT).to_integral_value(rounding=ROUND_HALF_UP)
    )
    if minor <= 0:
        raise InvalidAmountError(str(value))

    return minor


def to_decimal(minor: int) -> Decimal:
    """최소 단위 정수 → Decimal (소수점 2자리)"""
    return (Decimal(minor) / Money.MINOR_UNITS_PER_UNIT).quantize(CENT)


def scaled_to_decimal(scaled: int, divisor: int) -> Decimal:
    """scaled 금액 → Decimal (소수점 2자리, 반올림)

    scaled / divisor 가 최소 단위 금액인 값 (정산 엔진 내부 표현).
    """
    minor = Decimal(scaled) / Decimal(divisor)
    return (minor / Money.MINOR_UNITS_PER_UNIT).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """표시용 금액 문자열 (예: 1500.00)"""
    return f"{amount.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"

"""Option 값 추출 실패를 표현하는 예외 유틸리티.

개요:
    `Option`의 연산은 대부분 총함수이며 부재를 `Absent` 값으로 표현합니다.
    예외가 발생하는 곳은 값 추출 계열(`get()`, `get_if()`) 뿐이고,
    이 모듈은 그때 사용하는 단일 예외 타입(`NoSuchElementError`)과 생성자 함수를 제공합니다.

특징:
    * 단일 오류 종류: 부재 위반(absence-violation) 하나만 존재합니다.
    * 안정적인 코드 체계: 일관된 `code` 문자열로 실패 원인을 구분합니다.
    * `LookupError` 하위 타입이므로 일반적인 조회 실패로도 포착할 수 있습니다.

네이밍:
    * 오류 코드는 **snake_case**를 사용합니다. 예: ``"option_absent"``.

예시:
    >>> err = absent_value_err()
    >>> err.code, err.message
    ('option_absent', 'option is absent')
"""

from __future__ import annotations

from typing import Any

__all__ = [
    # 타입
    "NoSuchElementError",
    # 생성자
    "absent_value_err",
    "predicate_unmatched_err",
]


# ──────────────────────────────────────────────────────────────
# 기본 타입
# ──────────────────────────────────────────────────────────────
class NoSuchElementError(LookupError):
    """값이 없는 `Option`에서 값을 꺼내려 할 때 발생하는 예외.

    Attributes:
        code: 오류 코드(영문 소문자/밑줄). 예: ``"option_absent"``.
        message: 사용자 또는 로그 출력용 메시지.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ──────────────────────────────────────────────────────────────
# 생성자
# ──────────────────────────────────────────────────────────────
# 발생한 예외는 traceback을 보유하므로 싱글턴으로 재사용하지 않는다.
_ABSENT_CODE = "option_absent"
_ABSENT_MESSAGE = "option is absent"
_UNMATCHED_CODE = "option_predicate_unmatched"


def absent_value_err() -> NoSuchElementError:
    """`Absent`에서 값을 꺼내려 한 경우의 오류를 생성합니다.

    Returns:
        NoSuchElementError: 코드 ``"option_absent"`` 의 새 예외.
    """
    return NoSuchElementError(_ABSENT_CODE, _ABSENT_MESSAGE)


def predicate_unmatched_err(value: Any) -> NoSuchElementError:
    """값이 조건을 만족하지 않아 꺼낼 수 없는 경우의 오류를 생성합니다.

    Args:
        value: 조건을 만족하지 못한 값.

    Returns:
        NoSuchElementError: 코드 ``"option_predicate_unmatched"`` 의 새 예외.

    Examples:
        >>> predicate_unmatched_err(3).message
        'value does not satisfy the predicate: 3'
    """
    return NoSuchElementError(_UNMATCHED_CODE, f"value does not satisfy the predicate: {value!r}")

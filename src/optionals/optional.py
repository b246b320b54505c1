# src/optionals/optional.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, MutableSet, Sequence
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, List, Optional, Tuple, TypeVar, Union, cast, overload

from sortedcontainers import SortedSet

from optionals.exceptions import absent_value_err, predicate_unmatched_err

logger = logging.getLogger(__name__)

TValue = TypeVar("TValue")
TNewValue = TypeVar("TNewValue")
TOther = TypeVar("TOther")
TAcc = TypeVar("TAcc")
TCollection = TypeVar("TCollection")

_ABSENT_HASH = 0


class Option(Generic[TValue], ABC):
    """값의 존재(`Present`)/부재(`Absent`)를 표현하는 닫힌 두 변형 컨테이너.

    `None` 같은 센티널 없이 "값 또는 부재"를 표현하고, 존재 여부를 매번 확인하는 대신
    조합기(map/filter/fold/zip 등)로 변환을 합성하기 위한 타입입니다.

    제공 기능:
    - 상태 질의: is_present(), is_absent()
    - 값 추출: get(), get_or_default(), get_or_none(), get_if(), get_if_or_none()
    - 필터링: filter(), filter_not(), filter_is_instance()
    - 변환: map(), map_not_none(), flat_map(), switch_if_absent()
    - 조건 질의: matches(), matches_or_absent()
    - 집계: fold(), for_each(), combine(), partition(), zip()
    - 컬렉션 연동: add_to_collection(), to_list(), to_tuple(), to_set(),
      to_hash_set(), to_sorted_set(), as_iterable(), as_sequence()
    - 보조: to_optional(), from_nullable()

    규칙:
        - 인스턴스는 생성 이후 변형이 바뀌지 않으며(불변), 모든 연산은 새 `Option`
          또는 일반 값을 반환합니다.
        - 전달된 술어/변환/공급자는 필요한 분기에서만, 최대 한 번 호출됩니다.
        - 예외는 `get()`/`get_if()`만 발생시킵니다(`NoSuchElementError`).

    Type Parameters:
        TValue: 존재하는 값의 타입.
    """

    __slots__ = ()

    # ── 상태 질의 ─────────────────────────────────────────────────────────────
    @abstractmethod
    def is_present(self) -> bool:
        """값이 존재하는지 여부.

        Returns:
            bool: Present이면 True, Absent이면 False.
        """
        ...

    def is_absent(self) -> bool:
        """값이 부재인지 여부. 항상 `is_present()`의 여집합입니다."""
        return not self.is_present()

    # ── 값 추출 ───────────────────────────────────────────────────────────────
    @abstractmethod
    def get(self) -> TValue:
        """담긴 값을 반환합니다.

        Returns:
            TValue: 담긴 값.

        Raises:
            NoSuchElementError: Absent인 경우(코드 ``"option_absent"``).
        """
        ...

    @abstractmethod
    def get_or_default(self, fallback: Callable[[], TNewValue]) -> Union[TValue, TNewValue]:
        """값을 꺼내거나, 비어 있으면 공급자가 만든 기본값을 반환합니다.

        Args:
            fallback: 0-인자 공급자. Absent일 때만 한 번 호출됩니다.

        Returns:
            TValue | TNewValue: 값 또는 공급자의 결과.
        """
        ...

    def get_or_none(self) -> Optional[TValue]:
        """값을 꺼내거나, 비어 있으면 None을 반환합니다.

        Returns:
            Optional[TValue]: Present(v) → v, Absent → None.
        """
        return self.get_or_default(_none)

    to_optional = get_or_none  # Maybe → Optional 변환 이름 (동일 동작)

    def get_if(self, predicate: Callable[[TValue], bool]) -> TValue:
        """값이 조건을 만족할 때만 반환합니다.

        Args:
            predicate: 값에 대한 술어. Absent이면 호출되지 않습니다.

        Returns:
            TValue: 조건을 만족한 값.

        Raises:
            NoSuchElementError: Absent이거나(``"option_absent"``), 조건을 만족하지
                않는 경우(``"option_predicate_unmatched"``).
        """
        value = self.get()
        if not predicate(value):
            err = predicate_unmatched_err(value)
            logger.debug("option value rejected (code=%s)", err.code)
            raise err
        return value

    def get_if_or_none(self, predicate: Callable[[TValue], bool]) -> Optional[TValue]:
        """`get_if()`와 같지만 실패 대신 None을 반환합니다."""
        return self.filter(predicate).get_or_none()

    # ── 필터링 ────────────────────────────────────────────────────────────────
    @abstractmethod
    def filter(self, predicate: Callable[[TValue], bool]) -> "Option[TValue]":
        """값이 조건을 만족할 때만 유지합니다.

        Args:
            predicate: 값에 대한 술어. Absent이면 호출되지 않습니다.

        Returns:
            Option[TValue]: 조건을 만족하면 자기 자신, 아니면 Absent.
        """
        ...

    def filter_not(self, predicate: Callable[[TValue], bool]) -> "Option[TValue]":
        """`filter()`와 반대로, 조건을 만족하지 않을 때만 유지합니다."""
        return self.filter(lambda value: not predicate(value))

    def filter_is_instance(
        self, tp: Union[type[TNewValue], Tuple[type, ...]]
    ) -> "Option[TNewValue]":
        """값의 런타임 타입이 `tp`의 인스턴스일 때만 유지합니다.

        정적 캐스트가 아니라 `isinstance` 검사입니다.

        Args:
            tp: 타입 또는 타입 튜플.

        Returns:
            Option[TNewValue]: 인스턴스이면 같은 값, 아니면 Absent.

        Examples:
            >>> present(1).filter_is_instance(int)
            Present(value=1)
            >>> present(1).filter_is_instance(str)
            Absent
        """
        return cast("Option[TNewValue]", self.filter(lambda value: isinstance(value, tp)))

    # ── 변환 ──────────────────────────────────────────────────────────────────
    @abstractmethod
    def map(self, f: Callable[[TValue], TNewValue]) -> "Option[TNewValue]":
        """값이 있을 때만 변환합니다.

        Args:
            f: TValue → TNewValue 함수.

        Returns:
            Option[TNewValue]: 변환된 option, 값이 없으면 Absent.
        """
        ...

    def map_not_none(self, f: Callable[[TValue], Optional[TNewValue]]) -> "Option[TNewValue]":
        """`map()`과 같지만, 변환 결과가 None이면 Absent가 됩니다.

        Examples:
            >>> present({"a": 1}).map_not_none(lambda d: d.get("b"))
            Absent
        """
        return self.flat_map(lambda value: from_nullable(f(value)))

    @abstractmethod
    def flat_map(self, f: Callable[[TValue], "Option[TNewValue]"]) -> "Option[TNewValue]":
        """값이 있을 때만 Option을 반환하는 계산을 연결합니다.

        Args:
            f: TValue → Option[TNewValue] 함수.

        Returns:
            Option[TNewValue]: 함수의 반환값 그대로(한 단계 평탄화) 또는 Absent.
        """
        ...

    @abstractmethod
    def switch_if_absent(self, supplier: Callable[[], "Option[TValue]"]) -> "Option[TValue]":
        """비어 있을 때만 공급자가 만든 Option으로 대체합니다.

        Args:
            supplier: 0-인자 공급자. Present이면 호출되지 않습니다.

        Returns:
            Option[TValue]: Present이면 자기 자신, Absent이면 공급자의 결과.
        """
        ...

    # ── 조건 질의 ─────────────────────────────────────────────────────────────
    def matches(self, predicate: Callable[[TValue], bool]) -> bool:
        """값이 존재하고 조건을 만족하면 True. Absent이면 술어 없이 False."""
        return self.filter(predicate).is_present()

    def matches_or_absent(self, predicate: Callable[[TValue], bool]) -> bool:
        """Absent이거나 값이 조건을 만족하면 True.

        `matches()`와는 Absent일 때의 결과만 다릅니다.
        """
        return self.is_absent() or bool(predicate(self.get()))

    # ── 집계 ──────────────────────────────────────────────────────────────────
    @abstractmethod
    def fold(self, initial: TAcc, combine: Callable[[TAcc, TValue], TAcc]) -> TAcc:
        """초기값과 담긴 값을 합칩니다.

        Args:
            initial: 초기 누적값.
            combine: (누적값, 값) → 누적값 함수. Absent이면 호출되지 않습니다.

        Returns:
            TAcc: Present(v) → combine(initial, v), Absent → initial. Option이 아닌
            일반 값입니다.

        Examples:
            >>> present(2).fold(8, lambda acc, cur: acc // cur)
            4
        """
        ...

    def for_each(self, action: Callable[[TValue], Any]) -> None:
        """값이 있으면 `action`을 정확히 한 번 호출합니다."""
        for value in self:
            action(value)

    def combine(
        self, other: "Option[TValue]", transform: Callable[[TValue, TValue], TValue]
    ) -> "Option[TValue]":
        """두 Option의 값을 합칩니다.

        흡수 규칙은 비대칭입니다:
            - 둘 다 Present → Present(transform(a, b))
            - self만 Present → self 그대로
            - self가 Absent → `other` 그대로(상태와 무관, 다시 감싸지 않음)

        Args:
            other: 합칠 상대 Option.
            transform: (a, b) → 결과 함수. 둘 다 Present일 때만 호출됩니다.

        Returns:
            Option[TValue]: 위 규칙에 따른 결과.

        Examples:
            >>> present(2).combine(present(8), lambda l, r: r // l)
            Present(value=4)
            >>> Absent.combine(present(1), lambda l, r: l + r)
            Present(value=1)
        """
        if self.is_absent():
            return other
        if other.is_absent():
            return self
        return Present(transform(self.get(), other.get()))

    def partition(
        self, predicate: Callable[[TValue], bool]
    ) -> Tuple["Option[TValue]", "Option[TValue]"]:
        """값을 (조건 만족, 조건 불만족) 쌍으로 나눕니다.

        Returns:
            tuple: 한쪽만 값을 갖는 쌍. Absent이면 (Absent, Absent)이며 술어는 호출되지 않습니다.
        """
        if self.is_absent():
            return Absent, Absent
        if predicate(self.get()):
            return self, Absent
        return Absent, self

    @overload
    def zip(self, other: "Option[TOther]") -> "Option[Tuple[TValue, TOther]]": ...

    @overload
    def zip(
        self, other: "Option[TOther]", transform: Callable[[TValue, TOther], TNewValue]
    ) -> "Option[TNewValue]": ...

    def zip(self, other, transform=None):
        """두 Option이 모두 값을 가질 때만 짝지어 합칩니다.

        Args:
            other: 상대 Option.
            transform: (a, b) → 결과 함수. 생략하면 튜플 ``(a, b)`` 를 만듭니다.
                둘 다 Present일 때만 호출됩니다.

        Returns:
            Option: 둘 다 Present이면 Present(결과), 아니면 Absent.

        Examples:
            >>> present(1).zip(present(2))
            Present(value=(1, 2))
            >>> present(1).zip(Absent)
            Absent
        """
        pair = _pair if transform is None else transform
        return self.flat_map(lambda left: other.map(lambda right: pair(left, right)))

    # ── 컬렉션 연동 ───────────────────────────────────────────────────────────
    def __iter__(self) -> Iterator[TValue]:
        # 호출할 때마다 새 이터레이터를 만들므로 반복 순회가 가능하다.
        if self.is_present():
            yield self.get()

    def add_to_collection(self, target: TCollection) -> TCollection:
        """값이 있으면 `target`에 추가하고 `target` 자체를 반환합니다.

        집합(`MutableSet`)에는 ``add``, 그 밖의 컬렉션에는 ``append`` 를 사용합니다.

        Args:
            target: 값을 추가할 가변 컬렉션.

        Returns:
            TCollection: 전달받은 동일한 컬렉션 인스턴스(체이닝용).
        """
        for value in self:
            if isinstance(target, MutableSet):
                target.add(value)
            else:
                cast(List[TValue], target).append(value)
        return target

    def to_list(self) -> List[TValue]:
        """값 0/1개를 담은 새 리스트."""
        return list(self)

    def to_tuple(self) -> Tuple[TValue, ...]:
        """값 0/1개를 담은 불변 튜플."""
        return tuple(self)

    def to_set(self) -> frozenset[TValue]:
        """값 0/1개를 담은 불변 집합."""
        return frozenset(self)

    def to_hash_set(self) -> set[TValue]:
        """값 0/1개를 담은 가변 해시 집합."""
        return set(self)

    def to_sorted_set(self, key: Optional[Callable[[TValue], Any]] = None) -> SortedSet:
        """값 0/1개를 담은 정렬 집합.

        `sortedcontainers.SortedSet`은 일반 `set`과 동등 비교됩니다.
        값의 비교 가능 여부는 호출자의 책임입니다.
        """
        return SortedSet(self, key=key)

    def as_iterable(self) -> Iterable[TValue]:
        """자기 자신을 반복 가능한 객체로 반환합니다(순회마다 같은 결과)."""
        return self

    def as_sequence(self) -> Sequence[TValue]:
        """길이 0/1의 읽기 전용 시퀀스 뷰를 반환합니다.

        뷰는 값을 복사하지 않고 접근 시점에 이 Option을 읽습니다.

        Examples:
            >>> view = present("a").as_sequence()
            >>> len(view), view[0], list(view)
            (1, 'a', ['a'])
        """
        return _OptionSequence(self)

    # ── 생성 ──────────────────────────────────────────────────────────────────
    @staticmethod
    def from_nullable(value: Optional[TValue]) -> "Option[TValue]":
        """옵셔널 값을 Option으로 승격합니다.

        Args:
            value: 옵셔널 값.

        Returns:
            Option[TValue]: 값이 있으면 Present(value), None이면 Absent.
        """
        return Present(value) if value is not None else Absent


@dataclass(frozen=True, slots=True)
class Present(Option[TValue]):
    """값이 존재함을 나타내는 `Option`의 변형.

    `Present`는 불변(`frozen=True`)이고 `__slots__`를 사용합니다.
    동등성은 담긴 값의 동등성을 따르고, 해시는 담긴 값의 해시와 **같습니다**.

    Attributes:
        value: 담긴 실제 값.

    Examples:
        기본 사용:
            >>> Present(21).map(lambda x: x * 2)
            Present(value=42)

        구조 분해(패턴 매칭):
            >>> match Present("hi"):
            ...     case Present(v):
            ...         print(v)
            hi

    Notes:
        - 값 존재 여부 분기는 `is_present()`/`is_absent()` 또는 패턴 매칭을 사용하세요.
        - `Present(None)`도 만들 수 있습니다. None을 부재로 취급하려면 `from_nullable()`을
          사용하세요.
    """

    value: TValue

    def __hash__(self) -> int:
        return hash(self.value)

    def is_present(self) -> bool:
        return True

    def get(self) -> TValue:
        return self.value

    def get_or_default(self, fallback: Callable[[], TNewValue]) -> Union[TValue, TNewValue]:
        return self.value

    def filter(self, predicate: Callable[[TValue], bool]) -> "Option[TValue]":
        return self if predicate(self.value) else Absent

    def map(self, f: Callable[[TValue], TNewValue]) -> "Option[TNewValue]":
        return Present(f(self.value))

    def flat_map(self, f: Callable[[TValue], "Option[TNewValue]"]) -> "Option[TNewValue]":
        return f(self.value)

    def switch_if_absent(self, supplier: Callable[[], "Option[TValue]"]) -> "Option[TValue]":
        return self

    def fold(self, initial: TAcc, combine: Callable[[TAcc, TValue], TAcc]) -> TAcc:
        return combine(initial, self.value)


class _Absent(Option[Any]):
    """값의 부재를 나타내는 `Option`의 내부 싱글턴 변형.

    이 클래스의 인스턴스는 모듈 하단에 `Absent` 상수로 **하나만** 존재합니다.
    다시 생성하거나 `copy`/`deepcopy`/`pickle`을 거쳐도 같은 객체가 돌아오므로
    동일성 비교(`is`)가 항상 성립합니다.

    Examples:
        변환/체이닝 무시:
            >>> Absent.map(lambda x: x * 2)
            Absent
            >>> Absent.flat_map(lambda x: Present(x))
            Absent

        기본값 반환:
            >>> Absent.get_or_default(lambda: 123)
            123
    """

    __slots__ = ()

    _instance: ClassVar[Optional["_Absent"]] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __hash__(self) -> int:
        return _ABSENT_HASH

    def __reduce__(self) -> str:
        return "Absent"

    def is_present(self) -> bool:
        return False

    def get(self):
        err = absent_value_err()
        logger.debug("option value access failed (code=%s)", err.code)
        raise err

    def get_or_default(self, fallback):
        return fallback()

    def filter(self, predicate):
        return self

    def map(self, f):
        return self

    def flat_map(self, f):
        return self

    def switch_if_absent(self, supplier):
        return supplier()

    def fold(self, initial, combine):
        return initial


Absent: Option[Any] = _Absent()


class _OptionSequence(Sequence[TValue]):
    """`Option.as_sequence()`가 반환하는 길이 0/1의 읽기 전용 뷰."""

    __slots__ = ("_option",)

    def __init__(self, option: Option[TValue]) -> None:
        self._option = option

    def __len__(self) -> int:
        return 1 if self._option.is_present() else 0

    def __getitem__(self, index):
        return self._option.to_tuple()[index]

    def __iter__(self) -> Iterator[TValue]:
        return iter(self._option)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._option!r})"


# ── 생성 함수 ─────────────────────────────────────────────────────────────────
def present(value: TValue) -> Option[TValue]:
    """값을 그대로 감싼 `Present`를 반환합니다."""
    return Present(value)


def absent() -> Option[Any]:
    """공유 싱글턴 `Absent`를 반환합니다."""
    return Absent


def absent_of(tp: type[TValue]) -> Option[TValue]:
    """`tp` 타입으로 묶인 `Absent`를 반환합니다.

    정적 타입만 달라질 뿐 `absent()`와 같은 인스턴스입니다.

    Examples:
        >>> absent_of(int) is absent()
        True
    """
    return cast(Option[TValue], Absent)


def from_nullable(value: Optional[TValue]) -> Option[TValue]:
    """None이 아니면 `Present(value)`, None이면 `Absent`."""
    return Option.from_nullable(value)


def _none() -> None:
    return None


def _pair(left: Any, right: Any) -> Tuple[Any, Any]:
    return left, right

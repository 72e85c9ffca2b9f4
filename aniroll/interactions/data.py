__all__ = ["data", "Data", "DataContainerMixin"]

import inspect
from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar, cast

from aniroll.interactions.typedefs import SignatureAware

T = TypeVar("T")
DataContainerT = TypeVar("DataContainerT", bound="DataContainerMixin")
EMPTY_ENV: Mapping[Type[Any], Any] = {}


def data(type_: Type[T]) -> T:
    """Marks a parameter to be injected with the registered object of that type."""
    return cast(T, Data(type_))


class Data(Generic[T]):
    __slots__ = ("type",)

    def __init__(self, type_: Type[T]) -> None:
        self.type: Type[T] = type_

    def __repr__(self) -> str:
        return f"data({self.type.__name__})"


class DataContainerMixin:
    """
    Holds objects keyed by their type and injects them into callbacks.

    A callback asks for an object by defaulting a parameter to `data(SomeType)`.
    Lookups fall back to instances of subclasses of the requested type.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: Dict[Type[Any], Any] = {type(self): self}

    def set_data(
        self: DataContainerT, data_: Any, *, override: bool = False
    ) -> DataContainerT:
        type_ = type(data_)
        if not override and type_ in self._data:
            raise RuntimeError(f"{type_} already exists.")

        self._data[type_] = data_
        return self

    def get_data(self, type_: Type[T], default: Optional[T] = None) -> Optional[T]:
        try:
            return self._get_data(type_, EMPTY_ENV)
        except LookupError:
            return default

    def _get_data(self, type_: Type[T], env: Mapping[Type[Any], Any]) -> T:
        for mapping in (env, self._data):
            if type_ in mapping:
                return cast(T, mapping[type_])

        for mapping in (env, self._data):
            for obj in mapping.values():
                if isinstance(obj, type_):
                    return obj

        raise LookupError(f"data of type {type_} can't be found.")

    async def _invoke_callback(
        self,
        callback: SignatureAware,
        *args: Any,
        extra_env: Mapping[Type[Any], Any] = EMPTY_ENV,
        **kwargs: Any,
    ) -> Any:
        injected = {
            k: self._get_data(v.default.type, extra_env)
            for k, v in callback.__signature__.parameters.items()
            if v.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
            and isinstance(v.default, Data)
            and k not in kwargs
        }

        res = callback(*args, **injected, **kwargs)
        if inspect.isawaitable(res):
            return await res

        return res

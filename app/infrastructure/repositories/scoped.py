"""Repository access that opens a dedicated session per call."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

R = TypeVar("R")


class ScopedRepository(Generic[R]):
    """Run every repository method on its own short-lived session.

    Feed lookups execute in worker threads that are abandoned when they time
    out. Each call therefore owns its session and closes it when it returns,
    whether or not anyone is still waiting for the result.
    """

    def __init__(
        self,
        repository_factory: Callable[[Session], R],
        session_factory: Callable[[], Session],
    ) -> None:
        self._repository_factory = repository_factory
        self._session_factory = session_factory

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def call(*args: Any, **kwargs: Any) -> Any:
            with self._session_factory() as session:
                method = getattr(self._repository_factory(session), name)
                return method(*args, **kwargs)

        call.__name__ = name
        return call


__all__ = ["ScopedRepository"]

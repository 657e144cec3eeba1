"""Shared test fixtures for dup-dirs."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, Any

import pytest

from dup_dirs.core.size import SizeCalculator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


class ManualExecutor(Executor):
    """Executor that queues work until ``run_all`` is called.

    Lets tests observe the pending state and control when size
    computations complete, on the test's own thread.
    """

    def __init__(self) -> None:
        self._queue: list[tuple[Future[Any], Callable[[], Any]]] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        self._queue.append((future, lambda: fn(*args, **kwargs)))
        return future

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_all(self) -> None:
        while self._queue:
            future, call = self._queue.pop(0)
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = call()
            except BaseException as exc:  # noqa: BLE001
                future.set_exception(exc)
            else:
                future.set_result(result)


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def manual_calculator(manual_executor: ManualExecutor) -> SizeCalculator:
    """SizeCalculator whose work runs only on ``manual_executor.run_all()``."""
    return SizeCalculator(executor=manual_executor)


@pytest.fixture
def calculator() -> Iterator[SizeCalculator]:
    """SizeCalculator backed by a real thread pool."""
    with SizeCalculator(max_workers=2) as calc:
        yield calc


@pytest.fixture
def scenario_roots(tmp_path: Path) -> tuple[Path, Path]:
    """Create two roots with one shared child name.

    Structure:
        A/
            x/
        B/
            x/
            y/
    """
    a = tmp_path / "A"
    b = tmp_path / "B"
    (a / "x").mkdir(parents=True)
    (b / "x").mkdir(parents=True)
    (b / "y").mkdir()
    return a, b


@pytest.fixture
def sized_dir(tmp_path: Path) -> Path:
    """Create a directory holding one 100-byte file and one empty subdirectory."""
    root = tmp_path / "sized"
    root.mkdir()
    (root / "data.bin").write_bytes(b"\x00" * 100)
    (root / "empty").mkdir()
    return root


@pytest.fixture
def make_roots(tmp_path: Path) -> Callable[..., list[Path]]:
    """Factory creating roots ``r0..rN`` that each hold the given child names."""

    def _make(*children: tuple[str, ...]) -> list[Path]:
        roots = []
        for i, names in enumerate(children):
            root = tmp_path / f"r{i}"
            root.mkdir()
            for name in names:
                (root / name).mkdir()
            roots.append(root)
        return roots

    return _make

from contextvars import ContextVar

_run_id: ContextVar[str] = ContextVar("run_id", default="-")


def get_run_id() -> str:
    return _run_id.get()


def set_run_id(value: str) -> None:
    _run_id.set(value)

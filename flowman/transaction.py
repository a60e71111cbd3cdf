"""
UnitOfWork — explicit transaction handle for document builds.

Usage:
    from flowman.transaction import UnitOfWork

    with UnitOfWork() as uow:
        document = builder.build(uow)
        if not document.is_valid:
            show_errors(document.errors)
    # uow.rollback_only -> everything written inside the block was undone
"""

from django.db import transaction


class UnitOfWork:
    """
    Context manager over transaction.atomic() with a rollback-only flag.

    The flag is applied when the block exits: marking a unit
    rollback-only does not break queries still running inside it.
    Nested units become savepoints, so rolling one back leaves the
    enclosing transaction intact.
    """

    def __init__(self, using: str | None = None):
        self.using = using
        self._rollback_only = False
        self._atomic = None

    @property
    def active(self) -> bool:
        """Is the unit currently inside its atomic block?"""
        return self._atomic is not None

    @property
    def rollback_only(self) -> bool:
        return self._rollback_only

    def mark_rollback_only(self) -> None:
        """Roll back everything done in this unit when it exits."""
        self._rollback_only = True

    def __enter__(self):
        if self._atomic is not None:
            raise RuntimeError("UnitOfWork já está ativo")
        self._rollback_only = False
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        atomic, self._atomic = self._atomic, None
        if self._rollback_only and exc_type is None:
            transaction.set_rollback(True, using=self.using)
        return atomic.__exit__(exc_type, exc_value, traceback)

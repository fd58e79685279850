"""
Per-session statement counter.

Counts every ORM statement a session executes, lazy loads included, by
listening to ``do_orm_execute`` on the session. Identity-map hits do not
reach the database and are not counted.
"""

import logging
from typing import List, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import ORMExecuteState

logger = logging.getLogger(__name__)


class QueryCounter:
    """
    Context manager recording the statements executed by one session.

    Example:
        >>> with QueryCounter(session) as counter:
        ...     await service.list_orders_with_items()
        >>> counter.count
        1
    """

    def __init__(self, session: AsyncSession):
        self._sync_session = session.sync_session
        self.statements: List[str] = []
        self.relationship_loads = 0
        self._listening = False

    @property
    def count(self) -> int:
        return len(self.statements)

    def _on_execute(self, orm_execute_state: ORMExecuteState) -> None:
        self.statements.append(str(orm_execute_state.statement))
        if orm_execute_state.is_relationship_load:
            self.relationship_loads += 1

    def start(self) -> "QueryCounter":
        if not self._listening:
            event.listen(self._sync_session, "do_orm_execute", self._on_execute)
            self._listening = True
        return self

    def stop(self) -> None:
        if self._listening:
            event.remove(self._sync_session, "do_orm_execute", self._on_execute)
            self._listening = False

    def reset(self) -> None:
        self.statements.clear()
        self.relationship_loads = 0

    def __enter__(self) -> "QueryCounter":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> Optional[bool]:
        self.stop()
        return None

    def __repr__(self) -> str:
        return f"<QueryCounter(count={self.count}, relationship_loads={self.relationship_loads})>"

"""Demo board shown on first start."""

from __future__ import annotations

from datetime import datetime, timedelta

from ..models import BoardState, Status, Task, TaskInput
from ..utils import new_id, now_utc, to_iso

_DEMO_TASKS: list[tuple[Status, TaskInput, int | None]] = [
    (
        "todo",
        TaskInput(
            title="Revisar vibración anómala en compresor C-12",
            description="Ruido metálico al arrancar. Posible desalineación o rodamiento.",
            priority="high",
            tags=["mecánica", "seguridad", "compresor"],
            estimate_minutes=90,
        ),
        2,
    ),
    (
        "doing",
        TaskInput(
            title="Actualizar firmware PLC línea 3",
            description="Ventana de mantenimiento aprobada. Verificar backup antes.",
            priority="medium",
            tags=["IT/OT", "PLC", "backup"],
            estimate_minutes=60,
        ),
        6,
    ),
    (
        "done",
        TaskInput(
            title="Calibración sensor de peso estación empaquetado",
            description="Desviación de 1.2%. Registrar certificado y lote.",
            priority="low",
            tags=["calidad", "metrología"],
            estimate_minutes=45,
        ),
        None,
    ),
]


def build_demo_state(now: datetime | None = None) -> BoardState:
    """Three maintenance orders, one per column, with no audit history."""
    now = now or now_utc()
    state = BoardState.default()
    tasks: dict[str, Task] = {}
    order = state.order

    for status, task_input, due_in_days in _DEMO_TASKS:
        task_id = new_id()
        fields = task_input.to_fields()
        if due_in_days is not None:
            fields["due_at"] = to_iso(now + timedelta(days=due_in_days))
        tasks[task_id] = Task(id=task_id, created_at=to_iso(now), status=status, **fields)
        order = order.with_column(status, [*order.column(status), task_id])

    return state.model_copy(update={"tasks": tasks, "order": order})
